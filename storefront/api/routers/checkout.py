# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import protect
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CheckoutCreate, CheckoutOut, PaymentIn, OrderOut
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_service(db: Session):
    return CheckoutService(db)


@router.post("", response_model=CheckoutOut, status_code=201)
def create_checkout(
    payload: CheckoutCreate,
    user: UserModel = Depends(protect),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.create_checkout(user.id, payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{checkout_id}/pay", response_model=CheckoutOut)
def pay_checkout(
    checkout_id: int,
    payload: PaymentIn,
    user: UserModel = Depends(protect),
    db: Session = Depends(get_db),
):
    """Oznacza checkout jako oplacony, status platnosci przychodzi z zewnatrz."""
    svc = get_service(db)
    try:
        return svc.mark_paid(
            checkout_id,
            payment_status=payload.payment_status,
            payment_details=payload.payment_details,
            user_id=user.id,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{checkout_id}/finalize", response_model=OrderOut, status_code=201)
def finalize_checkout(
    checkout_id: int,
    user: UserModel = Depends(protect),
    db: Session = Depends(get_db),
):
    """
    Zamienia oplacony checkout na zamowienie i kasuje koszyk usera.
    Drugie wywolanie dostaje 400 (already finalized).
    """
    svc = get_service(db)
    try:
        return svc.finalize(checkout_id, user_id=user.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
