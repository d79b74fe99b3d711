#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from storefront.api.deps import protect
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    CartItemIn,
    CartQuantityIn,
    CartItemRemoveIn,
    CartMergeIn,
    CartOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.post("", response_model=CartOut)
def add_item(payload: CartItemIn, response: Response, db: Session = Depends(get_db)):
    """Dodaje produkt do koszyka goscia albo usera: 201 nowy koszyk, 200 istniejacy."""
    svc = get_service(db)
    try:
        cart, created = svc.add_item(
            product_id=payload.product_id,
            quantity=payload.quantity,
            size=payload.size,
            color=payload.color,
            user_id=payload.user_id,
            guest_id=payload.guest_id,
        )
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    response.status_code = 201 if created else 200
    return cart


@router.put("", response_model=CartOut)
def update_quantity(payload: CartQuantityIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.set_item_quantity(
            product_id=payload.product_id,
            quantity=payload.quantity,
            size=payload.size,
            color=payload.color,
            user_id=payload.user_id,
            guest_id=payload.guest_id,
        )
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("", response_model=CartOut)
def remove_item(payload: CartItemRemoveIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_item(
            product_id=payload.product_id,
            size=payload.size,
            color=payload.color,
            user_id=payload.user_id,
            guest_id=payload.guest_id,
        )
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int | None = Query(None, alias="userId"),
    guest_id: str | None = Query(None, alias="guestId"),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_cart(user_id, guest_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/merge", response_model=CartOut)
def merge_cart(
    payload: CartMergeIn,
    user: UserModel = Depends(protect),
    db: Session = Depends(get_db),
):
    """Po zalogowaniu: koszyk goscia laczony z koszykiem usera."""
    svc = get_service(db)
    try:
        return svc.merge(guest_id=payload.guest_id, user_id=user.id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
