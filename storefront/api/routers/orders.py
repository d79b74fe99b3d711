# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import protect
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFoundError
from storefront.domain.schemas import OrderOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("/my-orders", response_model=List[OrderOut])
def my_orders(user: UserModel = Depends(protect), db: Session = Depends(get_db)):
    """
    Zamowienia zalogowanego usera, najnowsze pierwsze.
    """
    return get_service(db).list_user_orders(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(protect),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegóły zamówienia razem z danymi wlasciciela.
    """
    svc = get_service(db)
    try:
        return svc.get_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
