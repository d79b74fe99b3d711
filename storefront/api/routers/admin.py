# storefront/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import admin
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    AdminUserCreate,
    AdminUserUpdate,
    MessageOut,
    OrderOut,
    OrderStatusIn,
    ProductOut,
    UserMessageOut,
    UserRead,
)
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.services.user_service import UserService

# wszystkie endpointy tylko dla roli admin
users_router = APIRouter(prefix="/admin/users", tags=["admin"], dependencies=[Depends(admin)])
orders_router = APIRouter(prefix="/admin/orders", tags=["admin"], dependencies=[Depends(admin)])
products_router = APIRouter(prefix="/admin/products", tags=["admin"], dependencies=[Depends(admin)])


# ---------------------------------------------------------------- users

@users_router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list_users()


@users_router.post("", response_model=UserMessageOut, status_code=201)
def create_user(payload: AdminUserCreate, db: Session = Depends(get_db)):
    try:
        user = UserService(db).create_user(payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return UserMessageOut(message="User created successfully", user=UserRead.model_validate(user))


@users_router.put("/{user_id}", response_model=UserMessageOut)
def update_user(user_id: int, payload: AdminUserUpdate, db: Session = Depends(get_db)):
    """Aktualizuje tylko przeslane pola: name, email, role."""
    try:
        user = UserService(db).update_user(user_id, payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return UserMessageOut(message="User updated successfully", user=UserRead.model_validate(user))


@users_router.delete("/{user_id}", response_model=MessageOut)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    try:
        UserService(db).delete_user(user_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="User deleted successfully")


# ---------------------------------------------------------------- orders

@orders_router.get("", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db)):
    return OrderService(db).list_orders()


@orders_router.put("/{order_id}", response_model=OrderOut)
def update_order_status(order_id: int, payload: OrderStatusIn, db: Session = Depends(get_db)):
    """Status "Delivered" ustawia tez is_delivered i delivered_at."""
    try:
        return OrderService(db).update_status(order_id, payload.status)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@orders_router.delete("/{order_id}", response_model=MessageOut)
def delete_order(order_id: int, db: Session = Depends(get_db)):
    try:
        OrderService(db).delete_order(order_id)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Order Removed")


# ---------------------------------------------------------------- products

@products_router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).list_products()
