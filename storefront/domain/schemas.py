# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Na zewnatrz camelCase (productId, guestId...), w kodzie snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------- cart

class LineItem(ApiModel):
    """Pozycja koszyka / checkoutu / zamowienia. Klucz: (product_id, size, color)."""

    product_id: int
    name: str
    image: str | None = None
    price: Decimal
    size: str | None = None
    color: str | None = None
    quantity: int = Field(..., gt=0)


class CartIdentity(ApiModel):
    user_id: int | None = None
    guest_id: str | None = None


class CartItemIn(CartIdentity):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)
    size: str | None = None
    color: str | None = None


class CartQuantityIn(CartIdentity):
    """Ustawienie ilosci, 0 lub mniej usuwa pozycje."""

    product_id: int = Field(..., gt=0)
    quantity: int
    size: str | None = None
    color: str | None = None


class CartItemRemoveIn(CartIdentity):
    product_id: int = Field(..., gt=0)
    size: str | None = None
    color: str | None = None


class CartMergeIn(ApiModel):
    guest_id: str = Field(..., min_length=1)


class CartOut(ApiModel):
    id: int
    user_id: int | None = None
    guest_id: str | None = None
    products: List[LineItem]
    total_price: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------- checkout

class ShippingAddress(ApiModel):
    address: str
    city: str
    postal_code: str
    country: str


class CheckoutCreate(ApiModel):
    checkout_items: List[LineItem] = Field(default_factory=list)
    shipping_address: ShippingAddress
    payment_method: str
    total_price: Decimal


class PaymentIn(ApiModel):
    payment_status: str
    payment_details: Any = None


class CheckoutOut(ApiModel):
    id: int
    user_id: int
    checkout_items: List[LineItem]
    shipping_address: ShippingAddress
    payment_method: str
    total_price: Decimal
    state: str
    is_paid: bool
    is_finalized: bool
    payment_status: str
    payment_details: Any = None
    paid_at: datetime | None = None
    finalized_at: datetime | None = None
    created_at: datetime | None = None


# ---------------------------------------------------------------- orders

class OrderOwner(ApiModel):
    id: int
    name: str
    email: str


class OrderOut(ApiModel):
    id: int
    checkout_id: int | None = None
    user_id: int
    user: OrderOwner | None = None
    order_items: List[LineItem]
    shipping_address: ShippingAddress
    payment_method: str
    total_price: Decimal
    is_paid: bool
    paid_at: datetime | None = None
    payment_status: str
    payment_details: Any = None
    is_delivered: bool
    delivered_at: datetime | None = None
    status: str
    created_at: datetime


class OrderStatusIn(ApiModel):
    status: str | None = None


# ---------------------------------------------------------------- users

class UserRegister(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserLogin(ApiModel):
    email: EmailStr
    password: str


class UserRead(ApiModel):
    id: int
    name: str
    email: str
    role: str


class AuthOut(ApiModel):
    user: UserRead
    token: str


class AdminUserCreate(UserRegister):
    role: str | None = None


class AdminUserUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    role: str | None = None


class UserMessageOut(ApiModel):
    message: str
    user: UserRead


class MessageOut(ApiModel):
    message: str


# ---------------------------------------------------------------- products

class ProductImage(ApiModel):
    url: str
    alt_text: str | None = None


class ProductOut(ApiModel):
    id: int
    name: str
    description: str
    price: Decimal
    sku: str
    category: str | None = None
    sizes: List[str]
    colors: List[str]
    images: List[ProductImage]
    count_in_stock: int


# ---------------------------------------------------------------- misc

class SubscribeIn(ApiModel):
    email: EmailStr | None = None


class UploadOut(ApiModel):
    image_url: str
