from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    # jedno zamowienie na checkout
    checkout_id = Column(Integer, nullable=True, unique=True)
    user_id = Column(Integer, nullable=False, index=True)

    order_items = Column(JSON, nullable=False)
    shipping_address = Column(JSON, nullable=False)
    payment_method = Column(String(50), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    is_paid = Column(Boolean, nullable=False, default=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    payment_status = Column(String(50), nullable=False, default="pending")
    payment_details = Column(JSON, nullable=True)

    is_delivered = Column(Boolean, nullable=False, default=False)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="Processing")  # Processing, Shipped, Delivered, Cancelled

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # tylko do odczytu (populate wlasciciela), bez wymuszonego FK
    user = relationship(
        "UserModel",
        primaryjoin="foreign(OrderModel.user_id) == UserModel.id",
        lazy="joined",
        viewonly=True,
    )
