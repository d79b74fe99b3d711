#storefront/data/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Numeric, JSON
from storefront.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    # wlasciciel: albo user albo gosc
    user_id = Column(Integer, nullable=True, unique=True)
    guest_id = Column(String(64), nullable=True, unique=True)

    # dokument z pozycjami koszyka, patrz domain.schemas.LineItem
    products = Column(JSON, nullable=False, default=list)
    total_price = Column(Numeric(10, 2), nullable=False, default=0)

    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
