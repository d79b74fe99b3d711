from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Numeric, JSON
from storefront.data.database import Base


class CheckoutState(str, Enum):
    """
    Stan sesji checkout, przejscia tylko do przodu:
    CREATED -> PAID -> FINALIZED
    """

    CREATED = "created"
    PAID = "paid"
    FINALIZED = "finalized"


class CheckoutModel(Base):
    __tablename__ = "checkouts"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)

    # snapshot pozycji koszyka z chwili utworzenia
    checkout_items = Column(JSON, nullable=False)
    shipping_address = Column(JSON, nullable=False)
    payment_method = Column(String(50), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    state = Column(String(20), nullable=False, default=CheckoutState.CREATED.value)
    payment_status = Column(String(50), nullable=False, default="Pending")
    payment_details = Column(JSON, nullable=True)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    finalized_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_paid(self) -> bool:
        return self.state in (CheckoutState.PAID.value, CheckoutState.FINALIZED.value)

    @property
    def is_finalized(self) -> bool:
        return self.state == CheckoutState.FINALIZED.value
