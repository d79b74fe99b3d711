from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from storefront.data.database import Base


class SubscriberModel(Base):
    __tablename__ = "subscribers"

    id = Column(Integer, primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    subscribed_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
