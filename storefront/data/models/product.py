from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, JSON
from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    sku = Column(String(64), nullable=False, unique=True)
    category = Column(String(100), nullable=True)

    sizes = Column(JSON, nullable=False, default=list)
    colors = Column(JSON, nullable=False, default=list)
    # [{"url": ..., "alt_text": ...}]
    images = Column(JSON, nullable=False, default=list)

    count_in_stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    @property
    def primary_image(self) -> str | None:
        if self.images:
            return self.images[0].get("url")
        return None
