from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars())

    def has_any(self) -> bool:
        return self.db.execute(select(ProductModel.id).limit(1)).first() is not None

    def add_many(self, products: list[ProductModel]):
        self.db.add_all(products)
        self.db.commit()
