from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFoundError
from storefront.repos.product_repo import ProductRepo


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def list_products(self) -> list[ProductModel]:
        return self.repo.list_products()
