# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import ProductModel, UserModel
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger, setup_logging
from storefront.utils.security import hash_password

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Oxford Shirt",
        "description": "Cotton oxford shirt with button-down collar.",
        "price": Decimal("39.99"),
        "sku": "OX-SHIRT-001",
        "category": "Top Wear",
        "sizes": ["S", "M", "L", "XL"],
        "colors": ["White", "Blue"],
        "images": [{"url": "https://picsum.photos/500/500?random=1", "alt_text": "Classic Oxford Shirt"}],
        "count_in_stock": 20,
    },
    {
        "name": "Slim Fit Chinos",
        "description": "Stretch cotton chinos, slim fit.",
        "price": Decimal("29.99"),
        "sku": "CHINO-002",
        "category": "Bottom Wear",
        "sizes": ["30", "32", "34"],
        "colors": ["Beige", "Navy"],
        "images": [{"url": "https://picsum.photos/500/500?random=2", "alt_text": "Slim Fit Chinos"}],
        "count_in_stock": 35,
    },
    {
        "name": "Knit Beanie",
        "description": "Warm ribbed beanie.",
        "price": Decimal("14.50"),
        "sku": "BEANIE-003",
        "category": "Accessories",
        "sizes": ["One Size"],
        "colors": ["Black", "Grey"],
        "images": [{"url": "https://picsum.photos/500/500?random=3", "alt_text": "Knit Beanie"}],
        "count_in_stock": 50,
    },
]


def seed(admin_email: str = "admin@example.com", admin_password: str = "admin123"):
    db = SessionLocal()
    try:
        # not forcing: only seed if empty
        products = ProductRepo(db)
        if products.has_any():
            logger.info("Catalog already seeded, skipping")
            return

        products.add_many([ProductModel(**data) for data in SAMPLE_PRODUCTS])

        users = UserRepo(db)
        if not users.get_by_email(admin_email):
            users.create_user(
                UserModel(
                    name="Admin",
                    email=admin_email,
                    password_hash=hash_password(admin_password),
                    role="admin",
                )
            )

        logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} products and admin user {admin_email}")
    finally:
        db.close()


def main():
    setup_logging()
    init_db()
    seed()


if __name__ == "__main__":
    main()
