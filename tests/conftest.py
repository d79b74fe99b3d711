import os

# srodowisko testowe ustawiane przed importem storefront (settings czyta env przy imporcie)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, UserModel
from storefront.main import create_app
from storefront.utils.security import hash_password, create_access_token


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _make_user(db, name, email, role="customer", password="secret123"):
    user = UserModel(name=name, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def customer(db):
    return _make_user(db, "Jane Customer", "jane@example.com")


@pytest.fixture()
def other_customer(db):
    return _make_user(db, "John Other", "john@example.com")


@pytest.fixture()
def admin_user(db):
    return _make_user(db, "Admin", "admin@example.com", role="admin")


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture()
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture()
def admin_headers(admin_user):
    return auth_headers(admin_user)


def _make_product(db, name, sku, price, image="https://img.example.com/p.png"):
    product = ProductModel(
        name=name,
        description=f"{name} description",
        price=Decimal(price),
        sku=sku,
        category="Top Wear",
        sizes=["S", "M", "L"],
        colors=["Red", "Blue"],
        images=[{"url": image, "alt_text": name}],
        count_in_stock=10,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture()
def product_a(db):
    return _make_product(db, "Product A", "SKU-A", "29.99", image="https://img.example.com/a.png")


@pytest.fixture()
def product_b(db):
    return _make_product(db, "Product B", "SKU-B", "10.00", image="https://img.example.com/b.png")


def line_item(product, quantity=1, size="M", color="Red") -> dict:
    return {
        "productId": product.id,
        "name": product.name,
        "image": product.images[0]["url"],
        "price": str(product.price),
        "size": size,
        "color": color,
        "quantity": quantity,
    }


SHIPPING_ADDRESS = {
    "address": "1 Main St",
    "city": "Springfield",
    "postalCode": "12345",
    "country": "US",
}
