# storefront/api/__init__.py
from fastapi import APIRouter

from storefront.api.routers import (
    admin,
    carts,
    checkout,
    health,
    orders,
    products,
    subscribers,
    upload,
    users,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(users.router)
api_router.include_router(products.router)
api_router.include_router(carts.router)
api_router.include_router(checkout.router)
api_router.include_router(orders.router)
api_router.include_router(admin.users_router)
api_router.include_router(admin.orders_router)
api_router.include_router(admin.products_router)
api_router.include_router(subscribers.router)
api_router.include_router(upload.router)
