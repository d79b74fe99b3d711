#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.checkout import CheckoutModel, CheckoutState
from storefront.data.models.order import OrderModel
from storefront.data.models.subscriber import SubscriberModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CheckoutModel",
    "CheckoutState",
    "OrderModel",
    "SubscriberModel",
]
