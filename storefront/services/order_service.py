# storefront/services/order_service.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.domain.errors import NotFoundError
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DELIVERED_STATUS = "Delivered"


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Zamowienia powstaja tylko przy finalizacji checkoutu (CheckoutService),
    tutaj odczyt i cykl zycia po utworzeniu (status, dostawa).
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = OrderRepo(db)

    def list_user_orders(self, user_id: int) -> list[OrderModel]:
        """Zamowienia usera, najnowsze pierwsze."""
        return self.repo.list_by_user(user_id)

    def get_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        return order

    # admin

    def list_orders(self) -> list[OrderModel]:
        return self.repo.list_orders()

    def update_status(self, order_id: int, status: str | None) -> OrderModel:
        order = self.get_order(order_id)

        new_data = {"status": status or order.status}
        if status == DELIVERED_STATUS:
            new_data["is_delivered"] = True
            new_data["delivered_at"] = datetime.now(timezone.utc)

        updated = self.repo.update_order_status(order.id, new_data)

        logger.info(f"Order {order_id} status -> {updated.status}")
        return updated

    def delete_order(self, order_id: int):
        order = self.get_order(order_id)
        self.repo.delete_order(order)

        logger.info(f"Order {order_id} removed")
