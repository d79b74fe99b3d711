# storefront/services/checkout_service.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.checkout import CheckoutModel, CheckoutState
from storefront.data.models.order import OrderModel
from storefront.domain.errors import (
    NotFoundError,
    InvalidInputError,
    InvalidStateError,
    NotPaidError,
    AlreadyFinalizedError,
)
from storefront.domain.schemas import CheckoutCreate
from storefront.repos.cart_repo import CartRepo
from storefront.repos.checkout_repo import CheckoutRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import calculate_total
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PAID_STATUS = "paid"


class CheckoutService:
    """
    Checkout -> platnosc -> zamowienie.

    Stany sesji: CREATED -> PAID -> FINALIZED, tylko do przodu.
    Finalizacja tworzy zamowienie i kasuje koszyk usera w jednej transakcji.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = CheckoutRepo(db)
        self.order_repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.notification_service = notification_service or NotificationService()

    def _get_owned(self, checkout_id: int, user_id: int | None) -> CheckoutModel:
        checkout = self.repo.get_checkout(checkout_id)

        if not checkout:
            raise NotFoundError("Checkout not found")

        if user_id is not None and checkout.user_id != user_id:
            raise PermissionError("Not authorized to access this checkout")

        return checkout

    def create_checkout(self, user_id: int, payload: CheckoutCreate) -> CheckoutModel:
        if not payload.checkout_items:
            raise InvalidInputError("No items in checkout")

        items = [item.model_dump(mode="json") for item in payload.checkout_items]

        # total od klienta przyjmujemy, ale sprawdzamy z pozycjami
        client_total = Decimal(payload.total_price).quantize(Decimal("0.01"))
        computed_total = calculate_total(items)
        if client_total != computed_total:
            logger.warning(
                f"Checkout total mismatch for user {user_id}: "
                f"client sent {client_total}, items sum to {computed_total}"
            )

        checkout = self.repo.create_checkout(
            CheckoutModel(
                user_id=user_id,
                checkout_items=items,
                shipping_address=payload.shipping_address.model_dump(),
                payment_method=payload.payment_method,
                total_price=client_total,
                state=CheckoutState.CREATED.value,
                payment_status="Pending",
            )
        )

        logger.info(f"Checkout {checkout.id} created for user {user_id}")
        return checkout

    def mark_paid(
        self,
        checkout_id: int,
        payment_status: str,
        payment_details: Any = None,
        user_id: int | None = None,
    ) -> CheckoutModel:
        checkout = self._get_owned(checkout_id, user_id)

        # tylko dokladnie "paid"
        if payment_status != PAID_STATUS:
            raise InvalidStateError("Invalid Status")

        if checkout.is_finalized:
            raise InvalidStateError("Checkout already finalized")

        rowcount = self.repo.transition_state(
            checkout_id=checkout.id,
            from_state=checkout.state,
            new_data={
                "state": CheckoutState.PAID.value,
                "payment_status": payment_status,
                "payment_details": payment_details,
                "paid_at": datetime.now(timezone.utc),
            },
        )

        if rowcount == 0:
            self.db.rollback()
            raise InvalidStateError("Checkout was modified by another request")

        self.db.commit()
        self.repo.refresh(checkout)

        logger.info(f"Checkout {checkout.id} marked as paid")
        return checkout

    def finalize(self, checkout_id: int, user_id: int | None = None) -> OrderModel:
        checkout = self._get_owned(checkout_id, user_id)

        if checkout.is_finalized:
            raise AlreadyFinalizedError("Checkout already finalized")

        if not checkout.is_paid:
            raise NotPaidError("Checkout is not paid")

        try:
            # warunek na stan, rownolegle wywolanie dostanie 0 wierszy
            rowcount = self.repo.transition_state(
                checkout_id=checkout.id,
                from_state=CheckoutState.PAID.value,
                new_data={
                    "state": CheckoutState.FINALIZED.value,
                    "finalized_at": datetime.now(timezone.utc),
                },
            )
            if rowcount == 0:
                raise AlreadyFinalizedError("Checkout already finalized")

            order = self.order_repo.add_order(
                OrderModel(
                    checkout_id=checkout.id,
                    user_id=checkout.user_id,
                    order_items=checkout.checkout_items,
                    shipping_address=checkout.shipping_address,
                    payment_method=checkout.payment_method,
                    total_price=checkout.total_price,
                    is_paid=True,
                    paid_at=checkout.paid_at,
                    payment_status=PAID_STATUS,
                    payment_details=checkout.payment_details,
                    is_delivered=False,
                )
            )

            # brak koszyka to nie blad
            deleted = self.cart_repo.delete_by_user(checkout.user_id)

            self.db.commit()
        except IntegrityError:
            # unique na orders.checkout_id
            self.db.rollback()
            raise AlreadyFinalizedError("Checkout already finalized")
        except Exception:
            self.db.rollback()
            raise

        self.repo.refresh(checkout)
        self.db.refresh(order)

        logger.info(
            f"Checkout {checkout.id} finalized into order {order.id}, "
            f"removed {deleted} cart(s) of user {checkout.user_id}"
        )

        try:
            self.notification_service.send_order_notification(order.user_id, order.id)
        except Exception as e:
            # zamowienie juz zapisane, powiadomienie nie cofa transakcji
            logger.warning(f"Failed to enqueue notification for order {order.id}: {e}")

        return order
