# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia dla klienta, wysylka przez kolejke Celery
    zeby nie blokowac requestu finalizacji.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        send_order_notification_task.delay(user_id, order_id)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Zamowienie przyjete do realizacji (status Processing).
    Kanal (email/SMS) jeszcze niepodpiety, zostaje wpis w logu.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed and processing")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
