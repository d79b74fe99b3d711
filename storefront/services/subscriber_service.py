from sqlalchemy.orm import Session

from storefront.data.models.subscriber import SubscriberModel
from storefront.domain.errors import InvalidInputError
from storefront.repos.subscriber_repo import SubscriberRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SubscriberService:
    def __init__(self, db: Session):
        self.repo = SubscriberRepo(db)

    def subscribe(self, email: str | None) -> SubscriberModel:
        if not email:
            raise InvalidInputError("Email is required")

        email = email.lower()
        if self.repo.get_by_email(email):
            raise InvalidInputError("Email is already subscribed")

        subscriber = self.repo.create_subscriber(SubscriberModel(email=email))
        logger.info(f"New newsletter subscriber {subscriber.id}")
        return subscriber
