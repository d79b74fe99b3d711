from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.subscriber import SubscriberModel


class SubscriberRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> SubscriberModel | None:
        return self.db.execute(
            select(SubscriberModel).where(SubscriberModel.email == email)
        ).scalars().first()

    def create_subscriber(self, subscriber: SubscriberModel) -> SubscriberModel:
        self.db.add(subscriber)
        self.db.commit()
        self.db.refresh(subscriber)
        return subscriber
