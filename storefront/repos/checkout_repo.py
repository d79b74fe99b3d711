# storefront/repos/checkout_repo.py
from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.data.models.checkout import CheckoutModel


class CheckoutRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_checkout(self, checkout_id: int) -> CheckoutModel | None:
        return self.db.get(CheckoutModel, checkout_id)

    def create_checkout(self, checkout: CheckoutModel) -> CheckoutModel:
        self.db.add(checkout)
        self.db.commit()
        self.db.refresh(checkout)
        return checkout

    def transition_state(self, checkout_id: int, from_state: str, new_data: dict) -> int:
        """
        Warunkowe przejscie stanu:
        UPDATE checkouts SET state = ... WHERE id = :id AND state = :from_state
        0 wierszy = stan zmienil sie w miedzyczasie.
        """
        result = self.db.execute(
            update(CheckoutModel)
            .where(CheckoutModel.id == checkout_id, CheckoutModel.state == from_state)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def refresh(self, checkout: CheckoutModel) -> CheckoutModel:
        self.db.refresh(checkout)
        return checkout
