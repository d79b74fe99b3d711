# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        """Dodaje zamowienie do biezacej transakcji (flush bez commita)."""
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders(self) -> list[OrderModel]:
        return list(
            self.db.execute(select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id.desc()))
            .scalars()
            .unique()
        )

    def list_by_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            )
            .scalars()
            .unique()
        )

    def update_order_status(self, order_id: int, new_data: dict) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            for key, value in new_data.items():
                setattr(order, key, value)
            self.db.commit()
            self.db.refresh(order)
        return order

    def delete_order(self, order: OrderModel):
        self.db.delete(order)
        self.db.commit()
