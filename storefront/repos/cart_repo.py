# storefront/repos/cart_repo.py
from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalars().first()

    def get_by_guest(self, guest_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.guest_id == guest_id)
        ).scalars().first()

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        """
        UPDATE carts SET ... WHERE id = :id AND version = :old_version
        Zwraca rowcount, 0 oznacza ze ktos nas wyprzedzil.
        Bez commita, commit robi serwis.
        """
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart(self, cart_id: int) -> int:
        result = self.db.execute(delete(CartModel).where(CartModel.id == cart_id))
        return result.rowcount

    def delete_by_user(self, user_id: int) -> int:
        result = self.db.execute(delete(CartModel).where(CartModel.user_id == user_id))
        return result.rowcount

    def refresh(self, cart: CartModel) -> CartModel:
        self.db.refresh(cart)
        return cart

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
