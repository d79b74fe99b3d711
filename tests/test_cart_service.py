"""Cart store and guest-to-user merge, exercised directly against the service."""

from decimal import Decimal

import pytest

from storefront.data.models import CartModel
from storefront.domain.errors import ConflictError, InvalidInputError, NotFoundError
from storefront.services.cart_service import CartService, calculate_total


def _lines(cart):
    return [(p["product_id"], p["size"], p["color"], p["quantity"]) for p in cart.products]


class TestCalculateTotal:
    def test_sums_price_times_quantity(self):
        items = [
            {"product_id": 1, "price": "29.99", "quantity": 2},
            {"product_id": 2, "price": "10.00", "quantity": 3},
        ]
        assert calculate_total(items) == Decimal("89.98")

    def test_empty_is_zero(self):
        assert calculate_total([]) == Decimal("0.00")


class TestAddItem:
    def test_first_add_creates_guest_cart(self, db, product_a):
        cart, created = CartService(db).add_item(product_a.id, 2, "M", "Red", guest_id="guest_1")

        assert created is True
        assert cart.guest_id == "guest_1"
        assert cart.user_id is None
        assert _lines(cart) == [(product_a.id, "M", "Red", 2)]
        assert cart.products[0]["name"] == "Product A"
        assert cart.products[0]["image"] == "https://img.example.com/a.png"
        assert cart.total_price == Decimal("59.98")

    def test_generates_guest_id_when_missing(self, db, product_a):
        cart, _ = CartService(db).add_item(product_a.id, 1)
        assert cart.guest_id.startswith("guest_")

    def test_generated_guest_ids_are_distinct(self, db, product_a):
        svc = CartService(db)
        guest_ids = [svc.add_item(product_a.id, 1)[0].guest_id for _ in range(50)]

        assert len(set(guest_ids)) == 50
        assert db.query(CartModel).count() == 50

    def test_second_cart_for_same_user_is_conflict(self, db, product_a, customer, monkeypatch):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, user_id=customer.id)

        # rownolegly request nie widzial jeszcze koszyka usera
        monkeypatch.setattr(svc.repo, "get_by_user", lambda user_id: None)

        with pytest.raises(ConflictError):
            svc.add_item(product_a.id, 1, user_id=customer.id)

        assert db.query(CartModel).filter_by(user_id=customer.id).count() == 1

    def test_second_cart_for_same_guest_is_conflict(self, db, product_a, monkeypatch):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, guest_id="g")

        monkeypatch.setattr(svc.repo, "get_by_guest", lambda guest_id: None)

        with pytest.raises(ConflictError):
            svc.add_item(product_a.id, 1, guest_id="g")

        assert db.query(CartModel).filter_by(guest_id="g").count() == 1

    def test_user_cart_has_no_guest_id(self, db, product_a, customer):
        cart, _ = CartService(db).add_item(product_a.id, 1, user_id=customer.id, guest_id="guest_x")
        assert cart.user_id == customer.id
        assert cart.guest_id is None

    def test_same_key_increments_quantity(self, db, product_a):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        cart, created = svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")

        assert created is False
        assert _lines(cart) == [(product_a.id, "M", "Red", 3)]
        assert cart.total_price == Decimal("89.97")

    def test_different_size_or_color_is_new_line(self, db, product_a, product_b):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        svc.add_item(product_a.id, 1, "L", "Red", guest_id="g")
        svc.add_item(product_a.id, 1, "M", "Blue", guest_id="g")
        cart, _ = svc.add_item(product_b.id, 2, "M", "Red", guest_id="g")

        assert len(cart.products) == 4
        assert cart.total_price == Decimal("109.97")

    def test_total_always_matches_lines(self, db, product_a, product_b):
        svc = CartService(db)
        for product, qty in [(product_a, 1), (product_b, 4), (product_a, 2), (product_b, 1)]:
            cart, _ = svc.add_item(product.id, qty, "S", "Red", guest_id="g")
            assert cart.total_price == calculate_total(cart.products)

        assert cart.total_price == Decimal("139.97")

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            CartService(db).add_item(999, 1, guest_id="g")

    def test_version_bumps_on_every_write(self, db, product_a):
        svc = CartService(db)
        cart, _ = svc.add_item(product_a.id, 1, guest_id="g")
        assert cart.version == 1
        cart, _ = svc.add_item(product_a.id, 1, guest_id="g")
        assert cart.version == 2

    def test_stale_version_raises_conflict(self, db, product_a, monkeypatch):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, guest_id="g")

        monkeypatch.setattr(svc.repo, "update_cart_version", lambda **kwargs: 0)

        with pytest.raises(ConflictError):
            svc.add_item(product_a.id, 1, guest_id="g")


class TestGetCart:
    def test_missing_cart(self, db):
        with pytest.raises(NotFoundError):
            CartService(db).get_cart(None, "nobody")

    def test_no_identity(self, db):
        with pytest.raises(NotFoundError):
            CartService(db).get_cart(None, None)

    def test_empty_cart_is_returned(self, db, product_a):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        svc.remove_item(product_a.id, "M", "Red", guest_id="g")

        cart = svc.get_cart(None, "g")
        assert cart.products == []
        assert cart.total_price == Decimal("0.00")

    def test_user_id_takes_precedence(self, db, product_a, product_b, customer):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, guest_id="g")
        svc.add_item(product_b.id, 1, user_id=customer.id)

        cart = svc.get_cart(customer.id, "g")
        assert cart.user_id == customer.id


class TestSetItemQuantity:
    def test_overwrites_quantity(self, db, product_a):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        cart = svc.set_item_quantity(product_a.id, 5, "M", "Red", guest_id="g")

        assert _lines(cart) == [(product_a.id, "M", "Red", 5)]
        assert cart.total_price == Decimal("149.95")

    def test_zero_removes_line(self, db, product_a, product_b):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        svc.add_item(product_b.id, 1, "M", "Red", guest_id="g")
        cart = svc.set_item_quantity(product_a.id, 0, "M", "Red", guest_id="g")

        assert _lines(cart) == [(product_b.id, "M", "Red", 1)]
        assert cart.total_price == Decimal("10.00")

    def test_negative_removes_line(self, db, product_a):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        cart = svc.set_item_quantity(product_a.id, -3, "M", "Red", guest_id="g")
        assert cart.products == []

    def test_missing_cart(self, db, product_a):
        with pytest.raises(NotFoundError):
            CartService(db).set_item_quantity(product_a.id, 1, guest_id="nobody")

    def test_missing_line(self, db, product_a):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        with pytest.raises(NotFoundError):
            svc.set_item_quantity(product_a.id, 2, "L", "Red", guest_id="g")


class TestRemoveItem:
    def test_removes_line(self, db, product_a, product_b):
        svc = CartService(db)
        svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")
        svc.add_item(product_b.id, 1, "M", "Red", guest_id="g")
        cart = svc.remove_item(product_a.id, "M", "Red", guest_id="g")

        assert _lines(cart) == [(product_b.id, "M", "Red", 1)]
        assert cart.total_price == Decimal("10.00")

    def test_missing_line(self, db, product_a):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        with pytest.raises(NotFoundError):
            svc.remove_item(product_a.id, "M", "Blue", guest_id="g")

    def test_missing_cart(self, db, product_a):
        with pytest.raises(NotFoundError):
            CartService(db).remove_item(product_a.id, guest_id="nobody")


class TestMerge:
    def test_guest_cart_reassigned_when_user_has_none(self, db, product_a, customer):
        svc = CartService(db)
        guest_cart, _ = svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")

        merged = svc.merge("g", customer.id)

        assert merged.id == guest_cart.id
        assert merged.user_id == customer.id
        assert merged.guest_id is None
        assert _lines(merged) == [(product_a.id, "M", "Red", 2)]
        assert svc.repo.get_by_guest("g") is None

    def test_matching_lines_add_up(self, db, product_a, customer):
        svc = CartService(db)
        svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")
        svc.add_item(product_a.id, 1, "M", "Red", user_id=customer.id)

        merged = svc.merge("g", customer.id)

        assert _lines(merged) == [(product_a.id, "M", "Red", 3)]
        assert merged.total_price == Decimal("89.97")
        assert svc.repo.get_by_guest("g") is None
        assert db.query(CartModel).count() == 1

    def test_disjoint_lines_are_appended(self, db, product_a, product_b, customer):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        svc.add_item(product_b.id, 2, "S", "Blue", user_id=customer.id)

        merged = svc.merge("g", customer.id)

        assert sorted(_lines(merged)) == sorted(
            [(product_b.id, "S", "Blue", 2), (product_a.id, "M", "Red", 1)]
        )
        assert merged.total_price == Decimal("49.99")

    def test_second_merge_does_not_double_quantities(self, db, product_a, customer):
        svc = CartService(db)
        svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")
        svc.add_item(product_a.id, 1, "M", "Red", user_id=customer.id)

        svc.merge("g", customer.id)
        again = svc.merge("g", customer.id)

        assert _lines(again) == [(product_a.id, "M", "Red", 3)]

    def test_no_guest_and_no_user_cart(self, db, customer):
        with pytest.raises(NotFoundError):
            CartService(db).merge("g", customer.id)

    def test_empty_guest_cart(self, db, product_a, customer):
        svc = CartService(db)
        svc.add_item(product_a.id, 1, "M", "Red", guest_id="g")
        svc.remove_item(product_a.id, "M", "Red", guest_id="g")

        with pytest.raises(InvalidInputError):
            svc.merge("g", customer.id)

    def test_conflict_keeps_guest_cart(self, db, product_a, customer, monkeypatch):
        svc = CartService(db)
        svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")
        svc.add_item(product_a.id, 1, "M", "Red", user_id=customer.id)

        monkeypatch.setattr(svc.repo, "update_cart_version", lambda **kwargs: 0)

        with pytest.raises(ConflictError):
            svc.merge("g", customer.id)

        db.expire_all()
        assert svc.repo.get_by_guest("g") is not None

    def test_reassign_onto_user_with_cart_is_conflict(self, db, product_a, product_b, customer, monkeypatch):
        svc = CartService(db)
        svc.add_item(product_a.id, 2, "M", "Red", guest_id="g")
        svc.add_item(product_b.id, 1, "M", "Red", user_id=customer.id)

        # koszyk usera powstal po odczycie w merge
        monkeypatch.setattr(svc.repo, "get_by_user", lambda user_id: None)

        with pytest.raises(ConflictError):
            svc.merge("g", customer.id)

        db.expire_all()
        assert svc.repo.get_by_guest("g") is not None
        assert db.query(CartModel).filter_by(user_id=customer.id).count() == 1
