import uuid
from decimal import Decimal
from typing import Iterable, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.domain.errors import NotFoundError, InvalidInputError, ConflictError
from storefront.domain.schemas import LineItem
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def line_key(item: dict) -> Tuple[int, str | None, str | None]:
    return int(item["product_id"]), item.get("size"), item.get("color")


def calculate_total(items: Iterable[dict]) -> Decimal:
    #zawsze liczone od nowa z pozycji, nigdy przyrostowo
    total = sum(
        (Decimal(str(i["price"])) * int(i["quantity"]) for i in items),
        Decimal("0.00"),
    )
    return total.quantize(Decimal("0.01"))


def _find_line(items: list[dict], key: tuple) -> int:
    for index, item in enumerate(items):
        if line_key(item) == key:
            return index
    return -1


class CartService:
    """
    Koszyk goscia (guest_id) albo zalogowanego uzytkownika (user_id).
    commands (add, set quantity, remove, merge) modyfikuja stan
    query (get) tylko odczyt
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    def _find_cart(self, user_id: int | None, guest_id: str | None) -> CartModel | None:
        if user_id:
            return self.repo.get_by_user(user_id)
        if guest_id:
            return self.repo.get_by_guest(guest_id)
        return None

    def _save_products(self, cart: CartModel, products: list[dict], **extra) -> CartModel:
        # Optimistic locking na polu version
        try:
            rowcount = self.repo.update_cart_version(
                cart_id=cart.id,
                old_version=cart.version,
                new_data={
                    "products": products,
                    "total_price": calculate_total(products),
                    "version": cart.version + 1,
                    **extra,
                },
            )
            if rowcount:
                self.repo.commit()
        except IntegrityError as e:
            # user ma juz koszyk (unikalny user_id)
            self.repo.rollback()
            raise ConflictError("Cart was modified by another request, please retry") from e

        if rowcount == 0:
            self.repo.rollback()
            raise ConflictError("Cart was modified by another request, please retry")

        return self.repo.refresh(cart)

    #query - odczyt
    def get_cart(self, user_id: int | None, guest_id: str | None) -> CartModel:
        cart = self._find_cart(user_id, guest_id)
        if not cart:
            raise NotFoundError("Cart not found")
        return cart

    #commands
    def add_item(
        self,
        product_id: int,
        quantity: int,
        size: str | None = None,
        color: str | None = None,
        user_id: int | None = None,
        guest_id: str | None = None,
    ) -> Tuple[CartModel, bool]:
        """
        Dodaje produkt do koszyka. Zwraca (koszyk, czy_utworzony).
        Ta sama para (produkt, rozmiar, kolor) zwieksza ilosc zamiast dublowac pozycje.
        """
        if quantity <= 0:
            raise InvalidInputError("Quantity must be greater than 0")

        product = self.product_repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        cart = self._find_cart(user_id, guest_id)

        if cart:
            products = [dict(p) for p in cart.products]
            index = _find_line(products, (product_id, size, color))

            if index > -1:
                logger.info(
                    f"Product {product_id} already in cart {cart.id}, quantity "
                    f"{products[index]['quantity']} -> {products[index]['quantity'] + quantity}"
                )
                products[index]["quantity"] += quantity
            else:
                logger.info(f"Adding product {product_id} to cart {cart.id}")
                products.append(self._new_line(product, quantity, size, color))

            return self._save_products(cart, products), False

        #nowy koszyk dla goscia albo usera
        products = [self._new_line(product, quantity, size, color)]
        owner_guest_id = None if user_id else (guest_id or self._generate_guest_id())
        new_cart = CartModel(
            user_id=user_id or None,
            guest_id=owner_guest_id,
            products=products,
            total_price=calculate_total(products),
            version=1,
        )
        try:
            created = self.repo.create_cart(new_cart)
        except IntegrityError as e:
            # rownolegle pierwsze dodanie utworzylo juz koszyk dla tego wlasciciela
            self.repo.rollback()
            logger.warning(f"Cart already exists (user={user_id}, guest={owner_guest_id})")
            raise ConflictError("Cart was modified by another request, please retry") from e

        logger.info(f"Created cart {created.id} (user={created.user_id}, guest={created.guest_id})")
        return created, True

    def set_item_quantity(
        self,
        product_id: int,
        quantity: int,
        size: str | None = None,
        color: str | None = None,
        user_id: int | None = None,
        guest_id: str | None = None,
    ) -> CartModel:
        cart = self.get_cart(user_id, guest_id)

        products = [dict(p) for p in cart.products]
        index = _find_line(products, (product_id, size, color))
        if index == -1:
            raise NotFoundError("Product not found in cart")

        if quantity > 0:
            products[index]["quantity"] = quantity
        else:
            # 0 albo mniej usuwa pozycje
            products.pop(index)

        logger.info(f"Cart {cart.id}: product {product_id} quantity set to {max(quantity, 0)}")
        return self._save_products(cart, products)

    def remove_item(
        self,
        product_id: int,
        size: str | None = None,
        color: str | None = None,
        user_id: int | None = None,
        guest_id: str | None = None,
    ) -> CartModel:
        cart = self.get_cart(user_id, guest_id)

        products = [dict(p) for p in cart.products]
        index = _find_line(products, (product_id, size, color))
        if index == -1:
            raise NotFoundError("Product not found in cart")

        products.pop(index)

        logger.info(f"Removed product {product_id} from cart {cart.id}")
        return self._save_products(cart, products)

    def merge(self, guest_id: str, user_id: int) -> CartModel:
        """
        Laczy koszyk goscia z koszykiem uzytkownika po zalogowaniu.

        1. brak koszyka goscia -> koszyk usera (juz zmergowany) albo NotFound
        2. pusty koszyk goscia -> InvalidInput
        3. oba istnieja -> pozycje goscia wpadaja do koszyka usera,
           koszyk goscia kasowany w tej samej transakcji
        4. brak koszyka usera -> koszyk goscia przepisany na usera
        """
        guest_cart = self.repo.get_by_guest(guest_id)
        user_cart = self.repo.get_by_user(user_id)

        if not guest_cart:
            if user_cart:
                logger.info(f"Guest cart {guest_id} already merged, returning cart {user_cart.id}")
                return user_cart
            raise NotFoundError("Guest cart not found")

        if not guest_cart.products:
            raise InvalidInputError("Guest cart is empty")

        if not user_cart:
            logger.info(f"Assigning guest cart {guest_cart.id} to user {user_id}")
            return self._save_products(
                guest_cart,
                [dict(p) for p in guest_cart.products],
                user_id=user_id,
                guest_id=None,
            )

        products = [dict(p) for p in user_cart.products]
        for guest_item in guest_cart.products:
            index = _find_line(products, line_key(guest_item))
            if index > -1:
                products[index]["quantity"] += int(guest_item["quantity"])
            else:
                products.append(dict(guest_item))

        # kasujemy goscia przed commitem, razem z zapisem koszyka usera
        self.repo.delete_cart(guest_cart.id)
        merged = self._save_products(user_cart, products)

        logger.info(f"Merged guest cart {guest_cart.id} into cart {user_cart.id} of user {user_id}")
        return merged

    @staticmethod
    def _new_line(product, quantity: int, size: str | None, color: str | None) -> dict:
        return LineItem(
            product_id=product.id,
            name=product.name,
            image=product.primary_image,
            price=product.price,
            size=size,
            color=color,
            quantity=quantity,
        ).model_dump(mode="json")

    @staticmethod
    def _generate_guest_id() -> str:
        return f"guest_{uuid.uuid4().hex}"
