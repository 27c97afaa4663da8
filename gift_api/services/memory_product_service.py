import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List

from gift_api.core.errors import InvalidArgumentError, NotFoundError
from gift_api.core.pagination import Page, Pageable
from gift_api.services.product_service import (
    OptionInCreate,
    OptionInUpdate,
    OptionOut,
    ProductInCreate,
    ProductInUpdate,
    ProductOut,
    ProductOutWithOptions,
    ProductService,
)


logger = logging.getLogger(__name__)


# Sortable fields, keyed by the name accepted in ?sort=
SORT_KEYS = {
    "id": lambda p: p.id,
    "name": lambda p: p.name,
    "price": lambda p: p.price,
    "categoryId": lambda p: p.category_id,
}


@dataclass
class _Product:
    id: int
    name: str
    price: int
    image_url: str
    category_id: int
    options: Dict[int, OptionOut] = field(default_factory=dict)

    def to_out(self) -> ProductOut:
        return ProductOut(
            id=self.id,
            name=self.name,
            price=self.price,
            image_url=self.image_url,
            category_id=self.category_id,
        )

    def to_out_with_options(self) -> ProductOutWithOptions:
        return ProductOutWithOptions(
            id=self.id,
            name=self.name,
            price=self.price,
            image_url=self.image_url,
            category_id=self.category_id,
            options=sorted(self.options.values(), key=lambda o: o.id),
        )


class InMemoryProductService(ProductService):
    """
    Dict-backed ProductService. Every public method runs under one lock so
    concurrent requests served from the threadpool see consistent state.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._products: Dict[int, _Product] = {}
        self._product_ids = itertools.count(1)
        self._option_ids = itertools.count(1)

    # -----------------------------
    # Helpers (lock must be held)
    # -----------------------------
    def _find(self, product_id: int) -> _Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    @staticmethod
    def _check_new_option_names(product: _Product, names: List[str]) -> None:
        existing = {o.name for o in product.options.values()}
        seen = set()
        for name in names:
            if name in existing or name in seen:
                raise InvalidArgumentError(
                    f"Option '{name}' already exists for product {product.id}"
                )
            seen.add(name)

    def _insert_options(self, product: _Product, option_ins: List[OptionInCreate]) -> None:
        for option_in in option_ins:
            option_id = next(self._option_ids)
            product.options[option_id] = OptionOut(
                id=option_id,
                name=option_in.name,
                quantity=option_in.quantity,
            )

    # -----------------------------
    # Products
    # -----------------------------
    def get_product(self, product_id: int) -> ProductOutWithOptions:
        with self._lock:
            return self._find(product_id).to_out_with_options()

    def get_products_by_page(self, pageable: Pageable, category_id: int) -> Page[ProductOut]:
        with self._lock:
            matches = [
                p.to_out() for p in self._products.values()
                if p.category_id == category_id
            ]

        # Stable sort: apply orders last-to-first so the first order wins
        for order in reversed(pageable.sort):
            key = SORT_KEYS.get(order.field)
            if key is None:
                raise InvalidArgumentError(f"Cannot sort products by '{order.field}'")
            matches.sort(key=key, reverse=order.descending)

        start = pageable.offset
        content = matches[start:start + pageable.size]

        return Page(content=content, pageable=pageable, total_elements=len(matches))

    def create_product(self, product_in: ProductInCreate) -> int:
        if not product_in.options:
            raise InvalidArgumentError("A product needs at least one option")

        with self._lock:
            product = _Product(
                id=next(self._product_ids),
                name=product_in.name,
                price=product_in.price,
                image_url=product_in.image_url,
                category_id=product_in.category_id,
            )
            self._check_new_option_names(product, [o.name for o in product_in.options])
            self._insert_options(product, product_in.options)
            self._products[product.id] = product

        logger.info("Created product %s with %s option(s)", product.id, len(product.options))
        return product.id

    def update_product(self, product_in: ProductInUpdate, product_id: int) -> int:
        with self._lock:
            product = self._find(product_id)
            product.name = product_in.name
            product.price = product_in.price
            product.image_url = product_in.image_url
            product.category_id = product_in.category_id
        return product_id

    def delete_product(self, product_id: int) -> int:
        with self._lock:
            self._find(product_id)
            del self._products[product_id]
        logger.info("Deleted product %s", product_id)
        return product_id

    def delete_products(self, product_ids: List[int]) -> None:
        with self._lock:
            missing = [i for i in product_ids if i not in self._products]
            if missing:
                raise NotFoundError(
                    f"Products not found: {', '.join(str(i) for i in missing)}"
                )
            for product_id in product_ids:
                self._products.pop(product_id, None)
        logger.info("Deleted products %s", product_ids)

    # -----------------------------
    # Options
    # -----------------------------
    def add_option(self, option_in: OptionInCreate, product_id: int) -> None:
        self.add_options([option_in], product_id)

    def add_options(self, option_ins: List[OptionInCreate], product_id: int) -> None:
        with self._lock:
            product = self._find(product_id)
            self._check_new_option_names(product, [o.name for o in option_ins])
            self._insert_options(product, option_ins)

    def update_option(self, option_in: OptionInUpdate, product_id: int) -> None:
        with self._lock:
            product = self._find(product_id)
            if option_in.id not in product.options:
                raise NotFoundError(
                    f"Option {option_in.id} not found for product {product_id}"
                )

            clash = any(
                o.name == option_in.name and o.id != option_in.id
                for o in product.options.values()
            )
            if clash:
                raise InvalidArgumentError(
                    f"Option '{option_in.name}' already exists for product {product_id}"
                )

            product.options[option_in.id] = OptionOut(
                id=option_in.id,
                name=option_in.name,
                quantity=option_in.quantity,
            )

    def delete_options(self, option_ids: List[int], product_id: int) -> None:
        with self._lock:
            product = self._find(product_id)

            missing = [i for i in option_ids if i not in product.options]
            if missing:
                raise NotFoundError(
                    f"Options not found for product {product_id}: "
                    f"{', '.join(str(i) for i in missing)}"
                )

            if len(set(option_ids)) >= len(product.options):
                raise InvalidArgumentError(
                    f"Product {product_id} must keep at least one option"
                )

            for option_id in option_ids:
                product.options.pop(option_id, None)
