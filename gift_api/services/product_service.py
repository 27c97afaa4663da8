"""
Contract between the products router and whatever owns product data.

The router only ever talks to a ``ProductService``; persistence, locking and
business rules belong to the implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from gift_api.core.pagination import Page, Pageable


# -------------------------------------------------
# Service inputs
# -------------------------------------------------

@dataclass(frozen=True)
class OptionInCreate:
    name: str
    quantity: int


@dataclass(frozen=True)
class OptionInUpdate:
    id: int
    name: str
    quantity: int


@dataclass(frozen=True)
class ProductInCreate:
    name: str
    price: int
    image_url: str
    category_id: int
    options: List[OptionInCreate]


@dataclass(frozen=True)
class ProductInUpdate:
    name: str
    price: int
    image_url: str
    category_id: int


# -------------------------------------------------
# Service outputs
# -------------------------------------------------

@dataclass(frozen=True)
class OptionOut:
    id: int
    name: str
    quantity: int


@dataclass(frozen=True)
class ProductOut:
    id: int
    name: str
    price: int
    image_url: str
    category_id: int


@dataclass(frozen=True)
class ProductOutWithOptions:
    id: int
    name: str
    price: int
    image_url: str
    category_id: int
    options: List[OptionOut]


# -------------------------------------------------
# Contract
# -------------------------------------------------

class ProductService(ABC):

    @abstractmethod
    def get_product(self, product_id: int) -> ProductOutWithOptions:
        """Raises NotFoundError when the product does not exist."""

    @abstractmethod
    def get_products_by_page(
        self, pageable: Pageable, category_id: int
    ) -> Page[ProductOut]:
        ...

    @abstractmethod
    def create_product(self, product_in: ProductInCreate) -> int:
        ...

    @abstractmethod
    def update_product(self, product_in: ProductInUpdate, product_id: int) -> int:
        ...

    @abstractmethod
    def delete_product(self, product_id: int) -> int:
        ...

    @abstractmethod
    def delete_products(self, product_ids: List[int]) -> None:
        ...

    @abstractmethod
    def add_option(self, option_in: OptionInCreate, product_id: int) -> None:
        ...

    @abstractmethod
    def add_options(self, option_ins: List[OptionInCreate], product_id: int) -> None:
        ...

    @abstractmethod
    def update_option(self, option_in: OptionInUpdate, product_id: int) -> None:
        ...

    @abstractmethod
    def delete_options(self, option_ids: List[int], product_id: int) -> None:
        ...
