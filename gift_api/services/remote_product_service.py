import logging
from contextlib import contextmanager
from typing import Any, Dict, List

from gift_api.core.errors import InvalidArgumentError, NotFoundError
from gift_api.core.pagination import Page, Pageable
from gift_api.integrations.products_client import ProductsAPIError, ProductsClient
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


@contextmanager
def _remote_errors():
    """Turn remote 404/400 answers back into the local error types."""
    try:
        yield
    except ProductsAPIError as e:
        if e.upstream_status == 404:
            raise NotFoundError(e.detail) from e
        if e.upstream_status == 400:
            raise InvalidArgumentError(e.detail) from e
        raise


# -------------------------------------------------
# JSON <-> service types
# -------------------------------------------------

def _product_body(product_in) -> Dict[str, Any]:
    return {
        "name": product_in.name,
        "price": product_in.price,
        "imageUrl": product_in.image_url,
        "categoryId": product_in.category_id,
    }


def _option_body(option_in) -> Dict[str, Any]:
    return {"name": option_in.name, "quantity": option_in.quantity}


def _product_out(data: Dict[str, Any]) -> ProductOut:
    return ProductOut(
        id=data["id"],
        name=data["name"],
        price=data["price"],
        image_url=data["imageUrl"],
        category_id=data["categoryId"],
    )


def _product_out_with_options(data: Dict[str, Any]) -> ProductOutWithOptions:
    return ProductOutWithOptions(
        id=data["id"],
        name=data["name"],
        price=data["price"],
        image_url=data["imageUrl"],
        category_id=data["categoryId"],
        options=[
            OptionOut(id=o["id"], name=o["name"], quantity=o["quantity"])
            for o in data.get("options", [])
        ],
    )


class RemoteProductService(ProductService):
    """
    ProductService that forwards every call to another products API.
    Selected by create_app() when PRODUCTS_API_URL is set.
    """

    def __init__(self, client: ProductsClient):
        self.client = client

    def get_product(self, product_id: int) -> ProductOutWithOptions:
        with _remote_errors():
            return _product_out_with_options(self.client.get_product(product_id))

    def get_products_by_page(self, pageable: Pageable, category_id: int) -> Page[ProductOut]:
        sort = [f"{o.field},{o.direction.value}" for o in pageable.sort]
        with _remote_errors():
            data = self.client.list_products(category_id, pageable.page, pageable.size, sort)

        return Page(
            content=[_product_out(p) for p in data.get("products", [])],
            pageable=pageable,
            total_elements=data.get("totalElements", 0),
        )

    def create_product(self, product_in: ProductInCreate) -> int:
        body = _product_body(product_in)
        body["options"] = [_option_body(o) for o in product_in.options]
        with _remote_errors():
            return self.client.create_product(body)

    def update_product(self, product_in: ProductInUpdate, product_id: int) -> int:
        with _remote_errors():
            return self.client.update_product(product_id, _product_body(product_in))

    def delete_product(self, product_id: int) -> int:
        with _remote_errors():
            return self.client.delete_product(product_id)

    def delete_products(self, product_ids: List[int]) -> None:
        with _remote_errors():
            self.client.delete_products(product_ids)

    def add_option(self, option_in: OptionInCreate, product_id: int) -> None:
        with _remote_errors():
            self.client.add_option(product_id, _option_body(option_in))

    def add_options(self, option_ins: List[OptionInCreate], product_id: int) -> None:
        # The remote API has no batch route; options are added one by one
        for option_in in option_ins:
            self.add_option(option_in, product_id)

    def update_option(self, option_in: OptionInUpdate, product_id: int) -> None:
        with _remote_errors():
            self.client.update_option(product_id, option_in.id, _option_body(option_in))

    def delete_options(self, option_ids: List[int], product_id: int) -> None:
        with _remote_errors():
            self.client.delete_options(product_id, option_ids)
