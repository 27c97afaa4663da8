"""RemoteProductService talking to a second in-memory app over HTTP."""

import pytest
from fastapi.testclient import TestClient

from gift_api.core.config import settings
from gift_api.core.errors import InvalidArgumentError, NotFoundError
from gift_api.core.pagination import Direction, Order, Pageable
from gift_api.integrations.products_client import ProductsAPIError, ProductsClient
from gift_api.main import build_product_service, create_app
from gift_api.services.memory_product_service import InMemoryProductService
from gift_api.services.product_service import (
    OptionInCreate,
    OptionInUpdate,
    ProductInCreate,
    ProductInUpdate,
)
from gift_api.services.remote_product_service import RemoteProductService


@pytest.fixture
def upstream():
    return InMemoryProductService()


@pytest.fixture
def remote(upstream):
    session = TestClient(create_app(upstream))
    return RemoteProductService(ProductsClient("http://testserver", session=session))


def _create(remote, name="Mug", category_id=1):
    return remote.create_product(
        ProductInCreate(name, 1000, "http://img/x.png", category_id, [OptionInCreate("Blue", 2)])
    )


def test_create_and_get(remote, upstream):
    product_id = _create(remote)

    product = remote.get_product(product_id)

    assert product == upstream.get_product(product_id)
    assert product.options[0].name == "Blue"


def test_page_round_trip(remote):
    for name in ["B", "A", "C"]:
        _create(remote, name)

    page = remote.get_products_by_page(Pageable(0, 2, (Order("name", Direction.DESC),)), 1)

    assert [p.name for p in page.content] == ["C", "B"]
    assert page.total_elements == 3
    assert page.has_next is True


def test_not_found_maps_back(remote):
    with pytest.raises(NotFoundError, match="Product 9 not found"):
        remote.get_product(9)


def test_invalid_argument_maps_back(remote):
    product_id = _create(remote)

    with pytest.raises(InvalidArgumentError):
        remote.add_option(OptionInCreate("Blue", 1), product_id)


def test_update_and_delete(remote, upstream):
    product_id = _create(remote)

    assert remote.update_product(ProductInUpdate("Cup", 5, "u", 2), product_id) == product_id
    assert upstream.get_product(product_id).name == "Cup"

    assert remote.delete_product(product_id) == product_id
    with pytest.raises(NotFoundError):
        upstream.get_product(product_id)


def test_delete_many(remote, upstream):
    ids = [_create(remote, "A"), _create(remote, "B")]

    remote.delete_products(ids)

    assert upstream.get_products_by_page(Pageable(0, 10), 1).total_elements == 0


def test_option_calls(remote, upstream):
    product_id = _create(remote)

    remote.add_options([OptionInCreate("Red", 1), OptionInCreate("Gold", 1)], product_id)
    red = next(o for o in upstream.get_product(product_id).options if o.name == "Red")
    remote.update_option(OptionInUpdate(red.id, "Ruby", 4), product_id)
    remote.delete_options([red.id], product_id)

    names = [o.name for o in upstream.get_product(product_id).options]
    assert names == ["Blue", "Gold"]


def test_other_upstream_errors_surface_as_502(remote):
    app = create_app(remote)
    remote.client.session = _BrokenSession()

    r = TestClient(app).get("/api/products/1")

    assert r.status_code == 502


class _BrokenSession:

    def request(self, **kwargs):
        class _Response:
            status_code = 503
            text = "unavailable"
            content = b"unavailable"

            def json(self):
                raise ValueError("not json")

        return _Response()


def test_build_product_service_selects_remote(monkeypatch):
    monkeypatch.setattr(settings, "PRODUCTS_API_URL", "http://catalog.test")

    assert isinstance(build_product_service(), RemoteProductService)


def test_build_product_service_defaults_to_memory(monkeypatch):
    monkeypatch.setattr(settings, "PRODUCTS_API_URL", "")

    assert isinstance(build_product_service(), InMemoryProductService)


def test_remote_error_type_is_not_swallowed(remote):
    remote.client.session = _BrokenSession()

    with pytest.raises(ProductsAPIError):
        remote.get_product(1)
