import pytest
from fastapi.testclient import TestClient

from gift_api.core.errors import NotFoundError
from gift_api.core.pagination import Page
from gift_api.main import create_app
from gift_api.services.memory_product_service import InMemoryProductService
from gift_api.services.product_service import (
    OptionOut,
    ProductOut,
    ProductOutWithOptions,
    ProductService,
)


class RecordingProductService(ProductService):
    """Records every call and returns canned results."""

    def __init__(self):
        self.calls = []
        self.next_id = 42
        self.missing_ids = set()

    def _record(self, name, *args):
        self.calls.append((name, args))

    def get_product(self, product_id):
        self._record("get_product", product_id)
        if product_id in self.missing_ids:
            raise NotFoundError(f"Product {product_id} not found")
        return ProductOutWithOptions(
            id=product_id,
            name="Mug",
            price=1000,
            image_url="http://img/mug.png",
            category_id=1,
            options=[OptionOut(id=7, name="Blue", quantity=3)],
        )

    def get_products_by_page(self, pageable, category_id):
        self._record("get_products_by_page", pageable, category_id)
        content = [ProductOut(id=1, name="Mug", price=1000, image_url="u", category_id=category_id)]
        return Page(content=content, pageable=pageable, total_elements=1)

    def create_product(self, product_in):
        self._record("create_product", product_in)
        return self.next_id

    def update_product(self, product_in, product_id):
        self._record("update_product", product_in, product_id)
        return product_id

    def delete_product(self, product_id):
        self._record("delete_product", product_id)
        if product_id in self.missing_ids:
            raise NotFoundError(f"Product {product_id} not found")
        return product_id

    def delete_products(self, product_ids):
        self._record("delete_products", product_ids)

    def add_option(self, option_in, product_id):
        self._record("add_option", option_in, product_id)

    def add_options(self, option_ins, product_id):
        self._record("add_options", option_ins, product_id)

    def update_option(self, option_in, product_id):
        self._record("update_option", option_in, product_id)

    def delete_options(self, option_ids, product_id):
        # Process in reverse to show the echoed body does not depend on it
        self._record("delete_options", list(reversed(option_ids)), product_id)

    def names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def recording_service():
    return RecordingProductService()


@pytest.fixture
def recording_client(recording_service):
    return TestClient(create_app(recording_service))


@pytest.fixture
def memory_service():
    return InMemoryProductService()


@pytest.fixture
def client(memory_service):
    return TestClient(create_app(memory_service))


@pytest.fixture
def product_payload():
    return {
        "name": "Coffee Mug",
        "price": 12000,
        "imageUrl": "http://img/mug.png",
        "categoryId": 1,
        "options": [
            {"name": "Blue", "quantity": 10},
            {"name": "Red", "quantity": 5},
        ],
    }
