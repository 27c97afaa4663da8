import pytest
import requests

from gift_api.integrations.products_client import ProductsAPIError, ProductsClient


class FakeResponse:

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ("" if payload is None else str(payload))
        self.content = self.text.encode()

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(*responses):
    session = FakeSession(*responses)
    return ProductsClient("http://catalog.test/", timeout=5, session=session), session


def test_requires_base_url():
    with pytest.raises(ProductsAPIError, match="not configured"):
        ProductsClient("")


def test_retries_skip_post():
    client = ProductsClient("http://catalog.test")

    retry = client.session.get_adapter("http://catalog.test").max_retries

    assert "POST" not in retry.allowed_methods
    assert {"GET", "PUT", "DELETE"} <= set(retry.allowed_methods)
    assert 503 in retry.status_forcelist


def test_list_products_builds_query():
    client, session = _client(FakeResponse(payload={"products": []}))

    assert client.list_products(3, 1, 50, ["name,desc"]) == {"products": []}

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://catalog.test/api/products"
    assert call["params"] == {"categoryId": 3, "page": 1, "size": 50, "sort": ["name,desc"]}
    assert call["timeout"] == 5


def test_empty_body_returns_none():
    client, session = _client(FakeResponse(text=""))

    assert client.delete_products([1, 2]) is None
    assert session.calls[0]["json"] == {"productIds": [1, 2]}


def test_error_status_keeps_detail():
    client, _ = _client(FakeResponse(status_code=404, payload={"detail": "Product 1 not found"}, text="x"))

    with pytest.raises(ProductsAPIError) as exc:
        client.get_product(1)

    assert exc.value.upstream_status == 404
    assert exc.value.detail == "Product 1 not found"
    assert exc.value.status_code == 502


def test_invalid_json_raises():
    client, _ = _client(FakeResponse(payload=None, text="<html>"))

    with pytest.raises(ProductsAPIError, match="Invalid"):
        client.get_product(1)


def test_connection_error():
    client, _ = _client(requests.ConnectionError("down"))

    with pytest.raises(ProductsAPIError, match="unreachable"):
        client.get_product(1)
