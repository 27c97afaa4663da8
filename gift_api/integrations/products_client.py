"""
HTTP client for a remote gift products API exposing the same
``/api/products`` routes this service serves.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gift_api.core.errors import GiftApiError


logger = logging.getLogger(__name__)


class ProductsAPIError(GiftApiError):
    """Remote products API failed or answered with an error status."""

    status_code = 502

    def __init__(self, message: str, upstream_status: Optional[int] = None, detail: str = ""):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.detail = detail or message


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.text


class ProductsClient:

    # POST is excluded: retrying a create can duplicate products
    RETRY_METHODS = frozenset({"GET", "PUT", "DELETE"})

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ProductsAPIError("Products API base URL not configured.")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else self._build_session(retries)

    @classmethod
    def _build_session(cls, retries: int) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            max_retries=Retry(
                total=retries,
                backoff_factor=0.5,
                status_forcelist=[502, 503, 504],
                allowed_methods=cls.RETRY_METHODS,
            )
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"Accept": "application/json"})
        return session

    def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        method = method.upper()

        try:
            response = self.session.request(
                method=method,
                url=f"{self.base_url}{path}",
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException:
            logger.exception("Products API unreachable | %s %s", method, path)
            raise ProductsAPIError(f"Products API unreachable: {method} {path}")

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.warning(
                "Products API answered %s | %s %s | %s",
                response.status_code,
                method,
                path,
                detail,
            )
            raise ProductsAPIError(
                f"Products API error {response.status_code} on {method} {path}",
                upstream_status=response.status_code,
                detail=detail,
            )

        # Delete-many and the option writes answer with an empty body
        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            logger.error("Products API sent non-JSON body | %s %s", method, path)
            raise ProductsAPIError(f"Invalid Products API response on {method} {path}")

    # -----------------------------
    # Products
    # -----------------------------
    def get_product(self, product_id: int) -> dict[str, Any]:
        return self.request("GET", f"/api/products/{product_id}")

    def list_products(
        self,
        category_id: int,
        page: int,
        size: int,
        sort: list[str],
    ) -> dict[str, Any]:
        params = {"categoryId": category_id, "page": page, "size": size, "sort": sort}
        return self.request("GET", "/api/products", params=params)

    def create_product(self, body: dict[str, Any]) -> int:
        return self.request("POST", "/api/products", json=body)

    def update_product(self, product_id: int, body: dict[str, Any]) -> int:
        return self.request("PUT", f"/api/products/{product_id}", json=body)

    def delete_product(self, product_id: int) -> int:
        return self.request("DELETE", f"/api/products/{product_id}")

    def delete_products(self, product_ids: list[int]) -> None:
        self.request("DELETE", "/api/products", json={"productIds": product_ids})

    # -----------------------------
    # Options
    # -----------------------------
    def add_option(self, product_id: int, body: dict[str, Any]) -> None:
        self.request("POST", f"/api/products/{product_id}/options", json=body)

    def update_option(self, product_id: int, option_id: int, body: dict[str, Any]) -> None:
        self.request("PUT", f"/api/products/{product_id}/options/{option_id}", json=body)

    def delete_options(self, product_id: int, option_ids: list[int]) -> list[int]:
        return self.request("DELETE", f"/api/products/{product_id}/options", json=option_ids)
