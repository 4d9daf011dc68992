from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from shopsmart.core.logging import get_logger

logger = get_logger(__name__)


class ProductApiError(RuntimeError):
    """A catalog request returned a non-2xx response or could not be sent."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProductApi:
    """
    Data access for the catalog REST API.

    Every failure is reported with a generic message ("Failed to fetch
    products", ...); the server's error body is only logged.

    A preconfigured ``httpx.Client`` can be passed in (tests hand over a
    FastAPI TestClient); otherwise one is created against ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "",
        client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ProductApi":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, failure: str, **kwargs: Any) -> Any:
        try:
            r = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ProductApiError(failure) from e

        if not r.is_success:
            logger.debug("%s %s -> %s %s", method, url, r.status_code, r.text)
            raise ProductApiError(failure, status_code=r.status_code)
        return r.json()

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/api/health", "Failed to reach backend")

    def get_all(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/products", "Failed to fetch products")

    def get_by_id(self, product_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}", "Failed to fetch product")

    def create(self, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/products", "Failed to create product", json=product)

    def update(self, product_id: int, product: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/products/{product_id}", "Failed to update product", json=product)

    def delete(self, product_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/products/{product_id}", "Failed to delete product")
