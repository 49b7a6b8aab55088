from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode, urlsplit

import requests

from .exceptions import (
    ApiError,
    AsyncClientUnavailableError,
    BadRequestError,
    ConfigurationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from .structures import RequestArgs, RequestParams, ResponseData
from .utils import dump_body, error_message, is_unauthorized_body, parse_body

try:
    import httpx
except ImportError:  # pragma: no cover - depends on installed extra
    httpx = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

BASE_URL = "https://api.kosmo.delivery/v2"
API_KEY_ENV = "KOSMO_API_KEY"


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


@dataclass(frozen=True)
class Kosmo:
    """Kosmo delivery API client with sync and async methods.

    The instance holds only the credential and connection options, every call
    opens its own transport session, so one client can be shared freely.
    """

    api_key: str = field(repr=False)
    base_url: str = BASE_URL
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str):
            raise TypeError("api_key must be str")
        if not isinstance(self.base_url, str):
            raise ConfigurationError("base_url must be str")
        parts = urlsplit(self.base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigurationError(f"Invalid base URL: {self.base_url!r}")

    @classmethod
    def from_env(cls, env_var: str = API_KEY_ENV, **options: Any) -> "Kosmo":
        api_key = os.getenv(env_var)
        if api_key is None or not api_key.strip():
            raise ConfigurationError(f"Missing required environment variable: {env_var}")
        return cls(api_key, **options)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _build_url(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        if not isinstance(path, str):
            raise TypeError("path must be str")
        url = f"{self.base_url.rstrip('/')}/{path.strip('/')}"
        if not params:
            return url
        clean = {k: _query_value(v) for k, v in params.items() if v is not None}
        if not clean:
            return url
        return f"{url}?{urlencode(clean)}"

    @staticmethod
    def _handle_response(response: ResponseData) -> Any:
        status_code = response.status_code
        body = parse_body(response.text)

        # the API reports some auth failures in the body with a non-401 status
        if is_unauthorized_body(body):
            raise UnauthorizedError(error_message(response), status_code, response.text)

        if HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES:
            return body
        if status_code == HTTPStatus.BAD_REQUEST:
            raise BadRequestError(response.text, status_code, response.text)
        if status_code == HTTPStatus.UNAUTHORIZED:
            raise UnauthorizedError(error_message(response), status_code, response.text)
        if status_code == HTTPStatus.FORBIDDEN:
            raise ForbiddenError(error_message(response), status_code, response.text)
        if status_code == HTTPStatus.NOT_FOUND:
            raise NotFoundError(error_message(response), status_code, response.text)
        if status_code == HTTPStatus.METHOD_NOT_ALLOWED:
            raise ApiError(response.text, status_code, response.text)
        if status_code == HTTPStatus.TOO_MANY_REQUESTS:
            raise RateLimitError(error_message(response), status_code, response.text)
        if HTTPStatus.INTERNAL_SERVER_ERROR <= status_code <= 599:
            raise ServerError(error_message(response), status_code, response.text)
        raise ApiError(
            f"Unexpected response status {status_code}: {response.text}",
            status_code,
            response.text,
        )

    def _classify(self, method: str, url: str, response: ResponseData) -> Any:
        try:
            return self._handle_response(response)
        except ApiError as exc:
            logger.debug("%s %s failed with %s (%s)", method, url, type(exc).__name__, exc.status_code)
            raise

    def _send(self, method: str, url: str, data: Optional[str]) -> ResponseData:
        if httpx is not None:
            try:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.request(method, url, content=data, headers=self.headers)
            except httpx.TimeoutException as exc:
                raise RequestTimeoutError("HTTP request timeout exceeded.") from exc
            except httpx.HTTPError as exc:
                raise TransportError("HTTP transport error in httpx client.") from exc
        else:
            try:
                with requests.Session() as session:
                    response = session.request(method, url, data=data, headers=self.headers, timeout=self.timeout)
            except requests.Timeout as exc:
                raise RequestTimeoutError("HTTP request timeout exceeded.") from exc
            except requests.RequestException as exc:
                raise TransportError("HTTP transport error in requests client.") from exc
        return ResponseData.from_transport(response)

    def _request(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
    ) -> Any:
        url = self._build_url(path, params)
        logger.debug("%s %s", method, url)
        response = self._send(method, url, data)
        return self._classify(method, url, response)

    async def _request_async(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
    ) -> Any:
        if httpx is None:
            raise AsyncClientUnavailableError("Async methods require httpx. Install kosmo-client[httpx].")

        url = self._build_url(path, params)
        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, content=data, headers=self.headers)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError("HTTP request timeout exceeded.") from exc
        except httpx.HTTPError as exc:
            raise TransportError("HTTP transport error in httpx client.") from exc

        return self._classify(method, url, ResponseData.from_transport(response))

    @staticmethod
    def _create_quotes_props(params: Dict[str, Any]) -> RequestArgs:
        return RequestArgs(path="quotes", params={}, method="POST", data=dump_body(params))

    def create_quotes(self, params: Dict[str, Any]) -> Any:
        return self._request(**self._create_quotes_props(params))

    async def create_quotes_async(self, params: Dict[str, Any]) -> Any:
        return await self._request_async(**self._create_quotes_props(params))

    @staticmethod
    def _create_order_props(params: Dict[str, Any]) -> RequestArgs:
        return RequestArgs(path="orders", params={}, method="POST", data=dump_body(params))

    def create_order(self, params: Dict[str, Any]) -> Any:
        return self._request(**self._create_order_props(params))

    async def create_order_async(self, params: Dict[str, Any]) -> Any:
        return await self._request_async(**self._create_order_props(params))

    @staticmethod
    def _list_orders_props(params: Optional[Dict[str, Any]] = None) -> RequestParams:
        return RequestParams(path="orders", params=dict(params or {}))

    def list_orders(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request(**self._list_orders_props(params))

    async def list_orders_async(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self._request_async(**self._list_orders_props(params))

    @staticmethod
    def _get_order_props(order_id: str) -> RequestParams:
        if not isinstance(order_id, str) or not order_id:
            raise ValueError("order_id must be a non-empty str")
        return RequestParams(path=f"orders/{quote(order_id, safe='')}", params={})

    def get_order(self, order_id: str) -> Any:
        return self._request(**self._get_order_props(order_id))

    async def get_order_async(self, order_id: str) -> Any:
        return await self._request_async(**self._get_order_props(order_id))


__all__ = [
    "BASE_URL",
    "API_KEY_ENV",
    "Kosmo",
    "httpx",
    "requests",
]
