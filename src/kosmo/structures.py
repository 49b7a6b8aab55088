from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


class RequestParams(dict):
    """Path and query string of a Kosmo API call, as ``_request`` kwargs."""

    def __init__(self, *, path: str, params: Dict[str, Any]) -> None:
        if not isinstance(path, str):
            raise TypeError("path must be str")
        if not isinstance(params, dict):
            raise TypeError("params must be dict")
        super().__init__(path=path, params=params)


class RequestArgs(RequestParams):
    """Kosmo API call that may carry a JSON-encoded body (quotes, orders)."""

    def __init__(
        self,
        *,
        path: str,
        params: Dict[str, Any],
        method: str = "GET",
        data: Optional[str] = None,
    ) -> None:
        if not isinstance(method, str):
            raise TypeError("method must be str")
        if data is not None and not isinstance(data, str):
            raise TypeError("data must be str or None")
        super().__init__(path=path, params=params)
        self["method"] = method
        if data is not None:
            self["data"] = data


@dataclass(frozen=True)
class ResponseData:
    """Transport-neutral view of an HTTP response."""

    status_code: int
    text: str
    reason_phrase: str = ""

    @classmethod
    def from_transport(cls, response: Any) -> "ResponseData":
        # httpx exposes ``reason_phrase``, requests exposes ``reason``
        reason = getattr(response, "reason_phrase", None)
        if reason is None:
            reason = getattr(response, "reason", None)
        return cls(
            status_code=int(response.status_code),
            text=response.text or "",
            reason_phrase=reason or "",
        )


__all__ = ["RequestParams", "RequestArgs", "ResponseData"]
