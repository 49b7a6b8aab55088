from __future__ import annotations

from typing import Optional


class KosmoError(Exception):
    """Base error for everything raised by the client."""


class ApiError(KosmoError):
    """Generic API error.

    Raised directly for 405 and for statuses with no dedicated subclass.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class BadRequestError(ApiError):
    """Raised for HTTP 400."""


class UnauthorizedError(ApiError):
    """Raised for HTTP 401 or an "unauthorized" error body."""


class ForbiddenError(ApiError):
    """Raised for HTTP 403."""


class NotFoundError(ApiError):
    """Raised for HTTP 404."""


class RateLimitError(ApiError):
    """Raised for HTTP 429."""


class ServerError(ApiError):
    """Raised for HTTP 5xx."""


class ConfigurationError(KosmoError, ValueError):
    """Raised when the client cannot be configured."""


class AsyncClientUnavailableError(RuntimeError):
    """Raised when async methods are used without httpx installed."""


class TransportError(KosmoError, RuntimeError):
    """Raised when HTTP client transport fails."""


class RequestTimeoutError(TransportError):
    """Raised when HTTP request exceeds timeout."""


__all__ = [
    "KosmoError",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ConfigurationError",
    "AsyncClientUnavailableError",
    "TransportError",
    "RequestTimeoutError",
]
