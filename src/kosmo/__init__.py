from __future__ import annotations

from .client import API_KEY_ENV, BASE_URL, Kosmo
from .exceptions import (
    ApiError,
    AsyncClientUnavailableError,
    BadRequestError,
    ConfigurationError,
    ForbiddenError,
    KosmoError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from .structures import RequestArgs, RequestParams, ResponseData
from .utils import dump_body, error_message, is_unauthorized_body, parse_body

__all__ = [
    "Kosmo",
    "BASE_URL",
    "API_KEY_ENV",
    "RequestParams",
    "RequestArgs",
    "ResponseData",
    "parse_body",
    "dump_body",
    "error_message",
    "is_unauthorized_body",
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
