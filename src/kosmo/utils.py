from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .structures import ResponseData

logger = logging.getLogger(__name__)

UNAUTHORIZED_MARKER = "unauthorized"


def _present(value: Any) -> bool:
    return value is not None and value is not False


def parse_body(text: Optional[str]) -> Optional[Any]:
    """Parse response text as JSON, returning None when it is not JSON."""

    if isinstance(text, (dict, list)):
        return text
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        logger.debug("Response body is not JSON, continuing without structured body")
        return None


def dump_body(payload: Any) -> str:
    """Serialize request payload into JSON text."""

    return json.dumps(payload)


def is_unauthorized_body(body: Any) -> bool:
    """Check whether a parsed body reports an authorization failure."""

    if not isinstance(body, dict):
        return False
    error = body.get("error")
    return isinstance(error, str) and UNAUTHORIZED_MARKER in error


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return json.dumps(value)
    return str(value)


def _detail_messages(details: Any) -> str:
    if isinstance(details, str):
        raise TypeError("details must be a sequence of objects")
    messages = []
    for detail in details:
        # a detail object without "message" renders as an empty entry
        if isinstance(detail, dict):
            message = detail.get("message")
        else:
            message = detail["message"]
        messages.append(_render(message))
    return ", ".join(messages)


def error_message(response: ResponseData) -> str:
    """Build a human readable message for a failed response.

    Prefers the ``error`` field, then the ``details[].message`` values, then the
    raw body. Non-object bodies fall back to the reason phrase. A malformed body
    always degrades to ``"<status>: <raw body>"``.
    """

    status = response.status_code
    try:
        body = parse_body(response.text)
        if isinstance(body, dict):
            if _present(body.get("error")):
                return f"{status}: {_render(body['error'])}"
            if _present(body.get("details")):
                return f"{status}: {_detail_messages(body['details'])}"
            return f"{status}: {response.text}"
        return f"{status}: {response.reason_phrase}"
    except (AttributeError, KeyError, TypeError, ValueError):
        logger.debug("Malformed error body for status %s, using raw text", status)
        return f"{status}: {response.text}"


__all__ = [
    "UNAUTHORIZED_MARKER",
    "parse_body",
    "dump_body",
    "is_unauthorized_body",
    "error_message",
]
