"""Turn etcd HTTP responses into documents or typed errors."""

import json
from typing import Optional

import httpx

from .document import Document
from .errors import EtcdHTTPError


def status_line(response: httpx.Response) -> str:
    """Status code and reason phrase, e.g. ``"404 Not Found"``."""
    reason = response.reason_phrase
    return f"{response.status_code} {reason}" if reason else str(response.status_code)


def is_success(response: httpx.Response) -> bool:
    return str(response.status_code).startswith("2")


def _error_from_body(response: httpx.Response) -> EtcdHTTPError:
    """Build an ``EtcdHTTPError``, borrowing etcd's error fields when parseable."""
    message = error_code = cause = index = None
    try:
        payload = json.loads(response.content)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        if isinstance(payload.get("message"), str):
            message = payload["message"]
        error_code = payload.get("errorCode")
        cause = payload.get("cause")
        index = payload.get("index")
    return EtcdHTTPError(
        status_line(response),
        response.status_code,
        message=message,
        error_code=error_code,
        cause=cause,
        index=index,
    )


def _has_empty_body(response: httpx.Response) -> bool:
    # etcd omits Content-Length on 204 responses
    return (
        response.status_code == 204
        or response.headers.get("Content-Length") == "0"
    )


def interpret_response(
    response: httpx.Response, from_key: Optional[str] = None
) -> Document:
    """Interpret a response from the versioned API.

    Non-2xx statuses raise ``EtcdHTTPError``. A declared empty body yields a
    null document whatever ``from_key`` is. Otherwise the body is parsed and
    either returned whole or reduced to its ``from_key`` field. Invalid JSON
    on a 2xx response propagates as ``ValueError``.
    """
    if not is_success(response):
        raise _error_from_body(response)

    if _has_empty_body(response):
        return Document(None)

    envelope = Document.from_json(response.content)
    if from_key is None:
        return envelope
    return envelope[from_key]


def interpret_status_response(response: httpx.Response) -> Document:
    """Interpret a response from a base endpoint (``/version``, ``/health``...).

    Failures carry the status line only.
    """
    if not is_success(response):
        raise EtcdHTTPError(status_line(response), response.status_code)
    return Document.from_json(response.content)


__all__ = ["interpret_response", "interpret_status_response", "status_line"]
