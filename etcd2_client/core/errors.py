"""Exceptions raised by the etcd v2 client."""

from typing import Optional


class EtcdError(Exception):
    """Base class for every error raised by this package."""


class EtcdTransportError(EtcdError):
    """The HTTP request could not be completed (connection refused, timeout...)."""


class EtcdHTTPError(EtcdError):
    """etcd answered with a non-2xx status.

    Attributes:
        status_line: status code and reason phrase, e.g. ``"404 Not Found"``
        status_code: numeric HTTP status
        message: the ``message`` field of the error body, when there is one
        error_code: etcd's numeric ``errorCode`` (100 is "Key not found")
        cause: etcd's ``cause`` field, usually the offending key
        index: etcd index at the time of the error
    """

    def __init__(
        self,
        status_line: str,
        status_code: int,
        message: Optional[str] = None,
        error_code: Optional[int] = None,
        cause: Optional[str] = None,
        index: Optional[int] = None,
    ):
        self.status_line = status_line
        self.status_code = status_code
        self.message = message
        self.error_code = error_code
        self.cause = cause
        self.index = index
        text = f"{status_line} - {message}" if message else status_line
        super().__init__(text)


class EtcdNotFoundError(EtcdError):
    """A lookup performed by the client itself found no match."""


class DocumentTypeError(TypeError):
    """A document value was accessed as the wrong JSON kind."""


__all__ = [
    "DocumentTypeError",
    "EtcdError",
    "EtcdHTTPError",
    "EtcdNotFoundError",
    "EtcdTransportError",
]
