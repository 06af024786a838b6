"""etcd2-client - A Python client for the etcd v2 HTTP API."""

__version__ = "0.2.0"
__author__ = "Anton Irshenko"
__email__ = "a_irshenko@example.com"

from .core.auth import generate_basicauth_header
from .core.client import EtcdClient
from .core.document import Document
from .core.errors import (
    DocumentTypeError,
    EtcdError,
    EtcdHTTPError,
    EtcdNotFoundError,
    EtcdTransportError,
)
from .core.logging import setup_logging
from .core.paths import join_path
from .core.settings import ClientSettings

__all__ = [
    "ClientSettings",
    "Document",
    "DocumentTypeError",
    "EtcdClient",
    "EtcdError",
    "EtcdHTTPError",
    "EtcdNotFoundError",
    "EtcdTransportError",
    "generate_basicauth_header",
    "join_path",
    "setup_logging",
]
