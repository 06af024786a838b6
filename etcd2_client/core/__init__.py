"""Core components of the etcd v2 client."""

from .client import EtcdClient
from .document import Document
from .settings import ClientSettings

__all__ = ["ClientSettings", "Document", "EtcdClient"]
