"""Connection settings for the etcd v2 client."""

import logging
import os
from dataclasses import dataclass, field
from typing import Tuple
from urllib.parse import urlparse

from .auth import generate_basicauth_header
from .paths import join_path

API_VERSION_PREFIX = "v2"
SUPPORTED_PROTOCOLS = ("http", "https")
LOOPBACK_HOSTS = ("127.0.0.1", "::1", "localhost")

DEFAULT_HOSTNAME = "127.0.0.1"
DEFAULT_PORT = 2379
DEFAULT_READ_TIMEOUT = 60


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class ClientSettings:
    """Immutable connection settings and the URLs derived from them.

    ``srv_domain``, ``failover``, ``cert``, ``ca_cert`` and ``reconnect`` are
    accepted and stored for API compatibility but have no effect on how
    requests are issued.
    """

    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT
    protocol: str = "http"
    srv_domain: str = ""
    read_timeout: float = DEFAULT_READ_TIMEOUT
    failover: bool = True
    cert: str = ""
    ca_cert: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    reconnect: bool = True

    base_url: str = field(init=False, default="")
    api_url: str = field(init=False, default="", repr=False)
    basic_auth_header: str = field(init=False, default="", repr=False)

    def __post_init__(self):
        if self.protocol not in SUPPORTED_PROTOCOLS:
            raise ValueError(
                f"protocol must be one of {SUPPORTED_PROTOCOLS}, got {self.protocol!r}"
            )
        # frozen: derived and normalized fields go through object.__setattr__
        object.__setattr__(self, "port", int(self.port))
        object.__setattr__(self, "username", self.username or "")
        object.__setattr__(self, "password", self.password or "")

        host = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        base_url = f"{self.protocol}://{host}:{self.port}"
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "api_url", join_path(base_url, API_VERSION_PREFIX))

        if self.username and self.password:
            self._warn_if_insecure()
            object.__setattr__(
                self,
                "basic_auth_header",
                generate_basicauth_header(self.username, self.password),
            )

    def _warn_if_insecure(self) -> None:
        if self.tls_enabled:
            return
        logger = logging.getLogger("etcd2_client.settings")
        if self.hostname not in LOOPBACK_HOSTS:
            logger.warning(
                "etcd_basic_auth_without_tls",
                extra={
                    "event": {"category": ["config"], "action": "insecure_auth"},
                    "etcd": {"host": self.hostname, "scheme": self.protocol},
                },
            )
        if self.failover:
            logger.warning(
                "etcd_basic_auth_without_tls_with_failover",
                extra={
                    "event": {"category": ["config"], "action": "insecure_auth"},
                    "etcd": {"host": self.hostname, "failover": True},
                },
            )

    @property
    def tls_enabled(self) -> bool:
        return self.protocol == "https"

    @staticmethod
    def _parse_host_port(endpoint: str) -> Tuple[str, int, str]:
        """Parse host, port, and scheme from endpoint URL.

        A bare ``host:port`` is read as ``http://host:port``.
        """
        endpoint = str(endpoint).strip()
        if "://" not in endpoint:
            endpoint = f"http://{endpoint}"
        parsed = urlparse(endpoint)
        host = parsed.hostname or DEFAULT_HOSTNAME
        port = parsed.port or DEFAULT_PORT
        scheme = parsed.scheme or "http"
        return host, int(port), scheme

    @classmethod
    def from_env(cls, **overrides) -> "ClientSettings":
        """Build settings from ``EtcdSettings__*`` environment variables.

        Environment variables:
            EtcdSettings__HostName: endpoint, e.g. ``https://etcd:2379`` or ``etcd:2379``
            EtcdSettings__UserName: Basic Auth username
            EtcdSettings__Password: Basic Auth password
            EtcdSettings__ReadTimeout: read timeout in seconds
            EtcdSettings__Failover: ``true`` / ``false``

        Keyword arguments take precedence over the environment.
        """
        kwargs = {}
        endpoint = os.getenv("EtcdSettings__HostName")
        if endpoint:
            host, port, scheme = cls._parse_host_port(endpoint)
            kwargs.update(hostname=host, port=port, protocol=scheme)
        username = os.getenv("EtcdSettings__UserName")
        if username:
            kwargs["username"] = username
        password = os.getenv("EtcdSettings__Password")
        if password:
            kwargs["password"] = password
        timeout = os.getenv("EtcdSettings__ReadTimeout")
        if timeout:
            kwargs["read_timeout"] = float(timeout)
        kwargs["failover"] = _env_flag("EtcdSettings__Failover", True)
        kwargs.update(overrides)
        return cls(**kwargs)


__all__ = ["API_VERSION_PREFIX", "ClientSettings"]
