"""etcd v2 HTTP API client."""

import logging
from typing import Any, Iterable, Mapping, Optional

import httpx

from .document import Document
from .encoding import EncodedBody, encode_form, encode_json
from .errors import EtcdNotFoundError
from .paths import join_path
from .response import interpret_response, interpret_status_response
from .settings import ClientSettings
from .transport import Transport

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ttl / waitIndex value meaning "not given"
UNSET = -1


def _is_set(value: Optional[int]) -> bool:
    return value is not None and value != UNSET


class EtcdClient:
    """Synchronous client for the etcd v2 HTTP API.

    Key reads and writes return the ``node`` of etcd's response envelope;
    management calls return the whole envelope. Every result is a
    ``Document``. Failures raise subclasses of ``EtcdError``.

    Instances are not thread-safe; use one client per thread.

    Example:
        with EtcdClient(hostname="127.0.0.1", port=2379) as client:
            client.set("/app/feature", "on")
            client.get("/app/feature")["value"].as_str()
    """

    def __init__(
        self,
        hostname: str = "127.0.0.1",
        port: int = 2379,
        protocol: str = "http",
        srv_domain: str = "",
        read_timeout: float = 60,
        failover: bool = True,
        cert: str = "",
        ca_cert: str = "",
        username: str = "",
        password: str = "",
        reconnect: bool = True,
        http_client: Optional[httpx.Client] = None,
        settings: Optional[ClientSettings] = None,
    ):
        """Initialize the client.

        Args:
            hostname: etcd host
            port: etcd client port
            protocol: ``http`` or ``https``
            srv_domain: DNS SRV discovery domain (reserved, no effect)
            read_timeout: HTTP timeout in seconds, also bounds ``wait``
            failover: multi-endpoint failover (reserved, no effect)
            cert: client certificate path (reserved, no effect)
            ca_cert: CA certificate path (reserved, no effect)
            username: Basic Auth username
            password: Basic Auth password
            reconnect: automatic reconnection (reserved, no effect)
            http_client: httpx client to send requests with instead of an
                internally created one; it is not closed by ``close()``.
                Default headers configured on it (``httpx.Client(headers=...)``)
                are merged into every request alongside Content-Type and
                Authorization.
            settings: prebuilt settings, overriding every argument above
        """
        self._logger = logging.getLogger("etcd2_client.client")
        if settings is None:
            settings = ClientSettings(
                hostname=hostname,
                port=port,
                protocol=protocol,
                srv_domain=srv_domain,
                read_timeout=read_timeout,
                failover=failover,
                cert=cert,
                ca_cert=ca_cert,
                username=username,
                password=password,
                reconnect=reconnect,
            )
        self._settings = settings
        self._transport = Transport(
            read_timeout=settings.read_timeout,
            auth_header=settings.basic_auth_header,
            http_client=http_client,
        )

    @classmethod
    def from_env(
        cls, http_client: Optional[httpx.Client] = None, **overrides
    ) -> "EtcdClient":
        """Create a client from ``EtcdSettings__*`` environment variables."""
        return cls(
            settings=ClientSettings.from_env(**overrides), http_client=http_client
        )

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    @property
    def api_url(self) -> str:
        return self._settings.api_url

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "EtcdClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._settings.base_url!r})"

    # API interaction

    def _call_api(
        self,
        path: str,
        method: str,
        encoded: Optional[EncodedBody] = None,
        from_key: Optional[str] = None,
    ) -> Document:
        if encoded is None:
            encoded = encode_form(())
        response = self._transport.request(
            join_path(self._settings.api_url, path),
            method,
            body=encoded.body,
            content_type=encoded.content_type,
        )
        return interpret_response(response, from_key=from_key)

    def _call_api_form(
        self,
        path: str,
        method: str,
        params: Iterable,
        from_key: Optional[str] = None,
    ) -> Document:
        return self._call_api(path, method, encode_form(params), from_key=from_key)

    def _call_api_json(
        self,
        path: str,
        method: str,
        payload: Any,
        from_key: Optional[str] = None,
    ) -> Document:
        return self._call_api(path, method, encode_json(payload), from_key=from_key)

    def _call_status(self, path: str) -> Document:
        response = self._transport.request(
            join_path(self._settings.base_url, path), "GET", authenticate=False
        )
        return interpret_status_response(response)

    @staticmethod
    def _keys_path(key: str) -> str:
        return join_path("keys", key)

    # Keys and directories

    def ls(self, key: str, recursive: bool = False) -> Document:
        """List a directory.

        Returns the directory node; its children are under ``nodes``, which
        etcd omits entirely for an empty directory.
        """
        path = self._keys_path(key)
        if recursive:
            path += "?recursive=true"
        return self._call_api(path, "GET", from_key="node")

    def get(self, key: str) -> Document:
        """Get a key's node."""
        return self._call_api(self._keys_path(key), "GET", from_key="node")

    def wait(self, key: str, wait_index: Optional[int] = None) -> Document:
        """Block until ``key`` changes, then return the whole envelope.

        Unlike ``get`` both ``node`` and ``prevNode`` are returned. Only one
        request is made; it is bounded by the read timeout alone.
        """
        path = self._keys_path(key) + "?wait=true"
        if _is_set(wait_index):
            path += f"&waitIndex={wait_index}"
        return self._call_api(path, "GET")

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> Document:
        """Create or overwrite a key, optionally expiring after ``ttl`` seconds."""
        params = [("value", value)]
        if _is_set(ttl):
            params.append(("ttl", ttl))
        return self._call_api_form(self._keys_path(key), "PUT", params, from_key="node")

    def create(self, key: str, value: str) -> Document:
        """Create a key; fails if it already exists."""
        return self._call_api_form(
            self._keys_path(key) + "?prevExist=false",
            "PUT",
            [("value", value)],
            from_key="node",
        )

    def update(self, key: str, value: str) -> Document:
        """Update a key; fails if it does not exist."""
        return self._call_api_form(
            self._keys_path(key) + "?prevExist=true",
            "PUT",
            [("value", value)],
            from_key="node",
        )

    def append(self, key: str, value: str, ttl: Optional[int] = None) -> Document:
        """Add an in-order key with a server generated name under directory ``key``."""
        params = [("value", value)]
        if _is_set(ttl):
            params.append(("ttl", ttl))
        return self._call_api_form(
            self._keys_path(key), "POST", params, from_key="node"
        )

    def delete(self, key: str) -> Document:
        """Delete a key."""
        return self._call_api(self._keys_path(key), "DELETE", from_key="node")

    del_ = delete

    def mkdir(self, path: str, ttl: Optional[int] = None) -> Document:
        """Create a directory."""
        params = [("dir", "true")]
        if _is_set(ttl):
            params.append(("ttl", ttl))
        return self._call_api_form(
            self._keys_path(path), "PUT", params, from_key="node"
        )

    def rmdir(self, path: str, recursive: bool = False) -> Document:
        """Delete a directory; without ``recursive`` it must be empty."""
        suffix = "?recursive=true" if recursive else "?dir=true"
        return self._call_api(self._keys_path(path) + suffix, "DELETE", from_key="node")

    # Status

    def get_version(self) -> Document:
        """Get server and cluster versions."""
        return self._call_status("version")

    def get_health(self) -> Document:
        return self._call_status("health")

    def get_debug_vars(self) -> Document:
        return self._call_status("debug/vars")

    def get_leader_stats(self) -> Document:
        """Get leader stats, e.g. ``{"leader": "ce2a822cea30bfca", "followers": {}}``."""
        return self._call_api("/stats/leader", "GET")

    def get_self_stats(self) -> Document:
        return self._call_api("/stats/self", "GET")

    def get_store_stats(self) -> Document:
        return self._call_api("/stats/store", "GET")

    # Members

    def get_cluster_members(self) -> Document:
        return self._call_api("/members", "GET", from_key="members")

    def add_cluster_member(self, address: str) -> Document:
        """Add a member reachable at peer URL ``address``."""
        return self._call_api_json("/members", "POST", {"peerURLs": [address]})

    def delete_cluster_member_by_id(self, member_id: str) -> Document:
        return self._call_api(f"/members/{member_id}", "DELETE")

    def delete_cluster_member_by_name(self, name: str) -> Document:
        """Delete the first member called ``name``.

        The member list is read first; a membership change between the read
        and the delete is not detected.
        """
        for member in self.get_cluster_members():
            if member.get("name") == name:
                return self.delete_cluster_member_by_id(member["id"].as_str())
        raise EtcdNotFoundError(f"Member {name} not found")

    def delete_cluster_member_by_peer_url(self, url: str) -> Document:
        """Delete the first member advertising peer URL ``url``."""
        for member in self.get_cluster_members():
            if url in member.get("peerURLs", []):
                return self.delete_cluster_member_by_id(member["id"].as_str())
        raise EtcdNotFoundError(f"Member with peer URL {url} not found")

    # Users

    def get_user_list(self) -> Document:
        """List users; null when none exist."""
        return self._call_api("/auth/users", "GET", from_key="users")

    def get_user_details(self, username: str) -> Document:
        return self._call_api(f"/auth/users/{username}", "GET")

    def create_user(self, username: str, password: str) -> Document:
        """Create a user, or change an existing user's password."""
        return self._call_api_json(
            f"/auth/users/{username}", "PUT", {"user": username, "password": password}
        )

    def grant_user_roles(self, username: str, roles: Iterable[str]) -> Document:
        return self._call_api_json(
            f"/auth/users/{username}", "PUT", {"user": username, "grant": list(roles)}
        )

    def revoke_user_roles(self, username: str, roles: Iterable[str]) -> Document:
        return self._call_api_json(
            f"/auth/users/{username}", "PUT", {"user": username, "revoke": list(roles)}
        )

    def delete_user(self, username: str) -> Document:
        return self._call_api(f"/auth/users/{username}", "DELETE")

    # Roles

    def get_role_list(self) -> Document:
        return self._call_api("/auth/roles", "GET", from_key="roles")

    def get_role_details(self, role: str) -> Document:
        return self._call_api(f"/auth/roles/{role}", "GET")

    def create_role(self, role: str, permissions: Mapping[str, Any]) -> Document:
        """Create a role.

        Permissions example: ``{"kv": {"read": ["/*"], "write": ["/*"]}}``
        """
        if isinstance(permissions, Document):
            permissions = permissions.raw
        return self._call_api_json(
            f"/auth/roles/{role}", "PUT", {"role": role, "permissions": permissions}
        )

    def delete_role(self, role: str) -> Document:
        return self._call_api(f"/auth/roles/{role}", "DELETE")

    # Auth

    def is_auth_enabled(self) -> bool:
        return self._call_api("/auth/enable", "GET")["enabled"].as_bool()

    def enable_auth(self) -> Document:
        """Enable authentication.

        Any failure (auth already enabled, no root user, unreadable answer...)
        is logged and an empty document is returned instead of raising.
        """
        try:
            return self._call_api("/auth/enable", "PUT")
        except Exception as e:
            self._logger.warning(
                "etcd_enable_auth_failed",
                extra={
                    "event": {"category": ["auth"], "action": "enable_auth_failed"},
                    "error": {"message": str(e), "type": type(e).__name__},
                },
                exc_info=True,
            )
            return Document({})

    def disable_auth(self) -> Document:
        return self._call_api("/auth/enable", "DELETE")

    # Misc

    def set_logging_level(self, level: str) -> Document:
        """Set the server's log level; one of DEBUG, INFO, WARNING, ERROR, CRITICAL."""
        if level not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}, got {level!r}")
        return self._call_api_json("/config/local/log", "PUT", {"Level": level})


__all__ = ["EtcdClient", "LOG_LEVELS", "UNSET"]
