"""HTTP transport for the etcd v2 client, built on httpx."""

import logging
from typing import Dict, Optional

import httpx

from .encoding import ContentType
from .errors import EtcdTransportError


class Transport:
    """Issues single HTTP requests against etcd.

    Every call builds its own header set (Content-Type and, when configured,
    Authorization) so nothing carries over from one request to the next.
    An injected ``http_client`` still adds its own default headers to each
    request. No retries are attempted; failures surface immediately.
    """

    def __init__(
        self,
        read_timeout: Optional[float] = None,
        auth_header: str = "",
        http_client: Optional[httpx.Client] = None,
    ):
        self._logger = logging.getLogger("etcd2_client.transport")
        self._auth_header = auth_header
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(timeout=httpx.Timeout(read_timeout))
        self._http = http_client

    def _build_headers(
        self, content_type: Optional[ContentType], authenticate: bool
    ) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if content_type is not None:
            headers["Content-Type"] = ContentType(content_type).value
        if authenticate and self._auth_header:
            headers["Authorization"] = self._auth_header
        return headers

    def request(
        self,
        url: str,
        method: str,
        body: str = "",
        content_type: Optional[ContentType] = None,
        authenticate: bool = True,
    ) -> httpx.Response:
        """Send one request and return the raw response, whatever its status."""
        headers = self._build_headers(content_type, authenticate)
        self._logger.debug(
            "etcd_request",
            extra={
                "etcd": {
                    "method": method,
                    "url": url,
                    "content_type": headers.get("Content-Type"),
                    "authenticated": "Authorization" in headers,
                }
            },
        )
        try:
            response = self._http.request(
                method,
                url,
                content=body.encode("utf-8") if body else None,
                headers=headers,
            )
        except httpx.TransportError as e:
            self._logger.debug(
                "etcd_request_failed",
                extra={
                    "etcd": {"method": method, "url": url},
                    "error": {"message": str(e), "type": type(e).__name__},
                },
            )
            raise EtcdTransportError(f"{method} {url}: {e}") from e

        self._logger.debug(
            "etcd_response",
            extra={"etcd": {"method": method, "url": url, "status": response.status_code}},
        )
        return response

    def close(self) -> None:
        """Close the underlying httpx client if this transport created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["Transport"]
