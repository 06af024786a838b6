"""Shared fixtures: an EtcdClient wired to an in-process fake server."""

import json

import httpx
import pytest

from etcd2_client import EtcdClient


class RecordingHandler:
    """MockTransport handler that remembers every request it answers."""

    def __init__(self, handler):
        self._handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_response(payload, status_code=200, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, json=payload, **kwargs)


def empty_response(status_code=200) -> httpx.Response:
    return httpx.Response(status_code, headers={"Content-Length": "0"})


def etcd_error(status_code, error_code, message, cause="", index=7) -> httpx.Response:
    body = {"errorCode": error_code, "message": message, "cause": cause, "index": index}
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))


@pytest.fixture
def make_client():
    """Build an EtcdClient whose requests are answered by ``handler``."""
    clients = []

    def _make(handler, **kwargs):
        recorder = RecordingHandler(handler)
        http_client = httpx.Client(transport=httpx.MockTransport(recorder))
        client = EtcdClient(http_client=http_client, **kwargs)
        clients.append(http_client)
        return client, recorder

    yield _make

    for http_client in clients:
        http_client.close()
