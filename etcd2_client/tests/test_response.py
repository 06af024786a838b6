"""Tests for response interpretation."""

import httpx
import pytest

from etcd2_client import EtcdHTTPError
from etcd2_client.core.response import (
    interpret_response,
    interpret_status_response,
    status_line,
)

from conftest import empty_response, etcd_error, json_response

ENVELOPE = {
    "action": "get",
    "node": {"key": "/foo", "value": "bar", "modifiedIndex": 8, "createdIndex": 8},
}


class TestSuccess:
    def test_whole_envelope(self):
        doc = interpret_response(json_response(ENVELOPE))
        assert doc == ENVELOPE

    def test_sub_field(self):
        doc = interpret_response(json_response(ENVELOPE), from_key="node")
        assert doc["value"].as_str() == "bar"

    def test_missing_sub_field(self):
        with pytest.raises(KeyError):
            interpret_response(json_response(ENVELOPE), from_key="members")

    @pytest.mark.parametrize("from_key", [None, "node", "members"])
    def test_zero_content_length_is_null(self, from_key):
        doc = interpret_response(empty_response(), from_key=from_key)
        assert doc.is_null()

    def test_no_content_is_null(self):
        assert interpret_response(httpx.Response(204)).is_null()

    def test_invalid_json_propagates(self):
        with pytest.raises(ValueError):
            interpret_response(httpx.Response(200, content=b"<html>"))


class TestFailure:
    def test_message_is_extracted(self):
        response = etcd_error(404, 100, "Key not found", cause="/foo", index=12)
        with pytest.raises(EtcdHTTPError) as exc_info:
            interpret_response(response, from_key="node")
        err = exc_info.value
        assert err.status_line == "404 Not Found"
        assert err.status_code == 404
        assert err.message == "Key not found"
        assert err.error_code == 100
        assert err.cause == "/foo"
        assert err.index == 12
        assert str(err) == "404 Not Found - Key not found"

    def test_unparseable_body_has_no_message(self):
        response = httpx.Response(502, content=b"Bad gateway")
        with pytest.raises(EtcdHTTPError) as exc_info:
            interpret_response(response)
        assert exc_info.value.message is None
        assert str(exc_info.value) == "502 Bad Gateway"

    def test_redirect_is_a_failure(self):
        """Only 2xx statuses count as success."""
        with pytest.raises(EtcdHTTPError):
            interpret_response(httpx.Response(307, headers={"Location": "/v2/keys"}))


class TestStatusEndpoints:
    def test_success_returns_body(self):
        body = {"etcdserver": "2.3.8", "etcdcluster": "2.3.0"}
        assert interpret_status_response(json_response(body)) == body

    def test_failure_has_no_message(self):
        response = etcd_error(503, 300, "Raft Internal Error")
        with pytest.raises(EtcdHTTPError) as exc_info:
            interpret_status_response(response)
        assert exc_info.value.message is None
        assert str(exc_info.value) == "503 Service Unavailable"

    def test_status_line(self):
        assert status_line(httpx.Response(201)) == "201 Created"
