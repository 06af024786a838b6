"""Request body encoders for the etcd v2 API."""

import enum
import json
from typing import Any, Iterable, Mapping, NamedTuple, Tuple, Union


class ContentType(str, enum.Enum):
    """Body encodings accepted by etcd, valued by their Content-Type header."""

    FORM = "application/x-www-form-urlencoded; charset=utf-8"
    JSON = "application/json"


class EncodedBody(NamedTuple):
    content_type: ContentType
    body: str


FormParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def encode_form(params: FormParams) -> EncodedBody:
    """Encode ordered name/value pairs as a form body.

    Values are NOT percent-escaped: callers must escape values containing
    ``&``, ``=`` or other reserved characters themselves.
    """
    pairs = params.items() if isinstance(params, Mapping) else params
    body = "&".join(f"{name}={value}" for name, value in pairs)
    return EncodedBody(ContentType.FORM, body)


def encode_json(payload: Any) -> EncodedBody:
    """Encode a JSON document as a compact request body."""
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return EncodedBody(ContentType.JSON, body)


__all__ = ["ContentType", "EncodedBody", "encode_form", "encode_json"]
