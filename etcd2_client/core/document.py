"""Typed view over the JSON documents returned by etcd."""

import json
from typing import Any, Dict, Iterator, List, Optional, Union

from .errors import DocumentTypeError


class Document:
    """A parsed JSON value: null, bool, number, string, array or object.

    etcd responses are passed through as-is; this wrapper only adds typed
    accessors that fail loudly with ``DocumentTypeError`` when a value is
    read as the wrong kind.

    Item access returns nested ``Document`` instances::

        node = client.get("/config/db")
        node["value"].as_str()

    Iterating an array yields documents, iterating an object yields its keys
    and iterating null yields nothing, so an empty etcd directory (whose
    ``nodes`` field is omitted) can be walked with
    ``for child in node.get("nodes")``.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any = None):
        if isinstance(value, Document):
            value = value.raw
        self._value = value

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Document":
        """Parse JSON text. Decoding errors propagate as ``ValueError``."""
        return cls(json.loads(text))

    @property
    def raw(self) -> Any:
        """The underlying plain Python value."""
        return self._value

    @property
    def kind(self) -> str:
        value = self._value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "bool"
        if isinstance(value, (int, float)):
            return "number"
        if isinstance(value, str):
            return "string"
        if isinstance(value, list):
            return "array"
        if isinstance(value, dict):
            return "object"
        return type(value).__name__

    def is_null(self) -> bool:
        return self._value is None

    def _expect(self, *kinds: str) -> None:
        if self.kind not in kinds:
            raise DocumentTypeError(
                f"expected {' or '.join(kinds)}, got {self.kind}: {self._value!r}"
            )

    # Typed accessors

    def as_str(self) -> str:
        self._expect("string")
        return self._value

    def as_int(self) -> int:
        self._expect("number")
        if not isinstance(self._value, int):
            raise DocumentTypeError(f"expected integer, got {self._value!r}")
        return self._value

    def as_float(self) -> float:
        self._expect("number")
        return float(self._value)

    def as_bool(self) -> bool:
        self._expect("bool")
        return self._value

    def as_list(self) -> List[Any]:
        self._expect("array")
        return self._value

    def as_dict(self) -> Dict[str, Any]:
        self._expect("object")
        return self._value

    # Container protocol

    def has_key(self, key: str) -> bool:
        self._expect("object")
        return key in self._value

    def get(self, key: str, default: Any = None) -> "Document":
        """Return the field ``key`` of an object, or ``default`` wrapped."""
        self._expect("object")
        return Document(self._value.get(key, default))

    def keys(self) -> List[str]:
        return list(self.as_dict().keys())

    def __getitem__(self, item: Union[str, int]) -> "Document":
        if isinstance(item, str):
            self._expect("object")
        elif isinstance(item, int) and not isinstance(item, bool):
            self._expect("array")
        else:
            raise DocumentTypeError(f"invalid document index: {item!r}")
        return Document(self._value[item])

    def __contains__(self, item: Any) -> bool:
        self._expect("object", "array")
        if isinstance(item, Document):
            item = item.raw
        return item in self._value

    def __iter__(self) -> Iterator[Any]:
        kind = self.kind
        if kind == "null":
            return iter(())
        if kind == "array":
            return (Document(v) for v in self._value)
        if kind == "object":
            return iter(self._value)
        raise DocumentTypeError(f"{kind} document is not iterable")

    def __len__(self) -> int:
        if self._value is None:
            return 0
        self._expect("array", "object", "string")
        return len(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Document):
            other = other.raw
        return self._value == other

    def __ne__(self, other: object) -> bool:
        return not self == other

    __hash__ = None

    def __repr__(self) -> str:
        return f"Document({self._value!r})"

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self._value, indent=indent, ensure_ascii=False)


__all__ = ["Document"]
