"""URL path helpers."""


def join_path(a: str, b: str) -> str:
    """Join two URL path components with exactly one slash between them.

    An empty ``a`` returns ``b`` untouched. Components are not escaped.
    """
    if not a:
        return b
    if a.endswith("/"):
        if b.startswith("/"):
            return a + b[1:]
        return a + b
    if b.startswith("/"):
        return a + b
    return f"{a}/{b}"


__all__ = ["join_path"]
