"""HTTP Basic Auth helpers."""

import base64


def generate_basicauth_header(username: str, password: str) -> str:
    """Build the value of an ``Authorization`` header for HTTP Basic Auth."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8"))
    return f"Basic {token.decode('ascii')}"


__all__ = ["generate_basicauth_header"]
