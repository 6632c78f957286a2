"""Decoding of the key segment in `/api/data/<key>` paths."""

from __future__ import annotations

from bundle_viewer.errors import KeyDecodeError

ENCODED_SLASH = "%2F"


def decode_key(raw: str | bytes) -> str:
    """Turn a raw path segment back into a literal document key.

    Only the encoded forward slash is reversed so keys such as `/v1/group`
    can be sent as one segment. Every other escape is kept verbatim.
    """

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise KeyDecodeError(str(exc)) from exc
    return raw.replace(ENCODED_SLASH, "/")
