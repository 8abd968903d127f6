"""Message digest helpers (MD5 hex encoding)."""

from __future__ import annotations

import hashlib


def md5_hex(origin: str | bytes, charset: str = "utf-8") -> str:
    """Return the lowercase hex MD5 of `origin`.

    Strings are encoded with `charset` first; an unknown charset raises
    LookupError.
    """
    if isinstance(origin, str):
        origin = origin.encode(charset)
    return digest("md5", origin).hex()


def digest(algorithm: str, source: bytes) -> bytes:
    """Digest `source` with the named hashlib algorithm.

    Raises ValueError for algorithms hashlib does not provide.
    """
    try:
        h = hashlib.new(algorithm)
    except ValueError as exc:
        raise ValueError(f"unsupported digest algorithm: {algorithm}") from exc
    h.update(source)
    return h.digest()
