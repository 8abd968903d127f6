"""Request token lookup and the presence check guarding write/list routes.

The token is an opaque string: it is looked for in the `token` header,
then the `token` query parameter, then the `token` cookie. It is not a
signed credential; `has_token` only checks that one was supplied and,
when `API_TOKENS` is configured, that it is on the allowlist.
"""

import hmac
from typing import Optional
from fastapi import Request
from .config import settings

TOKEN_NAME = "token"


def get_requested_token(request: Request) -> Optional[str]:
    """FastAPI dependency returning the token sent with `request`, if any."""
    for source in (request.headers, request.query_params, request.cookies):
        value = source.get(TOKEN_NAME)
        if value and value.strip():
            return value.strip()
    return None


def has_token(token: Optional[str]) -> bool:
    """Return True if `token` is present (and allowlisted when an allowlist exists)."""
    if not token:
        return False
    if not settings.API_TOKENS:
        return True
    supplied = token.encode("utf-8")
    return any(hmac.compare_digest(supplied, allowed.encode("utf-8")) for allowed in settings.API_TOKENS)
