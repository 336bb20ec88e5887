"""API key authentication for the HTTP service.

Keys come from ``RC_API_KEYS`` (comma-separated). With no keys configured
every request is let through as ``dev``. A key is accepted from
``Authorization: Bearer <key>`` first, then ``X-API-Key``.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from rightsclaims.config import configured_api_keys

#: Reachable without a key even when auth is on.
PUBLIC_PATHS: frozenset[str] = frozenset({"/health"})

_audit_logger = logging.getLogger("rightsclaims.audit")


@dataclass
class AuthResult:
    authenticated: bool
    identity: str = ""
    error: str | None = None


def _presented_key(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.headers.get("X-API-Key")


def authenticate(token: str, valid_keys: frozenset[str]) -> AuthResult:
    """Check *token* against *valid_keys* in constant time per key."""
    candidate = token.encode()
    if any(hmac.compare_digest(candidate, key.encode()) for key in valid_keys):
        return AuthResult(authenticated=True, identity=f"api_key:{token[:8]}...")
    return AuthResult(authenticated=False, error="Invalid API key")


def _reject(request: Request, status_code: int, reason: str, detail: str) -> HTTPException:
    client = request.client.host if request.client else "unknown"
    _audit_logger.warning(
        "Auth failure (%s): %s %s from %s",
        reason,
        request.method,
        request.url.path,
        client,
        extra={"path": request.url.path, "method": request.method},
    )
    return HTTPException(status_code=status_code, detail=detail)


async def require_api_key(request: Request) -> None:
    """App-wide dependency; stores the :class:`AuthResult` on ``request.state.auth``.

    Raises:
        HTTPException 403: auth is on and no key was presented.
        HTTPException 401: the presented key is not configured.
    """
    if request.url.path in PUBLIC_PATHS:
        return

    valid_keys = configured_api_keys()
    if not valid_keys:
        request.state.auth = AuthResult(authenticated=True, identity="dev")
        return

    token = _presented_key(request)
    if token is None:
        raise _reject(
            request,
            status.HTTP_403_FORBIDDEN,
            "no token",
            "API key required. Provide via Authorization: Bearer or X-API-Key header.",
        )

    result = authenticate(token, valid_keys)
    if not result.authenticated:
        raise _reject(request, status.HTTP_401_UNAUTHORIZED, "invalid token", "Invalid API key.")
    request.state.auth = result
