"""Claims construction.

Claims are built as base fields, then stamped with ``iat``, then given their
``jti``. The identifier is the content id of the claims with ``jti`` removed,
so it always covers ``iat`` and never itself. Every function returns a new
dict.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from rightsclaims.claims.models import ClaimsType
from rightsclaims.core import content

CLAIMS_ID_FIELD = "jti"


def calc_claims_id(claims: dict[str, Any]) -> str:
    return content.content_id(claims, exclude=(CLAIMS_ID_FIELD,))


def get_claims_id(claims: dict[str, Any]) -> str | None:
    return claims.get(CLAIMS_ID_FIELD)


def set_claims_id(claims: dict[str, Any]) -> dict[str, Any]:
    return {**claims, CLAIMS_ID_FIELD: calc_claims_id(claims)}


def timestamp(claims: dict[str, Any], now: int | None = None) -> dict[str, Any]:
    return {**claims, "iat": content.now() if now is None else now}


def create_claims(iss: str, sub: str, now: int | None = None) -> dict[str, Any]:
    """Build identified Create claims for subject *sub* issued by *iss*."""
    return set_claims_id(timestamp({"iss": iss, "sub": sub, "typ": ClaimsType.CREATE.value}, now))


def license_claims(
    iss: str,
    sub: str,
    aud: Iterable[str],
    exp: int,
    nbf: int | None = None,
    now: int | None = None,
) -> dict[str, Any]:
    """Build identified License claims granting *sub* to the *aud* addresses.

    ``aud`` keeps the caller's order; pass a list for a reproducible ``jti``.
    """
    base: dict[str, Any] = {
        "aud": list(aud),
        "exp": exp,
        "iss": iss,
        "sub": sub,
        "typ": ClaimsType.LICENSE.value,
    }
    if nbf is not None:
        base["nbf"] = nbf
    return set_claims_id(timestamp(base, now))
