"""Header construction from raw public keys.

A header is built once per signing key and reused for every credential that
key signs. Wrong-length or off-curve keys raise; no partial header is ever
returned.
"""

from __future__ import annotations

from typing import Any

from rightsclaims.claims.models import HEADER_TYP, Curve
from rightsclaims.claims.schemes import scheme_for, scheme_for_curve
from rightsclaims.exceptions import InvalidKeyLength


def build_header(public_key: bytes, curve: Curve | str) -> dict[str, Any]:
    """Build the ``{alg, jwk, typ}`` header for *public_key* on *curve*.

    Raises:
        InvalidKeyLength: *public_key* has the wrong length for *curve*.
        MalformedKeyError: a secp256k1 key is not a point on the curve.
    """
    scheme = scheme_for_curve(curve)
    public_key = bytes(public_key)
    if len(public_key) != scheme.public_key_length:
        raise InvalidKeyLength(scheme.public_key_length, len(public_key))
    return {
        "alg": scheme.algorithm.value,
        "jwk": scheme.jwk_from_public_key(public_key),
        "typ": HEADER_TYP,
    }


def ed25519_header(public_key: bytes) -> dict[str, Any]:
    return build_header(public_key, Curve.ED25519)


def secp256k1_header(public_key: bytes) -> dict[str, Any]:
    return build_header(public_key, Curve.SECP256K1)


def header_public_key(header: dict[str, Any]) -> bytes:
    """Recover the raw public key (the form addresses derive from) from *header*."""
    return scheme_for(header).public_key_from_jwk(header["jwk"])
