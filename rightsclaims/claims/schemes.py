"""Signature schemes, one per header ``alg``.

Each :class:`SignatureScheme` bundles everything that differs between the
two supported curves: key length, the ``jwk`` shape, public key recovery from
a ``jwk`` and the sign/verify primitives. ``SCHEMES`` covers every
:class:`Algorithm`; adding a curve means adding an enum member and an entry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rightsclaims.claims.models import Algorithm, Curve
from rightsclaims.core.encoding import b64url_decode, b64url_encode
from rightsclaims.crypto import ed25519, secp256k1
from rightsclaims.exceptions import CredentialError, FailureKind, MalformedKeyError


@dataclass(frozen=True)
class SignatureScheme:
    algorithm: Algorithm
    curve: Curve
    public_key_length: int
    jwk_from_public_key: Callable[[bytes], dict[str, str]]
    public_key_from_jwk: Callable[[dict[str, Any]], bytes]
    sign: Callable[[bytes, bytes], bytes]
    verify: Callable[[bytes, bytes, bytes], bool]


def _decode_coordinate(jwk: dict[str, Any], name: str) -> bytes:
    try:
        return b64url_decode(jwk[name])
    except (KeyError, ValueError) as exc:
        raise MalformedKeyError(f"jwk.{name} is not valid base64url") from exc


def _ed25519_jwk(public_key: bytes) -> dict[str, str]:
    return {"x": b64url_encode(public_key), "crv": "Ed25519", "kty": "OKP"}


def _ed25519_public_key(jwk: dict[str, Any]) -> bytes:
    public_key = _decode_coordinate(jwk, "x")
    if len(public_key) != ed25519.PUBLIC_KEY_LENGTH:
        raise MalformedKeyError(f"Ed25519 public key must be 32 bytes, got {len(public_key)}")
    return public_key


def _secp256k1_jwk(public_key: bytes) -> dict[str, str]:
    try:
        x, y = secp256k1.decompress(public_key)
    except ValueError as exc:
        raise MalformedKeyError(f"not a secp256k1 point: {exc}") from exc
    return {"x": b64url_encode(x), "y": b64url_encode(y), "crv": "P-256", "kty": "EC"}


def _secp256k1_public_key(jwk: dict[str, Any]) -> bytes:
    x = _decode_coordinate(jwk, "x")
    y = _decode_coordinate(jwk, "y")
    try:
        return secp256k1.compress(x, y)
    except ValueError as exc:
        raise MalformedKeyError(f"not a secp256k1 point: {exc}") from exc


SCHEMES: dict[Algorithm, SignatureScheme] = {
    Algorithm.EDDSA: SignatureScheme(
        algorithm=Algorithm.EDDSA,
        curve=Curve.ED25519,
        public_key_length=ed25519.PUBLIC_KEY_LENGTH,
        jwk_from_public_key=_ed25519_jwk,
        public_key_from_jwk=_ed25519_public_key,
        sign=ed25519.sign,
        verify=ed25519.verify,
    ),
    Algorithm.ES256: SignatureScheme(
        algorithm=Algorithm.ES256,
        curve=Curve.SECP256K1,
        public_key_length=secp256k1.COMPRESSED_KEY_LENGTH,
        jwk_from_public_key=_secp256k1_jwk,
        public_key_from_jwk=_secp256k1_public_key,
        sign=secp256k1.sign,
        verify=secp256k1.verify,
    ),
}

SCHEMES_BY_CURVE: dict[Curve, SignatureScheme] = {s.curve: s for s in SCHEMES.values()}


def scheme_for(header: Any) -> SignatureScheme:
    """Select the scheme named by ``header["alg"]``."""
    alg = header.get("alg") if isinstance(header, dict) else None
    try:
        return SCHEMES[Algorithm(alg)]
    except ValueError:
        raise CredentialError(FailureKind.INVALID_HEADER, f"unsupported alg: {alg!r}") from None


def scheme_for_curve(curve: Curve | str) -> SignatureScheme:
    try:
        return SCHEMES_BY_CURVE[Curve(curve)]
    except ValueError:
        raise ValueError(f"unsupported curve: {curve!r}") from None
