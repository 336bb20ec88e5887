"""Shared types and JSON Schemas for headers and claims.

Header shape::

    {"alg": "EdDsa" | "ES256",
     "jwk": {"x": <b64url>, "y"?: <b64url>, "crv": "Ed25519" | "P-256", "kty": "OKP" | "EC"},
     "typ": "JWT"}

Claims shapes (discriminated by ``typ``)::

    Create   {iat, iss, jti, sub, typ}
    License  {aud, exp, iat, iss, jti, nbf?, sub, typ}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from rightsclaims.core.party import ADDRESS_PATTERN, Addr
from rightsclaims.core.schema import DRAFT
from rightsclaims.exceptions import CredentialError, FailureKind


class Algorithm(StrEnum):
    """Header ``alg`` values."""

    EDDSA = "EdDsa"
    ES256 = "ES256"


class Curve(StrEnum):
    """Curves a header can be built for."""

    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"


class ClaimsType(StrEnum):
    """Claims ``typ`` values."""

    CREATE = "Create"
    LICENSE = "License"


HEADER_TYP = "JWT"

_COORDINATE = {"type": "string", "pattern": "^[A-Za-z0-9_-]{43}$"}

PublicKey: dict[str, Any] = {
    "type": "object",
    "title": "PublicKey",
    "properties": {
        "x": _COORDINATE,
        "y": _COORDINATE,
        "crv": {"enum": ["Ed25519", "P-256"]},
        "kty": {"enum": ["OKP", "EC"]},
    },
    "oneOf": [
        {
            "properties": {"crv": {"const": "Ed25519"}, "kty": {"const": "OKP"}},
            "not": {"required": ["y"]},
        },
        {
            "properties": {"crv": {"const": "P-256"}, "kty": {"const": "EC"}},
            "required": ["y"],
        },
    ],
    "required": ["crv", "kty", "x"],
    "additionalProperties": False,
}

Header: dict[str, Any] = {
    "$schema": DRAFT,
    "type": "object",
    "title": "Header",
    "properties": {
        "alg": {"enum": [a.value for a in Algorithm]},
        "jwk": PublicKey,
        "typ": {"const": HEADER_TYP},
    },
    "oneOf": [
        {
            "properties": {
                "alg": {"const": Algorithm.EDDSA.value},
                "jwk": {"properties": {"crv": {"const": "Ed25519"}}},
            }
        },
        {
            "properties": {
                "alg": {"const": Algorithm.ES256.value},
                "jwk": {"properties": {"crv": {"const": "P-256"}}},
            }
        },
    ],
    "required": ["alg", "jwk", "typ"],
    "additionalProperties": False,
}

IntDate = {"type": "integer"}
ContentId = {"type": "string", "pattern": ADDRESS_PATTERN}

_COMMON = {
    "iat": IntDate,
    "iss": Addr,
    "jti": ContentId,
    "sub": ContentId,
}

# Common fields only; used to shape-check claims whose typ is not supported
# so that the unsupported typ is what gets reported.
BaseClaims: dict[str, Any] = {
    "$schema": DRAFT,
    "type": "object",
    "title": "Claims",
    "properties": {**_COMMON, "typ": {"type": "string"}},
    "required": ["iat", "iss", "jti", "sub", "typ"],
}

Create: dict[str, Any] = {
    "$schema": DRAFT,
    "type": "object",
    "title": "Create",
    "properties": {**_COMMON, "typ": {"const": ClaimsType.CREATE.value}},
    "required": ["iat", "iss", "jti", "sub", "typ"],
    "additionalProperties": False,
}

License: dict[str, Any] = {
    "$schema": DRAFT,
    "type": "object",
    "title": "License",
    "properties": {
        **_COMMON,
        "aud": {"type": "array", "items": Addr, "minItems": 1, "uniqueItems": True},
        "exp": IntDate,
        "nbf": IntDate,
        "typ": {"const": ClaimsType.LICENSE.value},
    },
    "required": ["aud", "exp", "iat", "iss", "jti", "sub", "typ"],
    "additionalProperties": False,
}

CLAIMS_SCHEMAS: dict[ClaimsType, dict[str, Any]] = {
    ClaimsType.CREATE: Create,
    ClaimsType.LICENSE: License,
}


def claims_schema(typ: Any) -> dict[str, Any]:
    """Schema for a claims ``typ``; the common base shape when unsupported."""
    try:
        return CLAIMS_SCHEMAS[ClaimsType(typ)]
    except ValueError:
        return BaseClaims


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of validating claims or verifying a credential.

    Truthy only when ``valid``; ``failure`` names the first check that failed.
    """

    valid: bool
    failure: FailureKind | None = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def success(cls) -> VerificationResult:
        return cls(valid=True)

    @classmethod
    def from_error(cls, err: CredentialError) -> VerificationResult:
        return cls(valid=False, failure=err.kind, message=err.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "failure": self.failure.value if self.failure else None,
            "message": self.message,
        }
