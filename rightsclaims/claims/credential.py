"""Compact wire form for a credential: ``<header>.<claims>.<signature>``.

Each segment is unpadded base64url; header and claims segments hold canonical
JSON. Framing is optional; the verifier works on the decoded triple.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from rightsclaims.claims.models import VerificationResult
from rightsclaims.claims.signer import sign_claims
from rightsclaims.claims.verifier import verify_credential
from rightsclaims.core.content import encode_segment
from rightsclaims.core.encoding import b64url_decode, b64url_encode
from rightsclaims.exceptions import CredentialError, FailureKind


def _decode_json_segment(segment: str, kind: FailureKind, name: str) -> dict[str, Any]:
    try:
        value = json.loads(b64url_decode(segment))
    except (RecursionError, ValueError) as exc:
        raise CredentialError(kind, f"{name} segment is not base64url JSON") from exc
    if not isinstance(value, dict):
        raise CredentialError(kind, f"{name} segment must encode an object")
    return value


@dataclass(frozen=True)
class Credential:
    header: dict[str, Any]
    claims: dict[str, Any]
    signature: bytes

    @classmethod
    def issue(
        cls, claims: dict[str, Any], header: dict[str, Any], secret_key: bytes
    ) -> Credential:
        return cls(header=header, claims=claims, signature=sign_claims(claims, header, secret_key))

    def encode(self) -> str:
        return ".".join(
            (encode_segment(self.header), encode_segment(self.claims), b64url_encode(self.signature))
        )

    @classmethod
    def decode(cls, token: str) -> Credential:
        parts = token.split(".") if isinstance(token, str) else []
        if len(parts) != 3:
            raise CredentialError(
                FailureKind.SCHEMA_VIOLATION, "credential must have exactly three segments"
            )
        header = _decode_json_segment(parts[0], FailureKind.INVALID_HEADER, "header")
        claims = _decode_json_segment(parts[1], FailureKind.SCHEMA_VIOLATION, "claims")
        try:
            signature = b64url_decode(parts[2])
        except ValueError as exc:
            raise CredentialError(FailureKind.BAD_SIGNATURE, "signature is not base64url") from exc
        return cls(header=header, claims=claims, signature=signature)

    @property
    def jti(self) -> str | None:
        return self.claims.get("jti")

    def verify(self, metadata: dict[str, Any], now: int | None = None) -> VerificationResult:
        return verify_credential(self.claims, self.header, metadata, self.signature, now=now)
