"""Credential verification: the single decision point for accepting a credential.

Order of checks:

1. header shape and alg/key consistency
2. every claims check (see :mod:`rightsclaims.claims.validator`)
3. the header key derives the ``iss`` address
4. the signature covers ``b64url(header) + "." + b64url(claims)``

``verify_credential`` returns a :class:`VerificationResult` carrying the
first failure; ``check_credential`` raises it instead.
"""

from __future__ import annotations

import logging
from typing import Any

from rightsclaims.claims.header import header_public_key
from rightsclaims.claims.models import Header, VerificationResult
from rightsclaims.claims.schemes import scheme_for
from rightsclaims.claims.signer import signing_input
from rightsclaims.claims.validator import check_claims
from rightsclaims.core.encoding import b64url_decode
from rightsclaims.core.party import address_of
from rightsclaims.core.schema import validate_schema
from rightsclaims.exceptions import CredentialError, FailureKind

logger = logging.getLogger("rightsclaims.verifier")


def _signature_bytes(signature: bytes | str) -> bytes:
    if isinstance(signature, str):
        try:
            return b64url_decode(signature)
        except ValueError as exc:
            raise CredentialError(FailureKind.BAD_SIGNATURE, "signature is not base64url") from exc
    if isinstance(signature, (bytes, bytearray, memoryview)):
        return bytes(signature)
    raise CredentialError(FailureKind.BAD_SIGNATURE, "signature must be bytes or base64url")


def check_credential(
    claims: Any,
    header: Any,
    metadata: Any,
    signature: bytes | str,
    now: int | None = None,
) -> None:
    """Verify a credential, raising ``CredentialError`` on the first failure."""
    errors = validate_schema(header, Header)
    if errors:
        raise CredentialError(
            FailureKind.INVALID_HEADER, "header has invalid schema: " + "; ".join(errors[:3])
        )

    check_claims(claims, metadata, now=now)

    scheme = scheme_for(header)
    public_key = header_public_key(header)
    if address_of(public_key) != claims["iss"]:
        raise CredentialError(FailureKind.KEY_ISSUER_MISMATCH, "public key does not match iss")

    sig = _signature_bytes(signature)
    try:
        message = signing_input(header, claims)
    except (TypeError, ValueError) as exc:
        raise CredentialError(FailureKind.INVALID_HEADER, str(exc)) from exc
    if not scheme.verify(message, public_key, sig):
        raise CredentialError(
            FailureKind.BAD_SIGNATURE, f"invalid {scheme.curve.value} signature"
        )


def verify_credential(
    claims: Any,
    header: Any,
    metadata: Any,
    signature: bytes | str,
    now: int | None = None,
) -> VerificationResult:
    """Verify a credential; the result is truthy only if every check passed."""
    try:
        check_credential(claims, header, metadata, signature, now=now)
    except CredentialError as err:
        jti = claims.get("jti") if isinstance(claims, dict) else None
        logger.info(
            "Credential rejected (%s): %s",
            err.kind.value,
            err.message,
            extra={"failure": err.kind.value, "jti": jti},
        )
        return VerificationResult.from_error(err)
    logger.debug(
        "Credential verified",
        extra={"jti": claims["jti"], "iss": claims["iss"]},
    )
    return VerificationResult.success()


def verify_claims(
    claims: Any,
    header: Any,
    metadata: Any,
    signature: bytes | str,
    now: int | None = None,
) -> bool:
    """Boolean form of :func:`verify_credential`."""
    return verify_credential(claims, header, metadata, signature, now=now).valid
