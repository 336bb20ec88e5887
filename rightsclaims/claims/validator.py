"""Claims validation against a referenced metadata document.

Checks run in a fixed order and stop at the first failure:

    metadata shape -> claims schema -> typ -> iat -> aud -> exp -> nbf
    -> jti -> sub -> issuer role

``now`` is read once per call unless the caller passes it in.
"""

from __future__ import annotations

import logging
from typing import Any

from rightsclaims.claims.builder import calc_claims_id
from rightsclaims.claims.models import ClaimsType, VerificationResult, claims_schema
from rightsclaims.core import content
from rightsclaims.core.metadata import metadata_id, role_addresses, validate_metadata
from rightsclaims.core.schema import validate_schema
from rightsclaims.exceptions import CredentialError, FailureKind

logger = logging.getLogger("rightsclaims.validator")

_SUPPORTED_TYPES = frozenset(t.value for t in ClaimsType)


def _summarize(errors: list[str], limit: int = 3) -> str:
    shown = "; ".join(errors[:limit])
    if len(errors) > limit:
        shown += f" (+{len(errors) - limit} more)"
    return shown


def _check_structure(claims: Any, metadata: Any) -> None:
    meta_errors = validate_metadata(metadata)
    if meta_errors:
        raise CredentialError(
            FailureKind.INVALID_METADATA,
            "metadata has invalid schema: " + _summarize(meta_errors),
        )

    if not isinstance(claims, dict):
        raise CredentialError(FailureKind.SCHEMA_VIOLATION, "claims must be an object")
    errors = validate_schema(claims, claims_schema(claims.get("typ")))
    if errors:
        raise CredentialError(
            FailureKind.SCHEMA_VIOLATION, "claims has invalid schema: " + _summarize(errors)
        )
    try:
        content.canonical_json(claims)
    except (TypeError, ValueError) as exc:
        raise CredentialError(FailureKind.SCHEMA_VIOLATION, str(exc)) from exc

    if claims["typ"] not in _SUPPORTED_TYPES:
        raise CredentialError(FailureKind.UNSUPPORTED_TYPE, f"unexpected typ: {claims['typ']}")


def _check_temporal(claims: dict[str, Any], current: int) -> None:
    iat = claims["iat"]
    if iat > current:
        raise CredentialError(FailureKind.FUTURE_ISSUANCE, "iat cannot be later than now")

    if "aud" in claims and claims["iss"] in claims["aud"]:
        raise CredentialError(FailureKind.SELF_AUDIENCE, "aud cannot contain iss")

    nbf = claims.get("nbf")
    if "exp" in claims:
        exp = claims["exp"]
        if exp <= iat:
            raise CredentialError(
                FailureKind.EXP_BEFORE_IAT, "exp cannot be earlier than/same as iat"
            )
        if nbf is not None and exp <= nbf:
            raise CredentialError(
                FailureKind.EXP_BEFORE_NBF, "exp cannot be earlier than/same as nbf"
            )
        if exp < current:
            raise CredentialError(FailureKind.EXPIRED, f"claims expired at {exp}")

    if nbf is not None:
        if nbf <= iat:
            raise CredentialError(
                FailureKind.NBF_BEFORE_IAT, "nbf cannot be earlier than/same as iat"
            )
        if nbf > current:
            raise CredentialError(FailureKind.NOT_YET_VALID, f"claims not valid before {nbf}")


def _check_identity(claims: dict[str, Any], metadata: dict[str, Any]) -> None:
    claims_id = calc_claims_id(claims)
    if claims["jti"] != claims_id:
        raise CredentialError(
            FailureKind.IDENTIFIER_MISMATCH, f"expected jti={claims['jti']}; got {claims_id}"
        )

    try:
        meta_id = metadata_id(metadata)
    except (TypeError, ValueError) as exc:
        raise CredentialError(FailureKind.INVALID_METADATA, str(exc)) from exc
    if claims["sub"] != meta_id:
        raise CredentialError(
            FailureKind.SUBJECT_MISMATCH, f"expected sub={claims['sub']}; got {meta_id}"
        )

    try:
        authorized = role_addresses(metadata)
    except ValueError as exc:
        raise CredentialError(FailureKind.UNSUPPORTED_METADATA_TYPE, str(exc)) from exc
    if claims["iss"] not in authorized:
        raise CredentialError(
            FailureKind.UNAUTHORIZED_ISSUER,
            f"iss is not a {metadata['@type']} role address",
        )


def check_claims(claims: Any, metadata: Any, now: int | None = None) -> None:
    """Run every claims check, raising ``CredentialError`` on the first failure."""
    current = content.now() if now is None else now
    _check_structure(claims, metadata)
    _check_temporal(claims, current)
    _check_identity(claims, metadata)


def validate_claims(claims: Any, metadata: Any, now: int | None = None) -> VerificationResult:
    """Validate *claims* against *metadata*; falsy result names the failure."""
    try:
        check_claims(claims, metadata, now=now)
    except CredentialError as err:
        logger.debug("Claims rejected: %s", err.message, extra={"failure": err.kind.value})
        return VerificationResult.from_error(err)
    return VerificationResult.success()
