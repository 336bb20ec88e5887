"""Custom exception hierarchy for rightsclaims.

Every rejected header, claim or credential raises a :class:`CredentialError`
carrying a :class:`FailureKind`, so callers can tell *why* something failed.
The HTTP layer translates these into consistent JSON responses.
"""

from __future__ import annotations

from enum import StrEnum


class FailureKind(StrEnum):
    """Why a key, header, claims payload or credential was rejected."""

    MALFORMED_KEY = "MalformedKey"
    INVALID_HEADER = "InvalidHeader"
    INVALID_METADATA = "InvalidMetadata"
    SCHEMA_VIOLATION = "SchemaViolation"
    UNSUPPORTED_TYPE = "UnsupportedType"
    FUTURE_ISSUANCE = "FutureIssuance"
    SELF_AUDIENCE = "SelfAudience"
    EXP_BEFORE_IAT = "ExpBeforeIat"
    EXP_BEFORE_NBF = "ExpBeforeNbf"
    EXPIRED = "Expired"
    NBF_BEFORE_IAT = "NbfBeforeIat"
    NOT_YET_VALID = "NotYetValid"
    IDENTIFIER_MISMATCH = "IdentifierMismatch"
    SUBJECT_MISMATCH = "SubjectMismatch"
    UNSUPPORTED_METADATA_TYPE = "UnsupportedMetadataType"
    UNAUTHORIZED_ISSUER = "UnauthorizedIssuer"
    KEY_ISSUER_MISMATCH = "KeyIssuerMismatch"
    BAD_SIGNATURE = "BadSignature"


class RightsClaimsError(Exception):
    """Base exception for all rightsclaims errors."""

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An internal error occurred") -> None:
        self.message = message
        super().__init__(message)


class CredentialError(RightsClaimsError):
    """A header, claims payload or credential failed a check."""

    status_code = 422

    def __init__(self, kind: FailureKind, message: str = "") -> None:
        self.kind = FailureKind(kind)
        super().__init__(message or self.kind.value)

    @property
    def error_type(self) -> str:  # type: ignore[override]
        return self.kind.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value!r}, {self.message!r})"


class MalformedKeyError(CredentialError):
    """Key material has the wrong length or is not a valid curve point."""

    status_code = 400

    def __init__(self, message: str = "malformed key") -> None:
        super().__init__(FailureKind.MALFORMED_KEY, message)


class InvalidKeyLength(MalformedKeyError):
    """Raw public key length does not match the selected curve."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected public key length={expected}; got {actual}")
