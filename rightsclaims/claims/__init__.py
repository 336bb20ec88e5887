"""Create and License claims: headers, identifiers, signing and verification."""

from rightsclaims.claims.builder import (
    calc_claims_id,
    create_claims,
    get_claims_id,
    license_claims,
    set_claims_id,
    timestamp,
)
from rightsclaims.claims.credential import Credential
from rightsclaims.claims.header import build_header, ed25519_header, secp256k1_header
from rightsclaims.claims.models import (
    Algorithm,
    ClaimsType,
    Create,
    Curve,
    Header,
    License,
    VerificationResult,
)
from rightsclaims.claims.signer import sign_claims
from rightsclaims.claims.validator import check_claims, validate_claims
from rightsclaims.claims.verifier import check_credential, verify_claims, verify_credential

__all__ = [
    "Algorithm",
    "ClaimsType",
    "Create",
    "Credential",
    "Curve",
    "Header",
    "License",
    "VerificationResult",
    "build_header",
    "calc_claims_id",
    "check_claims",
    "check_credential",
    "create_claims",
    "ed25519_header",
    "get_claims_id",
    "license_claims",
    "secp256k1_header",
    "set_claims_id",
    "sign_claims",
    "timestamp",
    "validate_claims",
    "verify_claims",
    "verify_credential",
]
