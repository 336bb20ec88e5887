"""Tests for detached signatures over header and claims."""

import pytest

from rightsclaims.claims import create_claims, sign_claims
from rightsclaims.claims.signer import signing_input
from rightsclaims.core.content import encode_segment
from rightsclaims.core.metadata import metadata_id
from rightsclaims.crypto import ed25519, secp256k1
from rightsclaims.exceptions import CredentialError, FailureKind

from .conftest import COMPOSER, NOW, PERFORMER, addr


def test_signing_input_joins_encoded_segments(composer_header):
    claims = {"b": 1, "a": 2}
    expected = f"{encode_segment(composer_header)}.{encode_segment(claims)}"
    assert signing_input(composer_header, claims) == expected.encode("ascii")


def test_signing_input_ignores_key_order(composer_header):
    claims = {"iss": "x", "iat": 1}
    reordered = {"iat": 1, "iss": "x"}
    assert signing_input(composer_header, claims) == signing_input(composer_header, reordered)


def test_ed25519_signature(composition, composer_header):
    claims = create_claims(addr(COMPOSER), metadata_id(composition), now=NOW)
    sig = sign_claims(claims, composer_header, COMPOSER.secret_key)
    assert len(sig) == 64
    assert ed25519.verify(signing_input(composer_header, claims), COMPOSER.public_key, sig)


def test_secp256k1_signature(recording, performer_header):
    claims = create_claims(addr(PERFORMER), metadata_id(recording), now=NOW)
    sig = sign_claims(claims, performer_header, PERFORMER.secret_key)
    assert secp256k1.verify(signing_input(performer_header, claims), PERFORMER.public_key, sig)


def test_signing_does_not_validate_claims(composer_header):
    sig = sign_claims({"anything": "goes"}, composer_header, COMPOSER.secret_key)
    assert len(sig) == 64


def test_unknown_alg(composer_header):
    header = {**composer_header, "alg": "RS256"}
    with pytest.raises(CredentialError) as exc_info:
        sign_claims({}, header, COMPOSER.secret_key)
    assert exc_info.value.kind is FailureKind.INVALID_HEADER
