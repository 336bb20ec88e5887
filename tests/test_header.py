"""Tests for header construction."""

import pytest

from rightsclaims.claims import Header, build_header, ed25519_header, secp256k1_header
from rightsclaims.claims.header import header_public_key
from rightsclaims.claims.models import Algorithm, Curve
from rightsclaims.claims.schemes import SCHEMES, SCHEMES_BY_CURVE
from rightsclaims.core.encoding import b64url_decode
from rightsclaims.core.schema import validate_schema
from rightsclaims.crypto import secp256k1
from rightsclaims.exceptions import FailureKind, InvalidKeyLength, MalformedKeyError

from .conftest import COMPOSER, PERFORMER


class TestEd25519Header:
    def test_shape(self):
        header = ed25519_header(COMPOSER.public_key)
        assert header["alg"] == "EdDsa"
        assert header["typ"] == "JWT"
        assert header["jwk"]["crv"] == "Ed25519"
        assert header["jwk"]["kty"] == "OKP"
        assert "y" not in header["jwk"]

    def test_x_is_raw_public_key(self):
        header = ed25519_header(COMPOSER.public_key)
        assert len(header["jwk"]["x"]) == 43
        assert b64url_decode(header["jwk"]["x"]) == COMPOSER.public_key

    def test_wrong_length(self):
        with pytest.raises(InvalidKeyLength) as exc_info:
            ed25519_header(COMPOSER.public_key[:31])
        assert exc_info.value.message == "expected public key length=32; got 31"
        assert exc_info.value.kind is FailureKind.MALFORMED_KEY

    def test_compressed_secp256k1_key_rejected(self):
        with pytest.raises(InvalidKeyLength):
            ed25519_header(PERFORMER.public_key)


class TestSecp256k1Header:
    def test_shape(self):
        header = secp256k1_header(PERFORMER.public_key)
        assert header["alg"] == "ES256"
        assert header["typ"] == "JWT"
        assert header["jwk"]["crv"] == "P-256"
        assert header["jwk"]["kty"] == "EC"

    def test_coordinates_recompress_to_public_key(self):
        jwk = secp256k1_header(PERFORMER.public_key)["jwk"]
        x, y = b64url_decode(jwk["x"]), b64url_decode(jwk["y"])
        assert secp256k1.compress(x, y) == PERFORMER.public_key

    def test_wrong_length(self):
        with pytest.raises(InvalidKeyLength, match="length=33; got 32"):
            secp256k1_header(COMPOSER.public_key)

    def test_off_curve_point(self):
        with pytest.raises(MalformedKeyError):
            secp256k1_header(b"\x05" + b"\x01" * 32)


@pytest.mark.parametrize(
    "public_key,curve",
    [(COMPOSER.public_key, "ed25519"), (PERFORMER.public_key, "secp256k1")],
)
def test_built_headers_match_schema(public_key, curve):
    header = build_header(public_key, curve)
    assert validate_schema(header, Header) == []
    assert header_public_key(header) == public_key


def test_headers_are_deterministic():
    assert ed25519_header(COMPOSER.public_key) == ed25519_header(COMPOSER.public_key)


def test_unknown_curve():
    with pytest.raises(ValueError, match="unsupported curve"):
        build_header(COMPOSER.public_key, "p384")


class TestHeaderSchema:
    def test_alg_must_match_curve(self):
        header = ed25519_header(COMPOSER.public_key)
        header["alg"] = "ES256"
        assert validate_schema(header, Header)

    def test_ed25519_jwk_must_not_carry_y(self):
        header = ed25519_header(COMPOSER.public_key)
        header["jwk"]["y"] = header["jwk"]["x"]
        assert validate_schema(header, Header)

    def test_p256_jwk_requires_y(self):
        header = secp256k1_header(PERFORMER.public_key)
        del header["jwk"]["y"]
        assert validate_schema(header, Header)

    def test_typ_must_be_jwt(self):
        header = ed25519_header(COMPOSER.public_key)
        header["typ"] = "JWS"
        assert validate_schema(header, Header)


def test_every_algorithm_and_curve_has_a_scheme():
    assert set(SCHEMES) == set(Algorithm)
    assert set(SCHEMES_BY_CURVE) == set(Curve)
