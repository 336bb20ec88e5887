"""Tests for Ed25519 key pairs and signatures."""

import os

from nacl.signing import VerifyKey

from rightsclaims.crypto import ed25519


class TestKeyGeneration:
    def test_generates_unique_keys(self):
        assert ed25519.generate_keypair().public_key != ed25519.generate_keypair().public_key

    def test_deterministic_seed(self):
        seed = b"\x01" * 32
        assert ed25519.keypair_from_seed(seed) == ed25519.keypair_from_seed(seed)

    def test_key_lengths(self):
        kp = ed25519.generate_keypair()
        assert len(kp.public_key) == ed25519.PUBLIC_KEY_LENGTH
        assert len(kp.secret_key) == ed25519.SECRET_KEY_LENGTH

    def test_public_key_matches_verify_key(self):
        kp = ed25519.keypair_from_seed(os.urandom(32))
        sig = ed25519.sign(b"round-trip", kp.secret_key)
        VerifyKey(kp.public_key).verify(b"round-trip", sig)  # raises on failure

    def test_repr_hides_secret(self):
        kp = ed25519.keypair_from_seed(b"\x01" * 32)
        assert kp.secret_key.hex() not in repr(kp)
        assert "redacted" in repr(kp)


class TestSigning:
    def test_sign_returns_64_bytes(self):
        kp = ed25519.generate_keypair()
        assert len(ed25519.sign(b"hello", kp.secret_key)) == ed25519.SIGNATURE_LENGTH

    def test_sign_deterministic(self):
        kp = ed25519.generate_keypair()
        assert ed25519.sign(b"data", kp.secret_key) == ed25519.sign(b"data", kp.secret_key)


class TestVerification:
    def test_verify_valid_signature(self):
        kp = ed25519.generate_keypair()
        sig = ed25519.sign(b"claims", kp.secret_key)
        assert ed25519.verify(b"claims", kp.public_key, sig) is True

    def test_verify_tampered_data(self):
        kp = ed25519.generate_keypair()
        sig = ed25519.sign(b"original", kp.secret_key)
        assert ed25519.verify(b"tampered", kp.public_key, sig) is False

    def test_verify_wrong_key(self):
        k1 = ed25519.generate_keypair()
        k2 = ed25519.generate_keypair()
        sig = ed25519.sign(b"data", k1.secret_key)
        assert ed25519.verify(b"data", k2.public_key, sig) is False

    def test_verify_zero_signature(self):
        kp = ed25519.generate_keypair()
        assert ed25519.verify(b"data", kp.public_key, b"\x00" * 64) is False

    def test_verify_wrong_lengths(self):
        kp = ed25519.generate_keypair()
        sig = ed25519.sign(b"data", kp.secret_key)
        assert ed25519.verify(b"data", kp.public_key[:31], sig) is False
        assert ed25519.verify(b"data", kp.public_key, sig[:63]) is False
