"""Ed25519 signatures via PyNaCl (libsodium).

Secret keys are 32-byte seeds; public keys are the raw 32-byte verify keys.
Signatures are the detached 64-byte form.
"""

from __future__ import annotations

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from rightsclaims.crypto.keys import Keypair

PUBLIC_KEY_LENGTH = 32
SECRET_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


def generate_keypair() -> Keypair:
    """Generate a fresh random key pair."""
    return _keypair(SigningKey.generate())


def keypair_from_seed(seed: bytes) -> Keypair:
    """Create a deterministic key pair from a 32-byte seed."""
    return _keypair(SigningKey(bytes(seed)))


def _keypair(signing_key: SigningKey) -> Keypair:
    return Keypair(public_key=bytes(signing_key.verify_key), secret_key=bytes(signing_key))


def sign(message: bytes, secret_key: bytes) -> bytes:
    """Produce an Ed25519 signature over *message*."""
    # SignedMessage contains sig + message; .signature is just the 64-byte sig
    return SigningKey(bytes(secret_key)).sign(message).signature


def verify(message: bytes, public_key: bytes, signature: bytes) -> bool:
    """Verify an Ed25519 *signature* over *message*."""
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SIGNATURE_LENGTH:
        return False
    try:
        VerifyKey(bytes(public_key)).verify(message, bytes(signature))
        return True
    except BadSignatureError:
        return False
