"""secp256k1 ECDSA signatures via ``cryptography``.

Public keys travel as 33-byte SEC1 compressed points. Secret keys are 32-byte
big-endian scalars. Signatures are DER-encoded ECDSA over SHA-256.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from rightsclaims.crypto.keys import Keypair

CURVE = ec.SECP256K1()
COMPRESSED_KEY_LENGTH = 33
COORDINATE_LENGTH = 32
SECRET_KEY_LENGTH = 32


def _compressed(public_key: ec.EllipticCurvePublicKey) -> bytes:
    return public_key.public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )


def _private_key(secret_key: bytes) -> ec.EllipticCurvePrivateKey:
    if len(secret_key) != SECRET_KEY_LENGTH:
        raise ValueError(f"secp256k1 secret key must be 32 bytes, got {len(secret_key)}")
    return ec.derive_private_key(int.from_bytes(secret_key, "big"), CURVE)


def generate_keypair() -> Keypair:
    """Generate a fresh random key pair."""
    private_key = ec.generate_private_key(CURVE)
    secret = private_key.private_numbers().private_value.to_bytes(SECRET_KEY_LENGTH, "big")
    return Keypair(public_key=_compressed(private_key.public_key()), secret_key=secret)


def keypair_from_secret(secret_key: bytes) -> Keypair:
    """Rebuild a key pair from a 32-byte secret scalar."""
    private_key = _private_key(bytes(secret_key))
    return Keypair(public_key=_compressed(private_key.public_key()), secret_key=bytes(secret_key))


def decompress(public_key: bytes) -> tuple[bytes, bytes]:
    """Expand a compressed point into 32-byte affine (x, y) coordinates.

    Raises ``ValueError`` when *public_key* is not a point on the curve.
    """
    if len(public_key) != COMPRESSED_KEY_LENGTH:
        raise ValueError(
            f"expected compressed public key length={COMPRESSED_KEY_LENGTH}; got {len(public_key)}"
        )
    point = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, bytes(public_key))
    numbers = point.public_numbers()
    return (
        numbers.x.to_bytes(COORDINATE_LENGTH, "big"),
        numbers.y.to_bytes(COORDINATE_LENGTH, "big"),
    )


def compress(x: bytes, y: bytes) -> bytes:
    """Compress affine coordinates into a 33-byte point.

    Raises ``ValueError`` when (x, y) is not on the curve.
    """
    if len(x) != COORDINATE_LENGTH or len(y) != COORDINATE_LENGTH:
        raise ValueError("secp256k1 coordinates must be 32 bytes each")
    numbers = ec.EllipticCurvePublicNumbers(
        int.from_bytes(x, "big"), int.from_bytes(y, "big"), CURVE
    )
    return _compressed(numbers.public_key())


def sign(message: bytes, secret_key: bytes) -> bytes:
    """Produce a DER-encoded ECDSA/SHA-256 signature over *message*."""
    return _private_key(bytes(secret_key)).sign(message, ec.ECDSA(hashes.SHA256()))


def verify(message: bytes, public_key: bytes, signature: bytes) -> bool:
    """Verify a DER ECDSA *signature* against a compressed *public_key*."""
    try:
        point = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, bytes(public_key))
    except ValueError:
        return False
    try:
        point.verify(bytes(signature), message, ec.ECDSA(hashes.SHA256()))
        return True
    except (InvalidSignature, ValueError):
        return False
