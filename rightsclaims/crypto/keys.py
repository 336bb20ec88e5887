"""Key pair container shared by both signature providers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Keypair:
    """Raw public and secret key bytes for one party.

    ``public_key`` is the form that addresses and headers are built from:
    32 bytes for Ed25519, the 33-byte compressed point for secp256k1.
    ``secret_key`` is a 32-byte Ed25519 seed or secp256k1 scalar.
    """

    public_key: bytes
    secret_key: bytes = b""

    def __repr__(self) -> str:
        return f"Keypair(public_key={self.public_key.hex()}, secret_key=<redacted>)"
