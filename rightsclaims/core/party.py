"""Party addresses.

An address is the base58 SHA3-256 digest of a raw public key: 32 bytes for
Ed25519, the 33-byte compressed point for secp256k1.
"""

from __future__ import annotations

from rightsclaims.core.content import digest
from rightsclaims.core.encoding import base58_encode

#: JSON Schema fragment shared by every field holding an address or content id.
ADDRESS_PATTERN = "^[1-9A-HJ-NP-Za-km-z]{32,44}$"

Addr: dict = {"type": "string", "pattern": ADDRESS_PATTERN}


def address_of(public_key: bytes) -> str:
    """Derive the party address for *public_key*."""
    return base58_encode(digest(bytes(public_key)))
