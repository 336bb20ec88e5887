"""Byte encodings used on the wire: base58 (addresses, ids) and base64url.

Base58 uses the Bitcoin alphabet. Base64url is unpadded, so a 32-byte value
always encodes to exactly 43 characters.
"""

from __future__ import annotations

import base64
import binascii
import re

_B58_ALPHABET = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def base58_encode(data: bytes) -> str:
    """Encode bytes to base58 (Bitcoin alphabet)."""
    # Count leading zero bytes
    n_leading = 0
    for byte in data:
        if byte == 0:
            n_leading += 1
        else:
            break

    num = int.from_bytes(data, "big")

    result = bytearray()
    while num > 0:
        num, remainder = divmod(num, 58)
        result.append(_B58_ALPHABET[remainder])
    result.reverse()

    # Prepend '1' for each leading zero byte
    return ("1" * n_leading) + result.decode("ascii")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(s: str) -> bytes:
    """Decode unpadded base64url. Raises ``ValueError`` on malformed input."""
    if not isinstance(s, str) or not _B64URL_RE.fullmatch(s):
        raise ValueError("Invalid base64url: unexpected characters")
    pad = "=" * ((4 - len(s) % 4) % 4)
    try:
        return base64.urlsafe_b64decode((s + pad).encode("ascii"))
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64url: {exc}") from exc
