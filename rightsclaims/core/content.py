"""Content addressing primitives.

A content identifier is ``base58(sha3_256(canonical_json(value)))``, where the
canonical form has sorted keys, no insignificant whitespace and UTF-8
encoding. Floats are rejected by default so claim identifiers are
byte-for-byte reproducible; metadata documents opt in with ``allow_floats``.
NaN and infinities are never accepted.
"""

from __future__ import annotations

import hashlib
import json
import time
from collections.abc import Iterable
from typing import Any

from rightsclaims.core.encoding import b64url_encode, base58_encode


def _reject_floats(value: Any, path: str = "$") -> None:
    if isinstance(value, float):
        raise ValueError(f"Float not allowed in canonical JSON at {path}")
    if isinstance(value, dict):
        for k, v in value.items():
            _reject_floats(v, f"{path}.{k}")
    elif isinstance(value, (list, tuple)):
        for i, v in enumerate(value):
            _reject_floats(v, f"{path}[{i}]")


def canonical_json(value: Any, allow_floats: bool = False) -> bytes:
    """Deterministic JSON serialization for hashing and signing."""
    if not allow_floats:
        _reject_floats(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def digest(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def without_keys(value: dict[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Return a shallow copy of *value* without *keys*."""
    excluded = frozenset(keys)
    return {k: v for k, v in value.items() if k not in excluded}


def content_id(value: Any, exclude: Iterable[str] = (), allow_floats: bool = False) -> str:
    """Content identifier of *value*, skipping top-level keys in *exclude*.

    Excluded keys let an object carry its own identifier without feeding it
    back into the hash.
    """
    if isinstance(value, dict):
        value = without_keys(value, exclude)
    return base58_encode(digest(canonical_json(value, allow_floats=allow_floats)))


def encode_segment(value: Any) -> str:
    """base64url of the canonical JSON encoding of *value*."""
    return b64url_encode(canonical_json(value))


def now() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())
