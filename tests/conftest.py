"""Shared fixtures for rightsclaims tests.

Parties have deterministic keys so addresses and content ids are stable
across runs. ``NOW`` is a fixed clock reading for tests that pin time.
"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rightsclaims.api.app import app
from rightsclaims.claims import ed25519_header, secp256k1_header
from rightsclaims.core.metadata import metadata_id
from rightsclaims.core.party import address_of
from rightsclaims.crypto import ed25519, secp256k1

NOW = 1_700_000_000

COMPOSER = ed25519.keypair_from_seed(b"\x01" * 32)
PUBLISHER = ed25519.keypair_from_seed(b"\x02" * 32)
LYRICIST = ed25519.keypair_from_seed(b"\x05" * 32)
OUTSIDER = ed25519.keypair_from_seed(b"\x09" * 32)
PERFORMER = secp256k1.keypair_from_secret(b"\x03" * 32)
RECORD_LABEL = secp256k1.keypair_from_secret(b"\x04" * 32)
PRODUCER = secp256k1.keypair_from_secret(b"\x06" * 32)


def addr(keypair) -> str:
    return address_of(keypair.public_key)


@pytest.fixture
def composition():
    return {
        "@context": "http://schema.org/",
        "@type": "Composition",
        "name": "Blue in Green",
        "composer": [addr(COMPOSER)],
        "lyricist": [addr(LYRICIST)],
    }


@pytest.fixture
def recording(composition):
    return {
        "@context": "http://schema.org/",
        "@type": "Recording",
        "name": "Blue in Green (take 3)",
        "performer": [addr(PERFORMER)],
        "producer": [addr(PRODUCER)],
        "recordingOf": metadata_id(composition),
    }


@pytest.fixture
def album(recording):
    return {
        "@context": "http://schema.org/",
        "@type": "Album",
        "name": "Kind of Blue",
        "artist": [addr(PERFORMER)],
        "track": [metadata_id(recording)],
    }


@pytest.fixture
def composer_header():
    return ed25519_header(COMPOSER.public_key)


@pytest.fixture
def performer_header():
    return secp256k1_header(PERFORMER.public_key)


@pytest_asyncio.fixture
async def client(monkeypatch):
    """HTTP test client in dev mode (no API keys configured)."""
    monkeypatch.delenv("RC_API_KEYS", raising=False)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
