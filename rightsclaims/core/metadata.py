"""Metadata documents that claims refer to.

Only the parts the claims pipeline reads are modelled here: the ``@type``
discriminator, the role-address lists that say who may issue claims about
a document, and the document's own content identifier.

Role fields by type:
    Album        artist
    Composition  composer, lyricist
    Recording    performer, producer
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from rightsclaims.core.content import content_id
from rightsclaims.core.party import Addr
from rightsclaims.core.schema import DRAFT, validate_schema


class MetadataType(StrEnum):
    """Supported metadata document types."""

    ALBUM = "Album"
    COMPOSITION = "Composition"
    RECORDING = "Recording"


#: Fields whose addresses may issue claims about a document of each type.
ROLE_FIELDS: dict[MetadataType, tuple[str, ...]] = {
    MetadataType.ALBUM: ("artist",),
    MetadataType.COMPOSITION: ("composer", "lyricist"),
    MetadataType.RECORDING: ("performer", "producer"),
}

_ADDRESS_LIST = {"type": "array", "items": Addr, "uniqueItems": True}


def _document_schema(doc_type: MetadataType, required_role: str) -> dict[str, Any]:
    return {
        "$schema": DRAFT,
        "title": doc_type.value,
        "type": "object",
        "properties": {
            "@context": {"type": ["string", "object", "array"]},
            "@type": {"enum": [doc_type.value]},
            "@id": {"type": "string"},
            "name": {"type": "string"},
            **{role: _ADDRESS_LIST for role in ROLE_FIELDS[doc_type]},
            required_role: {**_ADDRESS_LIST, "minItems": 1},
        },
        "required": ["@type", required_role],
    }


Album = _document_schema(MetadataType.ALBUM, "artist")
Composition = _document_schema(MetadataType.COMPOSITION, "composer")
Recording = _document_schema(MetadataType.RECORDING, "performer")

METADATA_SCHEMAS: dict[MetadataType, dict[str, Any]] = {
    MetadataType.ALBUM: Album,
    MetadataType.COMPOSITION: Composition,
    MetadataType.RECORDING: Recording,
}


def metadata_type(document: dict[str, Any]) -> MetadataType:
    """Return the document's type. Raises ``ValueError`` if unsupported."""
    raw = document.get("@type") if isinstance(document, dict) else None
    if not isinstance(raw, str):
        raise ValueError(f"unexpected @type: {raw!r}")
    return MetadataType(raw)


def metadata_id(document: dict[str, Any]) -> str:
    """Content identifier of a metadata document (its ``@id`` excluded).

    Non-integer numbers are hashed in their shortest round-trip form.
    """
    return content_id(document, exclude=("@id",), allow_floats=True)


def role_addresses(document: dict[str, Any]) -> frozenset[str]:
    """Addresses authorized to issue claims about *document*.

    A role field that is absent contributes nothing.
    """
    doc_type = metadata_type(document)
    addresses: set[str] = set()
    for role in ROLE_FIELDS[doc_type]:
        addresses.update(document.get(role) or ())
    return frozenset(addresses)


def validate_metadata(document: Any) -> list[str]:
    """Shape-check a document of a supported type.

    Documents of unknown type return no errors here; role authorization
    reports them.
    """
    if not isinstance(document, dict):
        return ["$: metadata document must be an object"]
    try:
        doc_type = metadata_type(document)
    except ValueError:
        return []
    return validate_schema(document, METADATA_SCHEMAS[doc_type])
