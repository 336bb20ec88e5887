"""Tests for metadata documents: types, role addresses and ids."""

import pytest

from rightsclaims.core.content import content_id
from rightsclaims.core.metadata import (
    METADATA_SCHEMAS,
    ROLE_FIELDS,
    MetadataType,
    metadata_id,
    metadata_type,
    role_addresses,
    validate_metadata,
)

from .conftest import COMPOSER, LYRICIST, PERFORMER, PRODUCER, addr


class TestRoleAddresses:
    def test_composition_includes_composer_and_lyricist(self, composition):
        assert role_addresses(composition) == {addr(COMPOSER), addr(LYRICIST)}

    def test_recording_includes_performer_and_producer(self, recording):
        assert role_addresses(recording) == {addr(PERFORMER), addr(PRODUCER)}

    def test_album_uses_artist(self, album):
        assert role_addresses(album) == {addr(PERFORMER)}

    def test_absent_secondary_role_counts_as_empty(self, composition):
        del composition["lyricist"]
        assert role_addresses(composition) == {addr(COMPOSER)}

    @pytest.mark.parametrize("doc", [{"@type": "Book"}, {"@type": ["Album"]}, {}])
    def test_unknown_type_raises(self, doc):
        with pytest.raises(ValueError):
            role_addresses(doc)

    def test_every_type_has_role_fields_and_schema(self):
        assert set(ROLE_FIELDS) == set(MetadataType) == set(METADATA_SCHEMAS)


def test_metadata_type(recording):
    assert metadata_type(recording) is MetadataType.RECORDING


class TestMetadataId:
    def test_excludes_at_id(self, composition):
        plain = metadata_id(composition)
        assert metadata_id({**composition, "@id": plain}) == plain

    def test_is_content_id_of_document(self, composition):
        assert metadata_id(composition) == content_id(composition)

    def test_changes_with_roles(self, composition):
        before = metadata_id(composition)
        composition["composer"] = [addr(PERFORMER)]
        assert metadata_id(composition) != before

    def test_fractional_numbers_are_hashed(self, recording):
        recording["duration"] = 212.5
        first = metadata_id(recording)
        assert first == metadata_id(dict(recording))
        recording["duration"] = 212.25
        assert metadata_id(recording) != first

    def test_nan_is_rejected(self, recording):
        with pytest.raises(ValueError):
            metadata_id({**recording, "duration": float("nan")})


class TestValidateMetadata:
    def test_valid_documents(self, composition, recording, album):
        for doc in (composition, recording, album):
            assert validate_metadata(doc) == []

    def test_role_field_must_be_address_list(self, composition):
        composition["composer"] = addr(COMPOSER)
        assert validate_metadata(composition)

    def test_primary_role_required(self, recording):
        del recording["performer"]
        errors = validate_metadata(recording)
        assert any("performer" in e for e in errors)

    def test_primary_role_non_empty(self, album):
        album["artist"] = []
        assert validate_metadata(album)

    def test_non_object(self):
        assert validate_metadata(["Album"]) == ["$: metadata document must be an object"]

    def test_unknown_type_is_left_to_role_check(self):
        assert validate_metadata({"@type": "Book", "author": ["x"]}) == []
