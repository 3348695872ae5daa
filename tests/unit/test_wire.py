"""Tests for raw wire shapes and shared parsing helpers."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

from sunk.exceptions import InvalidFieldError, InvalidIdError
from sunk.wire import WireShape, camel_case, parse_id, parse_optional_id, payload_list, wire_field


@dataclass(frozen=True)
class RawThing(WireShape):
    id: str
    song_count: int
    kind: str = wire_field(key="type")
    rating: Optional[float] = None
    is_dir: Optional[bool] = None
    tags: List[str] = wire_field(default_factory=list)
    extra: Optional[Dict[str, Any]] = None


class TestCamelCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("id", "id"),
            ("album_count", "albumCount"),
            ("music_brainz_id", "musicBrainzId"),
            ("last_fm_url", "lastFmUrl"),
        ],
    )
    def test_conversion(self, name, expected):
        assert camel_case(name) == expected


class TestWireShape:
    """Tests for WireShape.from_payload()."""

    def test_parses_camel_case_keys(self):
        raw = RawThing.from_payload({"id": "1", "songCount": 9, "type": "music"})

        assert raw.id == "1"
        assert raw.song_count == 9
        assert raw.kind == "music"

    def test_absent_optional_fields_use_declared_defaults(self):
        raw = RawThing.from_payload({"id": "1", "songCount": 9, "type": "music"})

        assert raw.rating is None
        assert raw.is_dir is None
        assert raw.tags == []

    def test_missing_required_field(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            RawThing.from_payload({"id": "1", "type": "music"})

        assert exc_info.value.field == "songCount"

    def test_null_for_required_field(self):
        with pytest.raises(InvalidFieldError):
            RawThing.from_payload({"id": None, "songCount": 9, "type": "music"})

    def test_null_for_optional_field(self):
        raw = RawThing.from_payload({"id": "1", "songCount": 9, "type": "music", "rating": None})

        assert raw.rating is None

    def test_string_where_integer_expected(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            RawThing.from_payload({"id": "1", "songCount": "9", "type": "music"})

        assert exc_info.value.field == "songCount"
        assert exc_info.value.value == "9"

    def test_integer_where_string_expected(self):
        with pytest.raises(InvalidFieldError):
            RawThing.from_payload({"id": 1, "songCount": 9, "type": "music"})

    def test_negative_integer_rejected(self):
        with pytest.raises(InvalidFieldError, match="non-negative"):
            RawThing.from_payload({"id": "1", "songCount": -1, "type": "music"})

    def test_bool_is_not_an_integer(self):
        with pytest.raises(InvalidFieldError):
            RawThing.from_payload({"id": "1", "songCount": True, "type": "music"})

    def test_float_accepts_integer(self):
        raw = RawThing.from_payload({"id": "1", "songCount": 9, "type": "music", "rating": 4})

        assert raw.rating == 4.0
        assert isinstance(raw.rating, float)

    def test_bool_field_type_checked(self):
        with pytest.raises(InvalidFieldError):
            RawThing.from_payload({"id": "1", "songCount": 9, "type": "music", "isDir": "false"})

    def test_list_items_type_checked(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            RawThing.from_payload({"id": "1", "songCount": 9, "type": "music", "tags": ["a", 2]})

        assert exc_info.value.field == "tags[1]"

    def test_single_object_where_list_expected(self):
        """A bare object in a list-typed field counts as a one-element list."""

        @dataclass(frozen=True)
        class RawHolder(WireShape):
            item: List[Dict[str, Any]] = wire_field(default_factory=list)

        raw = RawHolder.from_payload({"item": {"id": "1"}})

        assert raw.item == [{"id": "1"}]

    def test_scalar_where_list_expected(self):
        with pytest.raises(InvalidFieldError):
            RawThing.from_payload({"id": "1", "songCount": 9, "type": "music", "tags": "rock"})

    def test_unknown_keys_ignored(self):
        raw = RawThing.from_payload({"id": "1", "songCount": 9, "type": "music", "bpm": 120})

        assert raw.id == "1"

    @pytest.mark.parametrize("payload", [None, [], "thing", 3])
    def test_payload_must_be_an_object(self, payload):
        with pytest.raises(InvalidFieldError):
            RawThing.from_payload(payload)


class TestParseId:
    """Tests for parse_id()."""

    def test_numeric_string(self):
        assert parse_id("id", "27") == 27

    def test_large_id(self):
        assert parse_id("id", "18446744073709551615") == 18446744073709551615

    @pytest.mark.parametrize("value", ["18446744073709551616", "99999999999999999999", "1" * 5000])
    def test_oversized_ids(self, value):
        with pytest.raises(InvalidIdError) as exc_info:
            parse_id("id", value)

        assert exc_info.value.field == "id"

    @pytest.mark.parametrize("value", ["al-1", "", " 1", "-1", "1.0", "0x1F", "١٢", 27, None])
    def test_invalid_ids(self, value):
        with pytest.raises(InvalidIdError) as exc_info:
            parse_id("albumId", value)

        assert exc_info.value.field == "albumId"
        assert exc_info.value.value == value

    def test_invalid_id_is_an_invalid_field(self):
        assert issubclass(InvalidIdError, InvalidFieldError)

    def test_optional_id(self):
        assert parse_optional_id("artistId", None) is None
        assert parse_optional_id("artistId", "5") == 5


class TestPayloadList:
    """Tests for payload_list()."""

    def test_list_value(self):
        assert payload_list({"song": [{"id": "1"}, {"id": "2"}]}, "song") == [{"id": "1"}, {"id": "2"}]

    def test_single_object(self):
        assert payload_list({"song": {"id": "1"}}, "song") == [{"id": "1"}]

    def test_missing_key(self):
        assert payload_list({}, "song") == []

    def test_missing_payload(self):
        assert payload_list(None, "song") == []

    def test_scalar_value(self):
        with pytest.raises(InvalidFieldError):
            payload_list({"song": "27"}, "song")

    def test_non_object_container(self):
        with pytest.raises(InvalidFieldError):
            payload_list([{"id": "1"}], "song")
