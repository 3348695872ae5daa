"""Tests for the Query builder and SearchPage."""

from enum import Enum

import pytest

from sunk.query import Query, SearchPage, to_query_value
from sunk.song import AudioFormat


class Color(Enum):
    RED = "red"


class TestToQueryValue:
    """Tests for to_query_value() conversion rules."""

    def test_bool_is_lowercase(self):
        assert to_query_value(True) == "true"
        assert to_query_value(False) == "false"

    def test_int_is_decimal(self):
        assert to_query_value(320) == "320"
        assert to_query_value(0) == "0"

    def test_audio_format_is_lowercase_name(self):
        assert to_query_value(AudioFormat.MP3) == "mp3"
        assert to_query_value(AudioFormat.FLAC) == "flac"

    def test_plain_enum_uses_value(self):
        assert to_query_value(Color.RED) == "red"

    def test_string_unchanged(self):
        assert to_query_value("Misteur Valaire") == "Misteur Valaire"


class TestQuery:
    """Tests for Query construction."""

    def test_new_query_is_empty(self):
        assert Query().build() == ()

    def test_with_arg_seeds_one_pair(self):
        assert Query.with_arg("id", 27).build() == (("id", "27"),)

    def test_args_preserve_insertion_order(self):
        query = Query().arg("size", 10).arg("genre", "Rock").arg("fromYear", 1990)

        assert query.build() == (("size", "10"), ("genre", "Rock"), ("fromYear", "1990"))

    def test_maybe_arg_none_adds_nothing(self):
        query = Query.with_arg("id", 1).maybe_arg("maxBitRate", None).maybe_arg("format", None)

        assert query.build() == (("id", "1"),)

    def test_maybe_arg_value_adds_exactly_one_entry(self):
        query = Query().maybe_arg("maxBitRate", 128)

        assert query.build() == (("maxBitRate", "128"),)

    def test_maybe_arg_keeps_falsy_values(self):
        """Only None means absent; False and 0 are real values."""
        query = Query().maybe_arg("includeNotPresent", False).maybe_arg("offset", 0)

        assert query.build() == (("includeNotPresent", "false"), ("offset", "0"))

    def test_maybe_arg_list_repeats_key_in_order(self):
        query = Query.with_arg("id", 27).maybe_arg_list("bitRate", [320, 128, 64])

        assert query.build() == (
            ("id", "27"),
            ("bitRate", "320"),
            ("bitRate", "128"),
            ("bitRate", "64"),
        )

    @pytest.mark.parametrize("values", [None, []])
    def test_maybe_arg_list_none_or_empty_adds_nothing(self, values):
        assert Query().maybe_arg_list("bitRate", values).build() == ()

    def test_duplicate_key_is_rejected(self):
        query = Query.with_arg("id", 1)

        with pytest.raises(ValueError, match="already set"):
            query.arg("id", 2)

    def test_list_key_cannot_be_reused_by_arg(self):
        query = Query().maybe_arg_list("bitRate", [64])

        with pytest.raises(ValueError):
            query.arg("bitRate", 128)

    def test_build_returns_immutable_snapshot(self):
        query = Query.with_arg("id", 1)
        built = query.build()
        query.arg("size", 5)

        assert built == (("id", "1"),)

    def test_same_calls_encode_identically(self):
        def make():
            return (
                Query.with_arg("id", 27)
                .maybe_arg("maxBitRate", 320)
                .maybe_arg("format", AudioFormat.OGG)
                .maybe_arg("timeOffset", None)
            )

        assert make().encode() == make().encode()
        assert make().encode() == "id=27&maxBitRate=320&format=ogg"

    def test_encode_escapes_values(self):
        assert Query.with_arg("query", "a&b c").encode() == "query=a%26b+c"


class TestSearchPage:
    """Tests for SearchPage paging."""

    def test_defaults(self):
        page = SearchPage()
        assert (page.count, page.offset) == (20, 0)

    def test_next_advances_by_count(self):
        assert SearchPage(count=10, offset=5).next() == SearchPage(count=10, offset=15)

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError):
            SearchPage(count=-1)

    def test_apply_without_prefix(self):
        query = SearchPage(count=5, offset=10).apply(Query())
        assert query.build() == (("count", "5"), ("offset", "10"))

    def test_apply_with_prefix(self):
        query = SearchPage(count=5, offset=10).apply(Query(), "song")
        assert query.build() == (("songCount", "5"), ("songOffset", "10"))
