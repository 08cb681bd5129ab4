"""Tests for the general utilities in minerva_cms.util."""

import re

import pytest

from minerva_cms.util import FoundRecord, in_array_recursive, same_identifier, unique_string, unique_url


class DocumentId:
    """Stand-in for a structured document id such as a Mongo ObjectId."""

    def __init__(self, value: str):
        """Store the hex value."""
        self.value = value

    def __str__(self) -> str:
        """Return the hex value."""
        return self.value


class FakeFinder:
    """In-memory RecordFinder that records every query it receives."""

    def __init__(self, records: list[tuple]):
        """Store (id, url) pairs."""
        self.records = [FoundRecord(id=record_id, url=url) for record_id, url in records]
        self.queries: list[str] = []

    def find_by_url_contains(self, pattern: str) -> list[FoundRecord]:
        """Return records whose url contains pattern."""
        self.queries.append(pattern)
        return [record for record in self.records if pattern in record.url]


class FailingFinder:
    """RecordFinder whose store is unreachable."""

    def find_by_url_contains(self, pattern: str) -> list[FoundRecord]:
        """Raise a connection error."""
        raise ConnectionError("store unavailable")


class TestUniqueUrl:
    """Tests for unique_url."""

    def test_no_conflicts_returns_lowercase_url(self):
        """Test url is only lowercased when nothing conflicts."""
        assert unique_url("Home", FakeFinder([])) == "home"

    def test_appends_first_free_counter(self):
        """Test the first counter not taken is appended."""
        finder = FakeFinder([(1, "home"), (2, "home-1")])

        assert unique_url("Home", finder) == "home-2"

    def test_single_conflict_gets_counter_one(self):
        """Test a single conflicting record yields the -1 suffix."""
        assert unique_url("about", FakeFinder([(1, "about")])) == "about-1"

    def test_excluded_record_is_not_a_conflict(self):
        """Test the record being edited does not conflict with itself."""
        finder = FakeFinder([(7, "home")])

        assert unique_url("home", finder, exclude_id=7) == "home"

    def test_other_records_still_conflict_when_editing(self):
        """Test exclusion only removes the edited record."""
        finder = FakeFinder([(7, "home"), (8, "home-1")])

        assert unique_url("home", finder, exclude_id=8) == "home-1"

    def test_output_is_stable_when_fed_back(self):
        """Test re-submitting the generated url for its own record keeps it."""
        finder = FakeFinder([(1, "home"), (2, "home-1")])
        first = unique_url("home", finder)
        finder.records.append(FoundRecord(id=3, url=first))

        assert unique_url(first, finder, exclude_id=3) == first

    @pytest.mark.parametrize("size", [1, 2, 5, 25])
    def test_counter_search_finds_next_after_sequence(self, size):
        """Test a conflict set of base, base-1 ... base-(N-1) yields base-N."""
        urls = ["page"] + [f"page-{i}" for i in range(1, size)]
        finder = FakeFinder(list(enumerate(urls, start=1)))

        assert unique_url("page", finder) == f"page-{size}"

    def test_gap_in_sequence_is_reused(self):
        """Test the lowest free counter is used."""
        finder = FakeFinder([(1, "news"), (2, "news-1"), (3, "news-3")])

        assert unique_url("news", finder) == "news-2"

    def test_substring_matches_force_a_counter(self):
        """Test partial matches from the contains query still seed the conflict set."""
        finder = FakeFinder([(1, "home2"), (2, "my-home")])

        assert unique_url("home", finder) == "home-1"

    def test_max_length_trims_base_for_suffix(self):
        """Test the base is shortened so base plus counter fits."""
        finder = FakeFinder([(1, "abcdef")])

        assert unique_url("abcdef", finder, max_length=6) == "abcd-1"

    def test_max_length_checks_trimmed_stem(self):
        """Test urls already using the trimmed stem are treated as conflicts."""
        finder = FakeFinder([(1, "abcdef"), (2, "abcd-1")])

        assert unique_url("abcdef", finder, max_length=6) == "abcd-2"
        assert finder.queries == ["abcdef", "abcd"]

    def test_max_length_truncates_requested_url(self):
        """Test an over-long request is cut to max length."""
        assert unique_url("abcdefgh", FakeFinder([]), max_length=5) == "abcde"

    def test_custom_separator(self):
        """Test separator joins the base url and counter."""
        finder = FakeFinder([(1, "home"), (2, "home_1")])

        assert unique_url("home", finder, separator="_") == "home_2"

    def test_queries_store_once_with_lowercase_pattern(self):
        """Test exactly one lookup is made, with the normalized url."""
        finder = FakeFinder([(1, "home"), (2, "home-1")])
        unique_url("HOME", finder)

        assert finder.queries == ["home"]

    @pytest.mark.parametrize(("url", "finder"), [("", FakeFinder([])), (None, FakeFinder([])), ("home", None)])
    def test_missing_input_returns_none(self, url, finder):
        """Test missing url or lookup short-circuits to None."""
        assert unique_url(url, finder) is None

    def test_lookup_errors_propagate(self):
        """Test store failures are not caught."""
        with pytest.raises(ConnectionError):
            unique_url("home", FailingFinder())

    def test_document_id_matches_string_exclude_id(self):
        """Test a structured record id is compared to a string id by value."""
        finder = FakeFinder([(DocumentId("4f2a"), "home")])

        assert unique_url("home", finder, exclude_id="4f2a") == "home"

    def test_int_record_id_matches_string_exclude_id(self):
        """Test an id taken from a URL string still excludes the record."""
        finder = FakeFinder([(12, "home")])

        assert unique_url("home", finder, exclude_id="12") == "home"


class TestSameIdentifier:
    """Tests for same_identifier."""

    def test_same_type_compares_natively(self):
        """Test ints and strs of the same type compare by value."""
        assert same_identifier(3, 3)
        assert not same_identifier(3, 4)
        assert same_identifier("abc", "abc")

    def test_different_types_compare_as_strings(self):
        """Test mixed types compare by string representation."""
        assert same_identifier(DocumentId("4f2a"), "4f2a")
        assert same_identifier(5, "5")
        assert not same_identifier(DocumentId("4f2a"), "4f2b")

    def test_none_exclude_id_never_matches_a_record(self):
        """Test no record is excluded when exclude id is None."""
        assert not same_identifier(1, None)
        assert not same_identifier("None", None)


class TestInArrayRecursive:
    """Tests for in_array_recursive."""

    def test_finds_deeply_nested_value(self):
        """Test a value inside nested lists is found."""
        assert in_array_recursive(5, [1, [2, [3, 5]], 4]) is True

    def test_missing_value(self):
        """Test a value not present is not found."""
        assert in_array_recursive(9, [1, [2, [3, 5]], 4]) is False

    @pytest.mark.parametrize("haystack", [[1, 2], [], {"a": [None]}, None])
    def test_empty_needle_returns_false(self, haystack):
        """Test None needle always returns False."""
        assert in_array_recursive(None, haystack) is False

    @pytest.mark.parametrize("needle", ["a", 1, [1], None])
    def test_empty_haystack_returns_false(self, needle):
        """Test empty haystack always returns False."""
        assert in_array_recursive(needle, []) is False

    @pytest.mark.parametrize("needle", [0, "", False, []])
    def test_falsy_needle_returns_false(self, needle):
        """Test falsy needles short-circuit even when present."""
        assert in_array_recursive(needle, [0, "", False, [[]]]) is False

    def test_strict_equality_across_types(self):
        """Test values of a different type never match."""
        assert in_array_recursive(1, [1.0, True, "1"]) is False
        assert in_array_recursive("a", [0, ["b"]]) is False
        assert in_array_recursive(1.0, [1, [1.0]]) is True

    def test_searches_dict_values_not_keys(self):
        """Test dict values are searched and keys are ignored."""
        haystack = {"title": "Home", "tags": {"primary": ["cms", "minerva"]}}

        assert in_array_recursive("minerva", haystack) is True
        assert in_array_recursive("tags", haystack) is False

    def test_strings_are_leaves(self):
        """Test strings are compared whole, not searched by character."""
        assert in_array_recursive("o", ["foo", ("bar",)]) is False
        assert in_array_recursive("foo", ["foo", ("bar",)]) is True

    @pytest.mark.parametrize("haystack", ["abc", b"abc", 5])
    def test_non_container_haystack_returns_false(self, haystack):
        """Test a scalar haystack is not searched character by character."""
        assert in_array_recursive("a", haystack) is False

    def test_tuples_and_sets_are_traversed(self):
        """Test tuple and set members are searched."""
        assert in_array_recursive("x", ({"x"},)) is True

    def test_deep_nesting_does_not_hit_recursion_limit(self):
        """Test very deep structures are searched iteratively."""
        haystack: list = ["needle"]
        for _ in range(5000):
            haystack = [haystack]

        assert in_array_recursive("needle", haystack) is True


class TestUniqueString:
    """Tests for unique_string."""

    def test_md5_by_default(self):
        """Test default output is a 32 char hex digest."""
        assert re.fullmatch(r"[0-9a-f]{32}", unique_string())

    def test_sha1(self):
        """Test sha1 output is a 40 char hex digest."""
        assert re.fullmatch(r"[0-9a-f]{40}", unique_string(hash="sha1"))

    @pytest.mark.parametrize("method", [None, False])
    def test_raw_id_is_13_chars(self, method):
        """Test unhashed ids are 13 hex chars."""
        assert re.fullmatch(r"[0-9a-f]{13}", unique_string(hash=method))

    def test_raw_id_with_entropy_and_prefix(self):
        """Test entropy extends the raw id to 23 chars after the prefix."""
        value = unique_string(hash=None, prefix="code-", entropy=True)

        assert value.startswith("code-")
        assert len(value) == len("code-") + 23

    def test_values_differ(self):
        """Test consecutive calls with entropy are unique."""
        values = {unique_string(entropy=True) for _ in range(50)}

        assert len(values) == 50

    def test_unknown_hash_raises(self):
        """Test an unsupported hash method is rejected."""
        with pytest.raises(ValueError, match="Unsupported hash method"):
            unique_string(hash="crc32")
