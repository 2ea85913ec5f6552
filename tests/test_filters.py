import pytest

from string_analyzer.models.string_record import FilterSet, StringRecord
from string_analyzer.services.analyzer import analyze
from string_analyzer.services.filters import filter_records, matches


def make_record(value: str) -> StringRecord:
    props = analyze(value)
    return StringRecord(id=props.sha256_hash, value=value, properties=props)


class TestMatches:
    @pytest.fixture
    def sample_record(self):
        return make_record("hello world")

    def test_empty_filters_match(self, sample_record):
        assert matches(sample_record, FilterSet()) is True

    def test_and_composition(self, sample_record):
        assert sample_record.properties.length == 11
        assert matches(sample_record, FilterSet(min_length=5, is_palindrome=False)) is True
        assert matches(sample_record, FilterSet(min_length=5, is_palindrome=True)) is False

    def test_length_bounds_are_inclusive(self, sample_record):
        assert matches(sample_record, FilterSet(min_length=11)) is True
        assert matches(sample_record, FilterSet(max_length=11)) is True
        assert matches(sample_record, FilterSet(min_length=12)) is False
        assert matches(sample_record, FilterSet(max_length=10)) is False

    def test_word_count_exact(self, sample_record):
        assert matches(sample_record, FilterSet(word_count=2)) is True
        assert matches(sample_record, FilterSet(word_count=1)) is False

    def test_contains_character_case_insensitive(self, sample_record):
        assert matches(sample_record, FilterSet(contains_character="h")) is True
        assert matches(sample_record, FilterSet(contains_character="H")) is True
        assert matches(sample_record, FilterSet(contains_character="z")) is False

    def test_contains_uppercase_value(self):
        record = make_record("ZEBRA")
        assert matches(record, FilterSet(contains_character="z")) is True

    def test_contains_space(self, sample_record):
        assert matches(sample_record, FilterSet(contains_character=" ")) is True


class TestFilterRecords:
    def test_keeps_order(self):
        records = [make_record(v) for v in ["level", "hello", "noon", "world"]]
        result = filter_records(records, FilterSet(is_palindrome=True))
        assert [r.value for r in result] == ["level", "noon"]


class TestFilterSet:
    def test_applied_omits_unset_fields(self):
        filters = FilterSet(min_length=3, is_palindrome=False)
        assert filters.applied() == {"min_length": 3, "is_palindrome": False}

    def test_is_empty(self):
        assert FilterSet().is_empty() is True
        assert FilterSet(word_count=0).is_empty() is False

    def test_satisfiable(self):
        assert FilterSet(min_length=2, max_length=5).is_satisfiable() is True
        assert FilterSet(min_length=5, max_length=5).is_satisfiable() is True
        assert FilterSet(min_length=6, max_length=5).is_satisfiable() is False
        assert FilterSet(max_length=-1).is_satisfiable() is False
