from typing import Iterable, List

from string_analyzer.models.string_record import FilterSet, StringRecord
from string_analyzer.services.analyzer import fold_char


def matches(record: StringRecord, filters: FilterSet) -> bool:
    """True when the record satisfies every predicate present in filters"""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character is not None:
        # frequency map keys are already case-folded
        if fold_char(filters.contains_character) not in props.character_frequency_map:
            return False

    return True


def filter_records(records: Iterable[StringRecord], filters: FilterSet) -> List[StringRecord]:
    return [record for record in records if matches(record, filters)]
