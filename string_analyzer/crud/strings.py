import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from string_analyzer.exceptions import ConflictError, ConflictingFiltersError, NotFoundError
from string_analyzer.models.string_record import FilterSet, InterpretedQuery, StringRecord
from string_analyzer.services import nl_parser
from string_analyzer.services.filters import filter_records
from string_analyzer.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class StringListResult:
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any]


@dataclass
class NaturalLanguageResult:
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery


def create_string(store: RecordStore, value: str) -> StringRecord:
    """Analyze and store a new string"""
    try:
        return store.insert(value)
    except ConflictError:
        logger.warning("Rejected duplicate string")
        raise


def get_string(store: RecordStore, value: str) -> Optional[StringRecord]:
    """Get string analysis by value"""
    record = store.get(value)
    if record is None:
        logger.debug("String lookup missed")
    return record


def delete_string(store: RecordStore, value: str) -> bool:
    """Delete string analysis by value"""
    try:
        store.delete(value)
    except NotFoundError:
        logger.warning("Delete requested for unknown string")
        return False
    return True


def list_filtered(store: RecordStore, filters: Optional[FilterSet] = None) -> StringListResult:
    """Get all strings matching every supplied filter, in insertion order"""
    filters = filters or FilterSet()
    data = filter_records(store.list(), filters)
    return StringListResult(data=data, count=len(data), filters_applied=filters.applied())


def list_by_natural_language(store: RecordStore, query: str) -> NaturalLanguageResult:
    """
    Parse a natural-language query and apply the derived filters.
    Raises ConflictingFiltersError before touching the store when the
    parsed filters cannot all hold.
    """
    interpreted = nl_parser.parse(query)
    if not interpreted.parsed_filters.is_satisfiable():
        logger.warning(f"Natural language query produced conflicting filters: {interpreted.echo()}")
        raise ConflictingFiltersError(
            "Query parsed but resulted in conflicting filters",
            interpreted_query=interpreted.echo(),
        )

    result = list_filtered(store, interpreted.parsed_filters)
    logger.info(f"Natural language query matched {result.count} strings: {interpreted.echo()}")
    return NaturalLanguageResult(
        data=result.data,
        count=result.count,
        interpreted_query=interpreted,
    )
