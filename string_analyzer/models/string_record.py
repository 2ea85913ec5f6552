from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PropertyReport(BaseModel):
    """Facts computed once about a stored value. Never mutated."""

    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str  # SHA-256 hash of value
    value: str
    properties: PropertyReport
    created_at: datetime = Field(default_factory=utc_now)


class FilterSet(BaseModel):
    """
    Conjunction of optional predicates over a record's properties.
    A field left as None imposes no constraint.
    """

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None  # inclusive
    max_length: Optional[int] = None  # inclusive
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def applied(self) -> Dict[str, Any]:
        """Only the predicates that were actually set"""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()

    def is_satisfiable(self) -> bool:
        if self.max_length is not None and self.max_length < 0:
            return False
        if self.min_length is not None and self.max_length is not None:
            return self.min_length <= self.max_length
        return True


class InterpretedQuery(BaseModel):
    """Structured filters derived from a natural-language query."""

    original: str
    parsed_filters: FilterSet = Field(default_factory=FilterSet)

    def echo(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "parsed_filters": self.parsed_filters.applied(),
        }
