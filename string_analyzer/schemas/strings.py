from pydantic import BaseModel, Field
from typing import Any, Dict, List
from datetime import datetime

from string_analyzer.models.string_record import StringRecord


class StringCreate(BaseModel):
    value: str = Field(..., description="String to analyze")


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @classmethod
    def from_record(cls, record: StringRecord) -> "StringResponse":
        return cls.model_validate(record.model_dump())


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class InterpretedQueryResponse(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQueryResponse
