from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional
import logging

from string_analyzer.crud import strings as crud
from string_analyzer.models.string_record import FilterSet
from string_analyzer.schemas.strings import (
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringResponse,
)
from string_analyzer.store import RecordStore, get_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/strings", response_model=StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, store: RecordStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if the string already exists.
    """
    record = crud.create_string(store, string_data.value)
    return StringResponse.from_record(record)


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None, description="Filter by palindrome (true/false)"),
    min_length: Optional[int] = Query(None, ge=0, description="Minimum string length"),
    max_length: Optional[int] = Query(None, ge=0, description="Maximum string length"),
    word_count: Optional[int] = Query(None, ge=0, description="Exact word count"),
    contains_character: Optional[str] = Query(
        None, min_length=1, max_length=1, description="Single character the string must contain"
    ),
    store: RecordStore = Depends(get_store),
):
    """
    Get all strings with optional filtering.
    """
    filters = FilterSet(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    result = crud.list_filtered(store, filters)
    return StringListResponse(
        data=[StringResponse.from_record(r) for r in result.data],
        count=result.count,
        filters_applied=result.filters_applied,
    )


# Registered before /strings/{string_value:path} so the literal path wins
@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query, e.g. 'all single word palindromic strings'"),
    store: RecordStore = Depends(get_store),
):
    """
    Filter strings using natural language queries.
    Unrecognized queries apply no filters and return every string.
    Returns 422 if the parsed filters conflict.
    """
    if query is None or not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Query parameter is required"},
        )

    result = crud.list_by_natural_language(store, query)
    return NaturalLanguageResponse(
        data=[StringResponse.from_record(r) for r in result.data],
        count=result.count,
        interpreted_query=result.interpreted_query.echo(),
    )


@router.get("/strings/{string_value:path}", response_model=StringResponse)
def get_string(string_value: str, store: RecordStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if the string doesn't exist.
    """
    record = crud.get_string(store, string_value)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "String does not exist in the system"},
        )
    return StringResponse.from_record(record)


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: RecordStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if the string doesn't exist.
    """
    success = crud.delete_string(store, string_value)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "String does not exist in the system"},
        )
    return None
