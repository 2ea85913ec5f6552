import logging
import threading
from typing import Dict, List, Optional

from fastapi import Request

from string_analyzer.exceptions import ConflictError, InvalidInputError, NotFoundError
from string_analyzer.models.string_record import StringRecord, utc_now
from string_analyzer.services.analyzer import Hasher, analyze, compute_sha256

logger = logging.getLogger(__name__)


class RecordStore:
    """
    In-memory mapping of content hash -> StringRecord.

    Every operation runs under a single lock so inserts, deletes and
    listings never interleave. Reads hand out copies; the store keeps
    sole ownership of its records. Contents live as long as the process.
    """

    def __init__(self, hasher: Hasher = compute_sha256, allow_empty: bool = False):
        self.hasher = hasher
        self.allow_empty = allow_empty
        self._records: Dict[str, StringRecord] = {}  # dicts keep insertion order
        self._lock = threading.RLock()

    def key_for(self, value: str) -> str:
        return self.hasher(value)

    def insert(self, value: str) -> StringRecord:
        if not isinstance(value, str):
            raise InvalidInputError("Value must be a string")
        if not value and not self.allow_empty:
            raise InvalidInputError("Value must not be empty")

        properties = analyze(value, hasher=self.hasher)
        record_id = properties.sha256_hash

        with self._lock:
            if record_id in self._records:
                raise ConflictError("String already exists in the system")
            record = StringRecord(
                id=record_id,
                value=value,
                properties=properties,
                created_at=utc_now(),
            )
            self._records[record_id] = record
            logger.info(f"Stored string {record_id[:12]} (total={len(self._records)})")
        return record.model_copy(deep=True)

    def get(self, value: str) -> Optional[StringRecord]:
        return self.get_by_id(self.key_for(value))

    def get_by_id(self, string_id: str) -> Optional[StringRecord]:
        with self._lock:
            record = self._records.get(string_id)
            return record.model_copy(deep=True) if record else None

    def list(self) -> List[StringRecord]:
        """Snapshot of every record in insertion order"""
        with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    def delete(self, value: str) -> None:
        record_id = self.key_for(value)
        with self._lock:
            if record_id not in self._records:
                raise NotFoundError("String does not exist in the system")
            del self._records[record_id]
            logger.info(f"Deleted string {record_id[:12]} (total={len(self._records)})")

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        with self._lock:
            return self.key_for(value) in self._records


# ------------------------------------------------------------------------------
# STORE DEPENDENCY
# ------------------------------------------------------------------------------
def get_store(request: Request) -> RecordStore:
    """Dependency to provide the application's record store."""
    return request.app.state.store
