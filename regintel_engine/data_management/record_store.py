"""Record store adapter for regulatory updates and legal cases.

Features:
- In-memory storage with optional JSON persistence
- O(1) lookup by record id
- Bulk read operations returning complete, unfiltered snapshots
- Raw dashboard dicts coerced into Records on load (camelCase aliases accepted)

JSON layout:
{
    "regulatory_updates": [{...}, ...],
    "legal_cases": [{...}, ...]
}
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from loguru import logger

from regintel_engine.data_management.schemas import Record, RecordType, RecordValidationError


class RecordNotFoundError(KeyError):
    """Raised by get_record for an unknown record id."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(record_id)


@runtime_checkable
class RecordStore(Protocol):
    """Read operations the engine consumes from a record store."""

    def list_regulatory_updates(self) -> List[Record]:
        ...

    def list_legal_cases(self) -> List[Record]:
        ...

    def get_record(self, record_id: str) -> Record:
        ...


class InMemoryRecordStore:
    """
    In-memory record store with optional JSON file persistence.

    Stands in for the production store in tests and the CLI. Records keep
    insertion order; re-adding an id replaces the stored record in place.

    Attributes:
        persistence_path: JSON file loaded on init and written by save()
        rejected: Number of raw entries that failed validation on load
    """

    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        persistence_path: Optional[str] = None,
    ):
        """
        Initialize record store.

        Args:
            records: Initial records
            persistence_path: Optional path to a JSON corpus file.
                            If None, storage is memory-only.
        """
        self._records: Dict[str, Record] = {}
        self.rejected = 0
        self.persistence_path = Path(persistence_path) if persistence_path else None
        self.logger = logger.bind(component="RecordStore")

        if self.persistence_path and self.persistence_path.exists():
            self._load_from_file()

        for record in records or []:
            self.add(record)

        self.logger.debug(
            "RecordStore initialized",
            records=len(self._records),
            persistence_enabled=self.persistence_path is not None,
        )

    def add(self, record: Record) -> None:
        self._records[record.id] = record

    def add_raw(self, data: Dict[str, Any], record_type: RecordType) -> Record:
        """
        Coerce and add a raw store dict.

        Raises:
            RecordValidationError: If the dict cannot be coerced into a Record
        """
        raw = dict(data)
        raw.setdefault("record_type", record_type.value)
        record = Record.from_raw(raw)
        self.add(record)
        return record

    def list_regulatory_updates(self) -> List[Record]:
        """All regulatory updates in insertion order."""
        return [r for r in self._records.values() if not r.is_legal_case]

    def list_legal_cases(self) -> List[Record]:
        """All legal cases in insertion order."""
        return [r for r in self._records.values() if r.is_legal_case]

    def get_record(self, record_id: str) -> Record:
        """
        Look up a record by id.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        try:
            return self._records[record_id]
        except KeyError:
            raise RecordNotFoundError(record_id) from None

    def __len__(self) -> int:
        return len(self._records)

    def get_stats(self) -> Dict[str, Any]:
        """Counts for status reporting."""
        updates = self.list_regulatory_updates()
        return {
            "total_records": len(self._records),
            "regulatory_updates": len(updates),
            "legal_cases": len(self._records) - len(updates),
            "authorities": len({r.authority for r in updates if r.authority}),
            "rejected_on_load": self.rejected,
            "persistence_path": str(self.persistence_path) if self.persistence_path else None,
        }

    def _load_from_file(self) -> None:
        """Load records from the JSON corpus file, skipping invalid entries."""
        with open(self.persistence_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        sections = (
            ("regulatory_updates", RecordType.REGULATORY_UPDATE),
            ("legal_cases", RecordType.LEGAL_CASE),
        )
        for key, record_type in sections:
            for raw in data.get(key, []):
                try:
                    self.add_raw(raw, record_type)
                except RecordValidationError as e:
                    self.rejected += 1
                    self.logger.warning(
                        "Skipping invalid record",
                        record_id=e.record_id,
                        error=str(e),
                    )

        self.logger.info(
            f"Loaded from {self.persistence_path}",
            records=len(self._records),
            rejected=self.rejected,
        )

    def save(self, path: Optional[str] = None) -> Path:
        """
        Write the store to JSON.

        Args:
            path: Target file (persistence_path if None)

        Returns:
            Path written
        """
        target = Path(path) if path else self.persistence_path
        if target is None:
            raise ValueError("No persistence path configured")

        payload = {
            "regulatory_updates": [
                r.model_dump(mode="json") for r in self.list_regulatory_updates()
            ],
            "legal_cases": [r.model_dump(mode="json") for r in self.list_legal_cases()],
        }
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        self.logger.info(f"Saved {len(self._records)} records", path=str(target))
        return target


__all__ = ["InMemoryRecordStore", "RecordNotFoundError", "RecordStore"]
