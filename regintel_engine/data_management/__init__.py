"""Record storage and schemas."""

from regintel_engine.data_management.record_store import (
    InMemoryRecordStore,
    RecordNotFoundError,
    RecordStore,
)

__all__ = ["InMemoryRecordStore", "RecordNotFoundError", "RecordStore"]
