"""Shared fixtures: a fixed reference time and record factories."""

from datetime import datetime, timedelta, timezone

import pytest

from regintel_engine.data_management.schemas import Record, RecordType

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def days_ago():
    """Timestamp the given number of days before the reference time."""

    def _days_ago(days: float) -> datetime:
        return NOW - timedelta(days=days)

    return _days_ago


@pytest.fixture
def make_update():
    """Factory for regulatory update records."""

    def _make(record_id="upd-1", title="FDA 510(k) Clearance: Test Device", **fields):
        fields.setdefault("record_type", RecordType.REGULATORY_UPDATE)
        return Record(id=record_id, title=title, **fields)

    return _make


@pytest.fixture
def make_case():
    """Factory for legal case records."""

    def _make(record_id="case-1", title="Doe v. Acme Medical", **fields):
        fields.setdefault("record_type", RecordType.LEGAL_CASE)
        return Record(id=record_id, title=title, **fields)

    return _make
