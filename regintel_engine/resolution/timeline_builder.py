"""Regulatory timeline construction for a single device.

The target record's extracted manufacturer and device name select the rest
of its history from the corpus:
- device-name similarity above 0.7, or
- manufacturer similarity above 0.8 (the stricter bar, since manufacturer
  names are the less ambiguous signal)

Events are ordered ascending by date, undated events last. The timeline's
current status is read off the last event only.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    EventImpact,
    Priority,
    Record,
    Timeline,
    TimelineEvent,
)
from regintel_engine.resolution.entity_extractor import EntityExtractor
from regintel_engine.resolution.text_similarity import similarity

# Last-event category keywords -> current status, checked in order
STATUS_RULES = [
    (("recall", "safety"), "Under Safety Review"),
    (("approval", "clearance"), "Approved"),
    (("registration",), "Registered"),
]

ACTIVE_STATUS = "Active"
UNKNOWN_STATUS = "Unknown"

_MIN_DATE = datetime.min.replace(tzinfo=timezone.utc)


def determine_current_status(events: Sequence[TimelineEvent]) -> str:
    """Derive a device status from the category of the last event."""
    if not events:
        return UNKNOWN_STATUS

    category = events[-1].event_category.lower()
    for keywords, status in STATUS_RULES:
        if any(keyword in category for keyword in keywords):
            return status
    return ACTIVE_STATUS


def event_impact(priority: Optional[Priority]) -> EventImpact:
    """Map record priority onto event impact (critical -> high, high -> medium)."""
    if priority == Priority.CRITICAL:
        return EventImpact.HIGH
    if priority == Priority.HIGH:
        return EventImpact.MEDIUM
    return EventImpact.LOW


class TimelineBuilder:
    """
    Builds chronological regulatory histories.

    Usage:
        builder = TimelineBuilder()
        timeline = builder.build_timeline("upd-001", records)
        if timeline is None:
            ...  # unknown record id

    Attributes:
        config: Engine configuration
        extractor: Manufacturer/device-name extractor
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        extractor: Optional[EntityExtractor] = None,
    ):
        self.config = config
        self.extractor = extractor or EntityExtractor(config)
        self.logger = logger.bind(component="TimelineBuilder")

    def categorize(self, record: Record) -> str:
        """Look up the event category for a record's update type."""
        if record.update_type and record.update_type in self.config.event_categories:
            return self.config.event_categories[record.update_type]
        return self.config.default_event_category

    def to_event(self, record: Record) -> TimelineEvent:
        return TimelineEvent(
            date=record.published_at,
            event_category=self.categorize(record),
            authority=record.authority,
            status=record.status or UNKNOWN_STATUS,
            impact=event_impact(record.priority),
            documents=(record.id,),
        )

    def _is_related(
        self,
        manufacturer: Optional[str],
        device_name: Optional[str],
        candidate: Record,
    ) -> bool:
        other_manufacturer, other_device = self.extractor.extract(
            candidate.title, candidate.body
        )

        if device_name and other_device:
            if similarity(device_name, other_device) > self.config.timeline_device_similarity:
                return True

        if manufacturer and other_manufacturer:
            if (
                similarity(manufacturer, other_manufacturer)
                > self.config.timeline_manufacturer_similarity
            ):
                return True

        return False

    def build_timeline(
        self,
        record_id: str,
        records: Sequence[Record],
    ) -> Optional[Timeline]:
        """
        Build the timeline of the device described by one record.

        Args:
            record_id: Id of the record identifying the device
            records: Corpus snapshot (regulatory updates)

        Returns:
            Timeline, or None when record_id is not in the corpus
        """
        target = next((r for r in records if r.id == record_id), None)
        if target is None:
            self.logger.debug("Timeline target not found", record_id=record_id)
            return None

        manufacturer, device_name = self.extractor.extract(target.title, target.body)

        matched: List[Record] = []
        for record in records:
            if record.id == target.id or self._is_related(manufacturer, device_name, record):
                matched.append(record)

        indexed_events = [(i, self.to_event(r)) for i, r in enumerate(matched)]
        indexed_events.sort(
            key=lambda item: (
                item[1].date is None,
                item[1].date or _MIN_DATE,
                item[0],
            )
        )
        events = tuple(event for _, event in indexed_events)

        timeline = Timeline(
            device_id=target.id,
            events=events,
            jurisdiction=target.region(),
            current_status=determine_current_status(events),
        )
        self.logger.info(
            f"Built timeline with {len(events)} events",
            record_id=record_id,
            current_status=timeline.current_status,
        )
        return timeline


__all__ = ["TimelineBuilder", "determine_current_status", "event_impact"]
