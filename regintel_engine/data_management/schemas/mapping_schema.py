"""Cross-reference schemas: device entity mappings, standards and timelines.

Mappings are ephemeral. They are recomputed on every analysis run from the
current corpus snapshot and are never treated as a source of truth.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MappingBasis(str, Enum):
    """Signal that grouped the records of an entity mapping."""

    MANUFACTURER = "manufacturer"
    DEVICE_NAME = "device_name"
    REGULATION = "regulation"
    CLINICAL_STUDY = "clinical_study"


class EventImpact(str, Enum):
    """Impact of a single timeline event."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EntityMapping(BaseModel):
    """Cluster of records believed to describe the same device.

    A mapping only exists when its confidence reached the mapping threshold
    of the run that produced it.

    Attributes:
        primary_id: First record of the cluster (corpus order).
        related_ids: Remaining records of the cluster.
        mapping_basis: Which signal grouped the records.
        confidence: Mean pairwise similarity (or weakest link for study links).
        computed_at: Reference time of the analysis run.
        manufacturer: Extracted manufacturer shared by the cluster, if any.
        device_name: Extracted device name shared by the cluster, if any.
        authorities: Distinct authorities represented in the cluster.
    """

    primary_id: str
    related_ids: tuple[str, ...] = ()
    mapping_basis: MappingBasis
    confidence: float = Field(..., ge=0.0, le=1.0)
    computed_at: datetime
    manufacturer: Optional[str] = None
    device_name: Optional[str] = None
    authorities: tuple[str, ...] = ()

    model_config = {"frozen": True}

    @property
    def record_ids(self) -> tuple[str, ...]:
        """Primary id followed by related ids."""
        return (self.primary_id, *self.related_ids)


class KnownStandard(BaseModel):
    """Reference standard recognized by keyword in record text."""

    id: str
    name: str
    keywords: tuple[str, ...] = ()
    regulations: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()

    model_config = {"frozen": True}


class StandardMapping(BaseModel):
    """Standard linked to the regulations of records that reference it."""

    standard_id: str
    name: str
    applicable_regulations: tuple[str, ...] = ()
    device_categories: tuple[str, ...] = ()
    requirements: tuple[str, ...] = ()
    record_ids: tuple[str, ...] = ()
    computed_at: datetime

    model_config = {"frozen": True}


class TimelineEvent(BaseModel):
    """One dated step in a device's regulatory history."""

    date: Optional[datetime] = None
    event_category: str
    authority: str = ""
    status: str = "Unknown"
    impact: EventImpact = EventImpact.LOW
    documents: tuple[str, ...] = ()

    model_config = {"frozen": True}


class Timeline(BaseModel):
    """Chronological regulatory history of a device.

    current_status is derived from the last event only.
    """

    device_id: str
    events: tuple[TimelineEvent, ...] = ()
    jurisdiction: str = ""
    current_status: str = "Unknown"

    model_config = {"frozen": True}


class CrossReferenceReport(BaseModel):
    """All cross-reference mappings produced by one run."""

    device_mappings: list[EntityMapping] = Field(default_factory=list)
    standard_mappings: list[StandardMapping] = Field(default_factory=list)
    clinical_mappings: list[EntityMapping] = Field(default_factory=list)

    @property
    def total_mappings(self) -> int:
        return (
            len(self.device_mappings)
            + len(self.standard_mappings)
            + len(self.clinical_mappings)
        )
