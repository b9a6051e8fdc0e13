"""Schema package for corpus records and engine outputs.

All models are Pydantic. Inputs (Record) are frozen snapshots; outputs are
derived per analysis run and carry no identity beyond their contents, so two
runs over the same snapshot compare equal.

Primary exports:
- Record: The corpus entry schema (regulatory update or legal case)
- EntityMapping / Timeline: Cross-jurisdiction device resolution
- LegalAnalysis: Themes, relationships, precedent chains, conflicts
- ApprovalVerdict: Publication verdict with audit reasoning
- TrendReport: Windowed topic and risk roll-up

Usage:
    from regintel_engine.data_management.schemas import Record, RecordType
    record = Record(id="upd-1", title="FDA 510(k) Clearance: Stent X")
"""

# Record schemas
from regintel_engine.data_management.schemas.record_schema import (
    Priority,
    Record,
    RecordType,
    RecordValidationError,
)

# Cross-reference schemas
from regintel_engine.data_management.schemas.mapping_schema import (
    CrossReferenceReport,
    EntityMapping,
    EventImpact,
    KnownStandard,
    MappingBasis,
    StandardMapping,
    Timeline,
    TimelineEvent,
)

# Legal schemas
from regintel_engine.data_management.schemas.legal_schema import (
    CaseAssessment,
    CaseRelationship,
    Conflict,
    ConflictPosition,
    LegalAnalysis,
    PrecedentChain,
    PrecedentValue,
    RelationshipType,
    Theme,
)

# Approval schemas
from regintel_engine.data_management.schemas.approval_schema import (
    ApprovalVerdict,
    ContentAnalysis,
    PrioritySuggestion,
    QualityMetrics,
    ReviewLevel,
    RiskLevel,
    TimelineSensitivity,
)

# Trend schemas
from regintel_engine.data_management.schemas.trend_schema import (
    EmergingTopic,
    TopicCount,
    TrendReport,
)

__all__ = [
    # Record
    "Priority",
    "Record",
    "RecordType",
    "RecordValidationError",
    # Cross-reference
    "CrossReferenceReport",
    "EntityMapping",
    "EventImpact",
    "KnownStandard",
    "MappingBasis",
    "StandardMapping",
    "Timeline",
    "TimelineEvent",
    # Legal
    "CaseAssessment",
    "CaseRelationship",
    "Conflict",
    "ConflictPosition",
    "LegalAnalysis",
    "PrecedentChain",
    "PrecedentValue",
    "RelationshipType",
    "Theme",
    # Approval
    "ApprovalVerdict",
    "ContentAnalysis",
    "PrioritySuggestion",
    "QualityMetrics",
    "ReviewLevel",
    "RiskLevel",
    "TimelineSensitivity",
    # Trends
    "EmergingTopic",
    "TopicCount",
    "TrendReport",
]
