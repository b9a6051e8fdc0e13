"""Approval scoring schemas.

Verdicts are computed fresh per evaluation call and never mutated. The
reasoning list is the audit trail: it always carries the numeric quality
score and the confidence band that selected the review level.
"""

from enum import Enum

from pydantic import BaseModel, Field

from regintel_engine.data_management.schemas.record_schema import Priority


class ReviewLevel(str, Enum):
    """Human-oversight tier required before publication.

    Ordered from least to most strict.
    """

    AUTO = "auto"
    SENIOR = "senior"
    EXPERT = "expert"
    BOARD = "board"

    @property
    def strictness(self) -> int:
        return _STRICTNESS[self]


_STRICTNESS = {
    ReviewLevel.AUTO: 0,
    ReviewLevel.SENIOR: 1,
    ReviewLevel.EXPERT: 2,
    ReviewLevel.BOARD: 3,
}


class RiskLevel(str, Enum):
    """Device risk level inferred from content."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TimelineSensitivity(str, Enum):
    """How quickly a regulatory change needs attention."""

    URGENT = "urgent"
    STANDARD = "standard"
    ROUTINE = "routine"


class QualityMetrics(BaseModel):
    """Weighted quality sub-scores, each in [0, 1].

    overall_score = 0.40 content + 0.25 reliability + 0.20 relevance + 0.15 timeliness
    """

    content_quality: float = Field(0.0, ge=0.0, le=1.0)
    source_reliability: float = Field(0.0, ge=0.0, le=1.0)
    relevance_score: float = Field(0.0, ge=0.0, le=1.0)
    timeliness: float = Field(0.0, ge=0.0, le=1.0)
    overall_score: float = Field(0.0, ge=0.0, le=1.0)

    model_config = {"frozen": True}


class ContentAnalysis(BaseModel):
    """Deterministic keyword analysis of a regulatory update.

    Attributes:
        categories: Detected categories ("AI/ML Technology", "Safety Alert"...).
        device_types: Detected device types.
        risk_level: Inferred device risk level.
        therapeutic_area: First matching therapeutic area or "general".
        compliance_requirements: Compliance terms found in the text.
        categorization_confidence: How much categorization evidence was found.
        confidence: Analysis-confidence signal that scales approval confidence.
        regulatory_impact: high/medium/low.
        timeline_sensitivity: urgent/standard/routine.
    """

    categories: tuple[str, ...] = ()
    device_types: tuple[str, ...] = ()
    risk_level: RiskLevel = RiskLevel.MEDIUM
    therapeutic_area: str = "general"
    compliance_requirements: tuple[str, ...] = ()
    categorization_confidence: float = Field(0.0, ge=0.0, le=1.0)
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    regulatory_impact: str = "low"
    timeline_sensitivity: TimelineSensitivity = TimelineSensitivity.ROUTINE

    model_config = {"frozen": True}


class ApprovalVerdict(BaseModel):
    """Publication verdict for a single record."""

    record_id: str
    approved: bool = False
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    review_level: ReviewLevel = ReviewLevel.BOARD
    reasoning: tuple[str, ...] = Field(..., min_length=1)
    required_actions: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()
    compliance_issues: tuple[str, ...] = ()
    quality: QualityMetrics | None = None

    model_config = {"frozen": True}


class PrioritySuggestion(BaseModel):
    """Suggested editorial priority for a regulatory update."""

    record_id: str
    priority: Priority
    reasoning: str

    model_config = {"frozen": True}
