"""Legal corpus analysis schemas.

Themes are static taxonomy entries; the analyzer returns copies carrying the
ids of the cases assigned to them. Relationships, precedent chains and
conflicts are derived per run and never persisted.
"""

from enum import Enum

from pydantic import BaseModel, Field


class PrecedentValue(str, Enum):
    """How much weight a theme's decisions carry as precedent."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRECEDENT_RANK[self]


_PRECEDENT_RANK = {
    PrecedentValue.LOW: 0,
    PrecedentValue.MEDIUM: 1,
    PrecedentValue.HIGH: 2,
}


class RelationshipType(str, Enum):
    """Kind of link between two legal cases."""

    CITING = "citing"
    CONFLICTING = "conflicting"
    SIMILAR_FACTS = "similar_facts"


class Theme(BaseModel):
    """Legal theme taxonomy entry.

    Attributes:
        id: Stable theme identifier (product_liability...).
        name: Display name.
        description: One-line description.
        keywords: Keywords matched case-insensitively against case text.
        precedent_value: Precedent weight of decisions in this theme.
        applicable_jurisdictions: Jurisdictions where the theme applies.
        category: Coarse category label.
        related_cases: Case ids assigned by an analysis run (empty in config).
    """

    id: str
    name: str
    description: str = ""
    keywords: tuple[str, ...] = ()
    precedent_value: PrecedentValue = PrecedentValue.MEDIUM
    applicable_jurisdictions: tuple[str, ...] = ()
    category: str = ""
    related_cases: tuple[str, ...] = ()

    model_config = {"frozen": True}


class CaseRelationship(BaseModel):
    """Scored link between two cases. Pair order carries no meaning."""

    case_id_1: str
    case_id_2: str
    relationship_type: RelationshipType = RelationshipType.SIMILAR_FACTS
    strength: float = Field(..., ge=0.0, le=1.0)
    explanation: str = ""

    model_config = {"frozen": True}

    @property
    def pair(self) -> frozenset[str]:
        return frozenset((self.case_id_1, self.case_id_2))


class PrecedentChain(BaseModel):
    """Chronological same-theme cases and how their outcomes evolved."""

    theme_id: str
    theme: str
    case_ids: tuple[str, ...]
    development_narrative: str

    model_config = {"frozen": True}


class ConflictPosition(BaseModel):
    """One case's stance inside a conflict."""

    case_id: str
    outcome_position: str
    jurisdiction: str = ""

    model_config = {"frozen": True}


class Conflict(BaseModel):
    """A theme whose cases split across at least two outcomes."""

    theme_id: str
    theme: str
    positions: tuple[ConflictPosition, ...]

    model_config = {"frozen": True}

    @property
    def outcome_groups(self) -> set[str]:
        return {p.outcome_position for p in self.positions}


class CaseAssessment(BaseModel):
    """Per-case theme assignment, precedent value and litigation risk.

    risk_level follows the strongest matched theme (high themes make a
    high-risk case); risk_indicators lists the risk keywords found.
    """

    case_id: str
    theme_ids: tuple[str, ...] = ()
    precedent_value: PrecedentValue = PrecedentValue.LOW
    risk_level: str = "low"
    risk_indicators: tuple[str, ...] = ()

    model_config = {"frozen": True}


class LegalAnalysis(BaseModel):
    """Complete result of analyzing a legal corpus."""

    themes: list[Theme] = Field(default_factory=list)
    relationships: list[CaseRelationship] = Field(default_factory=list)
    precedent_chains: list[PrecedentChain] = Field(default_factory=list)
    conflicts: list[Conflict] = Field(default_factory=list)
