"""Record schema for corpus entries consumed by the engine.

One explicit tagged type covers both regulatory updates and legal cases.
Records are immutable snapshots owned by the record store; the engine only
reads them for the duration of one analysis run.

Fields that the dashboard historically accessed through fallback chains
(summary-or-content, decision-or-filing date) are resolved by explicit
methods on the model so the fallback order is documented and tested.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator


class RecordType(str, Enum):
    """Discriminates the two kinds of corpus entries."""

    REGULATORY_UPDATE = "regulatory_update"
    LEGAL_CASE = "legal_case"


class Priority(str, Enum):
    """Editorial priority assigned by the record store."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RecordValidationError(ValueError):
    """Raised when raw data cannot be coerced into a Record."""

    def __init__(self, message: str, record_id: Optional[str] = None):
        self.record_id = record_id
        super().__init__(message)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Record(BaseModel):
    """A regulatory update or legal case.

    Attributes:
        id: Stable identifier from the record store.
        title: Headline or case title.
        record_type: Regulatory update or legal case.
        body: Free-text content (description for updates, content for cases).
        authority: Issuing authority (FDA, EMA, BfArM...) or court.
        jurisdiction: Region code such as US, EU, DE.
        source_id: Feed identifier (fda_510k, ema_epar...).
        update_type: Source-specific type label ("FDA 510(k) Clearance").
        status: Source-reported status.
        published_at: Publication timestamp (UTC).
        priority: Editorial priority.
        categories: Content categories.
        device_classes: Device classifications (Class II, Class III...).
        keywords: Free keywords.
        summary: Legal case summary.
        key_issues: Legal issues in dispute.
        legal_basis: Statute or doctrine the case rests on.
        outcome: Declared outcome (e.g. "plaintiff", "dismissed").
        decision_date: Date of decision.
        filing_date: Date of filing.
        court: Deciding court.
        case_type: Litigation type.
        impact_level: Editorial impact (low/medium/high).
    """

    id: str = Field(..., min_length=1, description="Stable record identifier")
    title: str = Field(..., description="Headline or case title")
    record_type: RecordType = RecordType.REGULATORY_UPDATE
    body: str = ""
    authority: str = ""
    jurisdiction: Optional[str] = None
    source_id: Optional[str] = None
    update_type: Optional[str] = None
    status: Optional[str] = None
    published_at: Optional[datetime] = None
    priority: Optional[Priority] = None
    categories: tuple[str, ...] = ()
    device_classes: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    # Legal case fields
    summary: Optional[str] = None
    key_issues: tuple[str, ...] = ()
    legal_basis: Optional[str] = None
    outcome: Optional[str] = None
    decision_date: Optional[datetime] = None
    filing_date: Optional[datetime] = None
    court: Optional[str] = None
    case_type: Optional[str] = None
    impact_level: Optional[str] = None

    model_config = {
        "frozen": True,
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {
                    "id": "upd-001",
                    "title": "FDA 510(k) Clearance: CardioFlow Stent",
                    "record_type": "regulatory_update",
                    "body": "Manufacturer: Acme Medical. Clearance for a coronary stent.",
                    "authority": "FDA",
                    "jurisdiction": "US",
                    "update_type": "FDA 510(k) Clearance",
                    "priority": "high",
                },
                {
                    "id": "case-001",
                    "title": "Doe v. Acme Medical",
                    "record_type": "legal_case",
                    "summary": "Product liability claim over a defective device.",
                    "key_issues": ["product liability", "design defect"],
                    "outcome": "plaintiff",
                    "jurisdiction": "US",
                },
            ]
        },
    }

    @field_validator("published_at", "decision_date", "filing_date")
    @classmethod
    def _normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)

    @field_validator("body", "authority", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_legal_case(self) -> bool:
        return self.record_type == RecordType.LEGAL_CASE

    def text(self) -> str:
        """Title and body joined by a space."""
        return f"{self.title} {self.body}"

    def region(self) -> str:
        """Jurisdiction code, or empty string when unknown."""
        return self.jurisdiction or ""

    def case_summary(self) -> str:
        """Summary, falling back to body, then empty string."""
        if self.summary:
            return self.summary
        return self.body or ""

    def case_date(self) -> Optional[datetime]:
        """Decision date, falling back to filing date, then publication date."""
        return self.decision_date or self.filing_date or self.published_at

    def case_outcome(self) -> str:
        """Declared outcome, or "unknown" when the case has none."""
        return self.outcome or "unknown"

    def case_text(self) -> str:
        """Title, summary and key issues, the text searched for legal themes."""
        return f"{self.title} {self.case_summary()} {' '.join(self.key_issues)}"

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "Record":
        """
        Coerce a raw store dict into a Record.

        Accepts the dashboard's camelCase aliases for the fields that were
        historically named differently (description/content, caseTitle,
        keyIssues, publishedAt, decisionDate).

        Raises:
            RecordValidationError: If mandatory fields are missing or invalid.
        """
        if not isinstance(data, dict):
            raise RecordValidationError(f"Expected a dict, got {type(data).__name__}")

        normalized = dict(data)
        for alias, name in _RAW_ALIASES.items():
            if alias in normalized and name not in normalized:
                normalized[name] = normalized.pop(alias)

        try:
            return cls.model_validate(normalized)
        except ValidationError as e:
            raise RecordValidationError(
                f"Invalid record: {e.error_count()} validation error(s)",
                record_id=str(data.get("id")) if data.get("id") else None,
            ) from e


_RAW_ALIASES: dict[str, str] = {
    "description": "body",
    "content": "body",
    "caseTitle": "title",
    "keyIssues": "key_issues",
    "legalBasis": "legal_basis",
    "publishedAt": "published_at",
    "decisionDate": "decision_date",
    "filingDate": "filing_date",
    "deviceClasses": "device_classes",
    "sourceId": "source_id",
    "updateType": "update_type",
    "caseType": "case_type",
    "impactLevel": "impact_level",
    "region": "jurisdiction",
    "type": "update_type",
}
