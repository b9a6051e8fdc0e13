"""Immutable engine configuration.

Every threshold, weight and lookup table the algorithms read lives on one
frozen EngineConfig that callers pass into each component. Defaults come
from the constant modules in this package; deployments override individual
values by constructing ``EngineConfig(field=...)`` or through environment
settings via ``EngineConfig.from_settings``.

Lookup tables are stored as read-only mappings and the standards as frozen
models, so a config shared by many components cannot be changed in place.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from regintel_engine.config.authority_reliability import (
    AUTHORITY_RELIABILITY,
    COMPLIANCE_TERMS,
    DEFAULT_EVENT_CATEGORY,
    DEFAULT_RELIABILITY,
    DEVICE_TYPE_KEYWORDS,
    EVENT_CATEGORIES,
    HIGH_PRIORITY_JURISDICTIONS,
    HIGH_RELEVANCE_KEYWORDS,
    LEGAL_RELEVANCE_KEYWORDS,
    MEDICAL_TERMS,
    MEDIUM_RELEVANCE_KEYWORDS,
    MEDTECH_KEYWORDS,
    REGULATORY_KEYWORDS,
    REGULATORY_TERMS,
    THERAPEUTIC_AREAS,
    URGENT_KEYWORDS,
)
from regintel_engine.config.legal_themes import (
    DEVICE_TITLE_PREFIXES,
    HIGH_RELEVANCE_THEME_IDS,
    KNOWN_STANDARDS,
    LEGAL_THEMES,
    MANUFACTURER_PATTERNS,
    RISK_INDICATORS,
    TREND_KEYWORDS,
)
from regintel_engine.data_management.schemas.legal_schema import Theme
from regintel_engine.data_management.schemas.mapping_schema import KnownStandard


def _default_themes() -> tuple[Theme, ...]:
    return tuple(Theme.model_validate(theme) for theme in LEGAL_THEMES)


def _default_standards() -> tuple[KnownStandard, ...]:
    return tuple(KnownStandard.model_validate(standard) for standard in KNOWN_STANDARDS)


class EngineConfig(BaseModel):
    """
    Tunables for every engine component.

    Attributes:
        mapping_threshold: Minimum mean pairwise similarity for a device mapping
        timeline_device_similarity: Device-name similarity a timeline match must exceed
        timeline_manufacturer_similarity: Manufacturer similarity a timeline match must exceed
        known_standards: Reference standards matched by keyword in record text
        relationship_min_strength: Case relationships are kept only above this
        relationship_bucket_by_theme: Compare only cases sharing a theme
        auto_approval_threshold: Confidence band for automatic approval
        senior_review_threshold: Confidence band for senior review
        expert_review_threshold: Confidence band for expert review
        quality_weights: Weights of the four quality sub-scores
        risk_factor_penalty: Confidence reduction per risk factor
        compliance_issue_penalty: Confidence reduction per compliance gap
        authority_reliability: Reliability per source id / authority (lowercase keys)
        default_reliability: Reliability of unknown authorities
        themes: Legal theme taxonomy
        emerging_recent_fraction: Most recent share of the window counted as "recent"
        emerging_share_threshold: Share of mentions that must be recent
        emerging_min_mentions: Minimum mentions before a topic can be emerging
        trend_top_n: Number of topics and risk patterns reported
    """

    # Device resolution
    mapping_threshold: float = Field(0.75, ge=0.0, le=1.0)
    timeline_device_similarity: float = Field(0.7, ge=0.0, le=1.0)
    timeline_manufacturer_similarity: float = Field(0.8, ge=0.0, le=1.0)
    manufacturer_patterns: tuple[str, ...] = tuple(MANUFACTURER_PATTERNS)
    device_title_prefixes: tuple[str, ...] = tuple(DEVICE_TITLE_PREFIXES)
    event_categories: Mapping[str, str] = Field(
        default_factory=lambda: MappingProxyType(dict(EVENT_CATEGORIES))
    )
    default_event_category: str = DEFAULT_EVENT_CATEGORY
    known_standards: tuple[KnownStandard, ...] = Field(default_factory=_default_standards)

    # Legal analysis
    relationship_min_strength: float = Field(0.3, ge=0.0, le=1.0)
    relationship_bucket_by_theme: bool = False
    themes: tuple[Theme, ...] = Field(default_factory=_default_themes)
    high_relevance_theme_ids: tuple[str, ...] = tuple(HIGH_RELEVANCE_THEME_IDS)

    # Approval scoring
    auto_approval_threshold: float = Field(0.85, ge=0.0, le=1.0)
    senior_review_threshold: float = Field(0.70, ge=0.0, le=1.0)
    expert_review_threshold: float = Field(0.50, ge=0.0, le=1.0)
    quality_weights: Mapping[str, float] = Field(
        default_factory=lambda: MappingProxyType(
            {
                "content_quality": 0.40,
                "source_reliability": 0.25,
                "relevance": 0.20,
                "timeliness": 0.15,
            }
        )
    )
    risk_factor_penalty: float = Field(0.10, ge=0.0, le=1.0)
    compliance_issue_penalty: float = Field(0.15, ge=0.0, le=1.0)
    authority_reliability: Mapping[str, float] = Field(
        default_factory=lambda: MappingProxyType(dict(AUTHORITY_RELIABILITY))
    )
    default_reliability: float = Field(DEFAULT_RELIABILITY, ge=0.0, le=1.0)
    high_priority_jurisdictions: tuple[str, ...] = tuple(HIGH_PRIORITY_JURISDICTIONS)
    regulatory_keywords: tuple[str, ...] = tuple(REGULATORY_KEYWORDS)
    high_relevance_keywords: tuple[str, ...] = tuple(HIGH_RELEVANCE_KEYWORDS)
    medium_relevance_keywords: tuple[str, ...] = tuple(MEDIUM_RELEVANCE_KEYWORDS)
    medtech_keywords: tuple[str, ...] = tuple(MEDTECH_KEYWORDS)
    legal_relevance_keywords: tuple[str, ...] = tuple(LEGAL_RELEVANCE_KEYWORDS)

    # Content analysis vocabularies
    device_type_keywords: tuple[str, ...] = tuple(DEVICE_TYPE_KEYWORDS)
    therapeutic_areas: tuple[str, ...] = tuple(THERAPEUTIC_AREAS)
    compliance_terms: tuple[str, ...] = tuple(COMPLIANCE_TERMS)
    urgent_keywords: tuple[str, ...] = tuple(URGENT_KEYWORDS)
    medical_terms: tuple[str, ...] = tuple(MEDICAL_TERMS)
    regulatory_terms: tuple[str, ...] = tuple(REGULATORY_TERMS)

    # Trends
    trend_window_days: int = Field(90, gt=0)
    trend_keywords: tuple[str, ...] = tuple(TREND_KEYWORDS)
    risk_indicators: tuple[str, ...] = tuple(RISK_INDICATORS)
    emerging_recent_fraction: float = Field(0.3, gt=0.0, le=1.0)
    emerging_share_threshold: float = Field(0.6, ge=0.0, le=1.0)
    emerging_min_mentions: int = Field(3, ge=1)
    trend_top_n: int = Field(5, ge=1)

    model_config = {"frozen": True}

    @field_validator(
        "event_categories",
        "quality_weights",
        "authority_reliability",
        mode="after",
    )
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _check_bands(self) -> "EngineConfig":
        if not (
            self.auto_approval_threshold
            >= self.senior_review_threshold
            >= self.expert_review_threshold
        ):
            raise ValueError(
                "approval thresholds must satisfy auto >= senior >= expert"
            )
        return self

    def theme(self, theme_id: str) -> Optional[Theme]:
        """Look up a taxonomy entry by id."""
        for theme in self.themes:
            if theme.id == theme_id:
                return theme
        return None

    @classmethod
    def from_settings(cls, settings: Optional[Any] = None) -> "EngineConfig":
        """
        Build a config from environment settings.

        Args:
            settings: Settings instance (uses the global singleton if None)

        Returns:
            EngineConfig with the environment-tunable thresholds applied
        """
        if settings is None:
            from regintel_engine.config.settings import settings as global_settings

            settings = global_settings

        return cls(
            mapping_threshold=settings.mapping_threshold,
            relationship_min_strength=settings.relationship_min_strength,
            trend_window_days=settings.trend_window_days,
        )


DEFAULT_CONFIG = EngineConfig()

__all__ = ["EngineConfig", "DEFAULT_CONFIG"]
