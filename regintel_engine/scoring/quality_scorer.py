"""Content quality scoring for regulatory updates.

Core formula:
    overall = 0.40 x content_quality
            + 0.25 x source_reliability
            + 0.20 x relevance
            + 0.15 x timeliness

Components:
- content_quality: Title/body length, regulatory keywords, classification
- source_reliability: Authority baseline lookup (unknown -> 0.5)
- relevance: High/medium relevance keywords plus jurisdiction bonus
- timeliness: Step function of age in days

Each component is in [0, 1]. A record without a publication date scores 0.0
timeliness rather than being treated as fresh.
"""

from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import QualityMetrics, Record
from regintel_engine.resolution.text_similarity import contains_any

# (max age in days, timeliness score)
TIMELINESS_STEPS = [
    (7, 1.0),
    (30, 0.8),
    (90, 0.6),
    (180, 0.4),
    (365, 0.2),
]
STALE_TIMELINESS = 0.1


class QualityScorer:
    """
    Computes the weighted quality score of a regulatory update.

    Usage:
        scorer = QualityScorer()
        metrics = scorer.score(record, now)

    Attributes:
        config: Engine configuration (weights, reliability table, keywords)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.logger = logger.bind(component="QualityScorer")

    def score(self, record: Record, now: Optional[datetime] = None) -> QualityMetrics:
        """
        Score a record across the four quality dimensions.

        Args:
            record: Regulatory update
            now: Reference time for timeliness (UTC now if None)

        Returns:
            QualityMetrics with sub-scores and the weighted overall score
        """
        weights = self.config.quality_weights
        content = self.content_quality(record)
        reliability = self.source_reliability(record)
        relevance = self.relevance(record)
        timeliness = self.timeliness(record.published_at, now)

        overall = (
            content * weights["content_quality"]
            + reliability * weights["source_reliability"]
            + relevance * weights["relevance"]
            + timeliness * weights["timeliness"]
        )

        self.logger.debug(
            f"Quality computed: {overall:.3f}",
            record_id=record.id,
            content=content,
            reliability=reliability,
            relevance=relevance,
            timeliness=timeliness,
        )
        return QualityMetrics(
            content_quality=content,
            source_reliability=reliability,
            relevance_score=relevance,
            timeliness=timeliness,
            overall_score=min(1.0, max(0.0, overall)),
        )

    def content_quality(self, record: Record) -> float:
        """
        Score title and body quality.

        0.5 base; +0.15 title of 20-200 chars; +0.15 body >= 100 chars and
        +0.10 more at >= 300; +0.05 per regulatory keyword in the body
        (max 0.15); +0.10 with categories; +0.05 with device classes.
        """
        score = 0.5

        if 20 <= len(record.title) <= 200:
            score += 0.15

        body = record.body
        if body:
            if len(body) >= 100:
                score += 0.15
            if len(body) >= 300:
                score += 0.10
            found = contains_any(body, self.config.regulatory_keywords)
            score += min(len(found) * 0.05, 0.15)

        if record.categories:
            score += 0.10

        if record.device_classes:
            score += 0.05

        return min(score, 1.0)

    def source_reliability(self, record: Record) -> float:
        """
        Look up the reliability baseline of the record's source.

        Priority order:
        1. Source feed id (fda_510k, ema_epar...)
        2. Authority name (FDA, EMA...)
        3. Default for unknown sources (0.5)
        """
        table = self.config.authority_reliability
        for key in (record.source_id, record.authority):
            if key and key.strip().lower() in table:
                return table[key.strip().lower()]
        return self.config.default_reliability

    def relevance(self, record: Record) -> float:
        """
        Score relevance to medical device regulation.

        0.3 base; +0.2 per high-relevance keyword (max 0.6); +0.1 per
        medium-relevance keyword (max 0.2); +0.1 in a high-priority
        jurisdiction.
        """
        text = record.text()
        score = 0.3

        high = contains_any(text, self.config.high_relevance_keywords)
        score += min(len(high) * 0.20, 0.60)

        medium = contains_any(text, self.config.medium_relevance_keywords)
        score += min(len(medium) * 0.10, 0.20)

        if record.region().upper() in self.config.high_priority_jurisdictions:
            score += 0.10

        return min(score, 1.0)

    @staticmethod
    def timeliness(published_at: Optional[datetime], now: Optional[datetime] = None) -> float:
        """Step function of publication age; 0.0 when the date is unknown."""
        if published_at is None:
            return 0.0

        reference = now or datetime.now(timezone.utc)
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)
        age_days = (reference - published_at).total_seconds() / 86400

        for max_age, value in TIMELINESS_STEPS:
            if age_days <= max_age:
                return value
        return STALE_TIMELINESS


__all__ = ["QualityScorer"]
