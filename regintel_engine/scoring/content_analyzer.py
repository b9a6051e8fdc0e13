"""Deterministic keyword analysis of regulatory update content.

Produces the analysis-confidence signal that scales approval confidence,
together with the categories, device types, risk level and compliance
requirements that the approval scorer turns into risk factors.

Risk level from device-class wording (first match wins):
- "class iii", "implantable", "life-sustaining", "critical" -> high
- "class ii", "monitoring" -> medium
- "class i", "non-invasive" -> low
- otherwise medium
"""

import re
from typing import List

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    ContentAnalysis,
    Priority,
    PrioritySuggestion,
    Record,
    RiskLevel,
    TimelineSensitivity,
)
from regintel_engine.resolution.text_similarity import contains_any

AI_ML_CATEGORY = "AI/ML Technology"
SAFETY_ALERT_CATEGORY = "Safety Alert"
CYBERSECURITY_CATEGORY = "Cybersecurity"
FALLBACK_CATEGORY = "Medical Device"

RISK_RULES = [
    (("class iii", "implantable", "life-sustaining", "critical"), RiskLevel.HIGH, 0.3),
    (("class ii", "monitoring"), RiskLevel.MEDIUM, 0.2),
    (("class i", "non-invasive"), RiskLevel.LOW, 0.1),
]

# "ai" as a whole word, so "maintain" or "detail" do not count
_AI_RE = re.compile(r"\bai\b")


def _unique(items: List[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


class ContentAnalyzer:
    """
    Keyword-driven categorization of regulatory updates.

    Usage:
        analyzer = ContentAnalyzer()
        analysis = analyzer.analyze(record)
        suggestion = analyzer.suggest_priority(record)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.logger = logger.bind(component="ContentAnalyzer")

    def analyze(self, record: Record) -> ContentAnalysis:
        """
        Analyze the title and body of a regulatory update.

        Args:
            record: Regulatory update

        Returns:
            ContentAnalysis with categorization and the confidence signal
        """
        text = record.text().lower()
        categorization = 0.0
        categories: List[str] = []

        device_types = contains_any(text, self.config.device_type_keywords)
        categorization += 0.1 * len(device_types)

        risk_level = RiskLevel.MEDIUM
        for keywords, level, weight in RISK_RULES:
            if any(keyword in text for keyword in keywords):
                risk_level = level
                categorization += weight
                break

        therapeutic_area = "general"
        for area in self.config.therapeutic_areas:
            if area in text:
                therapeutic_area = area
                categories.append(area)
                categorization += 0.1
                break

        compliance = contains_any(text, self.config.compliance_terms)
        categorization += 0.1 * len(compliance)

        if _AI_RE.search(text) or "artificial intelligence" in text:
            categories.append(AI_ML_CATEGORY)
            categorization += 0.2

        if "recall" in text or "safety alert" in text:
            categories.append(SAFETY_ALERT_CATEGORY)
            categorization += 0.3

        if not categories:
            categories.append(FALLBACK_CATEGORY)
            categorization = max(categorization, 0.5)

        if not device_types:
            device_types = [FALLBACK_CATEGORY]

        analysis = ContentAnalysis(
            categories=_unique(categories),
            device_types=_unique(device_types),
            risk_level=risk_level,
            therapeutic_area=therapeutic_area,
            compliance_requirements=_unique(compliance),
            categorization_confidence=min(categorization, 1.0),
            confidence=self._analysis_confidence(text, categories, device_types),
            regulatory_impact=self._regulatory_impact(risk_level, categories),
            timeline_sensitivity=self._timeline_sensitivity(text, categories),
        )
        self.logger.debug(
            f"Content analyzed: confidence {analysis.confidence:.2f}",
            record_id=record.id,
            categories=list(analysis.categories),
        )
        return analysis

    def _analysis_confidence(
        self,
        text: str,
        categories: List[str],
        device_types: List[str],
    ) -> float:
        """
        Confidence that the record is well-understood medical device content.

        0.5 base, +0.1 per medical term, +0.15 per regulatory term,
        +0.1 per category (max 0.3), +0.1 per device type (max 0.2).
        """
        confidence = 0.5
        confidence += 0.1 * len(contains_any(text, self.config.medical_terms))
        confidence += 0.15 * len(contains_any(text, self.config.regulatory_terms))
        confidence += min(0.1 * len(categories), 0.3)
        confidence += min(0.1 * len(device_types), 0.2)
        return min(confidence, 1.0)

    @staticmethod
    def _regulatory_impact(risk_level: RiskLevel, categories: List[str]) -> str:
        if risk_level == RiskLevel.CRITICAL or SAFETY_ALERT_CATEGORY in categories:
            return "high"
        if (
            risk_level == RiskLevel.HIGH
            or AI_ML_CATEGORY in categories
            or CYBERSECURITY_CATEGORY in categories
        ):
            return "medium"
        return "low"

    def _timeline_sensitivity(self, text: str, categories: List[str]) -> TimelineSensitivity:
        if contains_any(text, self.config.urgent_keywords) or SAFETY_ALERT_CATEGORY in categories:
            return TimelineSensitivity.URGENT
        if AI_ML_CATEGORY in categories or CYBERSECURITY_CATEGORY in categories:
            return TimelineSensitivity.STANDARD
        return TimelineSensitivity.ROUTINE

    def suggest_priority(self, record: Record) -> PrioritySuggestion:
        """
        Suggest an editorial priority from the content analysis.

        Rules, first match wins:
        - critical: safety alert, recall update type or high-risk device
        - high: AI/ML content, EU update with more than two compliance
          requirements, or categorization confidence above 0.8
        - medium: categorization confidence above 0.5
        - low: otherwise

        Args:
            record: Regulatory update

        Returns:
            PrioritySuggestion with a one-line reason
        """
        analysis = self.analyze(record)
        update_type = (record.update_type or "").lower()

        if (
            SAFETY_ALERT_CATEGORY in analysis.categories
            or "recall" in update_type
            or analysis.risk_level == RiskLevel.HIGH
        ):
            priority = Priority.CRITICAL
            reasoning = "Safety-relevant content or high-risk device"
        elif (
            AI_ML_CATEGORY in analysis.categories
            or (record.region() == "EU" and len(analysis.compliance_requirements) > 2)
            or analysis.categorization_confidence > 0.8
        ):
            priority = Priority.HIGH
            reasoning = "New technology or extensive compliance requirements"
        elif analysis.categorization_confidence > 0.5:
            priority = Priority.MEDIUM
            reasoning = "Routine regulatory change"
        else:
            priority = Priority.LOW
            reasoning = "Minor or general information"

        return PrioritySuggestion(record_id=record.id, priority=priority, reasoning=reasoning)


__all__ = ["ContentAnalyzer"]
