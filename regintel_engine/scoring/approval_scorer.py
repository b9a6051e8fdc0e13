"""Publication approval verdicts for regulatory updates and legal cases.

Regulatory updates:
    confidence = quality.overall x analysis.confidence
    confidence *= max(0, 1 - 0.10 x risk_factors)
    confidence *= max(0, 1 - 0.15 x compliance_issues)

Legal cases:
    confidence = 0.6 x relevance + precedent weight (0.3/0.2/0.1)
               + 0.05 per high-relevance theme (max 0.15)

Review bands, from most to least trusted:
- auto: confidence >= 0.85 (and no compliance issues / high precedent)
- senior: confidence >= 0.70
- expert: confidence >= 0.50
- board: otherwise

Any failure while evaluating degrades to the board fallback verdict. A
record is never auto-approved because evaluation broke.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    ApprovalVerdict,
    ContentAnalysis,
    PrecedentValue,
    QualityMetrics,
    Record,
    RecordValidationError,
    ReviewLevel,
    RiskLevel,
    TimelineSensitivity,
)
from regintel_engine.legal.theme_classifier import ThemeClassifier
from regintel_engine.resolution.text_similarity import contains_any
from regintel_engine.scoring.content_analyzer import (
    AI_ML_CATEGORY,
    SAFETY_ALERT_CATEGORY,
    ContentAnalyzer,
)
from regintel_engine.scoring.quality_scorer import QualityScorer

PRECEDENT_WEIGHTS: Dict[PrecedentValue, float] = {
    PrecedentValue.HIGH: 0.3,
    PrecedentValue.MEDIUM: 0.2,
    PrecedentValue.LOW: 0.1,
}

BAND_ACTIONS: Dict[ReviewLevel, str] = {
    ReviewLevel.SENIOR: "Senior reviewer approval needed",
    ReviewLevel.EXPERT: "Subject matter expert review needed",
    ReviewLevel.BOARD: "Full board review and approval needed",
}

PRECEDENT_ACTIONS: Dict[PrecedentValue, List[str]] = {
    PrecedentValue.HIGH: [
        "Review current compliance measures",
        "Run risk analysis for similar products",
    ],
    PrecedentValue.MEDIUM: ["Monitor similar cases"],
    PrecedentValue.LOW: ["Archive for future reference"],
}

RecordInput = Union[Record, Dict[str, Any]]


def fallback_verdict(record_id: str, reason: str) -> ApprovalVerdict:
    """Safety-biased verdict used when evaluation cannot complete."""
    return ApprovalVerdict(
        record_id=record_id,
        approved=False,
        confidence=0.0,
        review_level=ReviewLevel.BOARD,
        reasoning=(
            f"Evaluation failed: {reason}",
            "Quality score: 0.00",
            "Confidence 0.00 in board band (fallback): manual board review required",
        ),
        required_actions=("Manual board review required",),
        risk_factors=("Evaluation failure",),
        compliance_issues=("Unable to verify compliance",),
    )


class ApprovalScorer:
    """
    Evaluates records for publication and assigns a review level.

    Usage:
        scorer = ApprovalScorer()
        verdict = scorer.evaluate_regulatory_update(record, now=now)
        if verdict.review_level == ReviewLevel.AUTO:
            ...

    Attributes:
        config: Engine configuration (bands, penalties)
        content_analyzer: Produces the analysis-confidence signal
        quality_scorer: Produces the weighted quality score
        theme_classifier: Assigns legal themes for case evaluation
    """

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        content_analyzer: Optional[ContentAnalyzer] = None,
        quality_scorer: Optional[QualityScorer] = None,
        theme_classifier: Optional[ThemeClassifier] = None,
    ):
        self.config = config
        self.content_analyzer = content_analyzer or ContentAnalyzer(config)
        self.quality_scorer = quality_scorer or QualityScorer(config)
        self.theme_classifier = theme_classifier or ThemeClassifier(config)
        self.logger = logger.bind(component="ApprovalScorer")

    def review_level(self, confidence: float, auto_eligible: bool = True) -> ReviewLevel:
        """Map a confidence onto a review band."""
        if confidence >= self.config.auto_approval_threshold and auto_eligible:
            return ReviewLevel.AUTO
        if confidence >= self.config.senior_review_threshold:
            return ReviewLevel.SENIOR
        if confidence >= self.config.expert_review_threshold:
            return ReviewLevel.EXPERT
        return ReviewLevel.BOARD

    def _band_line(self, confidence: float, level: ReviewLevel) -> str:
        bounds = {
            ReviewLevel.AUTO: f">= {self.config.auto_approval_threshold:.2f}",
            ReviewLevel.SENIOR: f">= {self.config.senior_review_threshold:.2f}",
            ReviewLevel.EXPERT: f">= {self.config.expert_review_threshold:.2f}",
            ReviewLevel.BOARD: f"< {self.config.expert_review_threshold:.2f}",
        }
        outcome = "auto-approved" if level == ReviewLevel.AUTO else f"{level.value} review required"
        return f"Confidence {confidence:.2f} in {level.value} band ({bounds[level]}): {outcome}"

    def assess_risk(self, record: Record, analysis: ContentAnalysis) -> List[str]:
        """Risk factors raised by the content analysis."""
        risk_factors: List[str] = []

        if analysis.risk_level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
            risk_factors.append("High-risk device category")

        if SAFETY_ALERT_CATEGORY in analysis.categories or "recall" in (record.update_type or "").lower():
            risk_factors.append("Safety-critical content")

        if AI_ML_CATEGORY in analysis.categories:
            risk_factors.append("Emerging AI/ML technology")

        if len(analysis.compliance_requirements) > 3:
            risk_factors.append("Complex compliance requirements")

        if analysis.timeline_sensitivity == TimelineSensitivity.URGENT:
            risk_factors.append("Time-sensitive regulatory change")

        return risk_factors

    def check_compliance(self, record: Record) -> List[str]:
        """Publication gaps: missing detail, classification or priority."""
        issues: List[str] = []

        if len(record.body) < 50:
            issues.append("Insufficient content detail")

        if not record.categories:
            issues.append("Missing content categorization")

        if not record.device_classes:
            issues.append("Missing device classification")

        if record.priority is None:
            issues.append("Invalid priority assignment")

        if record.region().upper() == "EU":
            text = record.text().lower()
            if "medical device" in text and "mdr" not in text:
                issues.append("Potential MDR compliance gap")

        return issues

    def _coerce(self, record: RecordInput) -> Record:
        if isinstance(record, Record):
            return record
        return Record.from_raw(record)

    @staticmethod
    def _record_id(record: RecordInput) -> str:
        if isinstance(record, Record):
            return record.id
        if isinstance(record, dict) and record.get("id"):
            return str(record["id"])
        return "unknown"

    def evaluate_regulatory_update(
        self,
        record: RecordInput,
        now: Optional[datetime] = None,
    ) -> ApprovalVerdict:
        """
        Evaluate a regulatory update for publication.

        Args:
            record: Record, or a raw store dict to coerce
            now: Reference time for timeliness

        Returns:
            ApprovalVerdict (board fallback on any failure)
        """
        record_id = self._record_id(record)
        try:
            update = self._coerce(record)
            analysis = self.content_analyzer.analyze(update)
            quality = self.quality_scorer.score(update, now)
            risk_factors = self.assess_risk(update, analysis)
            compliance_issues = self.check_compliance(update)
            verdict = self._decide(update, analysis, quality, risk_factors, compliance_issues)
        except RecordValidationError as e:
            self.logger.warning(
                "Malformed record, falling back to board review",
                record_id=record_id,
                error=str(e),
            )
            return fallback_verdict(record_id, "malformed record")
        except Exception as e:
            self.logger.error(
                "Approval evaluation failed",
                record_id=record_id,
                error=str(e),
                exc_info=True,
            )
            return fallback_verdict(record_id, type(e).__name__)

        self.logger.info(
            f"Verdict: {'APPROVED' if verdict.approved else 'NOT APPROVED'} ({verdict.confidence:.2f})",
            record_id=record_id,
            review_level=verdict.review_level.value,
        )
        return verdict

    def _decide(
        self,
        record: Record,
        analysis: ContentAnalysis,
        quality: QualityMetrics,
        risk_factors: List[str],
        compliance_issues: List[str],
    ) -> ApprovalVerdict:
        reasoning: List[str] = []
        required_actions: List[str] = []

        confidence = quality.overall_score * analysis.confidence

        if risk_factors:
            confidence *= max(0.0, 1 - len(risk_factors) * self.config.risk_factor_penalty)
            reasoning.append(f"Risk factors identified: {len(risk_factors)}")

        if compliance_issues:
            confidence *= max(0.0, 1 - len(compliance_issues) * self.config.compliance_issue_penalty)
            reasoning.append(f"Compliance issues: {len(compliance_issues)}")
            required_actions.append("Address compliance issues before publication")

        confidence = max(0.0, min(1.0, confidence))
        level = self.review_level(confidence, auto_eligible=not compliance_issues)

        reasoning.append(self._band_line(confidence, level))
        if level in BAND_ACTIONS:
            required_actions.append(BAND_ACTIONS[level])
        reasoning.append(f"Quality score: {quality.overall_score:.2f}")
        reasoning.append(f"Analysis confidence: {analysis.confidence:.2f}")

        return ApprovalVerdict(
            record_id=record.id,
            approved=level == ReviewLevel.AUTO,
            confidence=confidence,
            review_level=level,
            reasoning=tuple(reasoning),
            required_actions=tuple(required_actions),
            risk_factors=tuple(risk_factors),
            compliance_issues=tuple(compliance_issues),
            quality=quality,
        )

    def legal_relevance(self, case: Record) -> float:
        """
        Relevance of a legal case to medical device regulation.

        0.3 base; +0.15 per medtech keyword (max 0.45); +0.10 per legal
        keyword (max 0.30); +0.15 high impact, +0.10 medium impact.
        """
        text = f"{case.title} {case.case_summary()}"
        score = 0.3
        score += min(len(contains_any(text, self.config.medtech_keywords)) * 0.15, 0.45)
        score += min(len(contains_any(text, self.config.legal_relevance_keywords)) * 0.10, 0.30)

        impact = (case.impact_level or "").lower()
        if impact == "high":
            score += 0.15
        elif impact == "medium":
            score += 0.10

        return min(score, 1.0)

    def evaluate_legal_case(self, record: RecordInput) -> ApprovalVerdict:
        """
        Evaluate a legal case for publication.

        Auto-approval additionally requires high precedent value.

        Args:
            record: Record, or a raw store dict to coerce

        Returns:
            ApprovalVerdict (board fallback on any failure)
        """
        record_id = self._record_id(record)
        try:
            case = self._coerce(record)
            assessment = self.theme_classifier.assess_case(case)
            relevance = self.legal_relevance(case)
            precedent = assessment.precedent_value

            relevant_themes = [
                t for t in assessment.theme_ids if t in self.config.high_relevance_theme_ids
            ]
            confidence = relevance * 0.6 + PRECEDENT_WEIGHTS[precedent]
            confidence += min(len(relevant_themes) * 0.05, 0.15)
            confidence = max(0.0, min(1.0, confidence))

            level = self.review_level(
                confidence, auto_eligible=precedent == PrecedentValue.HIGH
            )

            risk_factors: List[str] = []
            if (case.impact_level or "").lower() == "high":
                risk_factors.append("High-impact legal precedent")
            if precedent == PrecedentValue.HIGH:
                risk_factors.append("Significant legal precedent value")
            if "product_liability" in assessment.theme_ids:
                risk_factors.append("Product liability implications")
            if "regulatory_compliance" in assessment.theme_ids:
                risk_factors.append("Regulatory compliance implications")

            required_actions = list(PRECEDENT_ACTIONS[precedent])
            if level in BAND_ACTIONS:
                required_actions.append(BAND_ACTIONS[level])

            verdict = ApprovalVerdict(
                record_id=case.id,
                approved=level == ReviewLevel.AUTO,
                confidence=confidence,
                review_level=level,
                reasoning=(
                    f"Precedent value: {precedent.value}",
                    f"Quality score (legal relevance): {relevance:.2f}",
                    f"Themes: {', '.join(assessment.theme_ids) or 'none'}",
                    self._band_line(confidence, level),
                ),
                required_actions=tuple(required_actions),
                risk_factors=tuple(risk_factors),
            )
        except RecordValidationError as e:
            self.logger.warning(
                "Malformed case, falling back to board review",
                record_id=record_id,
                error=str(e),
            )
            return fallback_verdict(record_id, "malformed record")
        except Exception as e:
            self.logger.error(
                "Legal case evaluation failed",
                record_id=record_id,
                error=str(e),
                exc_info=True,
            )
            return fallback_verdict(record_id, type(e).__name__)

        self.logger.info(
            f"Legal verdict: {verdict.review_level.value} ({verdict.confidence:.2f})",
            record_id=record_id,
        )
        return verdict


__all__ = ["ApprovalScorer", "fallback_verdict"]
