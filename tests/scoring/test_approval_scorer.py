"""Tests for ApprovalScorer verdicts, review bands and the failure fallback."""

import pytest

from regintel_engine.config.engine_config import EngineConfig
from regintel_engine.data_management.schemas import (
    ContentAnalysis,
    Priority,
    QualityMetrics,
    ReviewLevel,
)
from regintel_engine.scoring.approval_scorer import ApprovalScorer, fallback_verdict
from regintel_engine.scoring.content_analyzer import ContentAnalyzer

CLEARANCE_BODY = (
    "Manufacturer: Acme Medical. The medical device received approval under FDA "
    "regulation after clinical evaluation of the diagnostic and surgical delivery "
    "system. Compliance with the applicable standard and guideline was confirmed "
    "by the review team for this stent."
)


class BrokenAnalyzer(ContentAnalyzer):
    """Analyzer that fails on every record."""

    def analyze(self, record):
        raise RuntimeError("analysis backend unavailable")


@pytest.fixture
def scorer():
    return ApprovalScorer()


@pytest.fixture
def clearance(make_update, days_ago):
    """A complete, fresh FDA clearance that qualifies for auto-approval."""

    def _make(**overrides):
        fields = dict(
            body=CLEARANCE_BODY,
            authority="FDA",
            source_id="fda_510k",
            jurisdiction="US",
            categories=("Cardiology",),
            device_classes=("Class II",),
            priority=Priority.HIGH,
            published_at=days_ago(3),
        )
        fields.update(overrides)
        return make_update("upd-510k", "FDA 510(k) Clearance: CardioFlow Coronary Stent", **fields)

    return _make


class TestRegulatoryUpdates:
    """Tests for evaluate_regulatory_update."""

    def test_auto_approval(self, scorer, clearance, now):
        verdict = scorer.evaluate_regulatory_update(clearance(), now)

        assert verdict.review_level == ReviewLevel.AUTO
        assert verdict.approved is True
        assert verdict.confidence == pytest.approx(0.9475)
        assert verdict.quality.overall_score == pytest.approx(0.9475)
        assert verdict.risk_factors == ()
        assert verdict.compliance_issues == ()
        assert verdict.required_actions == ()

    def test_reasoning_carries_score_and_band(self, scorer, clearance, now):
        verdict = scorer.evaluate_regulatory_update(clearance(), now)
        assert any(line.startswith("Quality score: ") for line in verdict.reasoning)
        assert any("in auto band (>= 0.85)" in line for line in verdict.reasoning)

    def test_compliance_issue_blocks_auto(self, scorer, clearance, now):
        verdict = scorer.evaluate_regulatory_update(clearance(device_classes=()), now)

        assert verdict.compliance_issues == ("Missing device classification",)
        assert verdict.confidence == pytest.approx(0.9475 * 0.85)
        assert verdict.review_level == ReviewLevel.SENIOR
        assert verdict.approved is False
        assert "Address compliance issues before publication" in verdict.required_actions
        assert "Senior reviewer approval needed" in verdict.required_actions

    def test_recall_raises_risk_factors(self, scorer, clearance, now):
        record = clearance(update_type="FDA Device Recall", body=CLEARANCE_BODY + " Recall initiated.")
        verdict = scorer.evaluate_regulatory_update(record, now)

        assert "Safety-critical content" in verdict.risk_factors
        assert "Time-sensitive regulatory change" in verdict.risk_factors
        assert verdict.review_level != ReviewLevel.AUTO

    def test_accepts_raw_dict(self, scorer, now):
        raw = {
            "id": "raw-1",
            "title": "Guidance update",
            "description": "Short note",
            "region": "US",
        }
        verdict = scorer.evaluate_regulatory_update(raw, now)
        assert verdict.record_id == "raw-1"
        assert verdict.quality is not None
        assert "Insufficient content detail" in verdict.compliance_issues

    def test_confidence_bounded(self, scorer, make_update, now):
        for record in (make_update(), make_update(title="", body="x" * 1000)):
            verdict = scorer.evaluate_regulatory_update(record, now)
            assert 0.0 <= verdict.confidence <= 1.0


class TestCheckCompliance:
    """Tests for check_compliance."""

    def test_bare_record(self, scorer, make_update):
        issues = scorer.check_compliance(make_update())
        assert issues == [
            "Insufficient content detail",
            "Missing content categorization",
            "Missing device classification",
            "Invalid priority assignment",
        ]

    def test_eu_mdr_gap(self, scorer, clearance):
        assert "Potential MDR compliance gap" in scorer.check_compliance(clearance(jurisdiction="EU"))

    def test_eu_with_mdr_reference(self, scorer, clearance):
        record = clearance(jurisdiction="EU", body=CLEARANCE_BODY + " Assessed under MDR.")
        assert scorer.check_compliance(record) == []


class TestFallback:
    """Evaluation failures never raise and never auto-approve."""

    def test_analyzer_failure(self, clearance, now):
        scorer = ApprovalScorer(content_analyzer=BrokenAnalyzer())
        verdict = scorer.evaluate_regulatory_update(clearance(), now)

        assert verdict.record_id == "upd-510k"
        assert verdict.approved is False
        assert verdict.confidence == 0.0
        assert verdict.review_level == ReviewLevel.BOARD
        assert verdict.reasoning[0] == "Evaluation failed: RuntimeError"
        assert verdict.compliance_issues == ("Unable to verify compliance",)

    def test_malformed_dict_keeps_id(self, scorer, now):
        verdict = scorer.evaluate_regulatory_update({"id": "bad-1"}, now)
        assert verdict.record_id == "bad-1"
        assert verdict.review_level == ReviewLevel.BOARD
        assert verdict.reasoning[0] == "Evaluation failed: malformed record"

    def test_malformed_without_id(self, scorer, now):
        assert scorer.evaluate_regulatory_update({"title": "No id"}, now).record_id == "unknown"
        assert scorer.evaluate_regulatory_update("not a record", now).record_id == "unknown"

    def test_malformed_legal_case(self, scorer):
        verdict = scorer.evaluate_legal_case({"id": "case-x"})
        assert verdict.record_id == "case-x"
        assert verdict.review_level == ReviewLevel.BOARD
        assert verdict.confidence == 0.0

    def test_fallback_reasoning(self):
        verdict = fallback_verdict("r-1", "timeout")
        assert verdict.reasoning[0] == "Evaluation failed: timeout"
        assert "Quality score: 0.00" in verdict.reasoning
        assert "board band" in verdict.reasoning[2]


class TestReviewBands:
    """Tests for review_level and penalty handling."""

    def test_band_edges(self, scorer):
        assert scorer.review_level(0.85) == ReviewLevel.AUTO
        assert scorer.review_level(0.849) == ReviewLevel.SENIOR
        assert scorer.review_level(0.70) == ReviewLevel.SENIOR
        assert scorer.review_level(0.50) == ReviewLevel.EXPERT
        assert scorer.review_level(0.49) == ReviewLevel.BOARD

    def test_not_auto_eligible(self, scorer):
        assert scorer.review_level(0.99, auto_eligible=False) == ReviewLevel.SENIOR

    def test_monotonic(self, scorer):
        """Higher confidence never demands a stricter review."""
        previous = ReviewLevel.BOARD.strictness
        for step in range(101):
            level = scorer.review_level(step / 100)
            assert level.strictness <= previous
            previous = level.strictness

    def test_penalty_floored_at_zero(self, make_update):
        scorer = ApprovalScorer(EngineConfig(risk_factor_penalty=0.5))
        verdict = scorer._decide(
            make_update(),
            ContentAnalysis(confidence=1.0),
            QualityMetrics(overall_score=0.9),
            ["a", "b", "c"],
            [],
        )
        assert verdict.confidence == 0.0
        assert verdict.review_level == ReviewLevel.BOARD


class TestLegalCases:
    """Tests for evaluate_legal_case."""

    def test_high_precedent_auto(self, scorer, make_case):
        case = make_case(
            "case-pl",
            "Roe v. Heartline Devices",
            summary="Product liability claim over a pacemaker implant; the medical device failed.",
            impact_level="high",
        )
        verdict = scorer.evaluate_legal_case(case)

        assert scorer.legal_relevance(case) == pytest.approx(1.0)
        assert verdict.confidence == pytest.approx(0.95)
        assert verdict.review_level == ReviewLevel.AUTO
        assert verdict.approved is True
        assert "Product liability implications" in verdict.risk_factors
        assert "Review current compliance measures" in verdict.required_actions
        assert verdict.reasoning[0] == "Precedent value: high"

    def test_medium_precedent_expert(self, scorer, make_case):
        case = make_case(
            "case-ct",
            "Clinical trial consent dispute",
            summary="Patient claims informed consent in the clinical trial was inadequate.",
            impact_level="medium",
        )
        verdict = scorer.evaluate_legal_case(case)

        assert scorer.legal_relevance(case) == pytest.approx(0.6)
        assert verdict.confidence == pytest.approx(0.56)
        assert verdict.review_level == ReviewLevel.EXPERT
        assert verdict.required_actions == (
            "Monitor similar cases",
            "Subject matter expert review needed",
        )

    def test_low_relevance_board(self, scorer, make_case):
        case = make_case(
            "case-gdpr",
            "Data protection authority v. Clinic",
            summary="GDPR fine for data protection failures at a clinic.",
        )
        verdict = scorer.evaluate_legal_case(case)
        assert verdict.confidence == pytest.approx(0.48)
        assert verdict.review_level == ReviewLevel.BOARD

    def test_auto_requires_high_precedent(self, make_case):
        config = EngineConfig(
            auto_approval_threshold=0.5,
            senior_review_threshold=0.5,
            expert_review_threshold=0.5,
        )
        case = make_case(
            "case-ct",
            "Clinical trial consent dispute",
            summary="Patient claims informed consent in the clinical trial was inadequate.",
            impact_level="medium",
        )
        verdict = ApprovalScorer(config).evaluate_legal_case(case)
        assert verdict.review_level == ReviewLevel.SENIOR
        assert verdict.approved is False

    def test_raw_dict_with_aliases(self, scorer):
        raw = {
            "id": "case-raw",
            "caseTitle": "Roe v. Heartline Devices",
            "summary": "Product liability claim over a pacemaker implant; the medical device failed.",
            "impactLevel": "high",
            "record_type": "legal_case",
        }
        verdict = scorer.evaluate_legal_case(raw)
        assert verdict.record_id == "case-raw"
        assert verdict.review_level == ReviewLevel.AUTO
