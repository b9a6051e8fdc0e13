"""Tests for ContentAnalyzer categorization and priority suggestions."""

import pytest

from regintel_engine.data_management.schemas import Priority, RiskLevel, TimelineSensitivity
from regintel_engine.scoring.content_analyzer import (
    AI_ML_CATEGORY,
    FALLBACK_CATEGORY,
    SAFETY_ALERT_CATEGORY,
    ContentAnalyzer,
)


@pytest.fixture
def analyzer():
    return ContentAnalyzer()


class TestAnalyze:
    """Tests for analyze()."""

    def test_analysis_confidence(self, analyzer, make_update):
        """One medical term, one regulatory term, fallback category and device type."""
        analysis = analyzer.analyze(make_update(title="FDA clearance for medical device"))
        assert analysis.confidence == pytest.approx(0.95)
        assert analysis.categories == (FALLBACK_CATEGORY,)
        assert analysis.device_types == (FALLBACK_CATEGORY,)

    def test_categorization_evidence(self, analyzer, make_update):
        record = make_update(
            title="cardiology monitoring system with risk management and biocompatibility evidence"
        )
        analysis = analyzer.analyze(record)

        assert analysis.categorization_confidence == pytest.approx(0.6)
        assert analysis.risk_level == RiskLevel.MEDIUM
        assert analysis.therapeutic_area == "cardiology"
        assert analysis.compliance_requirements == ("risk management", "biocompatibility")
        assert analysis.device_types == ("monitoring",)

    def test_first_risk_rule_wins(self, analyzer, make_update):
        analysis = analyzer.analyze(make_update(title="Class III implantable defibrillator"))
        assert analysis.risk_level == RiskLevel.HIGH
        assert analysis.regulatory_impact == "medium"

    def test_ai_word_boundary(self, analyzer, make_update):
        assert AI_ML_CATEGORY in analyzer.analyze(make_update(title="AI-based triage software")).categories
        assert AI_ML_CATEGORY not in analyzer.analyze(
            make_update(title="Maintain detail records")
        ).categories

    def test_safety_alert(self, analyzer, make_update):
        analysis = analyzer.analyze(make_update(title="Urgent recall of infusion pump"))
        assert SAFETY_ALERT_CATEGORY in analysis.categories
        assert analysis.timeline_sensitivity == TimelineSensitivity.URGENT
        assert analysis.regulatory_impact == "high"

    def test_routine_content(self, analyzer, make_update):
        analysis = analyzer.analyze(make_update(title="General notice about fees"))
        assert analysis.timeline_sensitivity == TimelineSensitivity.ROUTINE
        assert analysis.categorization_confidence == 0.5

    def test_confidence_bounded(self, analyzer, make_update):
        record = make_update(
            title="FDA EMA MDR ISO IEC clinical evaluation of a therapeutic diagnostic surgical "
            "implantable medical device",
        )
        assert 0.0 <= analyzer.analyze(record).confidence <= 1.0


class TestSuggestPriority:
    """Tests for suggest_priority()."""

    def test_recall_is_critical(self, analyzer, make_update):
        record = make_update(title="Urgent recall of infusion pump", update_type="FDA Device Recall")
        suggestion = analyzer.suggest_priority(record)
        assert suggestion.priority == Priority.CRITICAL
        assert suggestion.record_id == record.id

    def test_high_risk_is_critical(self, analyzer, make_update):
        suggestion = analyzer.suggest_priority(make_update(title="Class III implantable defibrillator"))
        assert suggestion.priority == Priority.CRITICAL

    def test_ai_is_high(self, analyzer, make_update):
        suggestion = analyzer.suggest_priority(make_update(title="AI-based triage software"))
        assert suggestion.priority == Priority.HIGH

    def test_eu_compliance_is_high(self, analyzer, make_update):
        record = make_update(
            title="cybersecurity clinical evaluation post-market surveillance notice",
            jurisdiction="EU",
        )
        assert analyzer.suggest_priority(record).priority == Priority.HIGH

    def test_same_content_outside_eu_is_low(self, analyzer, make_update):
        record = make_update(
            title="cybersecurity clinical evaluation post-market surveillance notice",
            jurisdiction="US",
        )
        assert analyzer.suggest_priority(record).priority == Priority.LOW

    def test_medium(self, analyzer, make_update):
        record = make_update(
            title="cardiology monitoring system with risk management and biocompatibility evidence"
        )
        assert analyzer.suggest_priority(record).priority == Priority.MEDIUM

    def test_low(self, analyzer, make_update):
        suggestion = analyzer.suggest_priority(make_update(title="General notice about fees"))
        assert suggestion.priority == Priority.LOW
        assert suggestion.reasoning
