"""Tests for RelationshipAnalyzer pair scoring.

Tests cover:
- Additive scoring components and the 1.0 cap
- Key-issue overlap by case-insensitive containment
- Relationship type precedence (conflicting over citing over similar facts)
- The strict minimum-strength filter
- Symmetry and ordering
- Within-theme bucketing
"""

from datetime import datetime, timezone

import pytest

from regintel_engine.config.engine_config import EngineConfig
from regintel_engine.data_management.schemas import RelationshipType
from regintel_engine.legal.relationship_analyzer import RelationshipAnalyzer


def _date(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


@pytest.fixture
def analyzer():
    return RelationshipAnalyzer()


class TestScorePair:
    """Tests for score_pair."""

    def test_all_components_capped(self, analyzer, make_case):
        """0.4 + 0.4 + 0.3 + 0.2 + 0.1 caps at 1.0 and reads as conflicting."""
        case_a = make_case(
            "c1",
            "Doe v. Acme",
            summary="Product liability claim",
            key_issues=("design defect", "failure to warn"),
            legal_basis="Product Liability Act",
            outcome="plaintiff",
            decision_date=_date(2024, 1, 10),
        )
        case_b = make_case(
            "c2",
            "Roe v. Acme",
            summary="Following Doe v. Acme, the court reconsidered",
            key_issues=("Design Defect", "failure to warn"),
            legal_basis="product liability act section 2",
            outcome="defendant",
            decision_date=_date(2024, 6, 1),
        )

        relationship = analyzer.score_pair(case_a, case_b)

        assert relationship.strength == 1.0
        assert relationship.relationship_type == RelationshipType.CONFLICTING
        assert "2 shared key issue(s)" in relationship.explanation

    def test_citing(self, analyzer, make_case):
        case_a = make_case("c1", "Doe v. Acme", summary="Original claim")
        case_b = make_case("c2", "Roe v. Beta", summary="Relies on doe v. acme")
        relationship = analyzer.score_pair(case_a, case_b)
        assert relationship.relationship_type == RelationshipType.CITING
        assert relationship.strength == pytest.approx(0.4)

    def test_similar_facts(self, analyzer, make_case):
        """Two shared issues, same outcome."""
        case_a = make_case("c1", "A", key_issues=("design defect", "labeling"), outcome="plaintiff")
        case_b = make_case("c2", "B", key_issues=("design defect", "labeling"), outcome="plaintiff")
        relationship = analyzer.score_pair(case_a, case_b)
        assert relationship.relationship_type == RelationshipType.SIMILAR_FACTS
        assert relationship.strength == pytest.approx(0.4)

    def test_divergent_outcome_on_shared_issue(self, analyzer, make_case):
        case_a = make_case("c1", "A", key_issues=("design defect",), outcome="plaintiff")
        case_b = make_case("c2", "B", key_issues=("design defect",), outcome="dismissed")
        relationship = analyzer.score_pair(case_a, case_b)
        assert relationship.relationship_type == RelationshipType.CONFLICTING
        assert relationship.strength == pytest.approx(0.4)

    def test_missing_outcomes_do_not_conflict(self, analyzer, make_case):
        case_a = make_case("c1", "A", key_issues=("design defect", "labeling"))
        case_b = make_case("c2", "B", key_issues=("design defect", "labeling"))
        assert analyzer.score_pair(case_a, case_b).relationship_type == RelationshipType.SIMILAR_FACTS

    def test_strength_exactly_at_minimum_dropped(self, analyzer, make_case):
        """0.2 (one issue) + 0.1 (dates) equals 0.3, which is not above 0.3."""
        case_a = make_case("c1", "A", key_issues=("labeling",), decision_date=_date(2024, 1, 1))
        case_b = make_case("c2", "B", key_issues=("labeling",), decision_date=_date(2024, 3, 1))
        assert analyzer.score_pair(case_a, case_b) is None

    def test_dates_a_year_apart_add_nothing(self, analyzer, make_case):
        case_a = make_case("c1", "A", key_issues=("a", "b"), decision_date=_date(2022, 1, 1))
        case_b = make_case("c2", "B", key_issues=("a", "b"), decision_date=_date(2023, 1, 1))
        assert analyzer.score_pair(case_a, case_b).strength == pytest.approx(0.4)

    def test_filing_date_fallback(self, analyzer, make_case):
        case_a = make_case("c1", "A", key_issues=("a", "b"), filing_date=_date(2024, 1, 1))
        case_b = make_case("c2", "B", key_issues=("a", "b"), decision_date=_date(2024, 2, 1))
        assert analyzer.score_pair(case_a, case_b).strength == pytest.approx(0.5)

    def test_symmetric_strength(self, analyzer, make_case):
        case_a = make_case("c1", "Doe v. Acme", key_issues=("a",), outcome="plaintiff")
        case_b = make_case("c2", "Roe", summary="cites Doe v. Acme", key_issues=("a", "b"), outcome="defendant")
        forward = analyzer.score_pair(case_a, case_b)
        backward = analyzer.score_pair(case_b, case_a)
        assert forward.strength == backward.strength
        assert forward.relationship_type == backward.relationship_type
        assert forward.pair == backward.pair

    def test_issues_overlap_by_containment(self, analyzer, make_case):
        """Each issue is contained in one of the other case's issues: 0.4 + 0.2 conflict."""
        case_a = make_case(
            "c1", "A", key_issues=("product liability", "design defect"), outcome="plaintiff"
        )
        case_b = make_case(
            "c2", "B", key_issues=("Product Liability Claim", "design defect claims"), outcome="defendant"
        )
        relationship = analyzer.score_pair(case_a, case_b)
        assert relationship.strength == pytest.approx(0.6)
        assert relationship.relationship_type == RelationshipType.CONFLICTING
        assert "2 shared key issue(s)" in relationship.explanation

    @pytest.mark.parametrize(
        "issues_a, issues_b",
        [
            (("defect",), ("design defect", "manufacturing defect", "labeling")),
            (("product liability", "design defect"), ("product liability claim", "design defect claims")),
            (("warning", "consent"), ("failure to warn", "informed consent")),
        ],
    )
    def test_issue_overlap_order_independent(self, analyzer, make_case, issues_a, issues_b):
        case_a = make_case("c1", "A", key_issues=issues_a, outcome="plaintiff")
        case_b = make_case("c2", "B", key_issues=issues_b, outcome="defendant")
        forward = analyzer.score_pair(case_a, case_b)
        backward = analyzer.score_pair(case_b, case_a)
        assert forward is not None
        assert forward.strength == backward.strength
        assert forward.relationship_type == backward.relationship_type

    def test_one_broad_issue_counts_each_narrow_match(self, analyzer, make_case):
        """'defect' covers two issues of the other case, so two overlaps count."""
        case_a = make_case("c1", "A", key_issues=("defect",), outcome="plaintiff")
        case_b = make_case("c2", "B", key_issues=("design defect", "manufacturing defect"), outcome="plaintiff")
        assert analyzer.score_pair(case_a, case_b).strength == pytest.approx(0.4)
        assert analyzer.score_pair(case_b, case_a).strength == pytest.approx(0.4)

    def test_unrelated_pair_dropped(self, analyzer, make_case):
        assert analyzer.score_pair(make_case("c1", "A"), make_case("c2", "B")) is None


class TestFindRelationships:
    """Tests for find_relationships."""

    @pytest.fixture
    def cases(self, make_case):
        return [
            make_case("c1", "Doe v. Acme", key_issues=("a", "b")),
            make_case("c2", "Roe v. Beta", key_issues=("a", "b", "c")),
            make_case("c3", "Poe v. Gamma", summary="Applies Doe v. Acme", key_issues=("a", "b", "c")),
        ]

    def test_sorted_by_strength_descending(self, analyzer, cases):
        relationships = analyzer.find_relationships(cases)
        strengths = [r.strength for r in relationships]
        assert strengths == sorted(strengths, reverse=True)
        assert relationships[0].pair == frozenset({"c1", "c3"})
        assert len(relationships) == 3

    def test_all_above_minimum(self, analyzer, cases):
        assert all(r.strength > 0.3 for r in analyzer.find_relationships(cases))

    def test_bucketing_compares_within_theme_only(self, make_case):
        analyzer = RelationshipAnalyzer(EngineConfig(relationship_bucket_by_theme=True))
        cases = [
            make_case("c1", "Doe v. Acme", key_issues=("a", "b")),
            make_case("c2", "Roe", summary="Cites Doe v. Acme", key_issues=("a", "b")),
        ]
        assert analyzer.find_relationships(cases, [["product_liability"], ["patent_ip"]]) == []
        assert len(analyzer.find_relationships(cases, [["patent_ip"], ["patent_ip"]])) == 1

    def test_bucketing_disabled_ignores_themes(self, analyzer, make_case):
        cases = [
            make_case("c1", "Doe v. Acme", key_issues=("a", "b")),
            make_case("c2", "Roe", summary="Cites Doe v. Acme", key_issues=("a", "b")),
        ]
        assert len(analyzer.find_relationships(cases, [["product_liability"], ["patent_ip"]])) == 1
