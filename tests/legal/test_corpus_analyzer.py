"""Tests for precedent chains, conflicts and the LegalCorpusAnalyzer.

Tests cover:
- Chronological chains and development narratives
- Conflicts only where outcomes diverge
- Unthemed cases staying out of every derived structure
- Idempotence over an unchanged snapshot
"""

from datetime import datetime, timezone

import pytest

from regintel_engine.legal.corpus_analyzer import LegalCorpusAnalyzer
from regintel_engine.legal.precedent_analyzer import development_narrative


def _date(year):
    return datetime(year, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def analyzer():
    return LegalCorpusAnalyzer()


@pytest.fixture
def liability_cases(make_case):
    """Three product liability cases listed out of chronological order."""
    return [
        make_case("pl-2023", "Roe v. Acme", summary="Product liability appeal", outcome="plaintiff",
                  decision_date=_date(2023), jurisdiction="EU"),
        make_case("pl-2022", "Doe v. Acme", summary="Defective device claim", outcome="plaintiff",
                  decision_date=_date(2022), jurisdiction="US"),
        make_case("pl-2024", "Poe v. Acme", summary="Manufacturer liability ruling", outcome="defendant",
                  decision_date=_date(2024), jurisdiction="DE"),
    ]


class TestPrecedentChains:
    """Tests for chain construction."""

    def test_chain_is_chronological(self, analyzer, liability_cases):
        analysis = analyzer.analyze(liability_cases)
        chain = next(c for c in analysis.precedent_chains if c.theme_id == "product_liability")
        assert chain.case_ids == ("pl-2022", "pl-2023", "pl-2024")

    def test_shifting_narrative(self, analyzer, liability_cases):
        chain = analyzer.analyze(liability_cases).precedent_chains[0]
        assert chain.development_narrative == (
            'Jurisprudence shifted from "plaintiff" to "defendant" across 3 cases.'
        )

    def test_consistent_narrative(self, analyzer, liability_cases):
        cases = [c for c in liability_cases if c.id != "pl-2024"]
        chain = analyzer.analyze(cases).precedent_chains[0]
        assert chain.development_narrative == "Consistent jurisprudence across 2 cases."

    def test_single_case_theme_has_no_chain(self, analyzer, liability_cases):
        analysis = analyzer.analyze(liability_cases[:1])
        assert analysis.precedent_chains == []

    def test_narrative_helper_uses_resolved_outcomes(self, make_case):
        cases = [make_case("a", "A"), make_case("b", "B", outcome="settled")]
        assert development_narrative(cases) == (
            'Jurisprudence shifted from "unknown" to "settled" across 2 cases.'
        )


class TestConflicts:
    """Tests for conflict detection."""

    def test_divergent_outcomes_conflict(self, analyzer, liability_cases):
        conflicts = analyzer.analyze(liability_cases).conflicts
        assert len(conflicts) == 1
        conflict = conflicts[0]
        assert conflict.theme_id == "product_liability"
        assert conflict.outcome_groups == {"plaintiff", "defendant"}
        assert [(p.case_id, p.outcome_position, p.jurisdiction) for p in conflict.positions] == [
            ("pl-2023", "plaintiff", "EU"),
            ("pl-2022", "plaintiff", "US"),
            ("pl-2024", "defendant", "DE"),
        ]

    def test_shared_outcome_never_conflicts(self, analyzer, liability_cases):
        cases = [c for c in liability_cases if c.outcome == "plaintiff"]
        assert analyzer.analyze(cases).conflicts == []


class TestLegalCorpusAnalyzer:
    """Tests for the combined analysis."""

    def test_unthemed_case_excluded_everywhere(self, analyzer, liability_cases, make_case):
        stray = make_case("stray", "Smith v. Jones", summary="Contract dispute over an office lease",
                          outcome="dismissed")
        analysis = analyzer.analyze(liability_cases + [stray])

        assert all("stray" not in t.related_cases for t in analysis.themes)
        assert all("stray" not in c.case_ids for c in analysis.precedent_chains)
        assert all(
            p.case_id != "stray" for conflict in analysis.conflicts for p in conflict.positions
        )

    def test_returns_all_themes(self, analyzer, liability_cases):
        analysis = analyzer.analyze(liability_cases)
        assert [t.id for t in analysis.themes] == [t.id for t in analyzer.config.themes]

    def test_idempotent(self, analyzer, liability_cases):
        """Two runs over an unchanged snapshot are deep-equal."""
        assert analyzer.analyze(liability_cases) == analyzer.analyze(liability_cases)

    def test_duplicate_ids_analyzed_once(self, analyzer, liability_cases):
        analysis = analyzer.analyze(liability_cases + liability_cases[:1])
        theme = next(t for t in analysis.themes if t.id == "product_liability")
        assert theme.related_cases == ("pl-2023", "pl-2022", "pl-2024")

    def test_empty_corpus(self, analyzer):
        analysis = analyzer.analyze([])
        assert analysis.relationships == []
        assert analysis.precedent_chains == []
        assert analysis.conflicts == []

    def test_assess_case(self, analyzer, liability_cases):
        assessment = analyzer.assess_case(liability_cases[0])
        assert assessment.theme_ids == ("product_liability",)
