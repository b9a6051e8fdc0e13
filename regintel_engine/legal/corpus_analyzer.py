"""Legal corpus analysis: themes, relationships, precedent chains, conflicts.

Runs the legal components over one snapshot of cases. The result depends
only on the cases and the configuration, so analyzing an unchanged corpus
twice yields equal output.

Usage:
    from regintel_engine.legal import LegalCorpusAnalyzer

    analysis = LegalCorpusAnalyzer().analyze(cases)
    for conflict in analysis.conflicts:
        print(conflict.theme, conflict.outcome_groups)
"""

from typing import Dict, Optional, Sequence

import structlog

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import CaseAssessment, LegalAnalysis, Record
from regintel_engine.legal.precedent_analyzer import PrecedentAnalyzer
from regintel_engine.legal.relationship_analyzer import RelationshipAnalyzer
from regintel_engine.legal.theme_classifier import ThemeClassifier


class LegalCorpusAnalyzer:
    """Coordinates theme assignment, relationship scoring and precedent analysis."""

    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        classifier: Optional[ThemeClassifier] = None,
        relationship_analyzer: Optional[RelationshipAnalyzer] = None,
        precedent_analyzer: Optional[PrecedentAnalyzer] = None,
    ) -> None:
        """Initialize LegalCorpusAnalyzer.

        Args:
            config: Engine configuration.
            classifier: Theme classifier (built from config if None).
            relationship_analyzer: Pair scorer (built from config if None).
            precedent_analyzer: Chain/conflict builder (default if None).
        """
        self.config = config
        self.classifier = classifier or ThemeClassifier(config)
        self.relationship_analyzer = relationship_analyzer or RelationshipAnalyzer(config)
        self.precedent_analyzer = precedent_analyzer or PrecedentAnalyzer()
        self._logger = structlog.get_logger().bind(component="LegalCorpusAnalyzer")

    def analyze(self, cases: Sequence[Record]) -> LegalAnalysis:
        """Analyze a legal corpus.

        Duplicate case ids are analyzed once, keeping the first occurrence.

        Args:
            cases: Legal case records.

        Returns:
            LegalAnalysis with themes, relationships, precedent chains and conflicts.
        """
        unique: list[Record] = []
        index: Dict[str, tuple[int, Record]] = {}
        for case in cases:
            if case.id in index:
                self._logger.warning("duplicate_case_id", case_id=case.id)
                continue
            index[case.id] = (len(unique), case)
            unique.append(case)

        themes = self.classifier.assign(unique)
        theme_ids = [self.classifier.match_themes(case) for case in unique]

        analysis = LegalAnalysis(
            themes=themes,
            relationships=self.relationship_analyzer.find_relationships(unique, theme_ids),
            precedent_chains=self.precedent_analyzer.build_chains(themes, index),
            conflicts=self.precedent_analyzer.detect_conflicts(themes, index),
        )

        self._logger.info(
            "legal_corpus_analyzed",
            cases=len(unique),
            relationships=len(analysis.relationships),
            precedent_chains=len(analysis.precedent_chains),
            conflicts=len(analysis.conflicts),
        )
        return analysis

    def assess_case(self, case: Record) -> CaseAssessment:
        """Theme assignment and precedent value for a single case."""
        return self.classifier.assess_case(case)
