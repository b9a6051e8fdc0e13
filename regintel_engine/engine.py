"""Regulatory intelligence engine facade.

Binds the resolution, legal, scoring and trend components to one record
store and one configuration. Every call reads a fresh snapshot of the store
and a fixed reference time, so repeated calls over an unchanged store give
equal results.

Usage:
    from regintel_engine import RegulatoryIntelligenceEngine
    from regintel_engine.data_management import InMemoryRecordStore

    engine = RegulatoryIntelligenceEngine(InMemoryRecordStore(persistence_path="corpus.json"))
    mappings = engine.map_devices_across_jurisdictions()
    timeline = engine.build_timeline("upd-001")
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.record_store import RecordStore
from regintel_engine.data_management.schemas import (
    ApprovalVerdict,
    CaseAssessment,
    ContentAnalysis,
    CrossReferenceReport,
    EntityMapping,
    LegalAnalysis,
    PrioritySuggestion,
    Record,
    StandardMapping,
    Timeline,
    TrendReport,
)
from regintel_engine.legal.corpus_analyzer import LegalCorpusAnalyzer
from regintel_engine.resolution.device_mapper import DeviceEntityMapper
from regintel_engine.resolution.entity_extractor import EntityExtractor
from regintel_engine.resolution.timeline_builder import TimelineBuilder
from regintel_engine.scoring.approval_scorer import ApprovalScorer
from regintel_engine.scoring.content_analyzer import ContentAnalyzer
from regintel_engine.trends.trend_aggregator import TrendAggregator
from regintel_engine.utils.logging import get_correlation_id, get_structured_logger


class RegulatoryIntelligenceEngine:
    """
    Entry point for the Publication Pipeline and reporting surfaces.

    Attributes:
        store: Record store read on every call
        config: Engine configuration shared by all components
        now: Fixed reference time, or None to use the current time per call
        run_id: Correlation id bound to this engine's logs
    """

    def __init__(
        self,
        store: RecordStore,
        config: EngineConfig = DEFAULT_CONFIG,
        now: Optional[datetime] = None,
    ):
        """
        Initialize the engine.

        Args:
            store: Record store collaborator
            config: Engine configuration
            now: Reference time for timeliness, windows and mapping stamps
        """
        self.store = store
        self.config = config
        if now is not None and now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        self.now = now
        self.run_id = get_correlation_id()
        self._logger = get_structured_logger("engine", run_id=self.run_id)

        extractor = EntityExtractor(config)
        self.device_mapper = DeviceEntityMapper(config, extractor)
        self.timeline_builder = TimelineBuilder(config, extractor)
        self.legal_analyzer = LegalCorpusAnalyzer(config)
        self.content_analyzer = ContentAnalyzer(config)
        self.approval_scorer = ApprovalScorer(
            config,
            content_analyzer=self.content_analyzer,
            theme_classifier=self.legal_analyzer.classifier,
        )
        self.trend_aggregator = TrendAggregator(config)

    def _now(self) -> datetime:
        return self.now or datetime.now(timezone.utc)

    def _updates(self) -> List[Record]:
        return list(self.store.list_regulatory_updates())

    def _cases(self) -> List[Record]:
        return list(self.store.list_legal_cases())

    def map_devices_across_jurisdictions(self) -> List[EntityMapping]:
        """Cross-jurisdiction device mappings over the current updates."""
        updates = self._updates()
        mappings = self.device_mapper.map_devices(updates, self._now())
        self._logger.info("devices_mapped", records=len(updates), mappings=len(mappings))
        return mappings

    def map_standards_to_regulations(self) -> List[StandardMapping]:
        """Known standards with the regulations of the updates that reference them."""
        return self.device_mapper.map_standards(self._updates(), self._now())

    def link_clinical_studies_to_approvals(self) -> List[EntityMapping]:
        return self.device_mapper.link_clinical_studies(self._updates(), self._now())

    def generate_cross_reference(self) -> CrossReferenceReport:
        """Device, standard and clinical-study mappings in one report."""
        return self.device_mapper.cross_reference(self._updates(), self._now())

    def build_timeline(self, record_id: str) -> Optional[Timeline]:
        """
        Regulatory timeline of the device described by a record.

        Returns:
            Timeline, or None when the record id is unknown
        """
        timeline = self.timeline_builder.build_timeline(record_id, self._updates())
        if timeline is None:
            self._logger.info("timeline_target_not_found", record_id=record_id)
        return timeline

    def analyze_legal_corpus(self, cases: Optional[Sequence[Record]] = None) -> LegalAnalysis:
        """
        Themes, relationships, precedent chains and conflicts.

        Args:
            cases: Cases to analyze (all legal cases in the store if None)
        """
        corpus = list(cases) if cases is not None else self._cases()
        return self.legal_analyzer.analyze(corpus)

    def assess_legal_case(self, case: Record) -> CaseAssessment:
        return self.legal_analyzer.assess_case(case)

    def evaluate_regulatory_update(self, record: Union[Record, Dict[str, Any]]) -> ApprovalVerdict:
        verdict = self.approval_scorer.evaluate_regulatory_update(record, now=self._now())
        self._logger.info(
            "update_evaluated",
            record_id=verdict.record_id,
            review_level=verdict.review_level.value,
            confidence=round(verdict.confidence, 4),
        )
        return verdict

    def evaluate_legal_case(self, record: Union[Record, Dict[str, Any]]) -> ApprovalVerdict:
        verdict = self.approval_scorer.evaluate_legal_case(record)
        self._logger.info(
            "case_evaluated",
            record_id=verdict.record_id,
            review_level=verdict.review_level.value,
            confidence=round(verdict.confidence, 4),
        )
        return verdict

    def analyze_content(self, record: Record) -> ContentAnalysis:
        return self.content_analyzer.analyze(record)

    def suggest_priority(self, record: Record) -> PrioritySuggestion:
        return self.content_analyzer.suggest_priority(record)

    def analyze_trends(self, window_days: Optional[int] = None) -> TrendReport:
        """Trend report over updates and cases within the window."""
        records = self._updates() + self._cases()
        return self.trend_aggregator.analyze_trends(records, window_days, self._now())


__all__ = ["RegulatoryIntelligenceEngine"]
