"""Windowed topic, emerging-topic and risk-pattern roll-up.

A record is in the window when its date (publication date for updates, case
date for legal cases) lies within window_days before the reference time.
Undated and future-dated records are left out.

Emerging topic: at least 3 mentions in the window, and more than 60% of them
dated inside the most recent 30% of the window. Emerging topics are ranked
by recent share and, like top topics, limited to trend_top_n.
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence

from loguru import logger

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.data_management.schemas import (
    EmergingTopic,
    Record,
    TopicCount,
    TrendReport,
)
from regintel_engine.resolution.text_similarity import contains_any

UNKNOWN_JURISDICTION = "Unknown"
OTHER_LITIGATION = "Other"


def record_date(record: Record) -> Optional[datetime]:
    """Date a record is placed in time by."""
    if record.is_legal_case:
        return record.case_date()
    return record.published_at


def _trend_text(record: Record) -> str:
    if record.is_legal_case:
        return f"{record.case_text()} {record.body}"
    return record.text()


def _ranked(counts: Dict[str, int], keywords: Sequence[str], top_n: int) -> List[TopicCount]:
    """Nonzero counts, highest first, keyword order breaking ties."""
    order = {keyword: i for i, keyword in enumerate(keywords)}
    ranked = sorted(
        (k for k, v in counts.items() if v > 0),
        key=lambda k: (-counts[k], order[k]),
    )
    return [TopicCount(topic=k, count=counts[k]) for k in ranked[:top_n]]


def _sorted_counts(counter: Counter) -> Dict[str, int]:
    return dict(sorted(counter.items(), key=lambda item: (-item[1], item[0])))


class TrendAggregator:
    """
    Builds trend reports over a sliding window.

    Usage:
        aggregator = TrendAggregator()
        report = aggregator.analyze_trends(records, window_days=90, now=now)
    """

    def __init__(self, config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.logger = logger.bind(component="TrendAggregator")

    def analyze_trends(
        self,
        records: Sequence[Record],
        window_days: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> TrendReport:
        """
        Roll up the records of a time window.

        Args:
            records: Regulatory updates and/or legal cases
            window_days: Window length (config default if None)
            now: Reference time (UTC now if None)

        Returns:
            TrendReport for the window
        """
        window = window_days or self.config.trend_window_days
        reference = now or datetime.now(timezone.utc)
        if reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)

        start = reference - timedelta(days=window)
        recent_start = reference - timedelta(days=window * self.config.emerging_recent_fraction)

        in_window: List[tuple[Record, datetime]] = []
        for record in records:
            date = record_date(record)
            if date is not None and start <= date <= reference:
                in_window.append((record, date))

        topic_totals: Counter = Counter()
        topic_recent: Counter = Counter()
        risk_counts: Counter = Counter()
        jurisdictions: Counter = Counter()
        litigation: Counter = Counter()

        for record, date in in_window:
            text = _trend_text(record)
            topics = contains_any(text, self.config.trend_keywords)
            topic_totals.update(topics)
            if date >= recent_start:
                topic_recent.update(topics)

            risk_counts.update(contains_any(text, self.config.risk_indicators))
            jurisdictions[record.region() or UNKNOWN_JURISDICTION] += 1
            if record.is_legal_case:
                litigation[record.case_type or OTHER_LITIGATION] += 1

        report = TrendReport(
            window_days=window,
            generated_at=reference,
            record_count=len(in_window),
            top_topics=_ranked(topic_totals, self.config.trend_keywords, self.config.trend_top_n),
            emerging_topics=self._emerging(topic_totals, topic_recent),
            risk_patterns=_ranked(risk_counts, self.config.risk_indicators, self.config.trend_top_n),
            jurisdiction_activity=_sorted_counts(jurisdictions),
            litigation_types=_sorted_counts(litigation),
        )
        self.logger.info(
            f"Trend report over {window} days",
            records=report.record_count,
            emerging=len(report.emerging_topics),
        )
        return report

    def _emerging(self, totals: Counter, recent: Counter) -> List[EmergingTopic]:
        emerging: List[EmergingTopic] = []
        for topic in self.config.trend_keywords:
            total = totals.get(topic, 0)
            if total < self.config.emerging_min_mentions:
                continue
            share = recent.get(topic, 0) / total
            if share > self.config.emerging_share_threshold:
                emerging.append(
                    EmergingTopic(
                        topic=topic,
                        total_mentions=total,
                        recent_mentions=recent.get(topic, 0),
                        recent_share=round(share, 4),
                    )
                )
        emerging.sort(key=lambda t: -t.recent_share)
        return emerging[: self.config.trend_top_n]


__all__ = ["TrendAggregator", "record_date"]
