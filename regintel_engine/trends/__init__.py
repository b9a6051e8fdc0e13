"""Trend reporting over a time window of the corpus."""

from regintel_engine.trends.trend_aggregator import TrendAggregator, record_date

__all__ = ["TrendAggregator", "record_date"]
