"""Quality, risk and approval scoring for publication decisions."""

from regintel_engine.scoring.approval_scorer import ApprovalScorer, fallback_verdict
from regintel_engine.scoring.content_analyzer import ContentAnalyzer
from regintel_engine.scoring.quality_scorer import QualityScorer

__all__ = ["ApprovalScorer", "ContentAnalyzer", "QualityScorer", "fallback_verdict"]
