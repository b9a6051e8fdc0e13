"""Legal theme and relationship analysis over a corpus of legal cases.

Logs through structlog, bound per component.
"""

from regintel_engine.legal.corpus_analyzer import LegalCorpusAnalyzer
from regintel_engine.legal.precedent_analyzer import PrecedentAnalyzer, development_narrative
from regintel_engine.legal.relationship_analyzer import RelationshipAnalyzer
from regintel_engine.legal.theme_classifier import ThemeClassifier

__all__ = [
    "LegalCorpusAnalyzer",
    "PrecedentAnalyzer",
    "RelationshipAnalyzer",
    "ThemeClassifier",
    "development_narrative",
]
