"""Cross-entity resolution and relationship graph engine for regulatory intelligence."""

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig
from regintel_engine.engine import RegulatoryIntelligenceEngine

__version__ = "0.1.0"

__all__ = ["DEFAULT_CONFIG", "EngineConfig", "RegulatoryIntelligenceEngine", "__version__"]
