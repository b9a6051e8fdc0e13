"""Configuration: environment settings, constant tables and the engine config."""

from regintel_engine.config.engine_config import DEFAULT_CONFIG, EngineConfig

__all__ = ["DEFAULT_CONFIG", "EngineConfig"]
