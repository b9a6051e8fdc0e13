"""Cross-jurisdiction device resolution: similarity, extraction, mapping and timelines."""

from regintel_engine.resolution.device_mapper import DeviceEntityMapper, MappingStats
from regintel_engine.resolution.entity_extractor import EntityExtractor
from regintel_engine.resolution.text_similarity import normalize, similarity
from regintel_engine.resolution.timeline_builder import TimelineBuilder

__all__ = [
    "DeviceEntityMapper",
    "EntityExtractor",
    "MappingStats",
    "TimelineBuilder",
    "normalize",
    "similarity",
]
