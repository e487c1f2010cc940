"""Normalization of MBTA predictions payloads into board rows."""

from .base import BaseProcessor
from .indexer import CrossReferenceIndex, CrossReferenceIndexer, build_index
from .extractor import (
    DepartureExtractor, ExtractionOptions, ExtractionResult,
    extract_departures, format_time_label, parse_timestamp
)

__all__ = [
    "BaseProcessor",
    "CrossReferenceIndex",
    "CrossReferenceIndexer",
    "build_index",
    "DepartureExtractor",
    "ExtractionOptions",
    "ExtractionResult",
    "extract_departures",
    "format_time_label",
    "parse_timestamp",
]
