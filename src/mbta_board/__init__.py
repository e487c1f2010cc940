"""MBTA Departure Board - commuter rail departures from the MBTA v3 API."""

__version__ = "0.1.0"

from .config import settings
from .exceptions import (
    BoardError, MalformedResponseError, ParseError,
    TimestampParseError, TransportError, UpstreamError
)
from .ingestion import FetchResult, JsonFileService, MbtaService, V3RestService
from .models import Departure, DepartureBoard
from .processing import ExtractionOptions, ExtractionResult, build_index, extract_departures

__all__ = [
    "settings",
    "BoardError",
    "MalformedResponseError",
    "ParseError",
    "TimestampParseError",
    "TransportError",
    "UpstreamError",
    "FetchResult",
    "JsonFileService",
    "MbtaService",
    "V3RestService",
    "Departure",
    "DepartureBoard",
    "ExtractionOptions",
    "ExtractionResult",
    "build_index",
    "extract_departures",
]
