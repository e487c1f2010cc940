"""Sources of MBTA predictions for the departure board."""

from .base import FetchResult, MbtaService, decode_predictions
from .file_service import JsonFileService
from .v3_rest_service import V3RestService

__all__ = [
    "FetchResult",
    "MbtaService",
    "decode_predictions",
    "JsonFileService",
    "V3RestService",
]
