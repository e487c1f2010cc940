"""MBTA departure board models."""

from .base import BaseModel
from .board import TRACK_TBD, Departure, DepartureBoard
from .transit import (
    ApiErrorEntry,
    ApiErrorEnvelope,
    IncludedEntity,
    OtherResource,
    PredictionResource,
    PredictionsResponse,
    RouteResource,
    ScheduleResource,
    StopResource,
    TripResource,
)

__all__ = [
    # Base model
    "BaseModel",

    # API payload models
    "ApiErrorEntry",
    "ApiErrorEnvelope",
    "IncludedEntity",
    "OtherResource",
    "PredictionResource",
    "PredictionsResponse",
    "RouteResource",
    "ScheduleResource",
    "StopResource",
    "TripResource",

    # Board models
    "Departure",
    "DepartureBoard",
    "TRACK_TBD",
]
