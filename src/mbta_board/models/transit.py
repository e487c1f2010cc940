"""Transit data models for MBTA v3 API (JSON:API) responses.

A predictions response has two halves: ``data``, the primary records, and
``included``, a flat side-list holding every route, stop, trip and schedule
the primary records point at. Included entities share one list and are told
apart by their ``type`` tag, so they are modelled as a discriminated union.
Tags this board does not use fall through to ``OtherResource``.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Discriminator, Field, Tag

from .base import BaseModel

INCLUDED_KINDS = ("route", "stop", "trip", "schedule")


class ResourceIdentifier(BaseModel):
    """A ``{type, id}`` pointer into the included list."""

    type: str
    id: str


class Relationship(BaseModel):
    """Relationship object; ``data`` is null when nothing is linked."""

    data: Optional[ResourceIdentifier] = None


# Included entities

class RouteAttributes(BaseModel):
    type: Optional[int] = Field(None, description="Route type (0=tram, 1=subway, 2=rail, 3=bus)")
    long_name: Optional[str] = None
    short_name: Optional[str] = None
    direction_names: Optional[List[Optional[str]]] = None


class RouteResource(BaseModel):
    type: Literal["route"]
    id: str
    attributes: RouteAttributes = RouteAttributes()


class StopAttributes(BaseModel):
    name: Optional[str] = None
    platform_code: Optional[str] = Field(None, description="Platform or track label")


class StopResource(BaseModel):
    type: Literal["stop"]
    id: str
    attributes: StopAttributes = StopAttributes()


class TripAttributes(BaseModel):
    headsign: Optional[str] = None
    direction_id: Optional[int] = None


class TripResource(BaseModel):
    type: Literal["trip"]
    id: str
    attributes: TripAttributes = TripAttributes()


class ScheduleAttributes(BaseModel):
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None


class ScheduleResource(BaseModel):
    type: Literal["schedule"]
    id: str
    attributes: ScheduleAttributes = ScheduleAttributes()


class OtherResource(BaseModel):
    """Any included entity whose kind the board has no use for."""

    type: str
    id: str


def _included_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    return kind if kind in INCLUDED_KINDS else "other"


IncludedEntity = Annotated[
    Union[
        Annotated[RouteResource, Tag("route")],
        Annotated[StopResource, Tag("stop")],
        Annotated[TripResource, Tag("trip")],
        Annotated[ScheduleResource, Tag("schedule")],
        Annotated[OtherResource, Tag("other")],
    ],
    Discriminator(_included_kind),
]


# Primary records

class PredictionAttributes(BaseModel):
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None
    status: Optional[str] = None
    direction_id: Optional[int] = None


class PredictionRelationships(BaseModel):
    route: Relationship = Relationship()
    stop: Relationship = Relationship()
    trip: Relationship = Relationship()
    schedule: Relationship = Relationship()


class PredictionResource(BaseModel):
    """One primary record: a prediction (or a schedule row served the same way)."""

    type: str
    id: str
    attributes: PredictionAttributes = PredictionAttributes()
    relationships: PredictionRelationships = PredictionRelationships()

    @property
    def route_id(self) -> Optional[str]:
        return _linked_id(self.relationships.route)

    @property
    def stop_id(self) -> Optional[str]:
        return _linked_id(self.relationships.stop)

    @property
    def trip_id(self) -> Optional[str]:
        return _linked_id(self.relationships.trip)

    @property
    def schedule_id(self) -> Optional[str]:
        return _linked_id(self.relationships.schedule)


def _linked_id(relationship: Relationship) -> Optional[str]:
    return relationship.data.id if relationship.data else None


class PredictionsResponse(BaseModel):
    """A successful predictions payload."""

    data: List[PredictionResource]
    included: List[IncludedEntity] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)


# Error envelope

class ErrorSource(BaseModel):
    parameter: Optional[str] = None


class ApiErrorEntry(BaseModel):
    """One entry of an MBTA API error envelope."""

    status: Optional[str] = None
    code: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[ErrorSource] = None


class ApiErrorEnvelope(BaseModel):
    errors: List[ApiErrorEntry] = Field(default_factory=list)
