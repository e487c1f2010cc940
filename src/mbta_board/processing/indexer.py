"""Cross-reference indexes over the ``included`` side-list of a response."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set
import logging

from .base import BaseProcessor
from ..models.transit import (
    IncludedEntity, OtherResource, RouteResource,
    ScheduleResource, StopResource, TripResource
)

logger = logging.getLogger(__name__)

COMMUTER_RAIL_ROUTE_TYPE = 2


@dataclass
class CrossReferenceIndex:
    """Lookups from relationship ids to the display values the board needs.

    Built once per response and never shared between responses. Missing
    attributes are stored as empty strings.
    """

    commuter_rail_routes: Set[str] = field(default_factory=set)
    track_of: Dict[str, str] = field(default_factory=dict)
    destination_of: Dict[str, str] = field(default_factory=dict)
    scheduled_departure_of: Dict[str, str] = field(default_factory=dict)
    direction_names_of: Dict[str, List[str]] = field(default_factory=dict)
    direction_id_of: Dict[str, int] = field(default_factory=dict)

    def is_commuter_rail(self, route_id: Optional[str]) -> bool:
        return route_id in self.commuter_rail_routes

    def direction_name(self, route_id: Optional[str], trip_id: Optional[str]) -> Optional[str]:
        """Name of the direction a trip runs on its route, e.g. ``Outbound``."""
        names = self.direction_names_of.get(route_id)
        direction_id = self.direction_id_of.get(trip_id)
        if not names or direction_id is None or not 0 <= direction_id < len(names):
            return None
        return names[direction_id] or None


class CrossReferenceIndexer(BaseProcessor):
    """Scans included entities once and builds a ``CrossReferenceIndex``."""

    def __init__(self, commuter_rail_route_type: int = COMMUTER_RAIL_ROUTE_TYPE):
        super().__init__("CrossReferenceIndexer")
        self.commuter_rail_route_type = commuter_rail_route_type

    def process(self, included: Sequence[IncludedEntity]) -> CrossReferenceIndex:
        index = CrossReferenceIndex()

        for entity in included:
            if isinstance(entity, RouteResource):
                attributes = entity.attributes
                if attributes.type == self.commuter_rail_route_type:
                    index.commuter_rail_routes.add(entity.id)
                index.direction_names_of[entity.id] = [
                    name or "" for name in attributes.direction_names or []
                ]
            elif isinstance(entity, StopResource):
                index.track_of[entity.id] = entity.attributes.platform_code or ""
            elif isinstance(entity, TripResource):
                index.destination_of[entity.id] = entity.attributes.headsign or ""
                if entity.attributes.direction_id is not None:
                    index.direction_id_of[entity.id] = entity.attributes.direction_id
            elif isinstance(entity, ScheduleResource):
                index.scheduled_departure_of[entity.id] = entity.attributes.departure_time or ""
            elif isinstance(entity, OtherResource):
                self.skipped_count += 1
                continue
            self.processed_count += 1

        logger.debug(
            f"Indexed {self.processed_count} included entities: "
            f"{len(index.commuter_rail_routes)} commuter rail routes, "
            f"{len(index.track_of)} stops, {len(index.destination_of)} trips, "
            f"{len(index.scheduled_departure_of)} schedules"
        )
        return index


def build_index(
    included: Sequence[IncludedEntity],
    commuter_rail_route_type: int = COMMUTER_RAIL_ROUTE_TYPE
) -> CrossReferenceIndex:
    """Build the cross-reference index for one response."""
    with CrossReferenceIndexer(commuter_rail_route_type) as indexer:
        return indexer.process(included)
