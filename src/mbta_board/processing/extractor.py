"""Turns a decoded predictions response into departure board rows."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Literal, Optional
import logging
import re

from .base import BaseProcessor
from .indexer import COMMUTER_RAIL_ROUTE_TYPE, CrossReferenceIndex, build_index
from ..exceptions import ParseError, TimestampParseError
from ..models.board import TRACK_TBD, Departure
from ..models.transit import PredictionResource, PredictionsResponse

logger = logging.getLogger(__name__)

DELAYED_STATUS = "Delayed"


@dataclass
class ExtractionOptions:
    """Which predictions make it onto the board.

    ``direction`` restricts rows to trips whose direction name on their route
    matches it (``"Outbound"`` or ``"Inbound"``). Upstream direction naming is
    not consistent enough to hard-code, so it is off unless asked for.
    """

    filter_commuter_rail: bool = True
    require_status: bool = False
    direction: Optional[Literal["Outbound", "Inbound"]] = None
    commuter_rail_route_type: int = COMMUTER_RAIL_ROUTE_TYPE

    @classmethod
    def from_settings(cls, settings) -> "ExtractionOptions":
        return cls(
            filter_commuter_rail=settings.filter_commuter_rail,
            require_status=settings.require_status,
            direction=settings.direction_filter,
            commuter_rail_route_type=settings.commuter_rail_route_type,
        )


@dataclass
class ExtractionResult:
    """Rows extracted from one response plus any row-level failures.

    ``error`` never means the rows are unusable; rows whose timestamp failed
    to parse are still present, labelled with the failure.
    """

    departures: List[Departure] = field(default_factory=list)
    error: Optional[ParseError] = None


RFC3339_PATTERN = re.compile(
    r"(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})",
    re.IGNORECASE | re.ASCII,
)


def parse_timestamp(raw: str) -> datetime:
    """Parse an RFC 3339 timestamp, which always carries a UTC offset.

    Other ISO-8601 spellings are rejected whatever ``fromisoformat`` would
    accept on the running interpreter.
    """
    match = RFC3339_PATTERN.fullmatch(raw) if isinstance(raw, str) else None
    if match is None:
        raise TimestampParseError(raw)
    date, clock, fraction, offset = match.groups()
    # fromisoformat before Python 3.11 wants exactly six fractional digits
    micros = (fraction or "").ljust(6, "0")[:6]
    offset = "+00:00" if offset.upper() == "Z" else offset
    try:
        return datetime.fromisoformat(f"{date}T{clock}.{micros}{offset}")
    except ValueError as e:
        raise TimestampParseError(raw) from e


def format_time_label(moment: datetime) -> str:
    """12-hour clock without a leading zero, e.g. ``4:30PM``."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}{meridiem}"


class DepartureExtractor(BaseProcessor):
    """Filters primary records and resolves them against the included index."""

    def __init__(self, options: Optional[ExtractionOptions] = None):
        super().__init__("DepartureExtractor")
        self.options = options or ExtractionOptions()

    def process(self, response: PredictionsResponse) -> ExtractionResult:
        index = build_index(response.included, self.options.commuter_rail_route_type)
        return self.extract(response.data, index)

    def extract(
        self,
        records: List[PredictionResource],
        index: CrossReferenceIndex
    ) -> ExtractionResult:
        departures: List[Departure] = []
        failures: List[TimestampParseError] = []

        for record in records:
            if not self._is_eligible(record, index):
                self.skipped_count += 1
                continue

            departure_time = record.attributes.departure_time
            departure_at: Optional[datetime] = None
            try:
                departure_at = parse_timestamp(departure_time)
                time_label = format_time_label(departure_at)
            except TimestampParseError as e:
                logger.warning(f"Unparsable departure time on prediction {record.id}: {departure_time!r}")
                failures.append(e)
                self.error_count += 1
                time_label = str(e)

            track = index.track_of.get(record.stop_id, "") or TRACK_TBD

            departures.append(Departure(
                time_label=time_label,
                destination=index.destination_of.get(record.trip_id, ""),
                track=track,
                status=self._resolve_status(record, departure_at, index),
            ))
            self.processed_count += 1

        error = ParseError(failures) if failures else None
        return ExtractionResult(departures=departures, error=error)

    def _is_eligible(self, record: PredictionResource, index: CrossReferenceIndex) -> bool:
        attributes = record.attributes
        if not attributes.departure_time:
            logger.debug(f"Skipping prediction {record.id}: no departure time")
            return False
        if self.options.require_status and not attributes.status:
            logger.debug(f"Skipping prediction {record.id}: no status")
            return False
        if self.options.filter_commuter_rail and not index.is_commuter_rail(record.route_id):
            logger.debug(f"Skipping prediction {record.id}: route {record.route_id} is not commuter rail")
            return False
        if self.options.direction:
            direction = index.direction_name(record.route_id, record.trip_id)
            if direction != self.options.direction:
                logger.debug(f"Skipping prediction {record.id}: direction {direction}")
                return False
        return True

    def _resolve_status(
        self,
        record: PredictionResource,
        departure_at: Optional[datetime],
        index: CrossReferenceIndex
    ) -> str:
        if record.attributes.status:
            return record.attributes.status
        if departure_at is None or record.schedule_id is None:
            return ""

        scheduled = index.scheduled_departure_of.get(record.schedule_id, "")
        if not scheduled:
            return ""
        try:
            scheduled_at = parse_timestamp(scheduled)
        except TimestampParseError:
            return ""
        return DELAYED_STATUS if departure_at > scheduled_at else ""


def extract_departures(
    response: PredictionsResponse,
    options: Optional[ExtractionOptions] = None
) -> ExtractionResult:
    """Extract board rows from one decoded response."""
    with DepartureExtractor(options) as extractor:
        return extractor.process(response)
