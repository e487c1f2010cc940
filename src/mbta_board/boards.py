"""Departure boards for the stations shown on the dashboard."""

from typing import List, Sequence, Tuple

from .ingestion.base import MbtaService
from .models.board import DepartureBoard
from .utils.logging import get_logger

logger = get_logger(__name__)


def station_boards(settings) -> List[Tuple[str, str]]:
    """(title, stop id) for each board, in display order."""
    return [
        ("North Station Information", settings.north_station_stop_id),
        ("South Station Information", settings.south_station_stop_id),
    ]


def build_boards(service: MbtaService, stations: Sequence[Tuple[str, str]]) -> List[DepartureBoard]:
    """Fetch each station independently; one station failing does not affect another."""
    boards = []
    for title, stop_id in stations:
        result = service.fetch_departures(stop_id)
        boards.append(DepartureBoard(
            title=title,
            stop_id=stop_id,
            departures=result.departures,
            error=result.error,
        ))
    logger.debug("Built departure boards", boards=len(boards), source=service.name)
    return boards
