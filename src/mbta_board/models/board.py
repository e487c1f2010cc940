"""Display models for the departure board."""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

TRACK_TBD = "TBD"


class Departure(BaseModel):
    """One row of the departure board."""

    model_config = ConfigDict(frozen=True)

    time_label: str = Field(..., description="Departure time, e.g. 4:30PM")
    destination: str = Field("", description="Trip headsign")
    track: str = Field(TRACK_TBD, description="Platform code or TBD")
    status: str = Field("", description="Upstream status or inferred 'Delayed'")


@dataclass
class DepartureBoard:
    """Title, rows and any error for one station's board.

    Rows take precedence for display: a board can carry both rows and a
    (non-fatal) parse error.
    """

    title: str
    stop_id: str
    departures: List[Departure] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def has_rows(self) -> bool:
        return bool(self.departures)
