"""Errors raised while fetching and normalizing MBTA departures.

Transport, upstream and malformed-response errors are fatal to a fetch: no
rows come back with them. Timestamp parse errors are per row and only ever
reach callers bundled inside a ``ParseError`` next to the rows that were
extracted.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .models.transit import ApiErrorEntry

UPSTREAM_ERROR_PREFIX = "MBTA API error"


class BoardError(Exception):
    """Base class for departure board errors."""


class TransportError(BoardError):
    """The request never produced an HTTP response (connection, DNS, timeout)."""


class UpstreamError(BoardError):
    """The MBTA API answered with an error envelope or a non-2xx status."""

    def __init__(self, errors: List["ApiErrorEntry"], http_status: Optional[int] = None):
        self.errors = list(errors)
        self.http_status = http_status
        super().__init__(self._render())

    def _render(self) -> str:
        if len(self.errors) == 1:
            return f"{UPSTREAM_ERROR_PREFIX}: {self.errors[0].detail}"
        if self.errors:
            entries = [entry.model_dump(exclude_none=True) for entry in self.errors]
            return f"{UPSTREAM_ERROR_PREFIX}: {entries}"
        return f"{UPSTREAM_ERROR_PREFIX}: HTTP {self.http_status}"

    @property
    def status(self) -> Optional[str]:
        """Status of the first envelope entry, falling back to the HTTP status."""
        if self.errors and self.errors[0].status:
            return self.errors[0].status
        return str(self.http_status) if self.http_status is not None else None


class MalformedResponseError(BoardError):
    """The response body could not be decoded into the expected payload shape."""


class TimestampParseError(BoardError):
    """A single prediction carried a departure time that is not ISO-8601 with an offset."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"(Parse Error) {raw}")


class ParseError(BoardError):
    """Row-level failures collected during one extraction.

    Never fatal: the extraction that produced it still returned every row,
    including the ones whose failures are listed here.
    """

    def __init__(self, errors: List[TimestampParseError]):
        self.errors = list(errors)
        super().__init__(f"Parse error: {[str(e) for e in self.errors]}")

    def __len__(self) -> int:
        return len(self.errors)
