"""Base service class for fetching departures from an MBTA predictions source."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import ValidationError

from ..exceptions import BoardError, MalformedResponseError, ParseError, UpstreamError
from ..models.board import Departure
from ..models.transit import ApiErrorEnvelope, PredictionsResponse
from ..processing.extractor import ExtractionOptions, ExtractionResult, extract_departures
from ..utils.logging import get_logger


@dataclass
class FetchResult:
    """Result of fetching departures for one stop.

    Fatal failures leave ``departures`` empty and put the exception in
    ``error``. A ``ParseError`` in ``error`` is soft: the rows are complete
    and should be shown.
    """

    stop_id: str
    source: str
    departures: List[Departure] = field(default_factory=list)
    error: Optional[BoardError] = None
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_successful(self) -> bool:
        """True when nothing at all went wrong."""
        return self.error is None

    @property
    def is_fatal(self) -> bool:
        """True when the fetch produced no usable rows because of an error."""
        return self.error is not None and not isinstance(self.error, ParseError)


def _load_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e


def upstream_error_from_body(body: bytes, http_status: Optional[int] = None) -> UpstreamError:
    """Build an ``UpstreamError`` from whatever error envelope the body carries."""
    try:
        payload = json.loads(body)
        envelope = ApiErrorEnvelope.model_validate(payload)
    except (TypeError, ValueError):
        # Not JSON or not an envelope; report the HTTP status alone.
        return UpstreamError([], http_status=http_status)
    return UpstreamError(envelope.errors, http_status=http_status)


def decode_predictions(body: bytes) -> PredictionsResponse:
    """Decode a 2xx body, honouring an error envelope if it carries one."""
    payload = _load_json(body)

    if isinstance(payload, dict) and payload.get("errors"):
        try:
            envelope = ApiErrorEnvelope.model_validate(payload)
        except ValidationError as e:
            raise MalformedResponseError(f"Unreadable error envelope: {e}") from e
        raise UpstreamError(envelope.errors)

    try:
        return PredictionsResponse.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Response does not match the predictions payload shape: {e}"
        ) from e


class MbtaService(ABC):
    """Fetches predictions for a stop and turns them into departure rows."""

    def __init__(self, name: str, options: Optional[ExtractionOptions] = None):
        """Initialize the service."""
        self.name = name
        self.options = options or ExtractionOptions()
        self.logger = get_logger(f"{self.__class__.__name__}.{name}")

    @abstractmethod
    def fetch_body(self, stop_id: str) -> bytes:
        """Return the raw body of a successful response.

        Implementations raise ``TransportError`` when no response could be
        obtained and ``UpstreamError`` for non-2xx responses.
        """
        pass

    def list_departures(self, stop_id: str) -> ExtractionResult:
        """Fetch and extract departures, raising on fatal errors."""
        body = self.fetch_body(stop_id)
        response = decode_predictions(body)
        result = extract_departures(response, self.options)

        self.logger.info(
            "Extracted departures",
            stop_id=stop_id,
            records=len(response),
            included=len(response.included),
            departures=len(result.departures),
            parse_errors=len(result.error) if result.error else 0,
        )
        return result

    def fetch_departures(self, stop_id: str) -> FetchResult:
        """Fetch departures for a stop, reporting any error in the result."""
        try:
            result = self.list_departures(stop_id)
        except BoardError as e:
            self.logger.error(
                "Failed to fetch departures",
                stop_id=stop_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FetchResult(stop_id=stop_id, source=self.name, error=e)

        if result.error:
            self.logger.warning("Departures fetched with parse errors", stop_id=stop_id, error=str(result.error))
        return FetchResult(
            stop_id=stop_id,
            source=self.name,
            departures=result.departures,
            error=result.error,
        )
