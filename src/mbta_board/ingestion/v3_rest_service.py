"""MBTA V3 REST API service for commuter rail predictions."""

from typing import Any, Dict, Optional, Sequence

import requests

from .base import MbtaService, upstream_error_from_body
from ..exceptions import TransportError
from ..processing.extractor import ExtractionOptions

DEFAULT_BASE_URL = "https://api-v3.mbta.com/"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_INCLUDE = ("route", "stop", "trip", "schedule")
DEFAULT_SORT = "departure_time"


class V3RestService(MbtaService):
    """Fetches predictions for a stop from the MBTA V3 REST API.

    One GET per call, no retries. Connection and configuration are given at
    construction; ``from_settings`` builds one from the application settings.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        include: Sequence[str] = DEFAULT_INCLUDE,
        sort: Optional[str] = DEFAULT_SORT,
        options: Optional[ExtractionOptions] = None,
        session: Optional[requests.Session] = None
    ):
        """Initialize the V3 REST service."""
        super().__init__("mbta_v3_rest", options)

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.include = list(include)
        self.sort = sort
        self.endpoint = "/predictions"

        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": "MBTA-Departure-Board/1.0",
            "Accept": "application/vnd.api+json",
        })
        if api_key:
            self.session.headers["x-api-key"] = api_key

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None) -> "V3RestService":
        return cls(
            base_url=settings.mbta_base_url,
            api_key=settings.mbta_api_key,
            timeout=settings.request_timeout_seconds,
            include=settings.include_relationships,
            sort=settings.sort_key,
            options=ExtractionOptions.from_settings(settings),
            session=session,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def build_params(self, stop_id: str) -> Dict[str, Any]:
        """Query parameters for a predictions request at one stop."""
        params = {"filter[stop]": stop_id}
        if self.include:
            params["include"] = ",".join(self.include)
        if self.sort:
            params["sort"] = self.sort
        return params

    def fetch_body(self, stop_id: str) -> bytes:
        url = f"{self.base_url}{self.endpoint}"
        params = self.build_params(stop_id)
        self.logger.info("Requesting predictions", url=url, params=params)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            self.logger.warning(
                "Upstream returned an error status",
                stop_id=stop_id,
                status=response.status_code,
            )
            raise upstream_error_from_body(response.content, response.status_code)

        self.logger.debug("Successful request", stop_id=stop_id, status=response.status_code)
        return response.content
