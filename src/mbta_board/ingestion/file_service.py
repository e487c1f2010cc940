"""Service that serves canned MBTA API responses from JSON files."""

from pathlib import Path
from typing import Optional, Union

from .base import MbtaService
from ..exceptions import TransportError
from ..processing.extractor import ExtractionOptions


class JsonFileService(MbtaService):
    """Ignores the requested stop and answers every call from one JSON file.

    Useful for demo pages and tests: the file goes through the same decoding
    as a live response, so an error envelope in it surfaces as an upstream
    error.
    """

    def __init__(self, json_file: Union[str, Path], options: Optional[ExtractionOptions] = None):
        super().__init__("json_file", options)
        self.json_file = Path(json_file)

    def fetch_body(self, stop_id: str) -> bytes:
        self.logger.debug("Reading canned response", stop_id=stop_id, path=str(self.json_file))
        try:
            return self.json_file.read_bytes()
        except OSError as e:
            raise TransportError(f"Could not read {self.json_file}: {e}") from e
