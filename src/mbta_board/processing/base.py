"""Shared plumbing for the steps that turn one predictions response into rows."""

from abc import ABC, abstractmethod
from typing import Any
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class BaseProcessor(ABC):
    """One pass over one predictions response.

    The indexer walks the included side-list and the extractor walks the
    primary records. Both count what they kept, what they passed over and
    what failed, and log the tally when their ``with`` block closes. A
    processor belongs to a single response; build a new one per request.
    """

    def __init__(self, name: str):
        self.name = name
        self.processed_count = 0
        self.skipped_count = 0
        self.error_count = 0
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        logger.debug(f"Starting {self.name} pass")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is None:
            return
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if exc_type is not None:
            logger.debug(f"{self.name} pass aborted after {elapsed:.3f}s: {exc_val}")
            return
        logger.debug(
            f"{self.name} pass done in {elapsed:.3f}s: kept {self.processed_count}, "
            f"passed over {self.skipped_count}, failed {self.error_count}"
        )

    @abstractmethod
    def process(self, data: Any) -> Any:
        """Run the pass over ``data`` and return what it built."""
