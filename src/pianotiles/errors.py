"""Error reporting for the frame loop."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ErrorReporter:
    """Logs the first few exceptions it sees and counts the rest.

    A frame that raises is dropped; the game keeps running.
    """

    def __init__(self, limit: int = 1, log: logging.Logger | None = None) -> None:
        self.limit = limit
        self.count = 0
        self._log = log or logger

    def report(self, exc: BaseException, context: str = "frame update") -> None:
        if self.count < self.limit:
            self._log.error("Unhandled error during %s", context, exc_info=exc)
        self.count += 1

    @property
    def suppressed(self) -> int:
        return max(0, self.count - self.limit)
