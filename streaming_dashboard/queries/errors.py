from __future__ import annotations

from typing import Optional


class TopologyLoadError(RuntimeError):
    """A topology snapshot could not be loaded; the message is user-facing."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class TopologyFetchError(TopologyLoadError):
    """Network, status or missing-file failure."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, path)
        self.status_code = status_code


class TopologyParseError(TopologyLoadError):
    """The payload was not JSON or not shaped like the expected records."""
