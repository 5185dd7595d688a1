"""Error types raised while reading and normalizing scoreboards."""

from __future__ import annotations


class IngestionError(RuntimeError):
    pass


class FetchError(IngestionError):
    """Outbound request failed or returned a non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body


class ParseError(IngestionError):
    """Response body is not JSON or lacks the expected top-level object."""


class LeaderParseError(IngestionError):
    pass
