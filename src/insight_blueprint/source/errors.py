"""Errors raised by data sources."""

from typing import Optional


class SourceError(RuntimeError):
    """Base class for every failure surfaced by a data source call."""


class SourceTransportError(SourceError):
    """The remote service could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SourceParseError(SourceError):
    """The response body was not a JSON object."""


class QueryValidationError(SourceError, ValueError):
    """Query options violate the contract of the source they were sent to.

    Raised before any request is issued.
    """
