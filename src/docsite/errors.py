"""Error taxonomy shared by the routing, serving and index layers.

Each error carries the HTTP status it maps to and a short public message.
Messages never include filesystem details.
"""

from __future__ import annotations


class DocSiteError(Exception):
    """Base class for errors rendered as ``{"error": message}`` envelopes."""

    status_code: int = 500
    message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class PathEscape(DocSiteError):
    """The requested path would leave the serving root."""

    status_code = 400
    message = "Bad path"


class NotFound(DocSiteError):
    status_code = 404
    message = "Not found"


class ServerError(DocSiteError):
    """I/O failure unrelated to the absence of a file."""

    status_code = 500
    message = "Server error"


class MalformedInput(DocSiteError):
    status_code = 400
    message = "Invalid JSON"


class PayloadTooLarge(MalformedInput):
    status_code = 413
    message = "Payload too large"


class IndexLoadFailure(DocSiteError):
    """The document store is missing or corrupt.

    Raised by the storage layer only; the index turns it into an empty
    collection, so it never reaches a client.
    """
