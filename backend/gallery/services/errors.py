"""Media listing error taxonomy."""

from __future__ import annotations


class MediaListingError(Exception):
    """Base class for failures that abort a listing."""


class UpstreamFetchError(MediaListingError):
    """The upstream listing call did not succeed."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Upstream error {status}: {body}")


class SourceTooLargeError(MediaListingError):
    """The upstream tree was truncated; refuse to serve a partial gallery."""


class MissingCredentialsError(MediaListingError):
    """A GitHub token is required but not configured."""


class PerFileDateError(Exception):
    """Commit date for a single file could not be fetched.

    Recoverable: the lister substitutes the epoch and carries on.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Commit date unavailable for {path}: {reason}")
