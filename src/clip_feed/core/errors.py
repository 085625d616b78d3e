"""Error taxonomy shared by the feed planner, vote ledger and API layer."""

from __future__ import annotations


class ClipFeedError(RuntimeError):
    """Base exception for all Clip Feed failures."""


class ValidationError(ClipFeedError):
    """Raised when a request carries a bad sort mode, limit or identifier.

    Always raised before any store access.
    """


class AuthRequired(ClipFeedError):
    """Raised when a vote request carries no usable voter identity."""


class QuotaExceeded(ClipFeedError):
    """The voter reached the daily vote cap.

    Reported to callers as ``error="quota_exceeded"`` on the cast result; the
    class exists so the HTTP layer and clients can name the outcome.
    """

    code = "quota_exceeded"


class NotFound(ClipFeedError):
    """A referenced item is absent, or an undo found no vote."""

    code = "not_found"


class TransientStoreError(ClipFeedError):
    """The underlying store is unavailable.

    Surfaced to the caller as-is. Cast and undo are idempotent, so retrying
    the whole request is safe.
    """
