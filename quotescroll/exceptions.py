"""Exceptions for the quotescroll application."""


class QuoteScrollError(Exception):
    """Base class for all application errors."""

    pass


class ValidationError(QuoteScrollError):
    """Error raised when validation fails."""

    pass


class ImportAlreadyRunningError(QuoteScrollError):
    """Error raised when an import is started while another one is still running."""

    pass


class NoImportToResumeError(QuoteScrollError):
    """Error raised when there is no interrupted import with a stored page cursor."""

    pass


class ReadwiseAPIError(QuoteScrollError):
    """Error raised when a Readwise API request fails.

    Covers network failures, non-success responses and malformed payloads.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthenticationError(ReadwiseAPIError):
    """Error raised when Readwise rejects the API token (HTTP 401/403)."""

    pass


class RateLimitError(ReadwiseAPIError):
    """Error raised when Readwise rate-limits the client (HTTP 429)."""

    def __init__(self, message: str, retry_after: int, status: int = 429):
        super().__init__(message, status=status)
        self.retry_after = retry_after
