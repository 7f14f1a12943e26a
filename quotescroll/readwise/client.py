import logging

import pydantic
import requests

from ..exceptions import AuthenticationError, RateLimitError, ReadwiseAPIError
from .models import ReadwiseExportResponse

# Initialize logger for this module
logger = logging.getLogger(__name__)


class ReadwiseAPIClient:
    """Client for reading highlights from the Readwise API."""

    API_BASE_URL = "https://readwise.io/api/v2"
    EXPORT_ENDPOINT = f"{API_BASE_URL}/export/"
    AUTH_ENDPOINT = f"{API_BASE_URL}/auth/"

    # HTTP status codes
    HTTP_OK = 200
    HTTP_NO_CONTENT = 204
    HTTP_UNAUTHORIZED = 401
    HTTP_FORBIDDEN = 403
    HTTP_TOO_MANY_REQUESTS = 429

    DEFAULT_RETRY_AFTER = 60

    def __init__(self, api_token: str):
        """Initialize the Readwise API client.

        Args:
            api_token: Readwise API token
        """
        logger.debug("Initializing ReadwiseAPIClient.")
        self.api_token = api_token
        self.headers = {"Authorization": f"Token {api_token}"}
        logger.debug("API Headers (token redacted): %s", {"Authorization": "Token [REDACTED]"})

    def validate_token(self) -> bool:
        """Validate the API token by making a request to the auth endpoint.

        Returns:
            True if the token is valid, False otherwise
        """
        logger.info("Validating Readwise API token...")
        try:
            response = requests.get(self.AUTH_ENDPOINT, headers=self.headers)
            is_valid = response.status_code in (self.HTTP_OK, self.HTTP_NO_CONTENT)
            if is_valid:
                logger.info("Readwise API token is valid (HTTP %d).", response.status_code)
            else:
                logger.warning(
                    "Readwise API token validation failed. Status: %d, Response: %s",
                    response.status_code,
                    response.text[:200],  # Log only the start of the response
                )
            return is_valid
        except requests.RequestException:
            logger.error("Error validating Readwise API token.", exc_info=True)
            return False

    def fetch_export_page(
        self,
        page_cursor: str | None = None,
        updated_after: str | None = None,
        ids: str | None = None,
        include_deleted: bool = False,
    ) -> ReadwiseExportResponse:
        """Fetch one page of the highlight export.

        Args:
            page_cursor: Cursor returned by the previous page, None for the first page
            updated_after: Only return books/highlights updated after this ISO timestamp
            ids: Comma-separated book ids to restrict the export to
            include_deleted: Also return highlights discarded in Readwise

        Returns:
            The parsed export page

        Raises:
            AuthenticationError: The token was rejected (401/403)
            RateLimitError: Readwise asked us to back off (429)
            ReadwiseAPIError: Any other network, HTTP or payload failure
        """
        params = {}
        if page_cursor:
            params["pageCursor"] = page_cursor
        if updated_after:
            params["updatedAfter"] = updated_after
        if ids:
            params["ids"] = ids
        if include_deleted:
            params["includeDeleted"] = "true"

        logger.debug("Requesting export page with params: %s", params)
        try:
            response = requests.get(self.EXPORT_ENDPOINT, headers=self.headers, params=params)
        except requests.RequestException as e:
            logger.error("Network error fetching export page.", exc_info=True)
            raise ReadwiseAPIError("Network error connecting to Readwise") from e

        self._raise_for_status(response)

        try:
            page = ReadwiseExportResponse.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as e:
            logger.error("Malformed export response: %s", response.text[:500], exc_info=True)
            raise ReadwiseAPIError("Malformed export response", status=response.status_code) from e

        logger.debug(
            "Fetched export page: %d books, next cursor: %s", len(page.results), page.next_page_cursor or "none"
        )
        return page

    def _raise_for_status(self, response: requests.Response) -> None:
        """Map non-success responses onto the client's exception types."""
        status = response.status_code
        if status in (self.HTTP_UNAUTHORIZED, self.HTTP_FORBIDDEN):
            logger.warning("Readwise rejected the API token (HTTP %d).", status)
            raise AuthenticationError("Invalid Readwise token", status=status)

        if status == self.HTTP_TOO_MANY_REQUESTS:
            retry_after = self._parse_retry_after(response.headers.get("Retry-After"))
            logger.warning("Rate limited by Readwise. Retry after %d seconds.", retry_after)
            raise RateLimitError(f"Rate limited. Retry after {retry_after} seconds.", retry_after=retry_after)

        if not response.ok:
            logger.error("Readwise export error. Status: %d, Response: %s", status, response.text[:500])
            raise ReadwiseAPIError("Failed to fetch highlights from Readwise", status=status)

    def _parse_retry_after(self, value: str | None) -> int:
        if not value:
            return self.DEFAULT_RETRY_AFTER
        try:
            return int(value)
        except ValueError:
            logger.debug("Unparseable Retry-After header: %s", value)
            return self.DEFAULT_RETRY_AFTER
