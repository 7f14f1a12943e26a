"""Tests for the Readwise API client."""

import pytest
import requests
import responses
from responses import matchers

from quotescroll.exceptions import AuthenticationError, RateLimitError, ReadwiseAPIError
from quotescroll.readwise import ReadwiseAPIClient

AUTH_URL = "https://readwise.io/api/v2/auth/"
EXPORT_URL = "https://readwise.io/api/v2/export/"
HTTP_FORBIDDEN = 403
HTTP_SERVER_ERROR = 500


@pytest.fixture
def api_client():
    """Fixture providing a Readwise API client."""
    return ReadwiseAPIClient("test_token")


@responses.activate
def test_validate_token_success(api_client):
    """Test token validation with successful response."""
    responses.add(responses.GET, AUTH_URL, status=204)

    assert api_client.validate_token() is True


@responses.activate
def test_validate_token_failure(api_client):
    """Test token validation with failure response."""
    responses.add(responses.GET, AUTH_URL, json={"error": "Invalid token"}, status=401)

    assert api_client.validate_token() is False


@responses.activate
def test_validate_token_exception(api_client):
    """Test token validation with a network failure."""
    responses.add(responses.GET, AUTH_URL, body=requests.ConnectionError("Network error"))

    assert api_client.validate_token() is False


@responses.activate
def test_fetch_export_page(api_client):
    """Test parsing of a full export page."""
    responses.add(
        responses.GET,
        EXPORT_URL,
        json={
            "count": 1,
            "nextPageCursor": 12345,
            "results": [
                {
                    "user_book_id": 1,
                    "title": "Atomic Habits",
                    "author": "James Clear",
                    "unknown_field": "ignored",
                    "highlights": [{"id": 10, "text": "Habits compound.", "tags": [{"id": 3, "name": "habits"}]}],
                }
            ],
        },
        match=[matchers.header_matcher({"Authorization": "Token test_token"})],
    )

    page = api_client.fetch_export_page()

    assert page.next_page_cursor == "12345"
    assert page.results[0].title == "Atomic Habits"
    assert page.results[0].highlights[0].tags[0].name == "habits"


@responses.activate
def test_fetch_export_page_passes_parameters(api_client):
    responses.add(
        responses.GET,
        EXPORT_URL,
        json={"nextPageCursor": None, "results": []},
        match=[
            matchers.query_param_matcher(
                {"pageCursor": "abc", "updatedAfter": "2024-01-01", "ids": "1,2", "includeDeleted": "true"}
            )
        ],
    )

    page = api_client.fetch_export_page(page_cursor="abc", updated_after="2024-01-01", ids="1,2", include_deleted=True)

    assert page.next_page_cursor is None
    assert page.results == []


@responses.activate
@pytest.mark.parametrize("status", [401, HTTP_FORBIDDEN])
def test_fetch_export_page_auth_error(api_client, status):
    responses.add(responses.GET, EXPORT_URL, status=status)

    with pytest.raises(AuthenticationError) as exc_info:
        api_client.fetch_export_page()

    assert exc_info.value.status == status


@responses.activate
def test_fetch_export_page_rate_limited(api_client):
    responses.add(responses.GET, EXPORT_URL, status=429, headers={"Retry-After": "17"})

    with pytest.raises(RateLimitError) as exc_info:
        api_client.fetch_export_page()

    assert exc_info.value.retry_after == 17


@responses.activate
def test_fetch_export_page_rate_limited_without_header(api_client):
    responses.add(responses.GET, EXPORT_URL, status=429)

    with pytest.raises(RateLimitError) as exc_info:
        api_client.fetch_export_page()

    assert exc_info.value.retry_after == ReadwiseAPIClient.DEFAULT_RETRY_AFTER


@responses.activate
def test_fetch_export_page_server_error(api_client):
    responses.add(responses.GET, EXPORT_URL, status=HTTP_SERVER_ERROR, body="oops")

    with pytest.raises(ReadwiseAPIError) as exc_info:
        api_client.fetch_export_page()

    assert exc_info.value.message == "Failed to fetch highlights from Readwise"
    assert exc_info.value.status == HTTP_SERVER_ERROR


@responses.activate
def test_fetch_export_page_network_error(api_client):
    responses.add(responses.GET, EXPORT_URL, body=requests.ConnectionError("down"))

    with pytest.raises(ReadwiseAPIError, match="Network error"):
        api_client.fetch_export_page()


@responses.activate
def test_fetch_export_page_malformed_payload(api_client):
    responses.add(responses.GET, EXPORT_URL, body="<html>not json</html>", status=200)

    with pytest.raises(ReadwiseAPIError, match="Malformed export response"):
        api_client.fetch_export_page()


@responses.activate
def test_fetch_export_page_wrong_shape(api_client):
    responses.add(responses.GET, EXPORT_URL, json={"results": [{"title": "no id"}]}, status=200)

    with pytest.raises(ReadwiseAPIError, match="Malformed export response"):
        api_client.fetch_export_page()
