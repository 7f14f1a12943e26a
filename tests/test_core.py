"""Tests for the QuoteScroll application facade."""

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import responses
from responses import matchers

from quotescroll.core import QuoteScroll
from quotescroll.exceptions import NoImportToResumeError, ValidationError
from quotescroll.models import FeedFilters, ImportProgress, ImportStatus
from quotescroll.sync import ImportListener

AUTH_URL = "https://readwise.io/api/v2/auth/"
EXPORT_URL = "https://readwise.io/api/v2/export/"
FEED_LIMIT = 3


class CountingListener(ImportListener):
    def __init__(self):
        self.progress_count = 0

    def on_progress(self, progress: ImportProgress) -> None:
        self.progress_count += 1


@pytest.fixture
def app():
    quotescroll = QuoteScroll("test_token", db_path=":memory:")
    yield quotescroll
    quotescroll.close()


@pytest.fixture(autouse=True)
def mock_sleep():
    with patch("time.sleep") as mocked:
        yield mocked


@responses.activate
def test_validate_setup(app):
    responses.add(responses.GET, AUTH_URL, status=204)

    app.validate_setup()


@responses.activate
def test_validate_setup_rejected_token(app):
    responses.add(responses.GET, AUTH_URL, status=401)

    with pytest.raises(ValidationError, match="Invalid Readwise API token"):
        app.validate_setup()


def test_validate_setup_missing_token():
    app = QuoteScroll("", db_path=":memory:")
    try:
        with pytest.raises(ValidationError, match="not set"):
            app.validate_setup()
    finally:
        app.close()


@responses.activate
def test_sync_then_feed(app, export_book, export_highlight):
    responses.add(
        responses.GET,
        EXPORT_URL,
        json={
            "nextPageCursor": None,
            "results": [
                export_book(
                    1,
                    [export_highlight(100), export_highlight(101, is_discard=True)],
                    title="Atomic Habits",
                ),
                export_book(2, [], title="Empty"),
            ],
        },
    )

    progress = app.sync()

    assert progress.status == ImportStatus.SUCCESS
    assert [book.title for book in app.get_books()] == ["Atomic Habits"]
    assert [h.id for h in app.get_feed(FeedFilters())] == [100]
    assert {h.id for h in app.get_feed(FeedFilters(show_deleted=True))} == {100, 101}
    assert app.get_import_progress() == progress


@responses.activate
def test_listeners_only_attached_for_one_sync(app, export_book, export_highlight):
    responses.add(
        responses.GET, EXPORT_URL, json={"nextPageCursor": None, "results": [export_book(1, [export_highlight(1)])]}
    )
    listener = CountingListener()

    app.sync(listeners=[listener])
    app.sync()

    assert listener.progress_count == 2  # one page plus the final record, first run only


@responses.activate
def test_incremental_sync_uses_last_success(app, export_book, export_highlight):
    last_sync = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)
    app.store.set_import_progress(ImportProgress(status=ImportStatus.SUCCESS, last_sync_timestamp=last_sync))
    responses.add(
        responses.GET,
        EXPORT_URL,
        json={"nextPageCursor": None, "results": []},
        match=[matchers.query_param_matcher({"updatedAfter": last_sync.isoformat()})],
    )

    progress = app.sync(incremental=True)

    assert progress.status == ImportStatus.SUCCESS


@responses.activate
def test_incremental_sync_without_history_is_full(app):
    responses.add(
        responses.GET,
        EXPORT_URL,
        json={"nextPageCursor": None, "results": []},
        match=[matchers.query_param_matcher({})],
    )

    assert app.sync(incremental=True).status == ImportStatus.SUCCESS


def test_resume_sync_without_interrupted_run(app):
    with pytest.raises(NoImportToResumeError):
        app.resume_sync()


def test_feed_with_samples_and_limit(app, make_highlight):
    app.store.save_highlights([make_highlight(1)])

    feed = app.get_feed(FeedFilters(show_sample_quotes=True), limit=FEED_LIMIT)

    assert len(feed) == FEED_LIMIT
    assert any(h.is_sample for h in feed)


def test_feed_without_samples(app, make_highlight):
    app.store.save_highlights([make_highlight(1)])

    assert [h.id for h in app.get_feed()] == [1]


def test_toggle_favorite(app, make_highlight):
    app.store.save_highlights([make_highlight(1)])

    assert app.toggle_favorite(1).is_favorite is True
    assert app.toggle_favorite(1).is_favorite is False
    assert app.toggle_favorite(2) is None


def test_samples_cannot_be_favorited(app):
    with pytest.raises(ValidationError):
        app.toggle_favorite(-1)
