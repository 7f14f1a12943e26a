"""Tests for feed filtering and ordering."""

import random
from datetime import datetime, timedelta, timezone

from quotescroll.feed import get_sorted_highlights, sort_highlights
from quotescroll.feed.samples import DEFAULT_TARGET_COUNT
from quotescroll.models import FeedFilters

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
SHUFFLE_ITEMS = 20
SHUFFLE_ATTEMPTS = 5


def test_newest_first(make_highlight):
    highlights = [make_highlight(i, highlighted_at=BASE_TIME + timedelta(days=i)) for i in range(1, 6)]

    result = sort_highlights(highlights)

    assert [h.id for h in result] == [5, 4, 3, 2, 1]


def test_equal_timestamps_larger_id_first(make_highlight):
    highlights = [make_highlight(i, highlighted_at=BASE_TIME) for i in (3, 10, 7)]

    assert [h.id for h in sort_highlights(highlights)] == [10, 7, 3]


def test_created_at_used_when_highlighted_at_missing(make_highlight):
    highlights = [
        make_highlight(1, highlighted_at=None, created_at=BASE_TIME + timedelta(hours=2)),
        make_highlight(2, highlighted_at=BASE_TIME + timedelta(hours=1)),
        make_highlight(3, highlighted_at=None, created_at=BASE_TIME + timedelta(hours=2)),
    ]

    assert [h.id for h in sort_highlights(highlights)] == [3, 1, 2]


def test_undated_highlights_go_last(make_highlight):
    highlights = [
        make_highlight(5, highlighted_at=None, created_at=None),
        make_highlight(1, highlighted_at=BASE_TIME),
        make_highlight(9, highlighted_at=None, created_at=None),
    ]

    assert [h.id for h in sort_highlights(highlights)] == [1, 9, 5]


def test_naive_timestamps_treated_as_utc(make_highlight):
    highlights = [
        make_highlight(1, highlighted_at=datetime(2024, 5, 1, 13, 0)),
        make_highlight(2, highlighted_at=BASE_TIME),
    ]

    assert [h.id for h in sort_highlights(highlights)] == [1, 2]


def test_sort_is_deterministic_and_does_not_mutate(make_highlight):
    highlights = [make_highlight(i, highlighted_at=BASE_TIME + timedelta(minutes=i % 3)) for i in range(1, 10)]
    original = list(highlights)

    first = sort_highlights(highlights)
    second = sort_highlights(list(reversed(highlights)))

    assert [h.id for h in first] == [h.id for h in second]
    assert highlights == original


def test_randomize_produces_different_orders(make_highlight):
    highlights = [make_highlight(i, highlighted_at=BASE_TIME + timedelta(minutes=i)) for i in range(SHUFFLE_ITEMS)]

    orders = {tuple(h.id for h in sort_highlights(highlights, randomize=True)) for _ in range(SHUFFLE_ATTEMPTS)}

    assert len(orders) > 1


def test_randomize_with_seeded_rng_is_a_permutation(make_highlight):
    highlights = [make_highlight(i) for i in range(SHUFFLE_ITEMS)]

    result = sort_highlights(highlights, randomize=True, rng=random.Random(1234))

    assert sorted(h.id for h in result) == list(range(SHUFFLE_ITEMS))


def test_default_filters_hide_deleted(make_highlight):
    highlights = [make_highlight(1), make_highlight(2, is_deleted=True)]

    assert [h.id for h in get_sorted_highlights(highlights)] == [1]
    assert {h.id for h in get_sorted_highlights(highlights, FeedFilters(show_deleted=True))} == {1, 2}


def test_favorites_only_and_not_deleted(make_highlight):
    highlights = [
        make_highlight(1, is_favorite=True),
        make_highlight(2, is_favorite=True, is_deleted=True),
        make_highlight(3),
        make_highlight(4, is_deleted=True),
    ]

    result = get_sorted_highlights(highlights, FeedFilters(show_deleted=False, show_favorites_only=True))

    assert [h.id for h in result] == [1]


def test_book_filter(make_highlight):
    highlights = [make_highlight(1, user_book_id=10), make_highlight(2, user_book_id=20)]

    assert [h.id for h in get_sorted_highlights(highlights, FeedFilters(book_id=20))] == [2]
    # Non-positive book ids mean "no book filter"
    assert len(get_sorted_highlights(highlights, FeedFilters(book_id=0))) == 2


def test_search_matches_text_and_note_case_insensitively(make_highlight):
    highlights = [
        make_highlight(1, text="The Stoic way"),
        make_highlight(2, text="Nothing here", note="stoicism notes"),
        make_highlight(3, text="Unrelated"),
    ]

    result = get_sorted_highlights(highlights, FeedFilters(search_query="STOIC"))

    assert {h.id for h in result} == {1, 2}


def test_samples_pad_a_sparse_feed(make_highlight):
    highlights = [make_highlight(1), make_highlight(2)]

    result = get_sorted_highlights(highlights, FeedFilters(), add_samples=True)

    samples = [h for h in result if h.is_sample]
    assert samples
    assert {h.id for h in result if not h.is_sample} == {1, 2}
    assert all(h.id < 0 for h in samples)


def test_no_samples_for_a_full_feed(make_highlight):
    highlights = [make_highlight(i) for i in range(1, DEFAULT_TARGET_COUNT + 1)]

    result = get_sorted_highlights(highlights, FeedFilters(), add_samples=True)

    assert not any(h.is_sample for h in result)


def test_book_filter_excludes_samples(make_highlight):
    highlights = [make_highlight(1, user_book_id=10)]

    result = get_sorted_highlights(highlights, FeedFilters(book_id=10), add_samples=True)

    assert [h.id for h in result] == [1]
