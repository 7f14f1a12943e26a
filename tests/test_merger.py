"""Tests for merging imported highlights into the local set."""

import pytest

from quotescroll.sync.merger import LOCALLY_OWNED_FIELDS, deduplicate_highlights


def _by_id(highlights):
    return {h.id: h for h in highlights}


@pytest.fixture
def existing(make_highlight):
    return [
        make_highlight(1, text="one", is_favorite=True),
        make_highlight(2, text="two"),
        make_highlight(3, text="three", is_favorite=True, note="keep me"),
    ]


@pytest.fixture
def incoming(make_highlight):
    return [
        make_highlight(2, text="two (edited)", is_favorite=True),
        make_highlight(3, text="three (edited)", is_favorite=False, note="remote note", is_deleted=True),
        make_highlight(4, text="four"),
    ]


def test_merge_keeps_union_of_ids(existing, incoming):
    merged = deduplicate_highlights(existing, incoming)

    assert {h.id for h in merged} == {h.id for h in existing} | {h.id for h in incoming}
    assert len(merged) == len({h.id for h in merged})


def test_local_favorite_wins_and_remote_wins_everything_else(existing, incoming):
    merged = _by_id(deduplicate_highlights(existing, incoming))
    existing_by_id = _by_id(existing)

    for remote in incoming:
        if remote.id not in existing_by_id:
            continue
        result = merged[remote.id]
        assert result.is_favorite == existing_by_id[remote.id].is_favorite
        for field in type(remote).model_fields:
            if field not in LOCALLY_OWNED_FIELDS:
                assert getattr(result, field) == getattr(remote, field)


def test_ids_on_one_side_pass_through_unchanged(existing, incoming):
    merged = _by_id(deduplicate_highlights(existing, incoming))

    assert merged[1] == existing[0]
    assert merged[4] == incoming[2]


def test_merge_is_idempotent(existing, incoming):
    once = deduplicate_highlights(existing, incoming)
    twice = deduplicate_highlights(once, incoming)

    assert _by_id(twice) == _by_id(once)


def test_merge_with_empty_inputs(existing, incoming):
    assert deduplicate_highlights([], []) == []
    assert _by_id(deduplicate_highlights(existing, [])) == _by_id(existing)
    assert _by_id(deduplicate_highlights([], incoming)) == _by_id(incoming)


def test_favorite_survives_reimport(make_highlight):
    """Stored id=7 is a favorite; the re-import changes the text but not the flag."""
    stored = [make_highlight(7, text="old", is_favorite=True)]
    reimported = [make_highlight(7, text="new", is_favorite=False)]

    merged = deduplicate_highlights(stored, reimported)

    assert len(merged) == 1
    assert merged[0].text == "new"
    assert merged[0].is_favorite is True


def test_inputs_are_not_mutated(existing, incoming):
    before = [h.model_copy() for h in existing]

    deduplicate_highlights(existing, incoming)

    assert existing == before
