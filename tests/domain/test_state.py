from __future__ import annotations

from collections import OrderedDict

import pytest

from lib_log_redis.domain.state import ORIGINAL_FORMAT_KEY, capture_state


def test_none_state_is_absent() -> None:
    assert capture_state(None) is None


def test_pairs_drop_original_format_sentinel() -> None:
    state = [(ORIGINAL_FORMAT_KEY, "User {userId} logged in"), ("userId", 42)]

    assert capture_state(state) == {"userId": 42}


def test_pairs_keep_insertion_order() -> None:
    state = [("b", 1), (ORIGINAL_FORMAT_KEY, "tmpl"), ("a", 2), ("c", 3)]

    assert list(capture_state(state)) == ["b", "a", "c"]


def test_duplicate_keys_keep_last_occurrence() -> None:
    state = [("user", "first"), ("user", "second")]

    assert capture_state(state) == {"user": "second"}


def test_mapping_state_drops_sentinel() -> None:
    state = OrderedDict([(ORIGINAL_FORMAT_KEY, "tmpl"), ("path", "/health")])

    assert capture_state(state) == {"path": "/health"}


def test_generator_of_pairs_is_captured() -> None:
    state = ((key, len(key)) for key in ("ab", "abc"))

    assert capture_state(state) == {"ab": 2, "abc": 3}


def test_empty_pair_list_becomes_empty_mapping() -> None:
    assert capture_state([]) == {}


@pytest.mark.parametrize(
    "state, expected",
    [
        ("state", "state"),
        (42, "42"),
        (b"raw", "b'raw'"),
        ([1, 2], "[1, 2]"),
        ([("ok", 1), ("bad",)], "[('ok', 1), ('bad',)]"),
        ([(1, "int key")], "[(1, 'int key')]"),
    ],
)
def test_non_pair_state_is_rendered_as_text(state: object, expected: str) -> None:
    assert capture_state(state) == expected


def test_custom_object_uses_str() -> None:
    class Payload:
        def __str__(self) -> str:
            return "payload!"

    assert capture_state(Payload()) == "payload!"
