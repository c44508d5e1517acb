"""Tests for target sequences and the contiguous-run matcher."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from breach_protocol.solver import (
    IncomparableTokensError,
    Interner,
    Sequence,
    TokenNotFoundError,
    make_tokens,
)


def tokens(interner, text):
    return make_tokens(interner, text.split())


@pytest.mark.parametrize(
    "pattern, stream, expect_match",
    [
        pytest.param("1A 2B 1A 3C", "1A 2B 3C 1A 2B 1A 3C", True, id="bare"),
        pytest.param("1A 2B 1A 3C", "1A 2B 3C 1A 2B 1A", False, id="incomplete"),
        pytest.param("1A 2B 1A 3C", "1A 2B 3C 1A 2B 1A 3C 2B 3C 1A", True, id="extra"),
        pytest.param("1A 2B", "1A 2B", True, id="exact"),
        pytest.param("1A 2B 3C", "3C 2B 1A", False, id="backwards"),
        pytest.param("1A 1A 2B", "1A 1A 1A 2B", True, id="overlapping-start"),
        pytest.param("2B", "1A 3C 2B", True, id="single-token"),
        pytest.param("1A 3C", "1A 2B 3C", False, id="subsequence-only"),
    ],
)
def test_is_matched(interner, pattern, stream, expect_match):
    sequence = Sequence(interner, pattern.split())
    assert sequence.is_matched(tokens(interner, stream)) is expect_match


def test_find_reports_first_offset(interner):
    sequence = Sequence(interner, ["1A", "2B", "1A", "3C"])
    assert sequence.find(tokens(interner, "1A 2B 3C 1A 2B 1A 3C")) == 3
    assert sequence.find(tokens(interner, "3C 3C")) is None


def test_stream_shorter_than_pattern(interner):
    sequence = Sequence(interner, ["1A", "2B", "3C"])
    assert not sequence.is_matched(tokens(interner, "1A 2B"))
    assert not sequence.is_matched([])


def test_empty_pattern_never_matches(interner):
    sequence = Sequence(interner, [])
    assert not sequence.is_matched(tokens(interner, "1A 2B"))
    assert not sequence.is_matched([])


def test_accepts_any_iterable(interner):
    sequence = Sequence(interner, ["2B", "3C"])
    stream = iter(tokens(interner, "1A 2B 3C"))
    assert sequence.is_matched(stream)


def test_unknown_item_is_lookup_failure(interner):
    with pytest.raises(TokenNotFoundError) as excinfo:
        Sequence(interner, ["1A", "FF", "2B"])
    assert excinfo.value.value == "FF"


def test_foreign_stream_is_rejected(interner):
    sequence = Sequence(interner, ["1A"])
    other = Interner(["1A"])
    with pytest.raises(IncomparableTokensError):
        sequence.is_matched([other.get("1A")])


def test_label_and_name(interner):
    named = Sequence(interner, ["1A", "2B"], name="datamine")
    unnamed = Sequence(interner, ["1A", "2B"])
    assert named.label == "datamine"
    assert unnamed.label == "1A 2B"
    assert len(named) == 2
    assert [t.value for t in unnamed] == ["1A", "2B"]


def test_from_tokens(interner):
    sequence = Sequence.from_tokens(tokens(interner, "3C 1A"), name="x")
    assert sequence.name == "x"
    assert sequence.is_matched(tokens(interner, "2B 3C 1A"))


def brute_force_find(pattern, stream):
    if not pattern:
        return None
    for offset in range(len(stream) - len(pattern) + 1):
        if stream[offset:offset + len(pattern)] == pattern:
            return offset
    return None


@given(
    pattern=st.lists(st.sampled_from(["1A", "2B", "3C"]), max_size=4),
    stream=st.lists(st.sampled_from(["1A", "2B", "3C"]), max_size=10),
)
@settings(max_examples=200)
def test_agrees_with_window_scan(pattern, stream):
    interner = Interner(["1A", "2B", "3C"])
    sequence = Sequence(interner, pattern)
    assert sequence.find(make_tokens(interner, stream)) == brute_force_find(pattern, stream)
