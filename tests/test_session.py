import pytest

from argclaim import (
    DuplicateArgumentError,
    PositionalCountOutOfRangeError,
    TooManyValuesError,
    ValueExpectedButMissingError,
)
from argclaim.session import ParseSession


def session(*raw, **kwargs):
    return ParseSession.from_raw(raw, **kwargs)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (["--flag"], True),
        (["--no-flag"], False),
        (["--alias"], True),
        (["--no-alias"], False),
        (["-f"], True),
        (["-xfy"], True),
        ([], None),
        (["--other"], None),
    ],
)
def test_claim_flag(raw, expected):
    s = session(*raw)
    assert s.claim_flag("flag", ["flag", "alias"], ["f"]) is expected


@pytest.mark.parametrize(
    "raw",
    [
        ["--flag", "--no-flag"],
        ["--no-flag", "--no-flag"],
        ["--flag", "-f"],
        ["-f", "-f"],
        ["--alias", "--flag"],
    ],
)
def test_claim_flag_duplicate(raw):
    s = session(*raw)
    with pytest.raises(DuplicateArgumentError) as e:
        s.claim_flag("flag", ["flag", "alias"], ["f"])
    assert e.value.name == "flag"


def test_claim_flag_consumes_single_char_per_bundle():
    s = session("-ff")
    assert s.claim_flag("flag", ["flag"], ["f"]) is True
    assert s.unclaimed_short_names() == [["f"]]


def test_claim_flag_skips_claimed_names():
    s = session("--flag")
    assert s.claim_flag("flag", ["flag"]) is True
    assert s.claim_flag("flag", ["flag"]) is None
    assert s.unclaimed_names() == []


def test_claim_multi_parameter_order():
    s = session("--m", "a", "-m", "b", "-m", "c")
    assert s.claim_multi_parameter("m", ["m"], ["m"]) == ["a", "b", "c"]
    assert s.unclaimed_values() == []


def test_claim_multi_parameter_absent():
    s = session("positional")
    assert s.claim_multi_parameter("m", ["m"], ["m"]) == []
    assert s.unclaimed_values() == ["positional"]


@pytest.mark.parametrize(
    "raw, used",
    [
        (["--m"], "--m"),
        (["--m", "--other"], "--m"),
        (["-m", "-x"], "-m"),
        (["a", "--m"], "--m"),
    ],
)
def test_claim_multi_parameter_value_missing(raw, used):
    s = session(*raw)
    with pytest.raises(ValueExpectedButMissingError) as e:
        s.claim_multi_parameter("m", ["m"], ["m"])
    assert e.value.name == "m"
    assert e.value.token == used


def test_claim_parameter_following_value_already_claimed():
    s = session("-ab", "value")
    assert s.claim_parameter("a", ["a"], ["a"]) == "value"
    with pytest.raises(ValueExpectedButMissingError):
        s.claim_parameter("b", ["b"], ["b"])


def test_claim_parameter():
    s = session("pos1", "--param", "value", "pos2")
    assert s.claim_parameter("param", ["param"]) == "value"
    assert s.unclaimed_values() == ["pos1", "pos2"]


def test_claim_parameter_absent():
    assert session("value").claim_parameter("param", ["param"]) is None


def test_claim_parameter_too_many_values():
    s = session("--param", "a", "--alias", "b")
    with pytest.raises(TooManyValuesError) as e:
        s.claim_parameter("param", ["param", "alias"])
    assert e.value.values == ["a", "b"]
    assert isinstance(e.value, DuplicateArgumentError)


def test_value_claimed_at_most_once():
    s = session("--a", "--b", "value")
    with pytest.raises(ValueExpectedButMissingError):
        s.claim_parameter("a", ["a"])
    assert s.claim_parameter("b", ["b"]) == "value"


def test_claim_positional():
    s = session("x", "--param", "value", "y", "--", "--z")
    s.claim_parameter("param", ["param"])
    assert s.claim_positional() == ["x", "y", "--z"]
    assert s.unclaimed_values() == []


@pytest.mark.parametrize(
    "min_count, max_count, raw",
    [
        (3, None, ["a", "b"]),
        (None, 1, ["a", "b"]),
        (1, 1, []),
        (0, 0, ["--", "a"]),
    ],
)
def test_claim_positional_out_of_range(min_count, max_count, raw):
    s = session(*raw)
    with pytest.raises(PositionalCountOutOfRangeError) as e:
        s.claim_positional(min_count, max_count)
    assert e.value.min_count == min_count
    assert e.value.max_count == max_count
    assert e.value.actual == len([x for x in raw if x != "--"])


def test_claim_positional_in_range():
    assert session("a", "b").claim_positional(1, 2) == ["a", "b"]


def test_unclaimed_names():
    s = session("--known", "--unknown", "-ab")
    s.claim_flag("known", ["known"])
    s.claim_flag("all", ["all"], ["a"])
    assert s.unclaimed_names() == ["unknown"]
    assert s.unclaimed_short_names() == [["b"]]
