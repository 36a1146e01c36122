import pytest

from scenekit.utils import monotonic_ms, split


def test_split_on_tabs_by_default():
    assert split("1\t2\t3") == ["1", "2", "3"]


def test_split_keeps_empty_fields():
    assert split("a,,b", ",") == ["a", "", "b"]


def test_split_trailing_delimiter_gives_empty_last_field():
    assert split("a\t") == ["a", ""]


def test_split_empty_line_gives_one_empty_token():
    assert split("") == [""]


def test_split_without_delimiter_returns_whole_line():
    assert split("no tabs here") == ["no tabs here"]


@pytest.mark.parametrize(
    "line",
    ["x", "x\ty", "\t\t", "10\t20\t30\t40\t50\t0", "\tleading", "sprites.txt"],
)
def test_split_matches_str_split_for_single_char(line):
    assert split(line) == line.split("\t")


def test_split_joins_back_to_original():
    line = "100\t0\t0\t16\t16\t20"
    assert "\t".join(split(line)) == line


def test_monotonic_ms_never_goes_backwards():
    first = monotonic_ms()
    second = monotonic_ms()
    assert isinstance(first, int)
    assert second >= first