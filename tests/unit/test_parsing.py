"""Unit tests for shared value parsing helpers."""

from __future__ import annotations

import pytest

from modsplit.parsing import (
    normalize_optional_string,
    parse_permissive_boolean,
    parse_positive_number,
)


def test_normalize_optional_string() -> None:
    assert normalize_optional_string(None) is None
    assert normalize_optional_string("   ") is None
    assert normalize_optional_string(" out ") == "out"
    assert normalize_optional_string(25) == "25"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, True),
        ("YES", True),
        (" on ", True),
        ("0", False),
        ("off", False),
        ("maybe", None),
        (None, None),
    ],
)
def test_parse_permissive_boolean(value: object, expected: bool | None) -> None:
    assert parse_permissive_boolean(value) is expected


def test_parse_positive_number_accepts_numbers_and_numeric_strings() -> None:
    assert parse_positive_number(4, "line_tolerance") == 4.0
    assert parse_positive_number(" 2.5 ", "line_tolerance") == 2.5


@pytest.mark.parametrize("value", [0, -3, "abc", "", True])
def test_parse_positive_number_rejects_invalid_values(value: object) -> None:
    with pytest.raises(ValueError, match="`line_tolerance` must be a positive number."):
        parse_positive_number(value, "line_tolerance")
