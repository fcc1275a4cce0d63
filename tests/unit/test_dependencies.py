"""Unit tests for request-level helpers in the dependency wiring."""
import pytest

from src.api.dependencies import strip_auth_scheme


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("Bearer abc.def", "abc.def"),
        ("bearer abc", "abc"),
        ("abc", "abc"),
        ("  Bearer   abc  ", "abc"),
        ("Bearer", None),
        ("bearer   ", None),
        ("", None),
        (None, None),
    ],
)
def test_strip_auth_scheme(header: str | None, expected: str | None) -> None:
    assert strip_auth_scheme(header) == expected
