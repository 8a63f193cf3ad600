"""Tests for test identity models."""

import pytest

from chaintest.models.identity import Location, TestIdentity
from chaintest.testing.factories import TestIdentityFactory


def test_identities_sort_by_file_then_line_then_name() -> None:
    """Run order is lexicographic over (file, line, name)."""
    identities = [
        TestIdentity(file="b.py", line=1, name="a"),
        TestIdentity(file="a.py", line=20, name="a"),
        TestIdentity(file="a.py", line=3, name="z"),
        TestIdentity(file="a.py", line=3, name="b"),
    ]

    assert sorted(identities) == [
        TestIdentity(file="a.py", line=3, name="b"),
        TestIdentity(file="a.py", line=3, name="z"),
        TestIdentity(file="a.py", line=20, name="a"),
        TestIdentity(file="b.py", line=1, name="a"),
    ]


def test_identities_are_equal_only_when_all_fields_match() -> None:
    """Equality and hashing cover every field."""
    identity = TestIdentity(file="a.py", line=3, name="b")

    assert identity == TestIdentity(file="a.py", line=3, name="b")
    assert identity != TestIdentity(file="a.py", line=4, name="b")
    assert len({identity, TestIdentity(file="a.py", line=3, name="b")}) == 1


@pytest.mark.parametrize(
    ("file", "line", "name"),
    [
        ("", 1, "name"),
        ("a.py", 0, "name"),
        ("a.py", -5, "name"),
        ("a.py", 1, ""),
    ],
)
def test_rejects_invalid_identities(file: str, line: int, name: str) -> None:
    """File and name must be non-empty, line positive."""
    with pytest.raises(ValueError, match="must"):
        TestIdentity(file=file, line=line, name=name)


def test_location() -> None:
    """The location renders as file:line."""
    identity = TestIdentityFactory.build(file="tests/test_a.py", line=12)

    assert identity.location == Location(file="tests/test_a.py", line=12)
    assert str(identity.location) == "tests/test_a.py:12"
