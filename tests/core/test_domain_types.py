"""Domain Types — verifies enum members and Python type mapping.

Tests:
    - DeclaredType has exactly 3 members with the expected zero values
    - from_python_type is an exact mapping (bool is not int)
    - ConstraintKind lists every recognized clause kind
"""

from envbind.core.domain_types import ConstraintKind, DeclaredType


def test_declared_type_has_exactly_three_members():
    assert len(DeclaredType) == 3
    assert DeclaredType("text") is DeclaredType.TEXT


def test_python_types_and_zero_values():
    assert DeclaredType.TEXT.python_type is str
    assert DeclaredType.INTEGER.python_type is int
    assert DeclaredType.FLOAT.python_type is float
    assert DeclaredType.TEXT.zero_value == ""
    assert DeclaredType.INTEGER.zero_value == 0
    assert type(DeclaredType.FLOAT.zero_value) is float


def test_from_python_type_is_exact():
    assert DeclaredType.from_python_type(str) is DeclaredType.TEXT
    assert DeclaredType.from_python_type(int) is DeclaredType.INTEGER
    assert DeclaredType.from_python_type(float) is DeclaredType.FLOAT
    assert DeclaredType.from_python_type(bool) is None
    assert DeclaredType.from_python_type(list[str]) is None
    assert DeclaredType.from_python_type(str | None) is None


def test_constraint_kinds():
    assert {k.value for k in ConstraintKind} == {
        "optional", "oneof", "min", "max", "regex", "format",
    }
