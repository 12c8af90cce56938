"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DeclaredType has exactly 3 members: text, integer, float
    - Each DeclaredType maps to exactly one Python type (bool is NOT an integer here)
    - ConstraintKind lists every clause kind the validator understands

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (error responses, logs)
"""

from enum import Enum
from typing import Callable, Optional


# ─── Lookup ──────────────────────────────────────────────────────

# lookup(key) -> value, or None when the variable is unset
EnvLookup = Callable[[str], Optional[str]]


# ─── Limits ──────────────────────────────────────────────────────

INT64_MIN: int = -(2 ** 63)
INT64_MAX: int = 2 ** 63 - 1


# ─── Enums ───────────────────────────────────────────────────────

class DeclaredType(str, Enum):
    """Semantic type of a configuration field."""
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    @property
    def zero_value(self) -> str | int | float:
        return _ZERO_VALUES[self]

    @classmethod
    def from_python_type(cls, tp: object) -> "DeclaredType | None":
        """Exact mapping from a Python annotation; None when unsupported."""
        for declared, python_type in _PYTHON_TYPES.items():
            if tp is python_type:
                return declared
        return None


_PYTHON_TYPES: dict[DeclaredType, type] = {
    DeclaredType.TEXT: str,
    DeclaredType.INTEGER: int,
    DeclaredType.FLOAT: float,
}

_ZERO_VALUES: dict[DeclaredType, str | int | float] = {
    DeclaredType.TEXT: "",
    DeclaredType.INTEGER: 0,
    DeclaredType.FLOAT: 0.0,
}


class ConstraintKind(str, Enum):
    """Clause kinds recognized after the key clause."""
    OPTIONAL = "optional"
    ONEOF = "oneof"
    MIN = "min"
    MAX = "max"
    REGEX = "regex"
    FORMAT = "format"


class FieldStatus(str, Enum):
    """Terminal success states of one field; failures raise instead."""
    SKIPPED = "skipped"
    BOUND = "bound"


# Only format literal enforced; every other literal passes
URL_FORMAT: str = "URL"
ALLOWED_URL_SCHEMES: tuple[str, ...] = ("http", "https")
