"""Annotation Parser — splits a field annotation into its key and constraint clauses.

Grammar: key[;clause]* where clause is `optional` or `kind=argument`.

Invariants:
    - Delimiter is `;`, no escaping: arguments must not contain `;`
    - The key is the first segment, non-empty, and never contains `=`
    - Clause arguments split on the FIRST `=` only (regex arguments may contain `=`)
    - Unrecognized clause kinds (and empty segments) are dropped silently
    - Constraint order is preserved exactly as written

Design Decisions:
    - Frozen dataclasses: a parsed annotation is a value, safe to share and compare
    - Unknown kinds dropped, never an error: annotations written for newer
      clause kinds still bind (ADR: forward compatibility)
"""

from dataclasses import dataclass, field

from envbind.core.domain_types import ConstraintKind
from envbind.core.errors import ErrorContext, MalformedAnnotationError


CLAUSE_DELIMITER: str = ";"
ARGUMENT_SEPARATOR: str = "="


@dataclass(frozen=True)
class Clause:
    """One constraint clause; argument is None only for `optional`."""
    kind: ConstraintKind
    argument: str | None = None

    @property
    def raw(self) -> str:
        if self.argument is None:
            return self.kind.value
        return f"{self.kind.value}{ARGUMENT_SEPARATOR}{self.argument}"


@dataclass(frozen=True)
class ParsedAnnotation:
    """Key clause plus ordered constraint clauses."""
    key: str
    clauses: tuple[Clause, ...] = field(default_factory=tuple)

    @property
    def optional(self) -> bool:
        return any(c.kind is ConstraintKind.OPTIONAL for c in self.clauses)

    @property
    def constraints(self) -> tuple[Clause, ...]:
        """Clauses that check a present value (everything but `optional`)."""
        return tuple(c for c in self.clauses if c.kind is not ConstraintKind.OPTIONAL)


def parse_clause(segment: str) -> Clause | None:
    """Parse one non-key segment. Returns None for unrecognized kinds."""
    if segment == ConstraintKind.OPTIONAL.value:
        return Clause(ConstraintKind.OPTIONAL)

    kind, sep, argument = segment.partition(ARGUMENT_SEPARATOR)
    if not sep or kind == ConstraintKind.OPTIONAL.value:
        return None
    try:
        return Clause(ConstraintKind(kind), argument)
    except ValueError:
        return None


def parse_annotation(annotation: str | None, field_name: str | None = None) -> ParsedAnnotation:
    """Split an annotation into key and clauses.

    Raises:
        MalformedAnnotationError: annotation missing/empty, or key empty or containing `=`.
    """
    context = ErrorContext(field_name=field_name)
    if not annotation:
        raise MalformedAnnotationError(
            f"failed to find env var name for field '{field_name}', "
            f"missing annotation? e.g. \"ENVIRONMENT;oneof=development,production\"",
            context,
        )

    key, *segments = annotation.split(CLAUSE_DELIMITER)
    if not key:
        raise MalformedAnnotationError(
            f"empty env var name in annotation '{annotation}' for field '{field_name}'",
            context,
        )
    if ARGUMENT_SEPARATOR in key:
        context.env_key = key
        raise MalformedAnnotationError(
            f"env var name '{key}' for field '{field_name}' must not contain "
            f"'{ARGUMENT_SEPARATOR}'; the key must come first in the annotation",
            context,
        )

    clauses = tuple(
        clause for clause in (parse_clause(s) for s in segments) if clause is not None
    )
    return ParsedAnnotation(key=key, clauses=clauses)
