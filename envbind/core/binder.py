"""Binder — drives every declared field through validate → coerce → assign.

Invariants:
    - Definition errors (annotation, declared type) surface before ANY lookup
    - Fields are processed strictly in declaration order; first error aborts the call
    - Fields before the failing one stay assigned; the rest keep their zero values
    - Optional + absent fields are never coerced nor assigned
    - Assignment requires the destination field's type to match the value's type exactly

Design Decisions:
    - iter_bind() yields one FieldOutcome per field so the service shell can log
      progress while the core stays free of logging
    - Field definitions are duck-typed (FieldDefinition protocol): core never
      imports the pydantic schema layer
"""

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any, Iterator, Protocol, Sequence

from envbind.core.annotation import ParsedAnnotation, parse_annotation
from envbind.core.coerce import coerce_value
from envbind.core.domain_types import DeclaredType, EnvLookup, FieldStatus
from envbind.core.enforce_constraints import is_absent, validate_constraints
from envbind.core.errors import AssignmentError, ErrorContext, UnsupportedFieldTypeError


class FieldDefinition(Protocol):
    name: str
    declared_type: DeclaredType
    annotation: str | None


@dataclass(frozen=True)
class FieldOutcome:
    """What happened to one field."""
    name: str
    env_key: str
    status: FieldStatus
    value: str | int | float | None = None


def prepare_fields(
    fields: Sequence[FieldDefinition],
) -> list[tuple[FieldDefinition, ParsedAnnotation]]:
    """Parse every annotation and check every declared type up front."""
    prepared = []
    for spec in fields:
        annotation = parse_annotation(spec.annotation, spec.name)
        if not isinstance(spec.declared_type, DeclaredType):
            raise UnsupportedFieldTypeError(
                str(spec.declared_type),
                ErrorContext(field_name=spec.name, env_key=annotation.key),
            )
        prepared.append((spec, annotation))
    return prepared


def _destination_type(record: Any, name: str) -> type | None:
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        if name not in {f.name for f in dataclasses.fields(record)}:
            return None
        return typing.get_type_hints(type(record)).get(name)
    if not hasattr(record, name):
        return None
    return type(getattr(record, name))


def assign_field(record: Any, name: str, value: Any, ctx: ErrorContext) -> None:
    """Set record.name = value, only when the destination type matches exactly."""
    destination = _destination_type(record, name)
    if destination is None:
        raise AssignmentError("field is not valid", ctx)
    if type(value) is not destination:
        raise AssignmentError(
            f"types don't match ({type(value).__name__} into "
            f"{getattr(destination, '__name__', destination)})",
            ctx,
        )
    try:
        setattr(record, name, value)
    except AttributeError as e:
        # FrozenInstanceError, read-only property, __slots__
        raise AssignmentError("field can't be set", ctx) from e


def bind_field(
    spec: FieldDefinition, annotation: ParsedAnnotation, record: Any, lookup: EnvLookup,
) -> FieldOutcome:
    """Run one field through the state machine. Raises on failure."""
    raw = lookup(annotation.key)

    error = validate_constraints(annotation, raw, spec.name)
    if error:
        raise error
    if is_absent(raw):
        return FieldOutcome(spec.name, annotation.key, FieldStatus.SKIPPED)

    ctx = ErrorContext(field_name=spec.name, env_key=annotation.key)
    value = coerce_value(spec.declared_type, raw, ctx)
    assign_field(record, spec.name, value, ctx)
    return FieldOutcome(spec.name, annotation.key, FieldStatus.BOUND, value)


def iter_bind(
    fields: Sequence[FieldDefinition], record: Any, lookup: EnvLookup,
) -> Iterator[FieldOutcome]:
    """Bind fields one at a time, yielding each outcome in declaration order."""
    for spec, annotation in prepare_fields(fields):
        yield bind_field(spec, annotation, record, lookup)


def bind(fields: Sequence[FieldDefinition], record: Any, lookup: EnvLookup) -> Any:
    """Bind every field into record and return it. First error wins."""
    for _ in iter_bind(fields, record, lookup):
        pass
    return record
