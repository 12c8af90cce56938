"""Error Hierarchy — typed, categorized exceptions for every binding failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the offending field name and env key in its ErrorContext
    - Definition errors (caller-schema bugs) are CRITICAL; data errors are ERROR
    - to_response() never includes the raw value unless asked (values may be secrets)
    - Messages never embed the raw value; it lives only in ErrorContext.raw_value

Design Decisions:
    - Single hierarchy with EnvbindError base: callers catch one type (ADR: uniform error shape)
    - ErrorContext as dataclass: rich diagnostics without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories — definition errors are caller-schema bugs."""
    DEFINITION = "definition"
    PRESENCE = "presence"
    CONSTRAINT = "constraint"
    COERCION = "coercion"
    ASSIGNMENT = "assignment"


@dataclass
class ErrorContext:
    """Where a binding failed: field, key, and the clause or value involved."""
    field_name: str | None = None
    env_key: str | None = None
    raw_value: str | None = None
    clause: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EnvbindError(Exception):
    """Base exception for all binding errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def field_name(self) -> str | None:
        return self.context.field_name

    @property
    def env_key(self) -> str | None:
        return self.context.env_key

    def to_response(self, include_value: bool = False) -> dict:
        """Convert to a structured error envelope for logs or CLI output."""
        context = {
            "field_name": self.context.field_name,
            "env_key": self.context.env_key,
            "clause": self.context.clause,
        }
        if include_value:
            context["raw_value"] = self.context.raw_value
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": context,
            }
        }


# ─── Definition Errors (caller-schema bugs) ─────────────────────

class MalformedAnnotationError(EnvbindError):
    """Annotation is missing, empty, or has an invalid key segment."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_ANNOTATION", ErrorCategory.DEFINITION,
            ErrorSeverity.CRITICAL, context,
        )


class UnsupportedFieldTypeError(EnvbindError):
    """Declared field type is not text, integer, or float."""
    def __init__(self, type_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"unsupported type '{type_name}' for record field "
            f"'{(context or ErrorContext()).field_name}'",
            "UNSUPPORTED_FIELD_TYPE", ErrorCategory.DEFINITION,
            ErrorSeverity.CRITICAL, context,
        )
        self.type_name = type_name


class InvalidConstraintDefinitionError(EnvbindError):
    """Constraint argument is unusable (uncompilable regex, non-numeric bound)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_CONSTRAINT_DEFINITION", ErrorCategory.DEFINITION,
            ErrorSeverity.ERROR, context,
        )


class AssignmentError(EnvbindError):
    """Coerced value cannot be written into the destination record field."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"failed to assign record field value for '{(context or ErrorContext()).field_name}', "
            f"{reason}",
            "ASSIGNMENT_ERROR", ErrorCategory.ASSIGNMENT,
            ErrorSeverity.CRITICAL, context,
        )
        self.reason = reason


# ─── Data Errors (bad environment values) ───────────────────────

class RequiredValueMissingError(EnvbindError):
    """Required variable is unset or empty."""
    def __init__(self, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        super().__init__(
            f"failed to find value for ENV[\"{ctx.env_key}\"], which is required "
            f"in record field '{ctx.field_name}'",
            "REQUIRED_VALUE_MISSING", ErrorCategory.PRESENCE,
            ErrorSeverity.ERROR, ctx,
        )


class NotInAllowedSetError(EnvbindError):
    """Value is not one of the oneof entries."""
    def __init__(self, allowed: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        super().__init__(
            f"failed to match env var {ctx.field_name} ({ctx.env_key}), "
            f"must be one of [{','.join(allowed)}]",
            "NOT_IN_ALLOWED_SET", ErrorCategory.CONSTRAINT,
            ErrorSeverity.ERROR, ctx,
        )
        self.allowed = allowed


class BelowMinimumError(EnvbindError):
    """Value is below the min bound, or not numeric at all."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BELOW_MINIMUM", ErrorCategory.CONSTRAINT,
            ErrorSeverity.ERROR, context,
        )


class AboveMaximumError(EnvbindError):
    """Value is above the max bound, or not numeric at all."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "ABOVE_MAXIMUM", ErrorCategory.CONSTRAINT,
            ErrorSeverity.ERROR, context,
        )


class PatternMismatchError(EnvbindError):
    """Value does not contain a match for the regex clause."""
    def __init__(self, pattern: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        super().__init__(
            f"failed regex match for env var {ctx.env_key}, with regex constraint "
            f"in record field {ctx.field_name}",
            "PATTERN_MISMATCH", ErrorCategory.CONSTRAINT,
            ErrorSeverity.ERROR, ctx,
        )
        self.pattern = pattern


class InvalidFormatError(EnvbindError):
    """Value does not satisfy the format clause."""
    def __init__(self, format_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        super().__init__(
            f"failed {format_name} format for env var {ctx.env_key}, "
            f"in record field {ctx.field_name}",
            "INVALID_FORMAT", ErrorCategory.CONSTRAINT,
            ErrorSeverity.ERROR, ctx,
        )
        self.format_name = format_name


class CoercionError(EnvbindError):
    """Raw value cannot be converted to the field's declared type."""
    def __init__(self, declared_type: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        super().__init__(
            f"failed to cast env variable '{ctx.env_key}' value to {declared_type}, "
            f"record field '{ctx.field_name}'",
            "COERCION_ERROR", ErrorCategory.COERCION,
            ErrorSeverity.ERROR, ctx,
        )
        self.declared_type = declared_type
