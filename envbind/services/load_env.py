"""Env Loader — load(target) binds the environment into a configuration record.

Invariants:
    - Lookup source precedence: explicit lookup > env_file argument > ENVBIND_ENV_FILE > os.environ
    - The first EnvbindError is logged once (with its code) and re-raised unchanged
    - Values are never logged, only keys, field names and outcomes
    - configure_logging() is the one place ENVBIND_LOG_LEVEL / ENVBIND_LOG_FORMAT take effect

Design Decisions:
    - Shell owns IO and logging; core.binder stays pure (ADR: functional core, imperative shell)
    - Three target shapes: dataclass instance (bound in place), dataclass class
      (zero-initialized then bound), EnvSchema (fresh namespace record)
"""

import logging
import os
from typing import Any, Sequence

from envbind.config import Settings, get_settings
from envbind.core.binder import FieldDefinition, iter_bind
from envbind.core.domain_types import EnvLookup, FieldStatus
from envbind.core.errors import EnvbindError
from envbind.infrastructure.environment import dotenv_lookup, os_environ_lookup
from envbind.infrastructure.observability import setup_logging
from envbind.schemas.field_spec import EnvSchema, schema_from_dataclass, zero_record

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """Install envbind log handling from ENVBIND_LOG_LEVEL / ENVBIND_LOG_FORMAT."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)


def resolve_lookup(
    lookup: EnvLookup | None = None,
    env_file: str | os.PathLike | None = None,
    settings: Settings | None = None,
) -> EnvLookup:
    """Pick the environment source for one load() call."""
    if lookup is not None:
        return lookup
    settings = settings or get_settings()
    env_file = env_file or settings.env_file
    if env_file:
        return dotenv_lookup(env_file, override=settings.dotenv_override)
    return os_environ_lookup()


def bind_fields(fields: Sequence[FieldDefinition], record: Any, lookup: EnvLookup) -> Any:
    """Bind fields into record with progress logging. Raises the first error."""
    logger.info(
        "Loading env vars...", extra={"field_count": len(fields)},
    )
    bound = 0
    try:
        for outcome in iter_bind(fields, record, lookup):
            if outcome.status is FieldStatus.BOUND:
                bound += 1
            logger.debug(
                "Field %s %s from %s", outcome.name, outcome.status.value, outcome.env_key,
                extra={
                    "field_name": outcome.name,
                    "env_key": outcome.env_key,
                    "status": outcome.status.value,
                },
            )
    except EnvbindError as e:
        logger.error(
            "Failed to load env vars: %s for field %s (%s)", e.code, e.field_name, e.env_key,
            extra={
                "error_code": e.code,
                "field_name": e.field_name,
                "env_key": e.env_key,
            },
        )
        raise
    logger.info(
        "Loaded %d of %d env var(s)", bound, len(fields),
        extra={"field_count": bound},
    )
    return record


def load(
    target: Any,
    *,
    lookup: EnvLookup | None = None,
    env_file: str | os.PathLike | None = None,
) -> Any:
    """Load environment variables into target and validate annotation constraints.

    e.g.
        @dataclass
        class AppEnv:
            environment: str = env_field("ENVIRONMENT;oneof=development,test,staging,production")
            version: float = env_field("VERSION;optional")
            api_url: str = env_field("API_URL;format=URL")
            concurrency: int = env_field("CONCURRENCY;optional;min=1")

        app_env = load(AppEnv)

    Returns:
        The bound record (the same object when target is an instance).

    Raises:
        EnvbindError: first definition, presence, constraint, coercion or assignment failure.
    """
    if isinstance(target, EnvSchema):
        fields, record = target.fields, target.new_record()
    elif isinstance(target, type):
        fields = schema_from_dataclass(target)
        record = zero_record(target)
    else:
        fields, record = schema_from_dataclass(target), target

    return bind_fields(fields, record, resolve_lookup(lookup, env_file))
