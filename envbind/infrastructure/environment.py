"""Environment Sources — lookup callables over the process env, a mapping, or a .env file.

Invariants:
    - Every lookup returns None for an unset key (never raises KeyError)
    - Lookups are read-only: nothing here writes to os.environ
    - A .env file is read ONCE when the lookup is built, not per key

Design Decisions:
    - python-dotenv dotenv_values() over load_dotenv(): no mutation of the process
      environment, so two loads with different files cannot interfere
    - Layering via ChainMap: first mapping wins, mirrors dotenv's override flag
"""

import logging
import os
from collections import ChainMap
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

from envbind.core.domain_types import EnvLookup

logger = logging.getLogger(__name__)


def mapping_lookup(values: Mapping[str, str | None]) -> EnvLookup:
    """Lookup over a fixed mapping (tests, injected config)."""
    return values.get


def os_environ_lookup() -> EnvLookup:
    """Lookup over the live process environment."""
    return os.environ.get


def read_dotenv(path: str | os.PathLike) -> dict[str, str | None]:
    """Parse a .env file; a missing file is an error, not an empty env."""
    env_path = Path(path)
    if not env_path.is_file():
        raise FileNotFoundError(f"env file not found: {env_path}")
    values = dotenv_values(env_path)
    logger.debug(
        "Read %d variable(s) from %s", len(values), env_path,
        extra={"field_count": len(values)},
    )
    return dict(values)


def dotenv_lookup(
    path: str | os.PathLike,
    *,
    override: bool = False,
    environ: Mapping[str, str] | None = None,
) -> EnvLookup:
    """Lookup over a .env file layered with the process environment.

    override=False: process environment wins (python-dotenv's default).
    override=True: file values win.
    """
    # bare `KEY` lines parse to None; they must not shadow the process env
    file_values = {k: v for k, v in read_dotenv(path).items() if v is not None}
    process_values = os.environ if environ is None else environ
    if override:
        return ChainMap(file_values, process_values).get
    return ChainMap(process_values, file_values).get
