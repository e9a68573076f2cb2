"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from clubledger.infrastructure.config import Settings, load_settings
from clubledger.infrastructure.persistence.sqlite_unit_of_work import SqliteUnitOfWork


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


def unit_of_work() -> SqliteUnitOfWork:
    return SqliteUnitOfWork(settings().db_path)
