"""Translation of domain and store errors into CLI failures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from clubledger.domain.exceptions import DomainException, StoreUnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn business errors into their message and store errors into a generic one."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except StoreUnavailableError:
        logger.exception("Store failure")
        raise click.ClickException("Internal error: the data store is unavailable")
