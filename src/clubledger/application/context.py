"""Per-request context passed explicitly to every use case."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Identity of the already-authenticated caller.

    Authentication happens outside this package; handlers only record who
    asked for each state change.
    """

    actor: str

    def __str__(self) -> str:
        return self.actor


SYSTEM = RequestContext(actor="system")
