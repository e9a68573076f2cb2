"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Store failures sit outside that hierarchy and are reported as a generic
internal error.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A uniqueness rule was violated (e.g. a period billed twice)."""


class DebtExceededError(DomainException):
    """The member has too many unsettled periods to purchase."""


class OutOfStockError(DomainException):
    """A product does not have enough stock for the requested quantity."""


class MembersOnlyError(DomainException):
    """A members-only product was requested by a non-member."""


class StoreUnavailableError(Exception):
    """The underlying store failed (connectivity, locking, corruption)."""
