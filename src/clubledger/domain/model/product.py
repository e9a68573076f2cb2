"""Product: a storefront item as seen by order fulfillment.

Price, flags and status are catalog metadata owned elsewhere. Stock is the
only field the ledger changes, and only through relative adjustments
issued by the stock ledger service.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from clubledger.domain.exceptions import OutOfStockError, ValidationError
from clubledger.domain.model.value_objects import Money


class ProductStatus(Enum):
    AVAILABLE = "disponible"
    INACTIVE = "inactivo"


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.
    """

    id: int
    name: str
    price: Money
    stock: int = 0
    members_only: bool = False
    status: ProductStatus = ProductStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.status == ProductStatus.AVAILABLE

    def ensure_can_supply(self, quantity: int) -> None:
        """Raise OutOfStockError unless *quantity* units can be debited."""
        if quantity > self.stock:
            raise OutOfStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, available {self.stock})"
            )

    def stock_after(self, adjustment: StockAdjustment) -> int:
        """Stock level that *adjustment* would leave."""
        if adjustment.operation == StockOperation.ADD:
            return self.stock + adjustment.quantity
        if adjustment.operation == StockOperation.SUBTRACT:
            return max(self.stock - adjustment.quantity, 0)
        return adjustment.quantity


class StockOperation(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    SET = "set"

    @classmethod
    def parse(cls, raw: str) -> StockOperation:
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(f"'{op.value}'" for op in cls)
            raise ValidationError(
                f"Invalid stock operation '{raw}'; expected one of {allowed}"
            ) from None


@dataclass(frozen=True)
class StockAdjustment:
    """Administrative restock, outside any order.

    ``subtract`` floors at zero instead of failing.
    """

    operation: StockOperation
    quantity: int

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(
                f"Stock quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
