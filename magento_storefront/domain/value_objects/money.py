"""
Money value object

Represents monetary amounts as returned by the storefront price fields.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union

from magento_storefront.infrastructure.utilities.helpers import to_decimal


@dataclass(frozen=True)
class Money:
    """
    Money value object that handles currency amounts properly
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self):
        """Validate money object on creation"""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter code")

        rounded_amount = self.amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        object.__setattr__(self, "amount", rounded_amount)
        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def from_dict(
        cls, data: Optional[Dict[str, Any]], default_currency: str = "USD"
    ) -> Optional["Money"]:
        """Parse a GraphQL ``Money`` object (``{value, currency}``)"""
        if not isinstance(data, dict) or data.get("value") is None:
            return None
        currency = data.get("currency") or default_currency
        return cls(to_decimal(data.get("value")), str(currency))

    def add(self, other: "Money") -> "Money":
        """Add two money amounts"""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot add different currencies: {self.currency} and {other.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, factor: Union[int, Decimal]) -> "Money":
        """Multiply money by a factor"""
        return Money(self.amount * Decimal(str(factor)), self.currency)

    def format(self) -> str:
        """Format money for display"""
        return f"{self.amount:.2f} {self.currency}"

    def __str__(self) -> str:
        return self.format()
