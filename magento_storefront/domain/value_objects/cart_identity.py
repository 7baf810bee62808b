"""
Cart identity value object

The single authoritative reference to the cart a session is working with.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class CartScope(str, Enum):
    """How a cart id has to be addressed on the remote API"""

    GUEST = "guest"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class CartIdentity:
    """Cart id tagged with its scope"""

    cart_id: str
    scope: CartScope

    def __post_init__(self):
        if not isinstance(self.cart_id, str) or not self.cart_id.strip():
            raise ValueError("Cart id must be a non-empty string")
        if not isinstance(self.scope, CartScope):
            object.__setattr__(self, "scope", CartScope(self.scope))

    @classmethod
    def guest(cls, cart_id: str) -> "CartIdentity":
        return cls(cart_id, CartScope.GUEST)

    @classmethod
    def customer(cls, cart_id: str) -> "CartIdentity":
        return cls(cart_id, CartScope.CUSTOMER)

    @property
    def is_guest(self) -> bool:
        return self.scope is CartScope.GUEST

    @property
    def is_customer(self) -> bool:
        return self.scope is CartScope.CUSTOMER

    def to_dict(self) -> Dict[str, str]:
        return {"scope": self.scope.value, "id": self.cart_id}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["CartIdentity"]:
        """Rebuild an identity from its persisted form; malformed data yields ``None``"""
        if not isinstance(data, dict):
            return None
        try:
            return cls(data.get("id"), CartScope(data.get("scope")))
        except ValueError:
            return None

    def __str__(self) -> str:
        return f"{self.scope.value}:{self.cart_id}"


@dataclass(frozen=True)
class PersistedCartSlots:
    """
    Guest/current/customer view of the persisted identity.

    A guest identity fills both the guest and the current slot; a customer
    identity fills only the customer slot.
    """

    guest_cart_id: Optional[str] = None
    current_cart_id: Optional[str] = None
    customer_cart_id: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: Optional[CartIdentity]) -> "PersistedCartSlots":
        if identity is None:
            return cls()
        if identity.is_customer:
            return cls(customer_cart_id=identity.cart_id)
        return cls(guest_cart_id=identity.cart_id, current_cart_id=identity.cart_id)
