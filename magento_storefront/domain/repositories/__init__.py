"""
Domain repository interfaces

Contains abstract interfaces for the collaborators of the cart identity store.
These follow the Repository pattern and Dependency Inversion principle.
"""

from .authentication_state import AuthenticationState
from .key_value_store import KeyValueStore
from .remote_cart_api import CartItemInput, CartItemUpdate, RemoteCartApi

__all__ = [
    "AuthenticationState",
    "KeyValueStore",
    "CartItemInput",
    "CartItemUpdate",
    "RemoteCartApi",
]
