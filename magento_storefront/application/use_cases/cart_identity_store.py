"""
Cart identity store

Keeps exactly one authoritative cart reference per session, consistent with
the authentication state, and carries the guest cart over to the customer on
login.

Login flow:
    1. ``prepare_guest_cart_for_login()`` while still a guest
    2. authenticate (sets the customer token)
    3. ``sync_after_login()``

Skipping step 1 means the server has nothing to merge into the customer cart.

A stored cart that cannot be fetched is abandoned and a new one is created.
After a transport failure the stored id is not cleared, so it survives when
creation fails too.
"""

import asyncio
import logging
from typing import Optional

from magento_storefront.application.dtos.cart_dtos import CartSyncResult
from magento_storefront.domain.entities.cart_entity import Cart
from magento_storefront.domain.repositories.authentication_state import AuthenticationState
from magento_storefront.domain.repositories.remote_cart_api import (
    CartItemInput,
    CartItemUpdate,
    RemoteCartApi,
)
from magento_storefront.domain.value_objects.cart_identity import (
    CartIdentity,
    CartScope,
    PersistedCartSlots,
)
from magento_storefront.infrastructure.repositories.cart_identity_repository import (
    CartIdentityRepository,
)
from magento_storefront.infrastructure.utilities.exceptions import (
    MagentoError,
    NetworkError,
    StorefrontError,
    ValidationError,
)


def _validate_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be a whole number of at least 1", "quantity")


def _validate_cart_item_id(cart_item_id: str) -> None:
    if not isinstance(cart_item_id, str) or not cart_item_id.strip():
        raise ValidationError("Cart item id is required", "cart_item_id")


class CartIdentityStore:
    """
    Per-session cart state: the active identity, its snapshot and persistence.

    Public operations are serialized with an ``asyncio.Lock``; helpers suffixed
    ``_unlocked`` expect the caller to hold it.
    """

    def __init__(
        self,
        cart_api: RemoteCartApi,
        auth_state: AuthenticationState,
        repository: CartIdentityRepository,
    ):
        self._cart_api = cart_api
        self._auth_state = auth_state
        self._repository = repository
        self._identity: Optional[CartIdentity] = None
        self._snapshot: Optional[Cart] = None
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def active_cart_id(self) -> Optional[str]:
        return self._identity.cart_id if self._identity else None

    @property
    def active_identity(self) -> Optional[CartIdentity]:
        return self._identity

    @property
    def snapshot(self) -> Optional[Cart]:
        return self._snapshot

    @property
    def item_count(self) -> int:
        return self._snapshot.item_count if self._snapshot else 0

    async def persisted_slots(self) -> PersistedCartSlots:
        return await self._repository.slots()

    def _current_scope(self) -> CartScope:
        return CartScope.CUSTOMER if self._auth_state.is_authenticated else CartScope.GUEST

    def _candidate(self, persisted: Optional[CartIdentity]) -> Optional[CartIdentity]:
        """Only a value whose scope matches the authentication state is usable"""
        if persisted is not None and persisted.scope is self._current_scope():
            return persisted
        return None

    def _adopt(self, identity: CartIdentity, cart: Cart) -> None:
        self._identity = identity
        self._snapshot = cart

    def _reset_memory(self) -> None:
        self._identity = None
        self._snapshot = None

    async def _recover_unlocked(self, failed: CartIdentity) -> Optional[CartIdentity]:
        """
        Forget a stale identity.

        Returns the replacement another writer persisted meanwhile, if it is
        usable in the current scope, otherwise ``None``.
        """
        self._reset_memory()
        persisted = await self._repository.load()
        if persisted is None:
            return None
        if persisted == failed:
            await self._repository.clear()
            self._logger.info("🧹 STALE CART CLEARED: %s", failed)
            return None
        replacement = self._candidate(persisted)
        if replacement is not None:
            self._logger.info("🔁 CART REPLACED MEANWHILE: %s -> %s", failed, replacement)
        return replacement

    async def _discard_unlocked(
        self, failed: CartIdentity, error: MagentoError
    ) -> Optional[CartIdentity]:
        """Drop an identity whose fetch failed; returns a replacement to try, if any"""
        self._logger.warning("⚠️ CART UNAVAILABLE %s: %s", failed, error)
        if isinstance(error, NetworkError):
            # Unreachable is not gone, so the stored id is kept
            self._reset_memory()
            return None
        return await self._recover_unlocked(failed)

    async def _fetch_unlocked(self, candidate: CartIdentity) -> Optional[Cart]:
        """Fetch a stored identity by id, retrying once with a concurrent replacement"""
        try:
            cart = await self._cart_api.get_cart(candidate.cart_id)
        except MagentoError as e:
            replacement = await self._discard_unlocked(candidate, e)
            if replacement is None:
                return None
            try:
                cart = await self._cart_api.get_cart(replacement.cart_id)
            except MagentoError as retry_error:
                await self._discard_unlocked(replacement, retry_error)
                return None
            candidate = replacement

        self._adopt(candidate, cart)
        return cart

    async def _create_unlocked(self) -> str:
        scope = self._current_scope()
        if scope is CartScope.CUSTOMER:
            try:
                customer_cart = await self._cart_api.get_customer_cart()
            except StorefrontError as e:
                self._logger.warning("⚠️ CUSTOMER CART UNAVAILABLE: %s", e)
                customer_cart = None
            if customer_cart is not None:
                identity = CartIdentity.customer(customer_cart.id)
                await self._repository.save(identity)
                self._adopt(identity, customer_cart)
                self._logger.info("🛒 CUSTOMER CART ADOPTED: %s", customer_cart.id)
                return customer_cart.id

        cart = await self._cart_api.create_cart()
        identity = CartIdentity(cart.id, scope)
        await self._repository.save(identity)
        self._adopt(identity, cart)
        self._logger.info("🆕 CART ACTIVE: %s", identity)
        return cart.id

    async def _resolve_unlocked(self) -> str:
        candidate = self._candidate(await self._repository.load())
        if candidate is not None:
            if candidate == self._identity and self._snapshot is not None:
                return candidate.cart_id
            cart = await self._fetch_unlocked(candidate)
            if cart is not None:
                return self._identity.cart_id
        return await self._create_unlocked()

    async def resolve_active_cart(self) -> str:
        """Return the id of the cart to use, fetching or creating it as needed"""
        async with self._lock:
            return await self._resolve_unlocked()

    async def prepare_guest_cart_for_login(self) -> Optional[str]:
        """
        Make the guest cart the server's most recent one before login so it is
        merged into the customer cart. Returns the guest cart id, or ``None``
        when already authenticated.
        """
        async with self._lock:
            if self._auth_state.is_authenticated:
                return None

            cart_id = await self._resolve_unlocked()
            try:
                self._snapshot = await self._cart_api.get_cart(cart_id)
            except StorefrontError as e:
                self._logger.warning("⚠️ GUEST CART TOUCH FAILED: %s: %s", cart_id, e)

            await self._repository.save(CartIdentity.guest(cart_id))
            self._logger.info("🔐 GUEST CART READY FOR LOGIN: %s", cart_id)
            return cart_id

    async def sync_after_login(self) -> CartSyncResult:
        """Adopt the customer cart; errors are reported in the result, never raised"""
        async with self._lock:
            if not self._auth_state.is_authenticated:
                return CartSyncResult(success=False, skipped=True)

            try:
                cart = await self._cart_api.get_customer_cart()
                if cart is None:
                    cart = await self._cart_api.create_cart()
                identity = CartIdentity.customer(cart.id)
                await self._repository.save(identity)
            except StorefrontError as e:
                self._logger.error("💥 CART SYNC ERROR: %s", e)
                return CartSyncResult(success=False, error=e)

            self._adopt(identity, cart)
            self._logger.info(
                "✅ CART SYNCED: %s with %d item(s)", cart.id, cart.total_quantity
            )
            return CartSyncResult(success=True, cart_id=cart.id)

    async def add_item(self, sku: str, quantity: int = 1) -> Cart:
        if not isinstance(sku, str) or not sku.strip():
            raise ValidationError("SKU is required", "sku")
        _validate_quantity(quantity)

        async with self._lock:
            cart_id = await self._resolve_unlocked()
            cart = await self._cart_api.add_products(cart_id, [CartItemInput(sku.strip(), quantity)])
            self._snapshot = cart
            self._logger.info("🛒 CART ADD: %s x%d -> %s", sku, quantity, cart_id)
            return cart

    async def update_item(self, cart_item_id: str, quantity: int) -> Cart:
        _validate_cart_item_id(cart_item_id)
        _validate_quantity(quantity)

        async with self._lock:
            cart_id = await self._resolve_unlocked()
            cart = await self._cart_api.update_items(
                cart_id, [CartItemUpdate(cart_item_id.strip(), quantity)]
            )
            self._snapshot = cart
            self._logger.info("🛒 CART UPDATE: item %s qty %d", cart_item_id, quantity)
            return cart

    async def remove_item(self, cart_item_id: str) -> Cart:
        _validate_cart_item_id(cart_item_id)

        async with self._lock:
            cart_id = await self._resolve_unlocked()
            cart = await self._cart_api.remove_item(cart_id, cart_item_id.strip())
            self._snapshot = cart
            self._logger.info("🛒 CART REMOVE: item %s", cart_item_id)
            return cart

    async def refresh(self) -> Optional[Cart]:
        """Re-read the remote cart; ``None`` when there is no usable cart"""
        async with self._lock:
            persisted = await self._repository.load()
            if persisted is None and self._identity is None:
                return None

            if self._auth_state.is_authenticated:
                try:
                    cart = await self._cart_api.get_customer_cart()
                except MagentoError as e:
                    self._logger.warning("⚠️ CUSTOMER CART REFRESH FAILED: %s", e)
                    self._reset_memory()
                    return None
                if cart is None:
                    self._reset_memory()
                    return None
                identity = CartIdentity.customer(cart.id)
                await self._repository.save(identity)
                self._adopt(identity, cart)
                return cart

            candidate = self._candidate(persisted)
            if candidate is None:
                self._reset_memory()
                return None
            return await self._fetch_unlocked(candidate)

    async def clear(self) -> None:
        """Forget the cart, e.g. on logout"""
        async with self._lock:
            self._reset_memory()
            await self._repository.clear()
            self._logger.info("🧹 CART IDENTITY CLEARED")
