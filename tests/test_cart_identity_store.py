"""
Cart identity store tests
"""

import json
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from magento_storefront.application.use_cases.cart_identity_store import CartIdentityStore
from magento_storefront.domain.entities.cart_entity import Cart, CartItem, CartProduct
from magento_storefront.domain.repositories.authentication_state import AuthenticationState
from magento_storefront.domain.repositories.remote_cart_api import (
    CartItemInput,
    CartItemUpdate,
    RemoteCartApi,
)
from magento_storefront.domain.value_objects.cart_identity import CartIdentity, CartScope
from magento_storefront.infrastructure.repositories.cart_identity_repository import (
    CartIdentityRepository,
)
from magento_storefront.infrastructure.utilities.exceptions import (
    AuthenticationError,
    GraphQLError,
    MagentoError,
    NetworkError,
    NotFoundError,
    StorageError,
    ValidationError,
)

IDENTITY_KEY = "42:cart_identity"


class FakeAuthState(AuthenticationState):
    """Token holder the tests flip between guest and customer"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    @property
    def token(self) -> Optional[str]:
        return self._token

    def login(self, token: str = "customer-token") -> None:
        self._token = token

    def logout(self) -> None:
        self._token = None


def make_cart(cart_id: str, *lines, total_quantity: Optional[int] = None) -> Cart:
    items = [
        CartItem(id=str(index), product=CartProduct(sku=sku), quantity=quantity)
        for index, (sku, quantity) in enumerate(lines, start=1)
    ]
    if total_quantity is None:
        total_quantity = sum(quantity for _, quantity in lines)
    return Cart(id=cart_id, items=items, total_quantity=total_quantity)


def make_cart_api() -> MagicMock:
    api = MagicMock(spec=RemoteCartApi)
    api.create_cart = AsyncMock()
    api.get_cart = AsyncMock()
    api.get_customer_cart = AsyncMock(return_value=None)
    api.add_products = AsyncMock()
    api.update_items = AsyncMock()
    api.remove_item = AsyncMock()
    return api


@pytest.fixture
def cart_api():
    return make_cart_api()


@pytest.fixture
def auth_state():
    return FakeAuthState()


@pytest.fixture
def repository(kv_store):
    return CartIdentityRepository(kv_store, "42")


@pytest.fixture
def store(cart_api, auth_state, repository):
    return CartIdentityStore(cart_api, auth_state, repository)


async def persist(kv_store, scope: str, cart_id: str) -> None:
    await kv_store.set(IDENTITY_KEY, json.dumps({"scope": scope, "id": cart_id}))


class TestResolveActiveCart:
    """Test resolving the cart to work with"""

    @pytest.mark.asyncio
    async def test_creates_guest_cart_when_nothing_is_stored(self, store, cart_api, kv_store):
        """Test a first resolve creates and persists a guest cart"""
        cart_api.create_cart.return_value = Cart.empty("g1")

        cart_id = await store.resolve_active_cart()

        assert cart_id == "g1"
        assert store.active_identity == CartIdentity.guest("g1")
        assert store.snapshot.id == "g1"
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g1"}
        cart_api.get_cart.assert_not_called()
        cart_api.get_customer_cart.assert_not_called()

    @pytest.mark.asyncio
    async def test_second_resolve_is_served_from_memory(self, store, cart_api):
        """Test resolve is idempotent and skips the remote fetch once cached"""
        cart_api.create_cart.return_value = Cart.empty("g1")

        first = await store.resolve_active_cart()
        second = await store.resolve_active_cart()

        assert first == second == "g1"
        cart_api.create_cart.assert_called_once()
        cart_api.get_cart.assert_not_called()

    @pytest.mark.asyncio
    async def test_stored_guest_cart_is_adopted_without_writes(self, store, cart_api, kv_store):
        """Test a live stored guest id is fetched, not recreated, and persistence is untouched"""
        await persist(kv_store, "guest", "g1")
        raw_before = kv_store.snapshot()[IDENTITY_KEY]
        cart_api.get_cart.return_value = make_cart("g1", ("A", 2))

        cart_id = await store.resolve_active_cart()

        assert cart_id == "g1"
        assert store.item_count == 2
        cart_api.get_cart.assert_awaited_once_with("g1")
        cart_api.create_cart.assert_not_called()
        assert kv_store.snapshot()[IDENTITY_KEY] == raw_before
        assert kv_store.get_stats()["sets"] == 1

    @pytest.mark.asyncio
    async def test_stale_guest_cart_is_replaced(self, store, cart_api, kv_store):
        """Test a guest id the server no longer knows is discarded and a new cart created"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.side_effect = NotFoundError('Could not find a cart with ID "g1"')
        cart_api.create_cart.return_value = Cart.empty("g2")

        cart_id = await store.resolve_active_cart()

        assert cart_id == "g2"
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g2"}

    @pytest.mark.asyncio
    async def test_graphql_rejection_counts_as_stale(self, store, cart_api, kv_store):
        """Test any GraphQL error on a stored id triggers recovery"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.side_effect = GraphQLError("The cart isn't active.")
        cart_api.create_cart.return_value = Cart.empty("g2")

        assert await store.resolve_active_cart() == "g2"

    @pytest.mark.asyncio
    async def test_unreachable_cart_is_replaced(self, store, cart_api, kv_store):
        """Test a transport failure on the stored id falls through to a new cart"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.side_effect = NetworkError("Request failed with status 404", code="404")
        cart_api.create_cart.return_value = Cart.empty("g2")

        assert await store.resolve_active_cart() == "g2"
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g2"}

    @pytest.mark.asyncio
    async def test_outage_keeps_stored_identity(self, store, cart_api, kv_store):
        """Test the stored id survives when neither fetch nor creation reach the server"""
        await persist(kv_store, "guest", "g1")
        raw_before = kv_store.snapshot()[IDENTITY_KEY]
        cart_api.get_cart.side_effect = NetworkError("Network error: timed out")
        cart_api.create_cart.side_effect = NetworkError("Network error: timed out")

        with pytest.raises(NetworkError):
            await store.resolve_active_cart()

        assert kv_store.snapshot()[IDENTITY_KEY] == raw_before
        assert store.active_identity is None

    @pytest.mark.asyncio
    async def test_add_item_recovers_from_unreachable_cart(self, store, cart_api, kv_store):
        """Test adding an item still works when the stored cart cannot be read"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.side_effect = NetworkError("Network error: reset")
        cart_api.create_cart.return_value = Cart.empty("g2")
        cart_api.add_products.return_value = make_cart("g2", ("A", 1))

        cart = await store.add_item("A")

        assert cart.id == "g2"
        cart_api.add_products.assert_awaited_once_with("g2", [CartItemInput("A", 1)])

    @pytest.mark.asyncio
    async def test_stale_customer_cart_falls_back_to_new_customer_cart(
        self, store, cart_api, auth_state, kv_store
    ):
        """Test a deleted customer cart is replaced by a newly created customer cart"""
        auth_state.login()
        await persist(kv_store, "customer", "c1")
        cart_api.get_cart.side_effect = NotFoundError('Could not find a cart with ID "c1"')
        cart_api.get_customer_cart.return_value = None
        cart_api.create_cart.return_value = Cart.empty("c2")

        cart_id = await store.resolve_active_cart()

        assert cart_id == "c2"
        cart_api.get_customer_cart.assert_awaited_once()
        assert store.active_identity == CartIdentity.customer("c2")
        slots = await store.persisted_slots()
        assert slots.customer_cart_id == "c2"
        assert slots.guest_cart_id is None

    @pytest.mark.asyncio
    async def test_authenticated_never_uses_guest_id(self, store, cart_api, auth_state, kv_store):
        """Test a guest-scoped value is ignored while authenticated"""
        auth_state.login()
        await persist(kv_store, "guest", "g1")
        cart_api.get_customer_cart.return_value = make_cart("c1", ("A", 1))

        cart_id = await store.resolve_active_cart()

        assert cart_id == "c1"
        cart_api.get_cart.assert_not_called()
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "customer", "id": "c1"}

    @pytest.mark.asyncio
    async def test_customer_cart_failure_falls_through_to_create(self, store, cart_api, auth_state):
        """Test a failing customer-cart lookup is treated as no customer cart"""
        auth_state.login()
        cart_api.get_customer_cart.side_effect = AuthenticationError("token expired")
        cart_api.create_cart.return_value = Cart.empty("c9")

        assert await store.resolve_active_cart() == "c9"
        assert store.active_identity.scope is CartScope.CUSTOMER

    @pytest.mark.asyncio
    async def test_create_cart_errors_propagate(self, store, cart_api, kv_store):
        """Test a failing create leaves nothing persisted"""
        cart_api.create_cart.side_effect = MagentoError("Failed to create cart")

        with pytest.raises(MagentoError):
            await store.resolve_active_cart()

        assert IDENTITY_KEY not in kv_store.snapshot()
        assert store.active_cart_id is None

    @pytest.mark.asyncio
    async def test_replacement_written_meanwhile_is_tried_once(self, store, cart_api, kv_store):
        """Test a replacement persisted by another writer is adopted instead of creating"""
        await persist(kv_store, "guest", "g1")

        async def get_cart(cart_id):
            if cart_id == "g1":
                await persist(kv_store, "guest", "g2")
                raise NotFoundError('Could not find a cart with ID "g1"')
            return make_cart(cart_id, ("B", 3))

        cart_api.get_cart.side_effect = get_cart

        cart_id = await store.resolve_active_cart()

        assert cart_id == "g2"
        assert store.item_count == 3
        cart_api.create_cart.assert_not_called()
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g2"}

    @pytest.mark.asyncio
    async def test_malformed_stored_value_is_ignored(self, store, cart_api, kv_store):
        """Test unreadable persistence behaves like an empty store"""
        await kv_store.set(IDENTITY_KEY, "{not json")
        cart_api.create_cart.return_value = Cart.empty("g1")

        assert await store.resolve_active_cart() == "g1"
        cart_api.get_cart.assert_not_called()


class TestLoginMerge:
    """Test the guest to customer cart hand-over"""

    @pytest.mark.asyncio
    async def test_prepare_is_noop_when_authenticated(self, store, cart_api, auth_state):
        """Test prepare returns None for a customer session"""
        auth_state.login()

        assert await store.prepare_guest_cart_for_login() is None
        cart_api.get_cart.assert_not_called()
        cart_api.create_cart.assert_not_called()

    @pytest.mark.asyncio
    async def test_prepare_touches_guest_cart(self, store, cart_api, kv_store):
        """Test prepare re-reads the guest cart and persists it as guest"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.return_value = make_cart("g1", ("A", 2))

        cart_id = await store.prepare_guest_cart_for_login()

        assert cart_id == "g1"
        assert cart_api.get_cart.await_count == 2
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g1"}

    @pytest.mark.asyncio
    async def test_prepare_swallows_touch_failure(self, store, cart_api, kv_store):
        """Test a failing extra read does not abort the login preparation"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        cart_api.get_cart.side_effect = NetworkError("Network error: reset")

        assert await store.prepare_guest_cart_for_login() == "g1"
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g1"}

    @pytest.mark.asyncio
    async def test_sync_is_skipped_for_guests(self, store, cart_api):
        """Test sync does nothing without a token"""
        result = await store.sync_after_login()

        assert result.skipped is True
        assert result.success is False
        cart_api.get_customer_cart.assert_not_called()

    @pytest.mark.asyncio
    async def test_sync_adopts_customer_cart(self, store, cart_api, auth_state, kv_store):
        """Test sync persists the customer cart and clears the guest slots"""
        await persist(kv_store, "guest", "g1")
        auth_state.login()
        cart_api.get_customer_cart.return_value = make_cart("c1", ("A", 2))

        result = await store.sync_after_login()

        assert result.success is True
        assert result.cart_id == "c1"
        slots = await store.persisted_slots()
        assert slots.guest_cart_id is None
        assert slots.current_cart_id is None
        assert slots.customer_cart_id == store.active_cart_id == "c1"

    @pytest.mark.asyncio
    async def test_sync_creates_cart_when_customer_has_none(self, store, cart_api, auth_state):
        """Test sync creates a cart when the customer has none"""
        auth_state.login()
        cart_api.get_customer_cart.return_value = None
        cart_api.create_cart.return_value = Cart.empty("c5")

        result = await store.sync_after_login()

        assert result.success is True
        assert store.active_identity == CartIdentity.customer("c5")

    @pytest.mark.asyncio
    async def test_sync_reports_errors_without_raising(self, store, cart_api, auth_state, kv_store):
        """Test a sync failure is returned and leaves the previous state alone"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        await store.resolve_active_cart()
        auth_state.login()
        failure = NetworkError("Network error: unreachable")
        cart_api.get_customer_cart.side_effect = failure

        result = await store.sync_after_login()

        assert result.success is False
        assert result.error is failure
        assert store.active_identity == CartIdentity.guest("g1")
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g1"}

    @pytest.mark.asyncio
    async def test_sync_reports_storage_errors(self, cart_api, auth_state):
        """Test a persistence failure during sync is reported, not raised"""
        repository = MagicMock(spec=CartIdentityRepository)
        repository.save = AsyncMock(side_effect=StorageError("disk full", "set"))
        store = CartIdentityStore(cart_api, auth_state, repository)
        auth_state.login()
        cart_api.get_customer_cart.return_value = make_cart("c1")

        result = await store.sync_after_login()

        assert result.success is False
        assert isinstance(result.error, StorageError)
        assert store.active_cart_id is None

    @pytest.mark.asyncio
    async def test_guest_cart_becomes_customer_cart_on_login(
        self, store, cart_api, auth_state, kv_store
    ):
        """Test the full guest add, prepare, login, sync flow"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        cart_api.add_products.return_value = make_cart("g1", ("A", 2))
        await store.add_item("A", 2)

        cart_api.get_cart.return_value = make_cart("g1", ("A", 2))
        assert await store.prepare_guest_cart_for_login() == "g1"
        cart_api.get_cart.assert_awaited_with("g1")

        auth_state.login()
        cart_api.get_customer_cart.return_value = make_cart("c1", ("A", 2))
        result = await store.sync_after_login()

        assert result.success is True
        assert store.active_cart_id == "c1"
        assert store.item_count == 2
        slots = await store.persisted_slots()
        assert slots.guest_cart_id is None
        assert slots.customer_cart_id == "c1"


class TestCartMutations:
    """Test add, update and remove"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sku,quantity",
        [("", 1), ("   ", 1), ("A", 0), ("A", -1), ("A", True), ("A", 1.5)],
    )
    async def test_add_item_validates_before_remote_calls(self, store, cart_api, sku, quantity):
        """Test invalid input is rejected without touching the server"""
        with pytest.raises(ValidationError):
            await store.add_item(sku, quantity)

        cart_api.create_cart.assert_not_called()
        cart_api.add_products.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_item_replaces_snapshot(self, store, cart_api):
        """Test the snapshot follows the last mutation response"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        cart_api.add_products.side_effect = [
            make_cart("g1", ("A", 1)),
            make_cart("g1", ("A", 1), ("B", 2), total_quantity=3),
        ]

        await store.add_item(" A ")
        cart = await store.add_item("B", 2)

        assert store.snapshot is cart
        assert store.snapshot.total_quantity == 3
        cart_api.add_products.assert_any_await("g1", [CartItemInput("A", 1)])

    @pytest.mark.asyncio
    async def test_add_item_error_keeps_snapshot(self, store, cart_api):
        """Test a rejected add propagates and keeps the old snapshot"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        cart_api.add_products.side_effect = [
            make_cart("g1", ("A", 1)),
            GraphQLError("The requested qty is not available"),
        ]
        await store.add_item("A")
        before = store.snapshot

        with pytest.raises(GraphQLError):
            await store.add_item("A", 99)

        assert store.snapshot is before
        assert store.item_count == 1

    @pytest.mark.asyncio
    async def test_update_item(self, store, cart_api):
        """Test a quantity change goes to the resolved cart"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        cart_api.update_items.return_value = make_cart("g1", ("A", 4))

        cart = await store.update_item("1", 4)

        assert cart.total_quantity == 4
        cart_api.update_items.assert_awaited_once_with("g1", [CartItemUpdate("1", 4)])

    @pytest.mark.asyncio
    async def test_update_item_validates(self, store, cart_api):
        """Test update rejects an empty id and a zero quantity"""
        with pytest.raises(ValidationError):
            await store.update_item("", 1)
        with pytest.raises(ValidationError):
            await store.update_item("1", 0)
        cart_api.update_items.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_item(self, store, cart_api):
        """Test removal replaces the snapshot"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        cart_api.remove_item.return_value = Cart.empty("g1")

        cart = await store.remove_item("7")

        assert cart.is_empty
        assert store.item_count == 0
        cart_api.remove_item.assert_awaited_once_with("g1", "7")


class TestRefresh:
    """Test re-reading the remote cart"""

    @pytest.mark.asyncio
    async def test_refresh_without_state_is_noop(self, store, cart_api):
        """Test refresh with nothing stored makes no call"""
        assert await store.refresh() is None
        cart_api.get_cart.assert_not_called()
        cart_api.get_customer_cart.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_guest_cart(self, store, cart_api, kv_store):
        """Test a guest refresh fetches the stored id"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.return_value = make_cart("g1", ("A", 5))

        cart = await store.refresh()

        assert cart.total_quantity == 5
        assert store.active_cart_id == "g1"

    @pytest.mark.asyncio
    async def test_refresh_authenticated_uses_customer_cart(
        self, store, cart_api, auth_state, kv_store
    ):
        """Test refresh goes through the customer cart even with a stale guest id stored"""
        await persist(kv_store, "guest", "stale")
        auth_state.login()
        cart_api.get_customer_cart.return_value = make_cart("c1", ("A", 1))

        cart = await store.refresh()

        assert cart.id == "c1"
        cart_api.get_cart.assert_not_called()
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "customer", "id": "c1"}

    @pytest.mark.asyncio
    async def test_refresh_authenticated_without_customer_cart(
        self, store, cart_api, auth_state, kv_store
    ):
        """Test refresh clears memory when the customer has no cart"""
        await persist(kv_store, "customer", "c1")
        auth_state.login()
        cart_api.get_customer_cart.return_value = None

        assert await store.refresh() is None
        assert store.active_identity is None

    @pytest.mark.asyncio
    async def test_refresh_authenticated_stale_token(self, store, cart_api, auth_state, kv_store):
        """Test an authentication failure on refresh clears memory"""
        await persist(kv_store, "customer", "c1")
        auth_state.login()
        cart_api.get_customer_cart.side_effect = AuthenticationError("token expired")

        assert await store.refresh() is None
        assert store.snapshot is None

    @pytest.mark.asyncio
    async def test_refresh_stale_guest_clears_everything(self, store, cart_api, kv_store):
        """Test refresh drops a deleted guest cart and does not create one"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        await store.resolve_active_cart()
        cart_api.get_cart.side_effect = NotFoundError('Could not find a cart with ID "g1"')

        assert await store.refresh() is None
        assert store.active_cart_id is None
        assert IDENTITY_KEY not in kv_store.snapshot()
        cart_api.create_cart.assert_called_once()

    @pytest.mark.asyncio
    async def test_refresh_ignores_customer_value_when_logged_out(
        self, store, cart_api, kv_store
    ):
        """Test a customer-scoped value is not used without a token"""
        await persist(kv_store, "customer", "c1")

        assert await store.refresh() is None
        cart_api.get_cart.assert_not_called()
        assert store.active_identity is None

    @pytest.mark.asyncio
    async def test_refresh_network_error_keeps_stored_id(self, store, cart_api, kv_store):
        """Test refresh reports no cart on a transport failure and keeps the stored id"""
        await persist(kv_store, "guest", "g1")
        cart_api.get_cart.side_effect = NetworkError("Network error: timed out")

        assert await store.refresh() is None
        assert store.active_identity is None
        assert json.loads(kv_store.snapshot()[IDENTITY_KEY]) == {"scope": "guest", "id": "g1"}

    @pytest.mark.asyncio
    async def test_refresh_customer_cart_network_error(self, store, cart_api, auth_state, kv_store):
        """Test a failing customer cart read while authenticated yields no cart"""
        await persist(kv_store, "customer", "c1")
        auth_state.login()
        cart_api.get_customer_cart.side_effect = NetworkError("Network error: timed out")

        assert await store.refresh() is None
        assert store.active_identity is None


class TestClear:
    """Test logout clearing"""

    @pytest.mark.asyncio
    async def test_clear_forgets_memory_and_persistence(self, store, cart_api, kv_store):
        """Test clear drops the identity everywhere"""
        cart_api.create_cart.return_value = Cart.empty("g1")
        await store.resolve_active_cart()

        await store.clear()

        assert store.active_cart_id is None
        assert store.snapshot is None
        assert store.item_count == 0
        assert IDENTITY_KEY not in kv_store.snapshot()

    @pytest.mark.asyncio
    async def test_resolve_after_logout_creates_guest_cart(
        self, store, cart_api, auth_state, kv_store
    ):
        """Test the next cart after logout is a fresh guest cart"""
        auth_state.login()
        cart_api.get_customer_cart.return_value = make_cart("c1")
        await store.sync_after_login()

        auth_state.logout()
        await store.clear()
        cart_api.create_cart.return_value = Cart.empty("g7")

        assert await store.resolve_active_cart() == "g7"
        assert store.active_identity.is_guest
