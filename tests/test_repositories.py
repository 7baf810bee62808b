"""
Tests for the key-value stores and the cart identity repository
"""

import json
import threading
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from magento_storefront.domain.value_objects.cart_identity import CartIdentity
from magento_storefront.infrastructure.database.models import KeyValueEntry
from magento_storefront.infrastructure.database.operations import DatabaseManager
from magento_storefront.infrastructure.repositories import (
    CartIdentityRepository,
    InMemoryKeyValueStore,
    SQLAlchemyKeyValueStore,
)
from magento_storefront.infrastructure.repositories.session_handler import managed_session
from magento_storefront.infrastructure.utilities.constants import StorageKeys
from magento_storefront.infrastructure.utilities.exceptions import StorageError


@pytest.fixture
def db_manager():
    manager = DatabaseManager("sqlite:///:memory:", "test")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def sql_store(db_manager):
    return SQLAlchemyKeyValueStore(db_manager)


class TestSQLAlchemyKeyValueStore:
    """Test the database-backed store"""

    @pytest.mark.asyncio
    async def test_get_missing(self, sql_store):
        """Test a missing key reads as None"""
        assert await sql_store.get("nothing") is None

    @pytest.mark.asyncio
    async def test_set_and_overwrite(self, sql_store, db_manager):
        """Test set inserts and then updates a single row"""
        await sql_store.set("42:cart_identity", "one")
        await sql_store.set("42:cart_identity", "two")

        assert await sql_store.get("42:cart_identity") == "two"
        with managed_session(db_manager) as session:
            assert session.query(KeyValueEntry).count() == 1

    @pytest.mark.asyncio
    async def test_delete(self, sql_store):
        """Test delete reports whether something was removed"""
        await sql_store.set("k", "v")

        assert await sql_store.delete("k") is True
        assert await sql_store.delete("k") is False
        assert await sql_store.get("k") is None

    @pytest.mark.asyncio
    async def test_values_survive_a_new_store(self, sql_store, db_manager):
        """Test values are shared through the database, not the store object"""
        await sql_store.set("k", "v")

        assert await SQLAlchemyKeyValueStore(db_manager).get("k") == "v"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", "x" * (StorageKeys.MAX_KEY_LENGTH + 1)])
    async def test_invalid_keys(self, sql_store, key):
        """Test empty and overlong keys are rejected"""
        with pytest.raises(StorageError):
            await sql_store.get(key)
        with pytest.raises(StorageError):
            await sql_store.set(key, "v")

    @pytest.mark.asyncio
    async def test_database_errors_become_storage_errors(self, sql_store, db_manager):
        """Test SQLAlchemy failures are wrapped"""
        failing = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with patch.object(db_manager, "get_session", side_effect=failing):
            with pytest.raises(StorageError) as exc_info:
                await sql_store.get("k")
        assert exc_info.value.operation == "get"

    @pytest.mark.asyncio
    async def test_sessions_run_off_the_event_loop_thread(self, sql_store, db_manager):
        """Test database work happens in a worker thread"""
        open_session = db_manager.get_session
        session_threads = []

        def tracking_session():
            session_threads.append(threading.get_ident())
            return open_session()

        with patch.object(db_manager, "get_session", side_effect=tracking_session):
            await sql_store.set("k", "v")
            assert await sql_store.get("k") == "v"
            assert await sql_store.delete("k") is True

        assert len(session_threads) == 3
        assert threading.get_ident() not in session_threads

    @pytest.mark.asyncio
    async def test_missing_table(self):
        """Test using the store before the tables exist fails with StorageError"""
        manager = DatabaseManager("sqlite:///:memory:", "test")
        try:
            with pytest.raises(StorageError) as exc_info:
                await SQLAlchemyKeyValueStore(manager).set("k", "v")
            assert exc_info.value.operation == "set"
        finally:
            manager.close()


class TestManagedSession:
    """Test commit and rollback behaviour"""

    def test_commit(self, db_manager):
        """Test changes are committed on success"""
        with managed_session(db_manager) as session:
            session.add(KeyValueEntry(key="k", value="v"))

        with managed_session(db_manager) as session:
            assert session.get(KeyValueEntry, "k").value == "v"

    def test_rollback_on_error(self, db_manager):
        """Test changes are discarded when the block raises"""
        with pytest.raises(RuntimeError):
            with managed_session(db_manager) as session:
                session.add(KeyValueEntry(key="k", value="v"))
                session.flush()
                raise RuntimeError("boom")

        with managed_session(db_manager) as session:
            assert session.get(KeyValueEntry, "k") is None


class TestInMemoryKeyValueStore:
    """Test the dict-backed store"""

    @pytest.mark.asyncio
    async def test_operations_and_stats(self):
        """Test reads, writes and statistics"""
        store = InMemoryKeyValueStore({"a": "1"})

        assert await store.get("a") == "1"
        assert await store.get("b") is None
        await store.set("b", "2")
        assert await store.delete("a") is True
        assert await store.delete("a") is False

        assert store.snapshot() == {"b": "2"}
        assert store.get_stats() == {"hits": 1, "misses": 1, "sets": 1, "deletes": 1, "size": 1}

    def test_initial_data_is_copied(self):
        """Test the initial mapping is not shared"""
        initial = {"a": "1"}
        store = InMemoryKeyValueStore(initial)
        initial["b"] = "2"

        assert store.snapshot() == {"a": "1"}


class TestCartIdentityRepository:
    """Test persistence of the tagged cart identity"""

    def test_key(self, kv_store):
        """Test keys are namespaced per session"""
        assert CartIdentityRepository(kv_store, "42").key == "42:cart_identity"
        assert CartIdentityRepository(kv_store).key == "cart_identity"

    @pytest.mark.asyncio
    async def test_save_and_load(self, kv_store):
        """Test the identity is stored as tagged JSON"""
        repository = CartIdentityRepository(kv_store, "42")

        await repository.save(CartIdentity.guest("g1"))

        assert json.loads(kv_store.snapshot()["42:cart_identity"]) == {"scope": "guest", "id": "g1"}
        assert await repository.load() == CartIdentity.guest("g1")

    @pytest.mark.asyncio
    async def test_namespaces_are_isolated(self, kv_store):
        """Test two sessions never see each other's cart"""
        first = CartIdentityRepository(kv_store, "1")
        second = CartIdentityRepository(kv_store, "2")

        await first.save(CartIdentity.customer("c1"))

        assert await second.load() is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[]",
            '{"scope": "guest"}',
            '{"scope": "admin", "id": "x"}',
            '{"scope": "guest", "id": ""}',
        ],
    )
    async def test_malformed_values_read_as_absent(self, raw):
        """Test unreadable values are treated as no cart"""
        repository = CartIdentityRepository(InMemoryKeyValueStore({"42:cart_identity": raw}), "42")

        assert await repository.load() is None

    @pytest.mark.asyncio
    async def test_clear(self, kv_store):
        """Test clear removes the value"""
        repository = CartIdentityRepository(kv_store, "42")
        await repository.save(CartIdentity.guest("g1"))

        await repository.clear()

        assert kv_store.snapshot() == {}

    @pytest.mark.asyncio
    async def test_slots(self, kv_store):
        """Test the slot view of guest and customer identities"""
        repository = CartIdentityRepository(kv_store, "42")

        await repository.save(CartIdentity.guest("g1"))
        guest = await repository.slots()
        await repository.save(CartIdentity.customer("c1"))
        customer = await repository.slots()

        assert (guest.guest_cart_id, guest.current_cart_id, guest.customer_cart_id) == ("g1", "g1", None)
        assert (customer.guest_cart_id, customer.current_cart_id, customer.customer_cart_id) == (
            None,
            None,
            "c1",
        )

    @pytest.mark.asyncio
    async def test_backed_by_database(self, sql_store):
        """Test the repository works on the SQLAlchemy store"""
        repository = CartIdentityRepository(sql_store, "7")

        await repository.save(CartIdentity.customer("c9"))

        assert await repository.load() == CartIdentity.customer("c9")
