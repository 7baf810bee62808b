"""
SQLAlchemy Key-Value Store

Concrete implementation of KeyValueStore backed by the ``kv_entries`` table.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from magento_storefront.domain.repositories.key_value_store import KeyValueStore
from magento_storefront.infrastructure.database.models import KeyValueEntry
from magento_storefront.infrastructure.database.operations import DatabaseManager
from magento_storefront.infrastructure.repositories.session_handler import managed_session
from magento_storefront.infrastructure.utilities.constants import StorageKeys
from magento_storefront.infrastructure.utilities.exceptions import StorageError


class SQLAlchemyKeyValueStore(KeyValueStore):
    """SQLAlchemy implementation of the key-value store"""

    def __init__(self, db_manager: Optional[DatabaseManager] = None):
        self._db_manager = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def _check_key(key: str) -> str:
        if not key:
            raise StorageError("Storage key cannot be empty", "validate")
        if len(key) > StorageKeys.MAX_KEY_LENGTH:
            raise StorageError(
                f"Storage key exceeds {StorageKeys.MAX_KEY_LENGTH} characters", "validate"
            )
        return key

    def _read(self, key: str) -> Optional[str]:
        with managed_session(self._db_manager) as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry else None

    def _write(self, key: str, value: str) -> None:
        with managed_session(self._db_manager) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value

    def _remove(self, key: str) -> bool:
        with managed_session(self._db_manager) as session:
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                return False
            session.delete(entry)
            return True

    # Sessions are synchronous; they run in a worker thread to keep the loop free

    async def get(self, key: str) -> Optional[str]:
        key = self._check_key(key)
        try:
            return await asyncio.to_thread(self._read, key)
        except SQLAlchemyError as e:
            self._logger.error("💥 KV GET ERROR: %s: %s", key, e)
            raise StorageError(f"Failed to read {key}: {e}", "get") from e

    async def set(self, key: str, value: str) -> None:
        key = self._check_key(key)
        try:
            await asyncio.to_thread(self._write, key, value)
            self._logger.debug("💾 KV SET: %s", key)
        except SQLAlchemyError as e:
            self._logger.error("💥 KV SET ERROR: %s: %s", key, e)
            raise StorageError(f"Failed to write {key}: {e}", "set") from e

    async def delete(self, key: str) -> bool:
        key = self._check_key(key)
        try:
            removed = await asyncio.to_thread(self._remove, key)
        except SQLAlchemyError as e:
            self._logger.error("💥 KV DELETE ERROR: %s: %s", key, e)
            raise StorageError(f"Failed to delete {key}: {e}", "delete") from e
        if removed:
            self._logger.debug("🗑️ KV DELETE: %s", key)
        return removed
