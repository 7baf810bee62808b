# pylint: disable=too-few-public-methods
"""
SQLAlchemy database models for the storefront bot
"""

from datetime import datetime
from typing import Optional, Type

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeMeta, Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

from magento_storefront.infrastructure.utilities.constants import StorageKeys

_Base = declarative_base()

# Type alias for mypy
Base: Type[DeclarativeMeta] = _Base


class KeyValueEntry(Base):
    """Namespaced string value, e.g. the persisted cart identity of one chat user"""
    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(StorageKeys.MAX_KEY_LENGTH), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"KeyValueEntry(key={self.key!r})"
