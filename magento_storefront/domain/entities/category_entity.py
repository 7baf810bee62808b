"""
Category Entity
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from magento_storefront.infrastructure.utilities.helpers import (
    as_list,
    to_int_or_none,
    to_str_or_none,
)


@dataclass
class Category:
    """Catalog category with its (already fetched) children"""

    id: str
    name: str
    uid: Optional[str] = None
    url_path: Optional[str] = None
    url_key: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    position: Optional[int] = None
    level: Optional[int] = None
    path: Optional[str] = None
    product_count: int = 0
    children: List["Category"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def walk(self) -> Iterator["Category"]:
        """Depth-first iteration over this category and its descendants"""
        yield self
        for child in self.children:
            yield from child.walk()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        children = [
            cls.from_dict(child)
            for child in as_list(data.get("children"))
            if isinstance(child, dict) and child.get("id") is not None
        ]
        children.sort(key=lambda c: c.position if c.position is not None else 0)
        return cls(
            id=to_str_or_none(data.get("id")) or "",
            uid=to_str_or_none(data.get("uid")),
            name=to_str_or_none(data.get("name")) or "",
            url_path=to_str_or_none(data.get("url_path")),
            url_key=to_str_or_none(data.get("url_key")),
            description=to_str_or_none(data.get("description")),
            image=to_str_or_none(data.get("image")),
            position=to_int_or_none(data.get("position")),
            level=to_int_or_none(data.get("level")),
            path=to_str_or_none(data.get("path")),
            product_count=to_int_or_none(data.get("product_count")) or 0,
            children=children,
        )
