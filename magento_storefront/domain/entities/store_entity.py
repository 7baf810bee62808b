# pylint: disable=too-many-instance-attributes
"""
Store Entities - store views, store configuration and country directory
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from magento_storefront.infrastructure.utilities.helpers import (
    as_list,
    to_bool_or_none,
    to_str_or_none,
)


def _first_str(data: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = to_str_or_none(data.get(key))
        if value is not None:
            return value
    return None


@dataclass
class Store:
    """A store view as listed by ``availableStores``"""

    id: str
    code: str
    name: str
    website_id: Optional[str] = None
    locale: Optional[str] = None
    base_currency_code: Optional[str] = None
    default_display_currency_code: Optional[str] = None
    timezone: Optional[str] = None
    weight_unit: Optional[str] = None
    base_url: Optional[str] = None
    secure_base_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        return cls(
            id=_first_str(data, "id", "store_id") or "",
            code=_first_str(data, "code", "store_code") or "",
            name=_first_str(data, "name", "store_name") or "",
            website_id=to_str_or_none(data.get("website_id")),
            locale=to_str_or_none(data.get("locale")),
            base_currency_code=to_str_or_none(data.get("base_currency_code")),
            default_display_currency_code=to_str_or_none(
                data.get("default_display_currency_code")
            ),
            timezone=to_str_or_none(data.get("timezone")),
            weight_unit=to_str_or_none(data.get("weight_unit")),
            base_url=to_str_or_none(data.get("base_url")),
            secure_base_url=to_str_or_none(data.get("secure_base_url")),
        )


@dataclass
class StoreConfig:
    """Configuration of the current store view"""

    id: Optional[str] = None
    code: Optional[str] = None
    store_name: Optional[str] = None
    website_id: Optional[str] = None
    locale: Optional[str] = None
    base_currency_code: Optional[str] = None
    default_display_currency_code: Optional[str] = None
    timezone: Optional[str] = None
    weight_unit: Optional[str] = None
    base_url: Optional[str] = None
    secure_base_url: Optional[str] = None
    catalog_search_enabled: Optional[bool] = None
    use_store_in_url: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        return cls(
            id=_first_str(data, "id", "store_id"),
            code=_first_str(data, "code", "store_code"),
            store_name=to_str_or_none(data.get("store_name")),
            website_id=to_str_or_none(data.get("website_id")),
            locale=to_str_or_none(data.get("locale")),
            base_currency_code=to_str_or_none(data.get("base_currency_code")),
            default_display_currency_code=to_str_or_none(
                data.get("default_display_currency_code")
            ),
            timezone=to_str_or_none(data.get("timezone")),
            weight_unit=to_str_or_none(data.get("weight_unit")),
            base_url=to_str_or_none(data.get("base_url")),
            secure_base_url=to_str_or_none(data.get("secure_base_url")),
            catalog_search_enabled=to_bool_or_none(data.get("catalog_search_enabled")),
            use_store_in_url=to_bool_or_none(data.get("use_store_in_url")),
        )


@dataclass
class CountryCity:
    """City entry of a region"""

    id: Optional[str] = None
    code: Optional[str] = None
    name: Optional[str] = None
    localized_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CountryCity":
        return cls(
            id=to_str_or_none(data.get("id")),
            code=to_str_or_none(data.get("code")),
            name=to_str_or_none(data.get("name")),
            localized_name=to_str_or_none(data.get("localized_name")),
        )


@dataclass
class CountryRegion:
    """Region of a country"""

    id: Optional[str] = None
    code: Optional[str] = None
    name: Optional[str] = None
    cities: List[CountryCity] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CountryRegion":
        return cls(
            id=to_str_or_none(data.get("id")),
            code=to_str_or_none(data.get("code")),
            name=to_str_or_none(data.get("name")),
            cities=[
                CountryCity.from_dict(city)
                for city in as_list(data.get("cities"))
                if isinstance(city, dict)
            ],
        )


@dataclass
class Country:
    """Country with its regions"""

    id: str
    two_letter_abbreviation: Optional[str] = None
    three_letter_abbreviation: Optional[str] = None
    full_name_locale: Optional[str] = None
    full_name_english: Optional[str] = None
    available_regions: List[CountryRegion] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.full_name_locale or self.full_name_english or self.id

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Country":
        return cls(
            id=to_str_or_none(data.get("id")) or "",
            two_letter_abbreviation=to_str_or_none(data.get("two_letter_abbreviation")),
            three_letter_abbreviation=to_str_or_none(data.get("three_letter_abbreviation")),
            full_name_locale=to_str_or_none(data.get("full_name_locale")),
            full_name_english=to_str_or_none(data.get("full_name_english")),
            available_regions=[
                CountryRegion.from_dict(region)
                for region in as_list(data.get("available_regions"))
                if isinstance(region, dict)
            ],
        )
