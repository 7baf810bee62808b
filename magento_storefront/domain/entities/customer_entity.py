# pylint: disable=too-many-instance-attributes
"""
Customer Entity - the authenticated customer's profile and address book

Every field is optional: stores may disable attributes such as gender or
date of birth, and the schema varies across Magento versions.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from magento_storefront.infrastructure.utilities.helpers import (
    to_bool_or_none,
    to_int_or_none,
    to_str_or_none,
)

logger = logging.getLogger(__name__)


@dataclass
class CustomerAddressRegion:
    """Region of an address"""

    region: Optional[str] = None
    region_code: Optional[str] = None
    region_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerAddressRegion":
        return cls(
            region=to_str_or_none(data.get("region")),
            region_code=to_str_or_none(data.get("region_code")),
            region_id=to_str_or_none(data.get("region_id")),
        )

    def to_input(self) -> Dict[str, Any]:
        """GraphQL ``CustomerAddressRegionInput``; ``region_id`` is sent as int when it parses"""
        region_input: Dict[str, Any] = {}
        if self.region is not None:
            region_input["region"] = self.region
        if self.region_code is not None:
            region_input["region_code"] = self.region_code
        if self.region_id is not None:
            parsed = to_int_or_none(self.region_id)
            region_input["region_id"] = parsed if parsed is not None else self.region_id
        return region_input


@dataclass
class CustomerAddress:
    """Customer address"""

    id: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    street: List[str] = field(default_factory=list)
    city: Optional[str] = None
    region: Optional[CustomerAddressRegion] = None
    postcode: Optional[str] = None
    country_code: Optional[str] = None
    telephone: Optional[str] = None
    default_shipping: Optional[bool] = None
    default_billing: Optional[bool] = None

    def format_lines(self) -> List[str]:
        """Address as printable lines"""
        name = " ".join(part for part in (self.firstname, self.lastname) if part)
        locality = " ".join(part for part in (self.postcode, self.city) if part)
        region = self.region.region if self.region and self.region.region else None
        lines = [name, *self.street, locality, region, self.country_code, self.telephone]
        return [line for line in lines if line]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerAddress":
        raw_street = data.get("street")
        street: List[str] = []
        if isinstance(raw_street, list):
            street = [s for s in (to_str_or_none(line) for line in raw_street) if s]
        elif isinstance(raw_street, str) and raw_street:
            street = [raw_street]

        region = data.get("region")
        return cls(
            id=to_str_or_none(data.get("id")),
            firstname=to_str_or_none(data.get("firstname")),
            lastname=to_str_or_none(data.get("lastname")),
            street=street,
            city=to_str_or_none(data.get("city")),
            region=CustomerAddressRegion.from_dict(region) if isinstance(region, dict) else None,
            postcode=to_str_or_none(data.get("postcode")),
            country_code=to_str_or_none(data.get("country_code")),
            telephone=to_str_or_none(data.get("telephone")),
            default_shipping=to_bool_or_none(data.get("default_shipping")),
            default_billing=to_bool_or_none(data.get("default_billing")),
        )


@dataclass
class Customer:
    """Customer domain entity"""

    id: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[int] = None
    date_of_birth: Optional[str] = None
    is_subscribed: Optional[bool] = None
    addresses: Optional[List[CustomerAddress]] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.firstname, self.lastname) if part)

    @property
    def default_shipping_address(self) -> Optional[CustomerAddress]:
        for address in self.addresses or []:
            if address.default_shipping:
                return address
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        addresses = None
        raw_addresses = data.get("addresses")
        if isinstance(raw_addresses, list):
            addresses = []
            for raw in raw_addresses:
                if not isinstance(raw, dict):
                    logger.warning("⚠️ SKIPPING ADDRESS: unexpected payload %r", raw)
                    continue
                addresses.append(CustomerAddress.from_dict(raw))

        return cls(
            id=to_str_or_none(data.get("id")),
            firstname=to_str_or_none(data.get("firstname")),
            lastname=to_str_or_none(data.get("lastname")),
            email=to_str_or_none(data.get("email")),
            gender=to_int_or_none(data.get("gender")),
            date_of_birth=to_str_or_none(data.get("date_of_birth")),
            is_subscribed=to_bool_or_none(data.get("is_subscribed")),
            addresses=addresses,
        )
