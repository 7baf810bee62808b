"""
Customer profile module

Every operation here needs a customer token on the client; calls made
without one fail fast with ``AuthenticationError`` (code ``401``) and never
reach the network.
"""

import logging
from typing import Any, Dict, List, Optional

from magento_storefront.domain.entities.customer_entity import (
    Customer,
    CustomerAddress,
    CustomerAddressRegion,
)
from magento_storefront.infrastructure.magento.graphql_client import (
    MagentoClient,
    response_data,
)
from magento_storefront.infrastructure.magento.queries.customer_queries import (
    CREATE_CUSTOMER_ADDRESS_MUTATION,
    CUSTOMER_PROFILE_QUERY,
    DELETE_CUSTOMER_ADDRESS_MUTATION,
    UPDATE_CUSTOMER_ADDRESS_MUTATION,
    UPDATE_CUSTOMER_MUTATION,
)
from magento_storefront.infrastructure.utilities.constants import MagentoSettings
from magento_storefront.infrastructure.utilities.exceptions import (
    AuthenticationError,
    GraphQLError,
    ValidationError,
)
from magento_storefront.infrastructure.utilities.helpers import as_dict, to_int_or_none


def _validate_street(street: List[str], empty_message: str) -> List[str]:
    if not street or any(not line or not line.strip() for line in street):
        raise ValidationError(empty_message, "street")
    if len(street) > MagentoSettings.MAX_STREET_LINES:
        raise ValidationError(
            f"Street address cannot have more than {MagentoSettings.MAX_STREET_LINES} lines",
            "street",
        )
    return [line.strip() for line in street]


def _parse_address_id(address_id: str) -> int:
    parsed = to_int_or_none(address_id)
    if parsed is None:
        raise ValidationError(f"Invalid address ID: {address_id}", "address_id")
    return parsed


class MagentoProfile:
    """Profile and address book of the authenticated customer"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    def _require_token(self, action: str) -> None:
        if not self._client.auth_token:
            raise AuthenticationError(
                f"Authentication required. Please login before {action}.", code="401"
            )

    async def get_profile(self) -> Customer:
        self._require_token("fetching profile")

        response = await self._client.query(CUSTOMER_PROFILE_QUERY)
        customer_data = response_data(response).get("customer")
        if not isinstance(customer_data, dict):
            raise GraphQLError(
                "Customer data not found in response. User may not be authenticated.",
                original_error=response,
            )
        return Customer.from_dict(customer_data)

    async def update_profile(
        self,
        firstname: Optional[str] = None,
        lastname: Optional[str] = None,
        gender: Optional[int] = None,
        date_of_birth: Optional[str] = None,
        is_subscribed: Optional[bool] = None,
    ) -> Customer:
        """Update only the fields given; at least one is required"""
        self._require_token("updating profile")

        variables: Dict[str, Any] = {}
        if firstname is not None:
            variables["firstname"] = firstname
        if lastname is not None:
            variables["lastname"] = lastname
        if gender is not None:
            variables["gender"] = gender
        if date_of_birth is not None:
            variables["dateOfBirth"] = date_of_birth
        if is_subscribed is not None:
            variables["isSubscribed"] = is_subscribed

        if not variables:
            raise ValidationError("At least one field must be provided to update the profile.")

        response = await self._client.mutate(UPDATE_CUSTOMER_MUTATION, variables)
        update_data = response_data(response).get("updateCustomerV2")
        customer_data = as_dict(update_data).get("customer")
        if not isinstance(customer_data, dict):
            raise GraphQLError("Customer data not found in update response.", original_error=response)

        self._logger.info("✅ PROFILE UPDATED: fields=%s", sorted(variables))
        return Customer.from_dict(customer_data)

    async def create_address(
        self,
        firstname: str,
        lastname: str,
        street: List[str],
        city: str,
        postcode: str,
        country_code: str,
        telephone: str,
        region: Optional[CustomerAddressRegion] = None,
        default_shipping: Optional[bool] = None,
        default_billing: Optional[bool] = None,
    ) -> CustomerAddress:
        self._require_token("creating address")

        required = (
            ("firstname", firstname, "First name is required"),
            ("lastname", lastname, "Last name is required"),
        )
        for field_name, value, message in required:
            if not value or not value.strip():
                raise ValidationError(message, field_name)
        street_lines = _validate_street(street, "Street address is required")
        for field_name, value, message in (
            ("city", city, "City is required"),
            ("postcode", postcode, "Postcode is required"),
            ("country_code", country_code, "Country code is required"),
            ("telephone", telephone, "Telephone is required"),
        ):
            if not value or not value.strip():
                raise ValidationError(message, field_name)

        address_input: Dict[str, Any] = {
            "firstname": firstname.strip(),
            "lastname": lastname.strip(),
            "street": street_lines,
            "city": city.strip(),
            "postcode": postcode.strip(),
            "country_code": country_code.strip().upper(),
            "telephone": telephone.strip(),
        }
        if region is not None:
            region_input = region.to_input()
            if region_input:
                address_input["region"] = region_input
        if default_shipping is not None:
            address_input["default_shipping"] = default_shipping
        if default_billing is not None:
            address_input["default_billing"] = default_billing

        response = await self._client.mutate(
            CREATE_CUSTOMER_ADDRESS_MUTATION, {"input": address_input}
        )
        address_data = response_data(response).get("createCustomerAddress")
        if not isinstance(address_data, dict):
            raise GraphQLError("Address data not found in response.", original_error=response)

        self._logger.info("🏠 ADDRESS CREATED: %s", address_data.get("id"))
        return CustomerAddress.from_dict(address_data)

    async def update_address(
        self,
        address_id: str,
        firstname: Optional[str] = None,
        lastname: Optional[str] = None,
        street: Optional[List[str]] = None,
        city: Optional[str] = None,
        postcode: Optional[str] = None,
        country_code: Optional[str] = None,
        telephone: Optional[str] = None,
        region: Optional[CustomerAddressRegion] = None,
        default_shipping: Optional[bool] = None,
        default_billing: Optional[bool] = None,
    ) -> CustomerAddress:
        """Partial update; blank string fields are ignored"""
        self._require_token("updating address")
        parsed_id = _parse_address_id(address_id)

        address_input: Dict[str, Any] = {}
        if street is not None:
            address_input["street"] = _validate_street(street, "Street address cannot be empty")
        for field_name, value in (
            ("firstname", firstname),
            ("lastname", lastname),
            ("city", city),
            ("postcode", postcode),
            ("telephone", telephone),
        ):
            if value is not None and value.strip():
                address_input[field_name] = value.strip()
        if country_code is not None and country_code.strip():
            address_input["country_code"] = country_code.strip().upper()
        if region is not None:
            region_input = region.to_input()
            if region_input:
                address_input["region"] = region_input
        if default_shipping is not None:
            address_input["default_shipping"] = default_shipping
        if default_billing is not None:
            address_input["default_billing"] = default_billing

        if not address_input:
            raise ValidationError("At least one field must be provided to update the address.")

        response = await self._client.mutate(
            UPDATE_CUSTOMER_ADDRESS_MUTATION, {"id": parsed_id, "input": address_input}
        )
        address_data = response_data(response).get("updateCustomerAddress")
        if not isinstance(address_data, dict):
            raise GraphQLError("Address data not found in response.", original_error=response)
        return CustomerAddress.from_dict(address_data)

    async def delete_address(self, address_id: str) -> bool:
        self._require_token("deleting address")
        parsed_id = _parse_address_id(address_id)

        response = await self._client.mutate(DELETE_CUSTOMER_ADDRESS_MUTATION, {"id": parsed_id})
        result = response_data(response).get("deleteCustomerAddress")
        if not isinstance(result, bool):
            raise GraphQLError("Delete result not found in response.", original_error=response)
        return result
