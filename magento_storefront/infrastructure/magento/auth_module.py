"""
Customer authentication module
"""

import logging
from typing import Optional

from magento_storefront.domain.entities.customer_entity import Customer
from magento_storefront.domain.repositories.authentication_state import (
    AuthenticationState,
)
from magento_storefront.infrastructure.magento.graphql_client import (
    MagentoClient,
    response_data,
)
from magento_storefront.infrastructure.magento.queries.auth_queries import (
    CREATE_CUSTOMER_MUTATION,
    GENERATE_CUSTOMER_TOKEN_MUTATION,
    REQUEST_PASSWORD_RESET_EMAIL_MUTATION,
    REVOKE_CUSTOMER_TOKEN_MUTATION,
)
from magento_storefront.infrastructure.utilities.exceptions import (
    MagentoError,
    ValidationError,
)


class MagentoAuth(AuthenticationState):
    """Login, registration and token handling; the token lives on the client"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def is_authenticated(self) -> bool:
        return self._client.is_authenticated

    @property
    def token(self) -> Optional[str]:
        return self._client.auth_token

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a customer token and keep it on the client"""
        if not email or not email.strip():
            raise ValidationError("Email is required", "email")
        if not password:
            raise ValidationError("Password is required", "password")

        self._logger.info("🔐 LOGIN: %s", email)
        response = await self._client.mutate(
            GENERATE_CUSTOMER_TOKEN_MUTATION,
            {"email": email.strip(), "password": password},
        )
        data = response_data(response)

        token_data = data.get("generateCustomerToken")
        if not isinstance(token_data, dict):
            raise MagentoError("Failed to generate token", original_error=response)

        token = token_data.get("token")
        if not token:
            raise MagentoError("Token is empty", original_error=response)

        self._client.set_auth_token(token)
        self._logger.info("✅ LOGIN SUCCESS: %s", email)
        return token

    async def register(
        self, email: str, password: str, firstname: str, lastname: str
    ) -> Customer:
        """Create a customer account, then log it in"""
        for field_name, value in (
            ("email", email),
            ("password", password),
            ("firstname", firstname),
            ("lastname", lastname),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{field_name.capitalize()} is required", field_name)

        self._logger.info("📝 REGISTER: %s", email)
        response = await self._client.mutate(
            CREATE_CUSTOMER_MUTATION,
            {
                "email": email.strip(),
                "password": password,
                "firstname": firstname.strip(),
                "lastname": lastname.strip(),
            },
        )
        data = response_data(response)

        customer_data = (data.get("createCustomer") or {}).get("customer")
        if not isinstance(customer_data, dict):
            raise MagentoError("Failed to create customer", original_error=response)

        await self.login(email, password)
        return Customer.from_dict(customer_data)

    async def forgot_password(self, email: str) -> bool:
        if not email or not email.strip():
            raise ValidationError("Email is required", "email")

        response = await self._client.mutate(
            REQUEST_PASSWORD_RESET_EMAIL_MUTATION, {"email": email.strip()}
        )
        data = response_data(response)
        if data.get("requestPasswordResetEmail") is not True:
            raise MagentoError("Failed to request password reset", original_error=response)
        return True

    async def logout(self, revoke: bool = False) -> None:
        """
        Forget the token. With ``revoke`` the server-side token is invalidated
        first; a failure to revoke is logged and the local token is cleared anyway.
        """
        if revoke and self._client.is_authenticated:
            try:
                await self._client.mutate(REVOKE_CUSTOMER_TOKEN_MUTATION)
            except MagentoError as e:
                self._logger.warning("⚠️ TOKEN REVOKE FAILED: %s", e)
        self._client.set_auth_token(None)
        self._logger.info("👋 LOGOUT")
