"""
Remote cart module

Thin GraphQL wrapper over the Magento cart API. It does not decide which cart
id to use; that is the job of the cart identity store.
"""

import logging
from typing import Any, Dict, List, Optional

from magento_storefront.domain.entities.cart_entity import Cart
from magento_storefront.domain.repositories.remote_cart_api import (
    CartItemInput,
    CartItemUpdate,
    RemoteCartApi,
)
from magento_storefront.infrastructure.magento.graphql_client import (
    MagentoClient,
    response_data,
)
from magento_storefront.infrastructure.magento.queries.cart_queries import (
    ADD_PRODUCTS_TO_CART_MUTATION,
    CREATE_EMPTY_CART_MUTATION,
    GET_CART_QUERY,
    GET_CUSTOMER_CART_QUERY,
    REMOVE_ITEM_FROM_CART_MUTATION,
    UPDATE_CART_ITEMS_MUTATION,
)
from magento_storefront.infrastructure.utilities.exceptions import (
    AuthenticationError,
    GraphQLError,
    GraphQLErrorDetail,
    MagentoError,
    NotFoundError,
    ValidationError,
)
from magento_storefront.infrastructure.utilities.helpers import as_dict, as_list


def cart_item_reference(cart_item_id: str) -> Dict[str, Any]:
    """Numeric ids go out as ``cart_item_id``, anything else as ``cart_item_uid``"""
    if cart_item_id.isdigit():
        return {"cart_item_id": int(cart_item_id)}
    return {"cart_item_uid": cart_item_id}


class MagentoCart(RemoteCartApi):
    """Cart operations against the storefront API"""

    def __init__(self, client: MagentoClient):
        self._client = client
        self._logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def _require_cart_id(cart_id: str) -> str:
        if not cart_id or not str(cart_id).strip():
            raise ValidationError("Cart id is required", "cart_id")
        return str(cart_id).strip()

    @staticmethod
    def _parse_cart(payload: Any, operation: str, response: Dict[str, Any]) -> Cart:
        cart_data = as_dict(payload).get("cart")
        if not isinstance(cart_data, dict) or not cart_data.get("id"):
            raise MagentoError(f"{operation}: cart missing from response", original_error=response)
        return Cart.from_dict(cart_data)

    async def create_cart(self) -> Cart:
        response = await self._client.mutate(CREATE_EMPTY_CART_MUTATION)
        cart_id = response_data(response).get("createEmptyCart")
        if not cart_id:
            raise MagentoError("Failed to create cart", original_error=response)

        self._logger.info("🆕 CART CREATED: %s", cart_id)
        return Cart.empty(str(cart_id))

    async def get_cart(self, cart_id: str) -> Cart:
        cart_id = self._require_cart_id(cart_id)
        response = await self._client.query(GET_CART_QUERY, {"cartId": cart_id})
        cart_data = response_data(response).get("cart")
        if not isinstance(cart_data, dict) or not cart_data.get("id"):
            raise NotFoundError(f'Could not find a cart with ID "{cart_id}"', original_error=response)
        return Cart.from_dict(cart_data)

    async def get_customer_cart(self) -> Optional[Cart]:
        if not self._client.is_authenticated:
            raise AuthenticationError(
                "Authentication required. Please login before fetching the customer cart.",
                code="401",
            )
        response = await self._client.query(GET_CUSTOMER_CART_QUERY)
        cart_data = response_data(response).get("customerCart")
        if not isinstance(cart_data, dict):
            return None
        if not cart_data.get("id"):
            raise MagentoError("customerCart: cart id missing from response", original_error=response)
        return Cart.from_dict(cart_data)

    async def add_products(self, cart_id: str, items: List[CartItemInput]) -> Cart:
        cart_id = self._require_cart_id(cart_id)
        if not items:
            raise ValidationError("At least one item is required", "items")

        response = await self._client.mutate(
            ADD_PRODUCTS_TO_CART_MUTATION,
            {"cartId": cart_id, "cartItems": [item.to_input() for item in items]},
        )
        payload = as_dict(response_data(response).get("addProductsToCart"))

        user_errors = [e for e in as_list(payload.get("user_errors")) if isinstance(e, dict)]
        if user_errors:
            details = [
                GraphQLErrorDetail(
                    message=str(e.get("message") or "Unknown cart error"),
                    extensions={"code": e.get("code")},
                )
                for e in user_errors
            ]
            self._logger.warning(
                "💥 ADD TO CART REJECTED: cart %s: %s",
                cart_id,
                ", ".join(d.message for d in details),
            )
            raise GraphQLError(
                ", ".join(d.message for d in details),
                errors=details,
                original_error=response,
            )

        return self._parse_cart(payload, "addProductsToCart", response)

    async def update_items(self, cart_id: str, items: List[CartItemUpdate]) -> Cart:
        cart_id = self._require_cart_id(cart_id)
        if not items:
            raise ValidationError("At least one item is required", "items")

        cart_items = [
            {**cart_item_reference(item.cart_item_id), "quantity": item.quantity}
            for item in items
        ]
        response = await self._client.mutate(
            UPDATE_CART_ITEMS_MUTATION, {"cartId": cart_id, "cartItems": cart_items}
        )
        payload = response_data(response).get("updateCartItems")
        return self._parse_cart(payload, "updateCartItems", response)

    async def remove_item(self, cart_id: str, cart_item_id: str) -> Cart:
        cart_id = self._require_cart_id(cart_id)
        if not cart_item_id:
            raise ValidationError("Cart item id is required", "cart_item_id")

        response = await self._client.mutate(
            REMOVE_ITEM_FROM_CART_MUTATION,
            {"input": {"cart_id": cart_id, **cart_item_reference(str(cart_item_id))}},
        )
        payload = response_data(response).get("removeItemFromCart")
        return self._parse_cart(payload, "removeItemFromCart", response)
