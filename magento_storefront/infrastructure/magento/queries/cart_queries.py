"""
Cart queries and mutations
"""

CART_FRAGMENT = """
fragment CartFields on Cart {
  id
  total_quantity
  items {
    id
    uid
    quantity
    product {
      sku
      name
      url_key
      small_image {
        url
        label
      }
    }
    prices {
      price {
        value
        currency
      }
      row_total {
        value
        currency
      }
    }
  }
  prices {
    grand_total {
      value
      currency
    }
    subtotal_excluding_tax {
      value
      currency
    }
    subtotal_including_tax {
      value
      currency
    }
  }
}
"""

CREATE_EMPTY_CART_MUTATION = """
mutation CreateEmptyCart {
  createEmptyCart
}
"""

GET_CART_QUERY = """
query GetCart($cartId: String!) {
  cart(cart_id: $cartId) {
    ...CartFields
  }
}
""" + CART_FRAGMENT

GET_CUSTOMER_CART_QUERY = """
query GetCustomerCart {
  customerCart {
    ...CartFields
  }
}
""" + CART_FRAGMENT

ADD_PRODUCTS_TO_CART_MUTATION = """
mutation AddProductsToCart($cartId: String!, $cartItems: [CartItemInput!]!) {
  addProductsToCart(cartId: $cartId, cartItems: $cartItems) {
    cart {
      ...CartFields
    }
    user_errors {
      code
      message
    }
  }
}
""" + CART_FRAGMENT

UPDATE_CART_ITEMS_MUTATION = """
mutation UpdateCartItems($cartId: String!, $cartItems: [CartItemUpdateInput!]!) {
  updateCartItems(input: { cart_id: $cartId, cart_items: $cartItems }) {
    cart {
      ...CartFields
    }
  }
}
""" + CART_FRAGMENT

REMOVE_ITEM_FROM_CART_MUTATION = """
mutation RemoveItemFromCart($input: RemoveItemFromCartInput!) {
  removeItemFromCart(input: $input) {
    cart {
      ...CartFields
    }
  }
}
""" + CART_FRAGMENT
