"""
Category, product and search queries
"""

CATEGORY_FIELDS = """
  id
  uid
  name
  url_path
  url_key
  description
  image
  position
  level
  path
  product_count
"""

GET_CATEGORY_QUERY = """
query GetCategory($id: Int!) {
  category(id: $id) {
%(fields)s
    children {
%(fields)s
    }
  }
}
""" % {"fields": CATEGORY_FIELDS}

GET_CATEGORY_TREE_QUERY = """
query GetCategoryTree {
  categoryList {
%(fields)s
    children {
%(fields)s
      children {
%(fields)s
        children {
%(fields)s
        }
      }
    }
  }
}
""" % {"fields": CATEGORY_FIELDS}

PRODUCT_FRAGMENT = """
fragment ProductFields on ProductInterface {
  id
  uid
  sku
  name
  url_key
  stock_status
  description {
    html
  }
  short_description {
    html
  }
  image {
    url
    label
    position
  }
  price_range {
    minimum_price {
      regular_price {
        value
        currency
      }
      final_price {
        value
        currency
      }
      discount {
        amount_off
        percent_off
      }
    }
    maximum_price {
      regular_price {
        value
        currency
      }
      final_price {
        value
        currency
      }
    }
  }
}
"""

PRODUCT_LIST_FIELDS = """
    total_count
    items {
      ...ProductFields
    }
    page_info {
      current_page
      page_size
      total_pages
    }
"""

GET_PRODUCTS_QUERY = """
query GetProducts($filter: ProductAttributeFilterInput, $pageSize: Int, $currentPage: Int) {
  products(filter: $filter, pageSize: $pageSize, currentPage: $currentPage) {
%s
  }
}
""" % PRODUCT_LIST_FIELDS + PRODUCT_FRAGMENT

SEARCH_PRODUCTS_QUERY = """
query SearchProducts(
  $search: String!,
  $pageSize: Int,
  $currentPage: Int,
  $sort: ProductAttributeSortInput
) {
  products(search: $search, pageSize: $pageSize, currentPage: $currentPage, sort: $sort) {
%s
  }
}
""" % PRODUCT_LIST_FIELDS + PRODUCT_FRAGMENT
