"""
Store metadata and country directory queries
"""

STORE_CONFIG_QUERY = """
query GetStoreConfig {
  storeConfig {
    id
    code
    store_name
    website_id
    locale
    base_currency_code
    default_display_currency_code
    timezone
    weight_unit
    base_url
    secure_base_url
    catalog_search_enabled
    use_store_in_url
  }
}
"""

AVAILABLE_STORES_QUERY = """
query GetAvailableStores {
  availableStores {
    store_code
    store_name
    website_id
    locale
    base_currency_code
    default_display_currency_code
    timezone
    weight_unit
    base_url
    secure_base_url
  }
}
"""

COUNTRY_FIELDS = """
  id
  two_letter_abbreviation
  three_letter_abbreviation
  full_name_locale
  full_name_english
  available_regions {
    id
    code
    name
    cities {
      id
      code
      name
      localized_name
    }
  }
"""

COUNTRIES_QUERY = """
query GetCountries {
  countries {
%s
  }
}
""" % COUNTRY_FIELDS

COUNTRY_QUERY = """
query GetCountry($id: String) {
  country(id: $id) {
%s
  }
}
""" % COUNTRY_FIELDS
