"""
Customer profile and address book documents (require a customer token)
"""

ADDRESS_FIELDS = """
  id
  firstname
  lastname
  street
  city
  region {
    region
    region_code
    region_id
  }
  postcode
  country_code
  telephone
  default_shipping
  default_billing
"""

CUSTOMER_FIELDS = """
  id
  firstname
  lastname
  email
  gender
  date_of_birth
  is_subscribed
  addresses {
%s
  }
""" % ADDRESS_FIELDS

CUSTOMER_PROFILE_QUERY = """
query GetCustomer {
  customer {
%s
  }
}
""" % CUSTOMER_FIELDS

UPDATE_CUSTOMER_MUTATION = """
mutation UpdateCustomer(
  $firstname: String,
  $lastname: String,
  $gender: Int,
  $dateOfBirth: String,
  $isSubscribed: Boolean
) {
  updateCustomerV2(
    input: {
      firstname: $firstname
      lastname: $lastname
      gender: $gender
      date_of_birth: $dateOfBirth
      is_subscribed: $isSubscribed
    }
  ) {
    customer {
%s
    }
  }
}
""" % CUSTOMER_FIELDS

CREATE_CUSTOMER_ADDRESS_MUTATION = """
mutation CreateCustomerAddress($input: CustomerAddressInput!) {
  createCustomerAddress(input: $input) {
%s
  }
}
""" % ADDRESS_FIELDS

UPDATE_CUSTOMER_ADDRESS_MUTATION = """
mutation UpdateCustomerAddress($id: Int!, $input: CustomerAddressInput) {
  updateCustomerAddress(id: $id, input: $input) {
%s
  }
}
""" % ADDRESS_FIELDS

DELETE_CUSTOMER_ADDRESS_MUTATION = """
mutation DeleteCustomerAddress($id: Int!) {
  deleteCustomerAddress(id: $id)
}
"""
