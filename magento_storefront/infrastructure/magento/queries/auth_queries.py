"""
Customer token and account mutations
"""

GENERATE_CUSTOMER_TOKEN_MUTATION = """
mutation GenerateCustomerToken($email: String!, $password: String!) {
  generateCustomerToken(email: $email, password: $password) {
    token
  }
}
"""

CREATE_CUSTOMER_MUTATION = """
mutation CreateCustomer(
  $email: String!,
  $password: String!,
  $firstname: String!,
  $lastname: String!
) {
  createCustomer(
    input: {
      email: $email
      password: $password
      firstname: $firstname
      lastname: $lastname
    }
  ) {
    customer {
      email
      firstname
      lastname
    }
  }
}
"""

REQUEST_PASSWORD_RESET_EMAIL_MUTATION = """
mutation RequestPasswordResetEmail($email: String!) {
  requestPasswordResetEmail(email: $email)
}
"""

REVOKE_CUSTOMER_TOKEN_MUTATION = """
mutation RevokeCustomerToken {
  revokeCustomerToken {
    result
  }
}
"""
