"""
Infrastructure Layer

Implementations of external concerns: the Magento GraphQL SDK, persistence,
logging and shared utilities.
"""
