"""
GraphQL documents used by the SDK modules
"""
