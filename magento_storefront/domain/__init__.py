"""
Domain Layer

Storefront entities, value objects and the interfaces of external collaborators.
"""
