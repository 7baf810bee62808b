"""
Application layer: use cases and DTOs
"""
