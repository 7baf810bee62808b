"""
Shared utilities: exceptions, constants and parsing helpers.
"""
