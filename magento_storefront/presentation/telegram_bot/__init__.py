"""
Telegram demo storefront
"""
