"""
Storefront content REST API.
"""
