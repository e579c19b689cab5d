"""Storefront Functions: the Azure Functions (Python v2) surface."""
