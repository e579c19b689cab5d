"""Storefront API: the FastAPI surface (App Service)."""
