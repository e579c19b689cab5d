"""Temporal workflow definitions run on storefront-manager-queue."""
