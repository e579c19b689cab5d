"""Storefront Manager: account and promo flows shared by both HTTP surfaces,
plus the promo redemption workflow."""
