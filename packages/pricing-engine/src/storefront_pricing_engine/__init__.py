"""Pricing Engine: promo code eligibility and discount amounts."""
