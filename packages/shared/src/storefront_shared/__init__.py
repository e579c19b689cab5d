"""Shared infrastructure for the storefront backend.

Provides the Temporal client connection factory, task queue constants,
and the Pydantic boundary models used across all components.
"""
