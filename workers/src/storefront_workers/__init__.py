"""Unified worker runner for the storefront's Temporal components.

Every worker process runs the same image with a different component argument
to select which component's workflows/activities it exposes.
"""
