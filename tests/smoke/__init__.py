"""Smoke runs of the full pipeline over generated documents."""
