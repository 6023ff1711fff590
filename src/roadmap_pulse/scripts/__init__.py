"""Maintenance entry points."""
