"""Reusable field validators for request schemas."""
