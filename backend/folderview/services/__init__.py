"""Browsing and serving services."""
