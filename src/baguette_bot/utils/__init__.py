"""Shared helpers: log formatting and URL handling."""
