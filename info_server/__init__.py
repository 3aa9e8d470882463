"""Diagnostic HTTP server reporting process and runtime introspection data."""

__version__ = "0.3.2"
