"""Resolve declarative sidebar configuration into a navigation tree."""

__version__ = "0.1.0"
