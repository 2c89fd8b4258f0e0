"""Snippet list shipped with the package."""
