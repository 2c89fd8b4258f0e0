"""Utility modules for snipbox.

- logging_utils: rotating file logging for the panel
- output: shared rich console for CLI output
"""
