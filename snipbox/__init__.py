"""
snipbox - snippet panel with a command palette
"""

__version__ = "0.3.0"
