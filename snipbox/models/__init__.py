"""Data models for snipbox.

- snippets: the Snippet record and its persisted JSON form
"""

from snipbox.models.snippets import Snippet

__all__ = ["Snippet"]
