"""
Lifecycle callbacks for documents.

Documents expose four explicit hook slots (before_create, before_save, after_create, after_save).
Methods decorated with the matching decorator are registered into the slot's ordered callback list.
"""

from .hook import Hook
from .callbacks import before_create, before_save, after_create, after_save, collect_callbacks

__all__ = ["Hook", "before_create", "before_save", "after_create", "after_save", "collect_callbacks"]
