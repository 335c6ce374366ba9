"""
Persistence commands.

Each command takes one document and performs one write against its collection.
"""

from .command import Command
from .command_context import CommandContext
from .insert import Insert, persist
from .insert_embedded import InsertEmbedded
from .cascade import children_of

__all__ = ["Command", "CommandContext", "Insert", "InsertEmbedded", "persist", "children_of"]
