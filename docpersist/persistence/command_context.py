from dataclasses import dataclass, field
from typing import Any

from pymongo.collection import Collection
from pymongo.write_concern import WriteConcern

from ..document.mongo_db import persist_in_safe_mode

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from ..document.document import Document


@dataclass
class CommandContext:
    """
    Everything a persistence command needs besides the document itself.

    Built per call and never retained by the command.
    """

    collection: Collection
    """ The collection the write goes to. For embedded documents this is the root document's collection. """

    validate: bool = True
    """ Whether a failed is_valid() check stops the write. A command given this context uses it in place of its own validate argument. """

    options: dict[str, Any] = field(default_factory=dict)
    """ Driver write options, passed through verbatim as keyword arguments (e.g. bypass_document_validation, session, comment). """

    def __post_init__(self) -> None:
        """Validate context after initialization"""
        if self.collection is None:
            raise ValueError("collection is required")
        if self.options is None:
            self.options = {}

    @classmethod
    def for_document(cls, document: 'Document', validate: bool = True, options: dict[str, Any] | None = None) -> 'CommandContext':
        """ Resolve the root document's collection. In safe mode, writes wait for the server's acknowledgement; otherwise they are fire-and-forget. """
        collection = document._root().get_collection()
        write_concern = WriteConcern(w=1) if persist_in_safe_mode() else WriteConcern(w=0)
        collection = collection.with_options(write_concern=write_concern)
        return cls(collection=collection, validate=validate, options=dict(options or {}))
