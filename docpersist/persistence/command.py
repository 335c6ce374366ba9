from abc import ABC, abstractmethod
from typing import Any

from pymongo.collection import Collection

from .command_context import CommandContext

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from ..document.document import Document


class Command(ABC):
    """
    Base class for persistence commands.

    A command wraps one document and one write. The target collection is resolved lazily from the
    document unless a collection or a whole CommandContext is passed in, so that commands which never
    write (e.g. a failed validation gate) never touch the database configuration.
    """

    def __init__(
        self,
        document: 'Document',
        validate: bool = True,
        collection: Collection | None = None,
        options: dict[str, Any] | None = None,
        context: CommandContext | None = None,
    ):
        self.document = document
        self.validate = validate
        self._collection = collection
        self._options = dict(options or {})
        self._context: CommandContext | None = None

        # A prepared context decides the collection, the options and whether to validate
        if context is not None:
            self.validate = context.validate
            self._collection = context.collection
            self._options = dict(context.options)
            self._context = context

    @property
    def context(self) -> CommandContext:
        if self._context is None:
            if self._collection is not None:
                self._context = CommandContext(collection=self._collection, validate=self.validate, options=self._options)
            else:
                self._context = CommandContext.for_document(self.document, validate=self.validate, options=self._options)
        return self._context

    @abstractmethod
    def persist(self) -> 'Document':
        """
        Run the command against the document.

        Returns:
            The document, whether or not the write happened
        """
        pass

    @abstractmethod
    def get_command_name(self) -> str:
        """ Name used in log messages. """
        pass

    def describe_document(self) -> str:
        return f"{type(self.document).__name__} '{self.document._id}'"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(document={self.describe_document()}, validate={self.validate})"
