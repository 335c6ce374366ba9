from __future__ import annotations

from dataclasses import dataclass, field
from typing import ForwardRef, TYPE_CHECKING
from bidict import bidict

from ..utilities.setup_error import SetupError
from ..utilities.special_values import ABSTRACT
from ..utilities.logger import logger
if TYPE_CHECKING:
    from .document import Document


class TypeNameDict(bidict[str, type]):
    def add(self, type_: type) -> None:
        """Register a single type by its name."""
        if type_.__name__ in self and self[type_.__name__] is not type_:
            raise SetupError(f"Document class name {type_.__name__} already exists.")
        self.forceput(type_.__name__, type_)

@dataclass
class DocumentRegistry:
    """ A registry of all Document classes, populated by DocumentMeta as classes are created. """
    type_id_dict: bidict[str, type] = field(default_factory=bidict)
    """ type id <-> concrete Document class. """

    type_name_dict: TypeNameDict = field(default_factory=TypeNameDict)
    """ Class name <-> class for *all* Document classes, including abstract ones. Used for resolving forward refs. """

    collection_name_dict: bidict[str, type] = field(default_factory=bidict)
    """ Collection name <-> top-level Document class. """

    def register(self, cls: type[Document]) -> None:
        self.type_name_dict.add(cls)

        type_id = cls.__type_id__
        if type_id != ABSTRACT:
            existing = self.type_id_dict.get(type_id)
            if existing is not None and existing is not cls:
                raise SetupError(f"Type id '{type_id}' of Document class {cls.__name__} is already used by {existing.__name__}.")
            self.type_id_dict.forceput(type_id, cls)

        # Only the class that declares the collection name owns it. Subclasses share their parent's collection.
        collection_name = cls.__dict__.get("__collection_name__", ABSTRACT)
        if collection_name != ABSTRACT and not cls.is_embedded():
            existing = self.collection_name_dict.get(collection_name)
            if existing is not None and existing is not cls:
                raise SetupError(f"Collection name {collection_name} defined in Document class {cls.__name__} already exists.")
            self.collection_name_dict.forceput(collection_name, cls)

        logger.debug(f"Registered Document class '{cls.__name__}' (type id: {type_id}, collection: {collection_name})")

    def type_to_type_id(self, type_: type) -> str | None:
        """ Return the type id for the type. """
        return self.type_id_dict.inverse.get(type_)

    def lookup_type_by_type_id(self, type_id: str) -> type[Document] | None:
        """ Returns None if no Document class is registered under the type id. """
        return self.type_id_dict.get(type_id)

    def collection_name_to_cls(self, collection_name: str) -> type[Document]:
        if collection_name not in self.collection_name_dict:
            raise ValueError(f"Document class with collection name {collection_name} not found in the document registry.")
        return self.collection_name_dict[collection_name]

    def resolve_forward_ref(self, forward_ref: str | ForwardRef) -> type[Document]:
        """
        Resolves a ForwardRef or string class name to its registered Document class.
        
        Raises:
            SetupError: If no Document class with this name has been defined
        """
        if isinstance(forward_ref, str):
            type_name = forward_ref
        elif isinstance(forward_ref, ForwardRef):
            type_name = forward_ref.__forward_arg__
        else:
            raise ValueError(f"Expected ForwardRef or string, got {type(forward_ref)}")
            
        if type_name in self.type_name_dict:
            return self.type_name_dict[type_name]
                
        raise SetupError(f"Could not resolve Document class '{type_name}'. Class not found in registry.")

    def unregister(self, cls: type[Document]) -> None:
        """ Remove a class from every index. Used by tests that define throwaway classes. """
        self.type_name_dict.inverse.pop(cls, None)
        self.type_id_dict.inverse.pop(cls, None)
        self.collection_name_dict.inverse.pop(cls, None)


document_registry = DocumentRegistry()
