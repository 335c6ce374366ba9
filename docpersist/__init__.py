"""
docpersist: insert documents, with their embedded children, into MongoDB.

    from docpersist import AUTO, Document, EmbeddedDocument, Field, embeds_many

    class Address(EmbeddedDocument):
        __type_id__ = AUTO
        street: str = Field(required=True)

    class Person(Document):
        __type_id__ = AUTO
        __collection_name__ = "people"
        name: str = Field(required=True)
        addresses = embeds_many(Address)

    person = Person(name="Ada", addresses=[Address(street="1 Main St")])
    person.insert()
"""

from .document.document import Document, EmbeddedDocument
from .document.document_id import DocumentId
from .document.field_config import Field
from .document.document_registry import document_registry
from .document.mongo_db import create_mongo_db, set_mongo_db, reset_mongo_db
from .associations import (
    AssociationKind,
    AssociationMetadata,
    AssociationValue,
    EmbeddedDocumentList,
    embeds_one,
    embeds_many,
    references_one,
    references_many,
)
from .callbacks import Hook, before_create, before_save, after_create, after_save
from .persistence import Command, CommandContext, Insert, InsertEmbedded, persist, children_of
from .utilities.special_values import ABSTRACT, AUTO
from .utilities.setup_error import SetupError
from .utilities.validation_error import ValidationError
from .utilities.logger import set_logger, set_log_level

__all__ = [
    "Document",
    "EmbeddedDocument",
    "DocumentId",
    "Field",
    "document_registry",
    "create_mongo_db",
    "set_mongo_db",
    "reset_mongo_db",
    "AssociationKind",
    "AssociationMetadata",
    "AssociationValue",
    "EmbeddedDocumentList",
    "embeds_one",
    "embeds_many",
    "references_one",
    "references_many",
    "Hook",
    "before_create",
    "before_save",
    "after_create",
    "after_save",
    "Command",
    "CommandContext",
    "Insert",
    "InsertEmbedded",
    "persist",
    "children_of",
    "ABSTRACT",
    "AUTO",
    "SetupError",
    "ValidationError",
    "set_logger",
    "set_log_level",
]
