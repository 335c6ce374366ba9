from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from ..utilities.typed_list import TypedList
if TYPE_CHECKING:
    from ..document.document import Document
    from .association_metadata import AssociationMetadata


class EmbeddedDocumentList(TypedList['Document']):
    """ The value of an embeds_many association.
    Every document added to the list is attached to the owning parent, so it knows its position within the root document. """

    def __init__(self, parent: Document, metadata: AssociationMetadata, initial_elements: Iterable[Document] | None = None):
        self.__allowed_types__ = (metadata.document_cls, )
        self.parent = parent
        self.metadata = metadata
        super().__init__(initial_elements)

    def __on_add__(self, element: Document) -> None:
        element._attach(self.parent, self.metadata)

    def __on_remove__(self, element: Document) -> None:
        element._detach()

    def build(self, **attributes) -> Document:
        """ Instantiate a new embedded document of the association's class and append it. """
        document = self.metadata.document_cls(**attributes)
        self.append(document)
        return document
