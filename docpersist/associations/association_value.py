from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Iterable
if TYPE_CHECKING:
    from ..document.document import Document


class ValueShape(StrEnum):
    ABSENT = auto()
    SINGLE = auto()
    MANY = auto()


@dataclass(frozen=True)
class AssociationValue:
    """ The value of an association on a particular document.
    Always exactly one of: absent, a single document, or an ordered sequence of documents. An empty sequence is reported as absent. """
    shape: ValueShape
    document: Document | None = None
    sequence: tuple[Document, ...] = field(default_factory=tuple)

    @classmethod
    def absent(cls) -> AssociationValue:
        return cls(ValueShape.ABSENT)

    @classmethod
    def single(cls, document: Document | None) -> AssociationValue:
        if document is None:
            return cls.absent()
        return cls(ValueShape.SINGLE, document=document)

    @classmethod
    def many(cls, documents: Iterable[Document] | None) -> AssociationValue:
        sequence = tuple(documents) if documents is not None else ()
        if not sequence:
            return cls.absent()
        return cls(ValueShape.MANY, sequence=sequence)

    def is_absent(self) -> bool:
        return self.shape is ValueShape.ABSENT

    def documents(self) -> list[Document]:
        """ Flattens the value into a list of documents (one level only). """
        if self.shape is ValueShape.ABSENT:
            return []
        elif self.shape is ValueShape.SINGLE:
            assert self.document is not None
            return [self.document]
        elif self.shape is ValueShape.MANY:
            return list(self.sequence)
        raise ValueError(f"Unknown association value shape '{self.shape}'")
