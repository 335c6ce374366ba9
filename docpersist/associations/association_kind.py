from enum import StrEnum, auto


class AssociationKind(StrEnum):
    """ How an associated document is stored relative to its parent. """
    EMBEDS_ONE = auto()
    """ A single sub-document stored inside the parent's record. """
    EMBEDS_MANY = auto()
    """ An ordered list of sub-documents stored inside the parent's record. """
    REFERENCES = auto()
    """ One or many separately stored top-level documents. Only their _ids are stored on the parent. """

    @property
    def embedded(self) -> bool:
        return self is not AssociationKind.REFERENCES
