from enum import StrEnum, auto


class Hook(StrEnum):
    """ The lifecycle points at which a document's callbacks run during an insert. """
    BEFORE_CREATE = auto()
    BEFORE_SAVE = auto()
    AFTER_CREATE = auto()
    AFTER_SAVE = auto()
