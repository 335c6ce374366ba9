"""
Association declarations and metadata.

Associations are either embedded (stored inside the parent's record) or referenced (stored as separate top-level documents).
"""

from .association_kind import AssociationKind
from .association_value import AssociationValue, ValueShape
from .association_metadata import AssociationMetadata, embeds_one, embeds_many, references_one, references_many
from .embedded_document_list import EmbeddedDocumentList

__all__ = [
    "AssociationKind",
    "AssociationValue",
    "ValueShape",
    "AssociationMetadata",
    "embeds_one",
    "embeds_many",
    "references_one",
    "references_many",
    "EmbeddedDocumentList",
]
