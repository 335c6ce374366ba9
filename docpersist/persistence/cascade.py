from ..associations.association_kind import AssociationKind
from ..document.document import Document


def children_of(document: Document) -> list[Document]:
	""" The documents embedded directly in this document.
	Embeds-many lists are flattened into their elements. Referenced associations are never included: those documents are stored on their own. """
	children: list[Document] = []
	for metadata in type(document).get_associations().values():
		if metadata.kind is AssociationKind.REFERENCES:
			continue
		elif metadata.kind in (AssociationKind.EMBEDS_ONE, AssociationKind.EMBEDS_MANY):
			children.extend(metadata.fetch(document).documents())
		else:
			raise ValueError(f"Unknown association kind '{metadata.kind}'")
	return children

def mark_persisted(document: Document) -> None:
	""" Mark every embedded descendant of the document as written. """
	for child in children_of(document):
		child.new_record = False
		mark_persisted(child)
