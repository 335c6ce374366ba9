from .random_id import random_id


class DocumentId(str):
	""" Used for a document's own _id field and for the foreign keys written by referenced associations.
	Embedded documents get one too, so that they can be told apart within their parent's list. """
	def __new__(cls, _id: str | None = None):
		if not _id:
			_id = random_id(24)
		instance = super().__new__(cls, _id)
		return instance
