from .command import Command
from .cascade import mark_persisted
from .insert import Insert
from ..document.document import Document
from ..utilities.setup_error import SetupError
from ..utilities.logger import logger


class InsertEmbedded(Command):
	"""
	Inserts a document that lives inside another document.

	If the parent has not been written yet, the parent is inserted, which writes this document with it.
	Otherwise the document is added to the already stored parent:

		collection.update_one({ "_id": root_id }, { "$push": { "addresses": {...} } })   # embeds_many
		collection.update_one({ "_id": root_id }, { "$set": { "address": {...} } })      # embeds_one
	"""

	def get_command_name(self) -> str:
		return "insert_embedded"

	def persist(self) -> Document:
		document = self.document

		if self.validate and not document.is_valid():
			logger.info(f"Not inserting {self.describe_document()}: validation failed ({', '.join(str(e) for e in document.errors)})")
			return document

		parent = document._parent
		association = document._association
		if parent is None or association is None:
			raise SetupError(f"{self.describe_document()} is not attached to a parent document and cannot be inserted on its own.")

		if parent.new_record:
			Insert(parent, self.validate, collection=self._collection, options=self._options).persist()
			if parent.new_record:
				logger.info(f"Not inserting {self.describe_document()}: its parent {type(parent).__name__} '{parent._id}' was not inserted.")
			# Inserting the root marked this document and its children as written
			return document

		operator = "$push" if association.many else "$set"
		update = { operator: { document._association_path(): document.raw_attributes() } }
		self.context.collection.update_one({ "_id": str(document._root()._id) }, update, **self.context.options)

		document.new_record = False
		mark_persisted(document)
		logger.debug(f"Inserted embedded {self.describe_document()} into {type(parent).__name__} '{parent._id}'")
		return document
