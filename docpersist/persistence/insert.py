from typing import Any

from pymongo.collection import Collection

from .command import Command
from .command_context import CommandContext
from .cascade import children_of, mark_persisted
from ..document.document import Document
from ..utilities.logger import logger


class Insert(Command):
	"""
	Takes a document that has not been written yet and inserts it.

	The underlying write resembles the following MongoDB call:

		collection.insert_one({ "_id": "...", "field": "value", "addresses": [ {...}, {...} ] })

	Embedded children are part of the same record, so one write persists the whole tree.
	"""

	def get_command_name(self) -> str:
		return "insert"

	def persist(self) -> Document:
		""" Insert the document. Returns the document whether the insert happened or not:
		a document that fails validation is returned untouched, and errors raised by callbacks or the driver propagate. """
		document = self.document

		if self.validate and not document.is_valid():
			logger.info(f"Not inserting {self.describe_document()}: validation failed ({', '.join(str(e) for e in document.errors)})")
			return document

		document.before_create()
		document.before_save()

		if self._insert():
			document.new_record = False
			if not document.is_embedded():
				mark_persisted(document)
			document.move_changes()
			document.after_create()
			document.after_save()
			logger.debug(f"Inserted {self.describe_document()}")

		return document

	def _insert(self) -> bool:
		""" Write the document. Returns whether the document is now stored. """
		if self.document.is_embedded():
			from .insert_embedded import InsertEmbedded
			embedded_insert = InsertEmbedded(self.document, self.validate, collection=self._collection, options=self._options)
			return embedded_insert.persist().is_persisted()

		self.context.collection.insert_one(self.document.raw_attributes(), **self.context.options)
		return True

	def children(self) -> list[Document]:
		""" The embedded documents written along with this one. """
		return children_of(self.document)


def persist(
		document: Document,
		validate: bool = True,
		collection: Collection | None = None,
		options: dict[str, Any] | None = None,
		context: CommandContext | None = None
	) -> Document:
	""" Functional form of Insert(...).persist(). """
	return Insert(document, validate=validate, collection=collection, options=options, context=context).persist()
