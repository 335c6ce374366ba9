from typing import Any, Callable, ClassVar, Self

from pymongo.collection import Collection
from pymongo.database import Database

from .document_meta import DocumentMeta
from .document_id import DocumentId
from .field_config import Field
from .field_schema import FieldSchema
from ..associations.association_metadata import AssociationMetadata
from ..callbacks.hook import Hook
from ..utilities.special_values import ABSTRACT
from ..utilities.setup_error import SetupError
from ..utilities.validation_error import ValidationError
from ..utilities.logger import logger


"""
Lifecycle of a Document:

	new_record=True  --insert()-->  before_create, before_save  --write-->  new_record=False, move_changes(), after_create, after_save

Validation runs first, when requested. A document that fails validation is returned untouched: no callbacks run and nothing is written.
Check document.errors (or document.new_record) after inserting to find out whether the write happened.
"""

class Document(metaclass=DocumentMeta):
	""" A class that inherits from Document can be inserted into MongoDb as a top-level document.
	Declare stored fields with annotations (optionally configured with Field()), and associations with embeds_one(), embeds_many(), references_one() and references_many().

	Newly created objects will be assigned a randomly generated _id unless you specify one specifically.
	"""
	# Class fields
	__type_id__: ClassVar[str] = ABSTRACT
	__collection_name__: ClassVar[str] = ABSTRACT
	__embedded__: ClassVar[bool] = False

	__document_fields__: ClassVar[dict[str, FieldSchema]]
	__associations__: ClassVar[dict[str, AssociationMetadata]]
	__callbacks__: ClassVar[dict[Hook, list[Callable[..., Any]]]]

	# Instance fields
	_id: DocumentId = Field(default_factory=DocumentId, kw_only=True)

	def __post_init__(self) -> None:
		""" By default, post init does nothing. """
		return

	@classmethod
	def is_embedded(cls) -> bool:
		return cls.__embedded__

	@classmethod
	def get_collection_name(cls) -> str:
		if cls.__collection_name__ == ABSTRACT:
			raise SetupError(f"Collection name not defined for {cls.__name__}. __collection_name__ must be specified for documents that are inserted.")
		return cls.__collection_name__

	@classmethod
	def get_db(cls) -> Database:
		from .mongo_db import create_mongo_db
		return create_mongo_db()

	def get_collection(self) -> Collection:
		""" Returns the corresponding Pymongo Collection. """
		return self.get_db()[type(self).get_collection_name()]

	@classmethod
	def get_associations(cls) -> dict[str, AssociationMetadata]:
		return cls.__associations__

	# region: Persistence state
	@property
	def new_record(self) -> bool:
		""" True until the document has been written to the database. """
		return self._new_record

	@new_record.setter
	def new_record(self, value: bool) -> None:
		object.__setattr__(self, "_new_record", value)

	def is_persisted(self) -> bool:
		return not self._new_record
	# endregion

	# region: Embedded tree
	def _attach(self, parent: 'Document', metadata: AssociationMetadata) -> None:
		""" Record where this document sits within its parent. Called by association descriptors and EmbeddedDocumentList. """
		object.__setattr__(self, "_parent", parent)
		object.__setattr__(self, "_association", metadata)

	def _detach(self) -> None:
		""" Forget the parent once this document has been taken out of its association. """
		object.__setattr__(self, "_parent", None)
		object.__setattr__(self, "_association", None)

	def _root(self) -> 'Document':
		""" The top-level document this document is stored within. A top-level document is its own root. """
		document = self
		while document._parent is not None:
			document = document._parent
		return document

	def _association_path(self) -> str:
		""" Dot-notation path, relative to the root, of the association holding this document (for embeds_many this is the list itself). """
		if self._parent is None or self._association is None:
			return ""
		parent_path = self._parent._path()
		prefix = f"{parent_path}." if parent_path else ""
		return prefix + self._association.name

	def _path(self) -> str:
		""" Dot-notation path of this document relative to its root, e.g. 'addresses.1.locations.0'. """
		association_path = self._association_path()
		if not association_path or self._association is None or self._parent is None:
			return association_path
		if self._association.many:
			siblings = getattr(self._parent, self._association.name)
			return f"{association_path}.{siblings.index_of(self)}"
		return association_path
	# endregion

	# region: Document -> raw attributes
	def raw_attributes(self) -> dict[str, Any]:
		""" The mapping sent to the database. Embedded associations are stored in place. Referenced associations are stored as their _ids. """
		output: dict[str, Any] = {"_id": str(self._id)}
		if type(self).__type_id__ != ABSTRACT:
			output["_type"] = type(self).__type_id__

		for field_name in type(self).__document_fields__:
			if field_name == "_id":
				continue
			output[field_name] = getattr(self, field_name)

		for metadata in type(self).__associations__.values():
			output[metadata.storage_key] = metadata.serialize(self)

		return output
	# endregion

	# region: Validation
	def validate(self) -> None:
		""" Override this to add document-level validation. Raise a ValidationError to mark the document invalid. """
		return

	def is_valid(self) -> bool:
		""" Runs field validation, validate(), and validation of embedded children. Failures are collected into self.errors. """
		errors: list[ValidationError] = []

		for field_name, field_schema in type(self).__document_fields__.items():
			try:
				field_schema.validate_field_value(getattr(self, field_name, None))
			except ValidationError as e:
				errors.append(e)

		try:
			self.validate()
		except ValidationError as e:
			errors.append(e)

		for metadata in type(self).__associations__.values():
			if not metadata.is_embedded():
				continue
			for child in metadata.fetch(self).documents():
				if not child.is_valid():
					errors.append(ValidationError("is invalid", field_name=metadata.name))
					break

		object.__setattr__(self, "_errors", errors)
		return not errors

	@property
	def errors(self) -> list[ValidationError]:
		""" Errors found by the last is_valid() call. """
		return list(self._errors)
	# endregion

	# region: Callbacks
	def _run_callbacks(self, hook: Hook) -> None:
		for callback in type(self).__callbacks__[hook]:
			callback(self)

	def before_create(self) -> None:
		self._run_callbacks(Hook.BEFORE_CREATE)

	def before_save(self) -> None:
		self._run_callbacks(Hook.BEFORE_SAVE)

	def after_create(self) -> None:
		self._run_callbacks(Hook.AFTER_CREATE)

	def after_save(self) -> None:
		self._run_callbacks(Hook.AFTER_SAVE)
	# endregion

	# region: Dirty tracking
	def _record_change(self, field_name: str, new_value: Any) -> None:
		old_value = self.__dict__.get(field_name)
		if field_name in self._changes:
			original_value = self._changes[field_name][0]
			if new_value == original_value:
				# Reverted to the original value
				del self._changes[field_name]
			else:
				self._changes[field_name] = (original_value, new_value)
		elif old_value != new_value:
			self._changes[field_name] = (old_value, new_value)

	@property
	def changes(self) -> dict[str, tuple[Any, Any]]:
		""" Pending changes as field name -> (old value, new value). """
		return dict(self._changes)

	@property
	def changed(self) -> bool:
		return bool(self._changes)

	@property
	def previous_changes(self) -> dict[str, tuple[Any, Any]]:
		""" The changes that were pending when the document was last written. """
		return dict(self._previous_changes)

	def move_changes(self) -> None:
		""" Called once a write has succeeded: the pending changes become the saved baseline. """
		object.__setattr__(self, "_previous_changes", self._changes)
		object.__setattr__(self, "_changes", {})
	# endregion

	# region: Persistence
	def insert(self, validate: bool = True, **options: Any) -> Self:
		""" Insert this document (and its embedded children). Extra keyword arguments are passed to the driver's insert call.
		A document that has already been written is returned as is. """
		from ..persistence.insert import Insert

		if not self.new_record:
			logger.warning(f"{type(self).__name__} '{self._id}' has already been inserted. Skipping.")
			return self

		Insert(self, validate=validate, options=options).persist()
		return self

	def save(self, validate: bool = True) -> bool:
		""" Insert the document if it is new. Returns whether the document is now persisted. """
		if not self.new_record:
			raise NotImplementedError(f"Updating persisted documents is not supported. {type(self).__name__} '{self._id}' is already persisted.")
		self.insert(validate=validate)
		return self.is_persisted()

	@classmethod
	def create(cls, *args: Any, **attributes: Any) -> Self:
		""" Instantiate and insert a document in one step. """
		document = cls(*args, **attributes)
		document.insert()
		return document
	# endregion

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Document):
			return NotImplemented
		return type(self) is type(other) and self._id == other._id

	def __hash__(self) -> int:
		return hash((type(self), self._id))

	def __repr__(self) -> str:
		values = ", ".join(f"{field_name}={getattr(self, field_name, None)!r}" for field_name in type(self).__document_fields__)
		return f"{type(self).__name__}({values})"


class EmbeddedDocument(Document):
	""" A document which is only ever stored inside another document, through embeds_one() or embeds_many().
	It has no collection of its own: it is written as part of its root document. """
	__type_id__ = ABSTRACT
	__collection_name__ = ABSTRACT
	__embedded__ = True

	def get_collection(self) -> Collection:
		""" Embedded documents live in their root document's collection. """
		if self._parent is None:
			raise SetupError(f"{type(self).__name__} '{self._id}' is not attached to a parent document, so it has no collection.")
		return self._root().get_collection()
