from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .association_kind import AssociationKind
from .association_value import AssociationValue
from ..utilities.setup_error import SetupError
if TYPE_CHECKING:
	from ..document.document import Document


@dataclass
class _AssociationConfig:
	""" Do not instantiate this directly. Use embeds_one(), embeds_many(), references_one() or references_many(). """
	kind: AssociationKind
	target: type[Document] | str
	many: bool


def embeds_one(target: type[Document] | str) -> Any:
	""" Declare a single embedded sub-document. The target may be the class or its name. """
	return _AssociationConfig(kind=AssociationKind.EMBEDS_ONE, target=target, many=False)

def embeds_many(target: type[Document] | str) -> Any:
	""" Declare an ordered list of embedded sub-documents. The target may be the class or its name. """
	return _AssociationConfig(kind=AssociationKind.EMBEDS_MANY, target=target, many=True)

def references_one(target: type[Document] | str) -> Any:
	""" Declare a reference to one separately stored document. Stored on the parent as '<name>_id'. """
	return _AssociationConfig(kind=AssociationKind.REFERENCES, target=target, many=False)

def references_many(target: type[Document] | str) -> Any:
	""" Declare references to many separately stored documents. Stored on the parent as '<name>_ids'. """
	return _AssociationConfig(kind=AssociationKind.REFERENCES, target=target, many=True)


class AssociationMetadata:
	""" Describes one named association on a Document class: its kind, its target class, and how to read its value from a document.
	Instances are installed as descriptors on the declaring class, so `person.addresses` reads through here. """

	def __init__(self, name: str, containing_cls: type[Document], config: _AssociationConfig) -> None:
		self.name = name
		self.containing_cls = containing_cls
		self.kind = config.kind
		self.many = config.many
		self._target = config.target
		self._document_cls: type[Document] | None = None

	def is_embedded(self) -> bool:
		return self.kind.embedded

	@property
	def document_cls(self) -> type[Document]:
		""" The associated Document class. Forward references by class name are resolved through the registry. """
		if self._document_cls is None:
			target = self._target
			if isinstance(target, str):
				from ..document.document_registry import document_registry
				target = document_registry.resolve_forward_ref(target)
			self.validate_target(target)
			self._document_cls = target
		return self._document_cls

	@property
	def storage_key(self) -> str:
		""" The key this association occupies within the parent's raw attributes. """
		if self.kind is AssociationKind.REFERENCES:
			return f"{self.name}_ids" if self.many else f"{self.name}_id"
		return self.name

	def validate_target(self, target_cls: type[Document]) -> None:
		""" Raise a SetupError if the target class does not fit the association kind. """
		if self.is_embedded() and not target_cls.is_embedded():
			raise SetupError(f"Association '{self.name}' on '{self.containing_cls.__name__}' embeds '{target_cls.__name__}', which is not an EmbeddedDocument.")
		if not self.is_embedded() and target_cls.is_embedded():
			raise SetupError(f"Association '{self.name}' on '{self.containing_cls.__name__}' references '{target_cls.__name__}', but embedded documents cannot be referenced.")

	def fetch(self, document: Document) -> AssociationValue:
		""" Returns the associated value(s) of this association on the document. """
		value = document.__dict__.get(self.name)
		if self.many:
			return AssociationValue.many(value)
		return AssociationValue.single(value)

	# region: descriptor
	def __get__(self, instance: Document | None, owner: type) -> Any:
		if instance is None:
			return self
		if self.name not in instance.__dict__:
			self.__set__(instance, [] if self.many else None)
		return instance.__dict__[self.name]

	def __set__(self, instance: Document, value: Any) -> None:
		previous = self.fetch(instance).documents() if self.is_embedded() else []

		if self.kind is AssociationKind.EMBEDS_MANY:
			from .embedded_document_list import EmbeddedDocumentList
			instance.__dict__[self.name] = EmbeddedDocumentList(instance, self, value or [])
		elif self.kind is AssociationKind.EMBEDS_ONE:
			if value is not None:
				self._check_target(value)
				value._attach(instance, self)
			instance.__dict__[self.name] = value
		elif self.many:
			documents = list(value or [])
			for document in documents:
				self._check_target(document)
			instance.__dict__[self.name] = documents
		else:
			if value is not None:
				self._check_target(value)
			instance.__dict__[self.name] = value

		# Children replaced by this assignment no longer belong to the instance
		current = self.fetch(instance).documents()
		for document in previous:
			if document._parent is instance and not any(document is kept for kept in current):
				document._detach()
	# endregion

	def _check_target(self, value: Any) -> None:
		if not isinstance(value, self.document_cls):
			raise TypeError(f"Association '{self.name}' on '{self.containing_cls.__name__}' expects '{self.document_cls.__name__}', got '{type(value).__name__}'.")

	def serialize(self, document: Document) -> Any:
		""" Returns the value stored under storage_key in the parent's raw attributes. """
		value = self.fetch(document)
		if self.kind is AssociationKind.REFERENCES:
			ids = [str(child._id) for child in value.documents()]
			if self.many:
				return ids
			return ids[0] if ids else None
		if self.many:
			return [child.raw_attributes() for child in value.documents()]
		return value.document.raw_attributes() if value.document is not None else None

	def __repr__(self) -> str:
		target = self._target if isinstance(self._target, str) else self._target.__name__
		return f"AssociationMetadata({self.containing_cls.__name__}.{self.name}, kind={self.kind}, target={target})"

