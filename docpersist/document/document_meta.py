from abc import ABCMeta
import inspect
from typing import Any, ClassVar, dataclass_transform, get_origin

from .field_config import Field, _FieldConfig
from .field_schema import FieldSchema
from ..associations.association_metadata import AssociationMetadata, _AssociationConfig
from ..callbacks.callbacks import collect_callbacks
from ..utilities.special_values import AUTO
from ..utilities.undefined import UNDEFINED


__document_fields__ = "__document_fields__"
__associations__ = "__associations__"
__callbacks__ = "__callbacks__"
__initialized__ = "__initialized__"

# Per-instance state that lives outside of the stored fields
INSTANCE_STATE_DEFAULTS: dict[str, Any] = {
	"_new_record": True,
	"_parent": None,
	"_association": None,
}


def _is_class_var(annotation: Any) -> bool:
	if get_origin(annotation) is ClassVar:
		return True
	# String annotations (from __future__ import annotations) are not evaluated
	return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


@dataclass_transform(field_specifiers=(Field, ), kw_only_default=False)
class DocumentMeta(ABCMeta):
	"""Metaclass for Document that handles field and association registration.

	Example usage:
		class Person(Document):
			__collection_name__ = "people"

			name: str = Field(required=True)
			age: int = 0
			addresses = embeds_many("Address")
			employer = references_one("Company")

	The metaclass will:
	1. Create a FieldSchema for each annotated field and store it on the class field and in cls.__document_fields__
	2. Create an AssociationMetadata for each association declaration and store it on the class field and in cls.__associations__
	3. Inherit fields, associations and callbacks from parent classes
	4. Generate an __init__ which assigns fields and associations from args, kwargs and defaults
	5. Install a __setattr__ which records changes to stored fields (see Document.changes)
	6. Register the class into the document registry
	"""

	def __new__(cls, name, bases, dct):
		from .document_registry import document_registry

		# Create the new class
		new_cls = super().__new__(cls, name, bases, dct)

		# Handle AUTO type_id before anything else
		if getattr(new_cls, '__type_id__', None) == AUTO:
			setattr(new_cls, '__type_id__', name)

		# Collect fields and associations from base classes
		setattr(new_cls, __document_fields__, {})
		setattr(new_cls, __associations__, {})
		for base in bases:
			if hasattr(base, __document_fields__):
				new_cls.__document_fields__.update(base.__document_fields__) #type: ignore
			if hasattr(base, __associations__):
				new_cls.__associations__.update(base.__associations__) #type: ignore

		# Associations declared on this class
		for attr_name, attr_value in dct.items():
			if isinstance(attr_value, _AssociationConfig):
				metadata = AssociationMetadata(attr_name, new_cls, attr_value) #type: ignore
				setattr(new_cls, attr_name, metadata)
				new_cls.__associations__[attr_name] = metadata #type: ignore

		# Collect all annotations, including those from parent classes, so that each FieldSchema points at *this* class
		annotations_dict = {}
		for base in bases:
			annotations_dict.update(inspect.get_annotations(base))
		annotations_dict.update(inspect.get_annotations(new_cls))

		for field_name, field_annotation in annotations_dict.items():
			# Skip processing any fields surrounded by double underscores
			assert isinstance(field_name, str)
			if field_name.startswith("__") and field_name.endswith("__"):
				continue

			# Skip class variables
			if _is_class_var(field_annotation):
				continue

			# Annotated associations are not stored fields
			if field_name in new_cls.__associations__: #type: ignore
				continue

			field_config = Field()

			# Use getattr to get cls attributes defined on the class and parent classes
			cls_field_value = getattr(new_cls, field_name, UNDEFINED)

			if cls_field_value is not UNDEFINED:
				# A subclass which defines its own _FieldConfig will override the parent class's settings for this field
				if isinstance(cls_field_value, _FieldConfig):
					field_config = cls_field_value

				# Fields from parent classes will have already been converted to FieldSchema objects
				elif isinstance(cls_field_value, FieldSchema):
					field_config = cls_field_value.field_config

				# Otherwise, create a FieldConfig which specifies a default value of the provided value
				else:
					field_config = Field(default=cls_field_value)

			field_schema = FieldSchema(
				field_name=field_name,
				containing_cls=new_cls, #type: ignore
				configuration=field_config
			)

			# Store the FieldSchema into both cls.__document_fields__ as well as the cls field itself
			setattr(new_cls, field_name, field_schema)
			new_cls.__document_fields__[field_name] = field_schema #type: ignore

		setattr(new_cls, __callbacks__, collect_callbacks(bases, dct))

		def __init__(self, *args, **kwargs):
			# Instance state is set directly so it never shows up as a change
			for state_name, state_default in INSTANCE_STATE_DEFAULTS.items():
				object.__setattr__(self, state_name, state_default)
			object.__setattr__(self, "_changes", {})
			object.__setattr__(self, "_previous_changes", {})
			object.__setattr__(self, "_errors", [])

			# Separate out kwonly fields
			positional_or_kw_fields: dict[str, FieldSchema] = {}
			kw_only_fields: dict[str, FieldSchema] = {}
			for field_name, field_schema in type(self).__document_fields__.items():
				if field_schema.field_config.kw_only:
					kw_only_fields[field_name] = field_schema
				else:
					positional_or_kw_fields[field_name] = field_schema

			# Track positional args by storing them into a dict
			args_dict: dict[int, Any] = dict(enumerate(args))
			supplied: dict[str, Any] = {}

			# Attempt to assign a value using either a positional arg, a kwarg, or a default value
			for idx, (field_name, field_schema) in enumerate(positional_or_kw_fields.items()):
				if idx in args_dict:
					field_value = args_dict.pop(idx)
					supplied[field_name] = field_value
				elif field_name in kwargs:
					field_value = kwargs.pop(field_name)
					supplied[field_name] = field_value
				elif field_schema.field_config.has_default():
					field_value = field_schema.field_config.get_default()
				else:
					# Missing values are reported by validation, not by construction
					field_value = None
				object.__setattr__(self, field_name, field_value)

			# If we have leftover args, raise an error
			if len(args_dict):
				extra_args_str = ", ".join(f"Idx {idx}: Value '{value}'" for idx, value in args_dict.items())
				raise TypeError(f"Error creating instance of '{type(self).__name__}'. Too many positional arguments were supplied. The following positional arguments do not line up with the defined fields. { extra_args_str }")

			# Handle kwonly fields
			for field_name, field_schema in kw_only_fields.items():
				if field_name in kwargs:
					field_value = kwargs.pop(field_name)
					supplied[field_name] = field_value
				elif field_schema.field_config.has_default():
					field_value = field_schema.field_config.get_default()
				else:
					field_value = None
				object.__setattr__(self, field_name, field_value)

			# Assign associations through their descriptors, so embedded children get attached to self
			for association_name in type(self).__associations__:
				if association_name in kwargs:
					setattr(self, association_name, kwargs.pop(association_name))

			# Anything left over is not a declared field or association
			if kwargs:
				unknown_str = ", ".join(f"'{name}'" for name in kwargs)
				raise TypeError(f"Error creating instance of '{type(self).__name__}'. Unknown keyword arguments: { unknown_str }. Declare them as fields or associations.")

			# Explicitly supplied values count as changes from nothing, defaults do not
			self._changes.update({
				field_name: (None, field_value)
				for field_name, field_value in supplied.items()
				if field_name != "_id" and field_value is not None
			})

			object.__setattr__(self, __initialized__, True)

			self.__post_init__()

		def __setattr__(self, field_name, field_value):
			if field_name in type(self).__document_fields__ and getattr(self, __initialized__, False):
				self._record_change(field_name, field_value)
			object.__setattr__(self, field_name, field_value)

		new_cls.__init__ = __init__
		new_cls.__setattr__ = __setattr__ #type: ignore

		document_registry.register(new_cls) #type: ignore

		return new_cls
