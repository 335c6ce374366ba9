from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .field_config import _FieldConfig
from ..utilities.validation_error import ValidationError
if TYPE_CHECKING:
    from .document import Document


class FieldSchema:
    """ Stores the schema for a stored field: its name, the class that declares it, and its configuration.
    Instances also act as descriptors so that reading the field on an instance returns the stored value. """
    def __init__(self,
                 field_name: str,
                 containing_cls: type[Document],
                 configuration: _FieldConfig
                ) -> None:
        self.field_name = field_name
        self.containing_cls = containing_cls
        self.field_config = configuration

    def __get__(self, instance: Document | None, owner: type) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self.field_name]
        except KeyError:
            raise AttributeError(f"'{type(instance).__name__}' object has no value for field '{self.field_name}'") from None

    def __set__(self, instance: Document, value: Any) -> None:
        instance.__dict__[self.field_name] = value

    def validate_field_value(self, field_value: Any) -> None:
        """ Validates the field value against the required flag, then against the validation func, if any.
        These raise a ValidationError with a client-shareable error message. """
        if field_value is None:
            if self.field_config.required:
                raise ValidationError("is required", field_name=self.field_name)
            return

        if self.field_config.validation_func is not None:
            try:
                self.field_config.validation_func(field_value)
            except ValidationError as e:
                if e.field_name is None:
                    e.field_name = self.field_name
                raise

    def __repr__(self) -> str:
        return f"FieldSchema({self.containing_cls.__name__}.{self.field_name})"
