from dataclasses import dataclass
from typing import Any, Callable

from ..utilities.undefined import Undefined, UNDEFINED


@dataclass
class _FieldConfig:
    """ Do not instantiate this directly. Use Field() instead. """
    default_value: Any | Undefined
    default_factory: Callable[[], Any] | None
    kw_only: bool
    validation_func: Callable[[Any], None] | None
    """ Should raise a ValidationError with a user-shareable message when the value is invalid. """
    required: bool

    def has_default(self) -> bool:
        if self.default_value is not UNDEFINED or self.default_factory is not None:
            return True
        return False

    def get_default(self) -> Any:
        if self.default_value is not UNDEFINED:
            return self.default_value
        elif self.default_factory is not None:
            return self.default_factory()
        else:
            raise ValueError(f"No default value set.")

def Field(
        # Note that for a field specifier, the following parameters are recognized by dataclass_transform as having special properties:
        #   - default
        #   - default_factory
        #   - kw_only
        *,
        default: Any | Undefined = UNDEFINED,
        default_factory: Callable[[], Any] | None = None,
        kw_only: bool = False,
        validation_func: Callable[[Any], None] | None = None,
        required: bool = False
    ) -> Any:
    """ Use this to add configurations to Document fields.
    
    The generated _FieldConfig will be consumed by DocumentMeta, stashed into FieldSchema.field_config, and registered into cls.__document_fields__.
    A required field fails validation when its value is None.
    
    Declare the return type as 'Any' so that the static type-checker doesn't complain. (Type checkers expect class fields to be the same type as instance fields.) """
    
    if default is not UNDEFINED and default_factory is not None:
        raise ValueError("Cannot specify both default and default_factory")

    return _FieldConfig(
        default_value=default,
        default_factory=default_factory,
        kw_only=kw_only,
        validation_func=validation_func,
        required=required
    )
