"""Field functionality: descriptors, introspection, and matching."""

from automapper.core.fields.inspect import (
    DEFAULT_ALIAS_KEY,
    describe_fields,
    is_frozen,
    is_mutable_record,
    is_zero,
    new_record,
    set_field,
    zero_value,
)
from automapper.core.fields.matcher import match_fields
from automapper.core.fields.models import FieldDescriptor, FieldPair

__all__ = [
    # Models
    "FieldDescriptor",
    "FieldPair",
    # Introspection
    "DEFAULT_ALIAS_KEY",
    "describe_fields",
    "is_frozen",
    "is_mutable_record",
    "is_zero",
    "new_record",
    "set_field",
    "zero_value",
    # Matching
    "match_fields",
]
