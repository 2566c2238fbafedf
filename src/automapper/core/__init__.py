"""Core functionalities: stateless helpers and models.

Architecture Note:
    core/ contains pure, stateless building blocks: type analysis, field
    introspection and matching, strategy classification, and errors.
    For stateful services, see registry/, planning/, and mapper/.
"""

from automapper.core.errors import (
    ConverterError,
    ConverterResultError,
    InvalidConverterError,
    MapperError,
    MissingConverterError,
    NotAFunctionError,
    NotAReferenceError,
    SequenceLengthError,
    UnknownElementTypeError,
)
from automapper.core.fields import (
    DEFAULT_ALIAS_KEY,
    FieldDescriptor,
    FieldPair,
    describe_fields,
    is_mutable_record,
    is_zero,
    match_fields,
    new_record,
    set_field,
    zero_value,
)
from automapper.core.strategy import (
    ConverterLookup,
    FieldStep,
    MappingPlan,
    Strategy,
    classify,
)
from automapper.core.types import (
    SequenceKind,
    SequenceShape,
    is_record,
    is_record_type,
    normalize,
    record_target,
    sequence_shape,
    type_name,
    unwrap_optional,
)

__all__ = [
    # Types
    "SequenceKind",
    "SequenceShape",
    "is_record",
    "is_record_type",
    "normalize",
    "record_target",
    "sequence_shape",
    "type_name",
    "unwrap_optional",
    # Fields
    "DEFAULT_ALIAS_KEY",
    "FieldDescriptor",
    "FieldPair",
    "describe_fields",
    "is_mutable_record",
    "is_zero",
    "match_fields",
    "new_record",
    "set_field",
    "zero_value",
    # Strategy
    "Strategy",
    "FieldStep",
    "MappingPlan",
    "ConverterLookup",
    "classify",
    # Errors
    "MapperError",
    "NotAReferenceError",
    "NotAFunctionError",
    "InvalidConverterError",
    "MissingConverterError",
    "ConverterError",
    "ConverterResultError",
    "SequenceLengthError",
    "UnknownElementTypeError",
]
