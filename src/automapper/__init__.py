"""automapper: structural field mapping between independently defined records.

Usage:
    from dataclasses import dataclass, field
    from automapper import Mapper

    @dataclass
    class OrderRow:
        id: int
        total: int
        customer: CustomerRow | None = None

    @dataclass
    class Order:
        order_id: str = field(default="", metadata={"mapper": "id"})
        total: int = 0
        customer: Customer | None = None

    mapper = Mapper()
    mapper.register_converter(str, source=int, target=str)

    order = Order()
    mapper.map(OrderRow(id=7, total=120), order)
    # Order(order_id="7", total=120, customer=None)
"""

__version__ = "0.1.0"

# Configuration
from automapper.config import MapperSettings

# Core primitives
from automapper.core import (
    ConverterError,
    ConverterResultError,
    FieldDescriptor,
    FieldStep,
    InvalidConverterError,
    MapperError,
    MappingPlan,
    MissingConverterError,
    NotAFunctionError,
    NotAReferenceError,
    SequenceLengthError,
    Strategy,
    UnknownElementTypeError,
    describe_fields,
)

# Mapper
from automapper.mapper import Mapper, get_mapper

# Stores
from automapper.planning import PlanCache
from automapper.registry import ConverterEntry, ConverterRegistry

__all__ = [
    # Version
    "__version__",
    # Mapper
    "Mapper",
    "get_mapper",
    "MapperSettings",
    # Stores
    "ConverterEntry",
    "ConverterRegistry",
    "PlanCache",
    # Models
    "FieldDescriptor",
    "FieldStep",
    "MappingPlan",
    "Strategy",
    "describe_fields",
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
