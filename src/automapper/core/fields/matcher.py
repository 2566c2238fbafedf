"""Field matching between two record shapes."""

from __future__ import annotations

import warnings

from automapper.core.fields.inspect import DEFAULT_ALIAS_KEY, describe_fields
from automapper.core.fields.models import FieldDescriptor, FieldPair


def _by_key(descriptors: tuple[FieldDescriptor, ...], cls: type) -> dict[str, FieldDescriptor]:
    keyed: dict[str, FieldDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.key in keyed:
            warnings.warn(
                f"{cls.__qualname__} has several fields matching key '{descriptor.key}'. "
                f"Only '{descriptor.name}' will be used.",
                stacklevel=3,
            )
        keyed[descriptor.key] = descriptor
    return keyed


def match_fields(
    source_type: type, destination_type: type, alias_key: str = DEFAULT_ALIAS_KEY
) -> list[FieldPair]:
    """Pair source fields with the destination fields they map into.

    Keys are field names unless an alias annotation overrides them; matching
    is exact. Unsettable destination fields are skipped, destination fields
    without a source counterpart are left alone, and unmatched source fields
    are dropped. Pairs come out in destination declaration order.

    Args:
        source_type: Record class to read from.
        destination_type: Record class to write into.
        alias_key: Metadata key holding the per-field alias.

    Returns:
        Matched field pairs.
    """
    sources = _by_key(describe_fields(source_type, alias_key), source_type)
    destinations = _by_key(
        tuple(d for d in describe_fields(destination_type, alias_key) if d.settable),
        destination_type,
    )
    return [
        FieldPair(source=sources[key], destination=destination)
        for key, destination in destinations.items()
        if key in sources
    ]
