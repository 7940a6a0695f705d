"""Data field and weight normalization for multi-field queries.

Components accept their data fields either as one field name or as an ordered
list mixing bare names and weighted entries. Query builders need the names and
the weights as two parallel lists, in configuration order, since that order
encodes field priority.

Weight Alignment:
    The weight list is filled for every input entry, including entries that
    contribute no field name. ``fields[i]`` and ``weights[i]`` only refer to the
    same field when every entry is well formed.

Usage:
    >>> from searchshaper.fields import normalize_fields
    >>> normalize_fields([{"field": "title", "weight": 3}, "body", {"field": "tags"}])
    NormalizedFields(fields=['title', 'body', 'tags'], weights=[3, 1, 1])
"""

import math
from typing import Any, Mapping, Optional

from searchshaper.constants import DEFAULT_WEIGHT
from searchshaper.types import FieldEntry, FieldSpec, NormalizedFields, WeightedField


def is_number(value: Any) -> bool:
    """Return True for finite int/float values, booleans excluded."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _entry_field(entry: FieldEntry) -> Optional[str]:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, WeightedField):
        return entry.field or None
    if isinstance(entry, Mapping):
        return entry.get("field") or None
    return None


def _entry_weight(entry: FieldEntry) -> Any:
    if isinstance(entry, WeightedField):
        return entry.weight
    if isinstance(entry, Mapping):
        return entry.get("weight")
    return None


def _entries(field: FieldSpec) -> list[FieldEntry]:
    # A lone weighted entry is a one-element list
    if isinstance(field, (Mapping, WeightedField)):
        return [field]
    return list(field)


def get_normalized_field(field: FieldSpec) -> Optional[list[str]]:
    """Resolve a data field spec to an ordered list of field names.

    Args:
        field: A field name, a list of names/weighted entries, or None.

    Returns:
        The field names, or None when no field is configured. Entries without
        a field name are skipped.
    """
    if not field:
        return None
    if isinstance(field, str):
        return [field]

    fields = []
    for entry in _entries(field):
        name = _entry_field(entry)
        if name:
            fields.append(name)
    return fields


def get_normalized_weights(field: FieldSpec) -> Optional[list[float]]:
    """Resolve the weights of a list data field spec.

    Args:
        field: A field name, a list of names/weighted entries, or None.

    Returns:
        One weight per input entry (default 1), or None for a bare field name
        or an empty spec.
    """
    if not field or isinstance(field, str):
        return None

    weights = []
    for entry in _entries(field):
        weight = _entry_weight(entry)
        # Default weight keeps the list aligned with the input order
        weights.append(weight if is_number(weight) else DEFAULT_WEIGHT)
    return weights


def normalize_fields(field: FieldSpec) -> NormalizedFields:
    """Resolve a data field spec to parallel name and weight lists.

    Args:
        field: A field name, a list of names/weighted entries, or None.

    Returns:
        NormalizedFields(fields, weights).
    """
    return NormalizedFields(get_normalized_field(field), get_normalized_weights(field))
