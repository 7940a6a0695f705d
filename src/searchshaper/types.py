"""Types exchanged between the search layer and the shaping functions.

Documents and hits stay plain mappings, exactly as the search engine returns
them. Only the values searchshaper produces, and the weighted field entries a
caller may configure, get dedicated dataclasses.

Types:
    - WeightedField: A data field with an optional query-time weight
    - NormalizedFields: Parallel field-name and weight lists
    - Suggestion: A single autosuggest option

Usage:
    >>> from searchshaper.types import Suggestion, WeightedField
    >>> WeightedField(field="title", weight=3)
    WeightedField(field='title', weight=3)
    >>> Suggestion(label="iphone", value="iphone", source={"title": "iphone"})
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple, Optional, Sequence, Union


Document = Mapping[str, Any]
Hit = Mapping[str, Any]
Bucket = Mapping[str, Any]
Record = dict[str, Any]


@dataclass(frozen=True)
class WeightedField:
    """A data field entry carrying an optional weight.

    Attributes:
        field: Dotted path of the field.
        weight: Query-time boost; non-numeric or missing weights count as 1.
    """

    field: str
    weight: Optional[float] = None


"""A single data field entry: a bare name, a mapping or a WeightedField."""
FieldEntry = Union[str, Mapping[str, Any], WeightedField]

"""A data field configuration: one name or an ordered list of entries."""
FieldSpec = Union[str, Sequence[FieldEntry], None]


class NormalizedFields(NamedTuple):
    """Field names and weights resolved from a FieldSpec.

    ``weights`` is only produced for list specs and always has the length of
    the input list, so it can be longer than ``fields`` when entries without a
    field name were skipped.
    """

    fields: Optional[list[str]]
    weights: Optional[list[float]]


@dataclass(frozen=True)
class Suggestion:
    """An autosuggest option resolved from a document field.

    Attributes:
        label: Display text of the option.
        value: Value submitted when the option is selected; equal to label.
        source: The document the option was extracted from.
    """

    label: str
    value: str
    source: Document = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation.

        Returns:
            Dictionary with label, value and source.
        """
        return {"label": self.label, "value": self.value, "source": self.source}
