"""searchshaper: shaping of raw search-engine responses for display.

This package turns already-fetched search responses into the structures a
search UI renders: autosuggest options extracted from nested, multi-valued
document fields, flattened result records with highlights merged in, and
hit-shaped records built from aggregation buckets. Every function is pure and
stateless; fetching responses and rendering results belong to the caller.
"""

from searchshaper.aggregations import buckets_to_hits, parse_comp_agg_to_hits
from searchshaper.config import ShaperConfig
from searchshaper.dependencies import flat_react_prop
from searchshaper.errors import ConfigurationError, CyclicDocumentError, SearchShaperError
from searchshaper.fields import (
    get_normalized_field,
    get_normalized_weights,
    is_number,
    normalize_fields,
)
from searchshaper.hits import highlight_results, normalize_hits, parse_hits, with_click_ids
from searchshaper.shaper import SearchResultShaper
from searchshaper.suggestions import (
    FieldPathResolver,
    SuggestionCollector,
    extract_suggestion,
    flatten,
    get_query_suggestions,
    get_suggestions,
    resolve_suggestions,
)
from searchshaper.types import NormalizedFields, Suggestion, WeightedField


__all__ = [
    # Aggregations
    "buckets_to_hits",
    "parse_comp_agg_to_hits",
    # Config
    "ShaperConfig",
    # Dependencies
    "flat_react_prop",
    # Errors
    "ConfigurationError",
    "CyclicDocumentError",
    "SearchShaperError",
    # Fields
    "get_normalized_field",
    "get_normalized_weights",
    "is_number",
    "normalize_fields",
    # Hits
    "highlight_results",
    "normalize_hits",
    "parse_hits",
    "with_click_ids",
    # Shaper
    "SearchResultShaper",
    # Suggestions
    "FieldPathResolver",
    "SuggestionCollector",
    "extract_suggestion",
    "flatten",
    "get_query_suggestions",
    "get_suggestions",
    "resolve_suggestions",
    # Types
    "NormalizedFields",
    "Suggestion",
    "WeightedField",
]
