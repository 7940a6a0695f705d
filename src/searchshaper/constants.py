"""Constants shared by the shaping functions and the configuration layer.

Reserved keys name the metadata a search engine attaches to hits and buckets,
plus the keys searchshaper adds to shaped records. The query vocabularies
(types, formats, sort options) are used to validate component configuration.
"""

ERROR_PREFIX = "SearchShaper"

# Keys reserved by the search engine on raw hits
SOURCE_KEY = "_source"
HIGHLIGHT_KEY = "highlight"
ID_KEY = "_id"
SCORE_KEY = "_score"
PROMOTED_KEY = "_promoted"

# Keys added to shaped records
CLICK_ID_KEY = "_click_id"
DOC_COUNT_KEY = "_doc_count"
BUCKET_KEY = "_key"

# Fields of documents stored in a query-suggestions index
QUERY_SUGGESTION_FIELDS: list[str] = ["key", "key.autosuggest", "key.search"]

QUERY_TYPES: dict[str, str] = {
    "Search": "search",
    "Term": "term",
    "Geo": "geo",
    "Range": "range",
}

QUERY_FORMATS: dict[str, str] = {
    "Or": "or",
    "And": "and",
}

SORT_OPTIONS: dict[str, str] = {
    "Asc": "asc",
    "Desc": "desc",
    "Count": "count",
}

DEFAULT_WEIGHT = 1
DEFAULT_MAX_DEPTH = 32


def get_error_message(msg: str) -> str:
    """Prefix a message with the library name."""
    return f"{ERROR_PREFIX}: {msg}"


ERROR_MESSAGES: dict[str, str] = {
    "invalid_index": get_error_message("Please provide a valid index."),
    "invalid_url": get_error_message("Please provide a valid url."),
    "invalid_component_id": get_error_message("Please provide component id."),
    "invalid_data_field": get_error_message("Please provide data field."),
    "data_field_as_array": get_error_message(
        "Only components with `search` type supports the multiple data fields. "
        "Please define `data_field` as a string."
    ),
}
