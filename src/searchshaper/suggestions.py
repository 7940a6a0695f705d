"""Autosuggest extraction from search hits.

Suggestions are read from arbitrary document fields: dotted paths may cross
nested objects and arrays of objects, and terminal values may be single
scalars or lists of scalars. Each terminal value becomes an option whose label
and value are the stringified field value.

Extraction Rules:
    - A candidate is accepted when one of the search terms is a
      case-insensitive substring of it and its label has not been used yet.
    - Candidates from promoted documents (``_promoted``) are always accepted.
    - In distinct mode a document contributes at most one suggestion: fields
      are tried in configuration order and the first accepted candidate wins.

Synonym Fallback:
    Matching on the literal search term discards documents that matched the
    query through synonyms (searching "iphone" may return a document that
    only mentions "ios"). When the first pass yields fewer suggestions than
    there are documents, a second pass is run from scratch that accepts every
    candidate, and its result replaces the first one.

Usage:
    >>> from searchshaper.suggestions import get_suggestions
    >>> hits = [{"title": "Apple iPhone"}, {"title": "Pixel"}]
    >>> [s.label for s in get_suggestions(["title"], hits, "iphone")]
    ['Apple iPhone', 'Pixel']
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from searchshaper.constants import (
    DEFAULT_MAX_DEPTH,
    PROMOTED_KEY,
    QUERY_SUGGESTION_FIELDS,
)
from searchshaper.errors import CyclicDocumentError
from searchshaper.hits import parse_hits
from searchshaper.types import Document, Hit, Suggestion
from searchshaper.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def flatten(values: Sequence[Any], max_depth: int = DEFAULT_MAX_DEPTH) -> list[Any]:
    """Flatten arbitrarily nested lists into one list, preserving order.

    Args:
        values: A list whose items may themselves be lists.
        max_depth: Nesting levels below this depth are dropped.

    Returns:
        The non-list items in traversal order.

    Raises:
        CyclicDocumentError: If a list contains itself.
    """
    return _flatten(values, max_depth, 0, set())


def _flatten(
    values: Sequence[Any], max_depth: int, depth: int, ancestors: set[int]
) -> list[Any]:
    if id(values) in ancestors:
        msg = "Document value contains itself and cannot be flattened."
        logger.error(msg)
        raise CyclicDocumentError(msg)
    if depth > max_depth:
        logger.warning("Dropping list values nested deeper than %d levels.", max_depth)
        return []

    ancestors.add(id(values))
    flat: list[Any] = []
    for item in values:
        if _is_sequence(item):
            flat.extend(_flatten(item, max_depth, depth + 1, ancestors))
        else:
            flat.append(item)
    ancestors.discard(id(values))
    return flat


def extract_suggestion(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Return the displayable part of a terminal field value.

    Lists are flattened, objects yield None (they cannot be displayed as a
    suggestion) and scalars are returned unchanged.
    """
    if _is_sequence(value):
        return flatten(value, max_depth)
    if isinstance(value, Mapping):
        return None
    return value


class SuggestionCollector:
    """Accumulates the accepted suggestions of one extraction pass.

    Attributes:
        current_value (str): The search term.
        skip_word_match (bool): Accept candidates without matching the term.
        show_distinct_suggestions (bool): Stop after one accepted candidate
            per document.
        suggestions (list[Suggestion]): Accepted suggestions in order.
        labels (set[str]): Labels already used in this pass.
    """

    def __init__(
        self,
        current_value: Optional[str] = "",
        skip_word_match: bool = False,
        show_distinct_suggestions: bool = True,
    ) -> None:
        self.current_value = current_value or ""
        self.skip_word_match = skip_word_match
        self.show_distinct_suggestions = show_distinct_suggestions
        self.suggestions: list[Suggestion] = []
        self.labels: set[str] = set()
        # Splitting on single spaces keeps empty terms, which match anything
        self._terms = [term.lower() for term in self.current_value.strip().split(" ")]

    def is_word_match(self, value: Any) -> bool:
        """Check whether any search term occurs in the candidate value."""
        if self.skip_word_match:
            return True
        text = str(value).lower()
        return any(term in text for term in self._terms)

    def populate(self, value: Any, source: Document) -> bool:
        """Offer a candidate value extracted from ``source``.

        Args:
            value: Terminal field value.
            source: The top-level document the value belongs to.

        Returns:
            True when the candidate was accepted and the caller should stop
            looking at further values of this document (distinct mode only).
        """
        label = str(value)
        promoted = bool(source.get(PROMOTED_KEY)) if isinstance(source, Mapping) else False
        if not ((self.is_word_match(value) and label not in self.labels) or promoted):
            return False

        self.suggestions.append(Suggestion(label=label, value=label, source=source))
        self.labels.add(label)
        return self.show_distinct_suggestions


class FieldPathResolver:
    """Resolves dotted field paths in documents and feeds a collector.

    Paths are walked with an explicit stack, one segment per step, so the
    traversal depth is bounded by the number of path segments.
    """

    def __init__(
        self, collector: SuggestionCollector, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> None:
        self.collector = collector
        self.max_depth = max_depth

    def parse_field(
        self,
        parsed_source: Any,
        field: str = "",
        source: Optional[Document] = None,
    ) -> bool:
        """Resolve ``field`` in ``parsed_source`` and offer its terminal values.

        Args:
            parsed_source: The node to resolve the path in.
            field: Dotted field path, e.g. "author.names.first".
            source: Top-level document reported as suggestion source; defaults
                to ``parsed_source``.

        Returns:
            True if the collector asked to stop (distinct mode accepted a
            value), False otherwise, including when the path does not resolve.
        """
        if source is None:
            source = parsed_source

        stack: list[tuple[Any, str]] = [(parsed_source, field or "")]
        while stack:
            node, path = stack.pop()
            if not isinstance(node, Mapping):
                continue

            head, _, children = path.partition(".")
            label = node.get(head)
            if not label:
                continue

            if children:
                # Nested fields of the 'foo.bar.zoo' variety
                nodes = label if _is_sequence(label) else [label]
                stack.extend((item, children) for item in reversed(nodes))
                continue

            if self._offer(label, source):
                return True
        return False

    def _offer(self, label: Any, source: Document) -> bool:
        value = extract_suggestion(label, self.max_depth)
        if value is None:
            return False
        if not isinstance(value, list):
            return self.collector.populate(value, source)

        for candidate in value:
            if candidate is None or candidate == "" or isinstance(candidate, Mapping):
                continue
            if self.collector.populate(candidate, source):
                return True
        return False


def _traverse_suggestions(
    fields: Sequence[str],
    suggestions: Sequence[Hit],
    current_value: Optional[str],
    show_distinct_suggestions: bool,
    skip_word_match: bool,
    max_depth: int,
) -> list[Suggestion]:
    collector = SuggestionCollector(
        current_value=current_value,
        skip_word_match=skip_word_match,
        show_distinct_suggestions=show_distinct_suggestions,
    )
    resolver = FieldPathResolver(collector, max_depth=max_depth)
    for item in suggestions:
        for field in fields:
            if resolver.parse_field(item, field):
                break
    return collector.suggestions


def get_suggestions(
    fields: Union[str, Sequence[str], None] = None,
    suggestions: Optional[Sequence[Hit]] = None,
    current_value: Optional[str] = "",
    show_distinct_suggestions: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Suggestion]:
    """Build the autosuggest options for a set of documents.

    Args:
        fields: Data fields to read suggestions from, in priority order.
        suggestions: Documents (usually normalized hits) to read from.
        current_value: The search term.
        show_distinct_suggestions: When True, return at most one suggestion
            per document.
        max_depth: Maximum nesting of list values at a terminal field.

    Returns:
        Suggestions in document and field traversal order.
    """
    if isinstance(fields, str):
        fields = [fields]
    fields = list(fields or [])
    suggestions = list(suggestions or [])

    result = _traverse_suggestions(
        fields, suggestions, current_value, show_distinct_suggestions, False, max_depth
    )
    if len(result) < len(suggestions):
        logger.debug(
            "Word match produced %d suggestions for %d documents, retrying without it.",
            len(result),
            len(suggestions),
        )
        result = _traverse_suggestions(
            fields, suggestions, current_value, show_distinct_suggestions, True, max_depth
        )

    logger.debug("Resolved %d suggestions from %d documents.", len(result), len(suggestions))
    return result


resolve_suggestions = get_suggestions


def get_query_suggestions(
    hits: Optional[Sequence[Hit]],
    current_value: Optional[str] = "",
    show_distinct_suggestions: bool = True,
) -> list[Suggestion]:
    """Build suggestions from the raw hits of a query-suggestions index.

    Query-suggestion documents store popular searches under ``key`` and its
    sub-fields, so the hits are normalized and resolved against those fields.
    """
    return get_suggestions(
        QUERY_SUGGESTION_FIELDS,
        parse_hits(hits),
        current_value,
        show_distinct_suggestions,
    )
