"""Facade applying a component's configuration to its search responses.

The request layer owns one ``SearchResultShaper`` per registered component and
passes it every raw response it fetches. The shaper keeps no state between
calls besides the immutable configuration and the fields resolved from it.

Usage:
    >>> from searchshaper import SearchResultShaper, ShaperConfig
    >>> shaper = SearchResultShaper(ShaperConfig(data_field=["title", "brand"]))
    >>> suggestions = shaper.suggestions(response["hits"]["hits"], "iphone")
    >>> results = shaper.results(response["hits"]["hits"])
"""

import logging
from typing import Optional, Sequence

from searchshaper.aggregations import parse_comp_agg_to_hits
from searchshaper.config import ShaperConfig
from searchshaper.fields import normalize_fields
from searchshaper.hits import normalize_hits, parse_hits
from searchshaper.suggestions import get_query_suggestions, get_suggestions
from searchshaper.types import Bucket, Hit, Record, Suggestion
from searchshaper.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


class SearchResultShaper:
    """Shapes raw hits and buckets according to a ShaperConfig.

    Attributes:
        config: The component's shaping settings.
        fields: Data field names in priority order.
        weights: Data field weights, or None for a single field.
    """

    def __init__(self, config: ShaperConfig) -> None:
        self.config = config
        normalized = normalize_fields(config.data_field)
        self.fields: list[str] = normalized.fields or []
        self.weights: Optional[list[float]] = normalized.weights

    def suggestions(
        self, raw_hits: Optional[Sequence[Hit]], current_value: Optional[str] = ""
    ) -> list[Suggestion]:
        """Build autosuggest options from the raw hits of a suggestions query."""
        return get_suggestions(
            self.fields,
            parse_hits(raw_hits),
            current_value,
            self.config.show_distinct_suggestions,
        )

    def query_suggestions(
        self, raw_hits: Optional[Sequence[Hit]], current_value: Optional[str] = ""
    ) -> list[Suggestion]:
        """Build options from the raw hits of a query-suggestions index."""
        return get_query_suggestions(
            raw_hits, current_value, self.config.show_distinct_suggestions
        )

    def results(self, raw_hits: Optional[Sequence[Hit]]) -> list[Record]:
        """Normalize raw hits into display records."""
        return normalize_hits(raw_hits, with_display_ids=self.config.with_click_ids)

    def aggregations(self, buckets: Optional[Sequence[Bucket]]) -> list[Record]:
        """Convert aggregation buckets into hit-shaped records.

        Returns an empty list when the component has no aggregation field.
        """
        if not self.config.aggregation_field:
            logger.debug(
                "Component %s has no aggregation field, ignoring %d buckets.",
                self.config.component_id,
                len(buckets or []),
            )
            return []
        return parse_comp_agg_to_hits(self.config.aggregation_field, buckets)
