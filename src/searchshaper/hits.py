"""Search hit normalization for display.

Search engines return each hit as engine metadata (``_id``, ``_score``,
``highlight``, ...) wrapping the stored document under ``_source``. Display
code wants a single flat record per hit, with highlighted fragments shown in
place of the raw field values.

Normalization Steps:
    1. Highlight merge: every highlighted field of ``_source`` is replaced by
       the first highlight fragment; further fragments are dropped.
    2. Flatten: source fields are copied first, then every metadata key except
       ``_source``. Metadata wins when a key exists in both, since those keys
       are reserved by the engine.
    3. Optional click ids: a 1-based ``_click_id`` is added in hit order.

Inputs are never mutated; every step works on copies.

Usage:
    >>> from searchshaper.hits import normalize_hits
    >>> hit = {
    ...     "_id": "1",
    ...     "_source": {"title": "hello world"},
    ...     "highlight": {"title": ["<em>hello</em> world"]},
    ... }
    >>> normalize_hits([hit])[0]["title"]
    '<em>hello</em> world'
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from searchshaper.constants import CLICK_ID_KEY, HIGHLIGHT_KEY, SOURCE_KEY
from searchshaper.types import Hit, Record
from searchshaper.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


def highlight_results(result: Hit) -> dict[str, Any]:
    """Merge the first highlight fragment of each field into ``_source``.

    Args:
        result: A raw search hit.

    Returns:
        A shallow copy of the hit with a copied, highlight-merged ``_source``.
    """
    data = dict(result)
    highlight = data.get(HIGHLIGHT_KEY)
    if not highlight or not isinstance(highlight, Mapping):
        return data

    source = dict(data.get(SOURCE_KEY) or {})
    for field, fragments in highlight.items():
        if isinstance(fragments, str):
            source[field] = fragments
        elif isinstance(fragments, (list, tuple)) and fragments:
            source[field] = fragments[0]
    data[SOURCE_KEY] = source
    return data


def parse_hits(hits: Optional[Sequence[Hit]]) -> list[Record]:
    """Flatten raw hits into one record per hit.

    Args:
        hits: Raw search hits; None is treated as no hits.

    Returns:
        Records holding the source fields and the hit metadata side by side.
    """
    results: list[Record] = []
    if not hits:
        return results

    for item in hits:
        data = highlight_results(item)
        result: Record = dict(data.get(SOURCE_KEY) or {})
        for key, value in data.items():
            if key != SOURCE_KEY:
                result[key] = value
        results.append(result)
    return results


def with_click_ids(results: Optional[Sequence[Mapping[str, Any]]] = None) -> list[Record]:
    """Tag each record with its 1-based position as ``_click_id``."""
    return [
        {**result, CLICK_ID_KEY: index}
        for index, result in enumerate(results or [], start=1)
    ]


def normalize_hits(
    hits: Optional[Sequence[Hit]], with_display_ids: bool = False
) -> list[Record]:
    """Turn raw hits into display records.

    Args:
        hits: Raw search hits.
        with_display_ids: Whether to add sequential ``_click_id`` values, used
            to attribute analytics click events.

    Returns:
        Normalized records in hit order.
    """
    results = parse_hits(hits)
    if with_display_ids:
        results = with_click_ids(results)
    logger.debug("Normalized %d hits.", len(results))
    return results
