"""Aggregation bucket adapter.

Term and composite aggregations return buckets rather than hits. Converting
each bucket to a hit-shaped record lets the same display pipeline render
grouped results.

Bucket Mapping:
    - ``doc_count`` -> ``_doc_count``
    - ``key`` -> ``_key``; composite aggregations key buckets by a mapping, in
      which case the value stored under the aggregation field name is used
    - every field of the bucket's nested ``<agg_field_name>`` document is
      copied to the top level

Usage:
    >>> from searchshaper.aggregations import parse_comp_agg_to_hits
    >>> bucket = {"doc_count": 4, "key": {"color": "red"}, "color": {"price": 10}}
    >>> parse_comp_agg_to_hits("color", [bucket])
    [{'_doc_count': 4, '_key': 'red', 'price': 10}]
"""

from typing import Any, Mapping, Optional, Sequence

from searchshaper.constants import BUCKET_KEY, DOC_COUNT_KEY
from searchshaper.types import Bucket, Record


def _bucket_key(key: Any, agg_field_name: str) -> Any:
    # Composite aggregations key buckets by source name
    if isinstance(key, Mapping) and agg_field_name in key:
        return key[agg_field_name]
    return key


def parse_comp_agg_to_hits(
    agg_field_name: str, buckets: Optional[Sequence[Bucket]] = None
) -> list[Record]:
    """Convert aggregation buckets to hit-shaped records.

    Args:
        agg_field_name: Name of the aggregation field.
        buckets: Buckets in the order returned by the engine.

    Returns:
        One record per bucket, in bucket order.
    """
    hits: list[Record] = []
    for bucket in buckets or []:
        data = bucket.get(agg_field_name)
        hit: Record = {
            DOC_COUNT_KEY: bucket.get("doc_count"),
            BUCKET_KEY: _bucket_key(bucket.get("key"), agg_field_name),
        }
        if isinstance(data, Mapping):
            hit.update(data)
        hits.append(hit)
    return hits


buckets_to_hits = parse_comp_agg_to_hits
