"""Shared fixtures for searchshaper tests.

Fixtures:
    raw_hits: Search hits as returned by the engine, with highlights.
    phone_documents: Normalized documents for suggestion extraction, only
        some of which contain the literal search term.
    color_buckets: Composite aggregation buckets keyed by aggregation name.
"""

from typing import Any

import pytest


@pytest.fixture
def raw_hits() -> list[dict[str, Any]]:
    """Create raw hits carrying metadata, source and highlights."""
    return [
        {
            "_index": "products",
            "_id": "1",
            "_score": 2.5,
            "_source": {
                "title": "Apple iPhone 13",
                "content": "A phone by Apple",
                "brand": "Apple",
            },
            "highlight": {"title": ["Apple <em>iPhone</em> 13", "second fragment"]},
        },
        {
            "_index": "products",
            "_id": "2",
            "_score": 1.5,
            "_source": {
                "title": "Samsung Galaxy S21",
                "content": "A phone by Samsung",
                "brand": "Samsung",
            },
        },
    ]


@pytest.fixture
def phone_documents() -> list[dict[str, Any]]:
    """Create five documents of which only two mention "iphone"."""
    return [
        {"_id": "1", "title": "iPhone 13", "os": "ios"},
        {"_id": "2", "title": "iPhone SE", "os": "ios"},
        {"_id": "3", "title": "Apple smartphone", "os": "ios"},
        {"_id": "4", "title": "Apple flagship", "os": "ios"},
        {"_id": "5", "title": "Apple mini", "os": "ios"},
    ]


@pytest.fixture
def color_buckets() -> list[dict[str, Any]]:
    """Create composite aggregation buckets for the colorAgg aggregation."""
    return [
        {"doc_count": 4, "key": {"colorAgg": "red"}, "colorAgg": {"avgPrice": 10}},
        {"doc_count": 2, "key": {"colorAgg": "blue"}, "colorAgg": {"avgPrice": 25}},
    ]
