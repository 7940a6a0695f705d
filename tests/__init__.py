"""Test suite for the searchshaper library.

The test suite is organized into the following modules:
- tests/test_fields.py: Field/weight normalization
- tests/test_suggestions.py: Path resolution, collection and the two-pass strategy
- tests/test_hits.py: Highlight merge, hit flattening and click ids
- tests/test_aggregations.py: Bucket to hit conversion
- tests/test_shaper.py: The configuration-driven facade
- tests/utils: Configuration, logging and document converter utilities
"""
