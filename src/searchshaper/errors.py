"""Exceptions raised by searchshaper.

The shaping functions are total and degrade to empty results; the only
conditions they raise for are documents that reference themselves. Invalid
component configuration is rejected by the configuration layer.
"""


class SearchShaperError(Exception):
    """Base class for all searchshaper errors."""


class CyclicDocumentError(SearchShaperError, ValueError):
    """Raised when a document value contains itself."""


class ConfigurationError(SearchShaperError, ValueError):
    """Raised when a shaper configuration is invalid."""
