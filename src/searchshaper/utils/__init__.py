"""Utility modules for searchshaper.

Utilities Provided:
    - Configuration: YAML config loading, environment variable resolution
    - Logging: Logger factory with environment-based configuration
    - Document Converters: Turn shaped hits into Haystack/LangChain documents

Usage:
    >>> from searchshaper.utils import HitDocumentConverter, load_config
"""

from searchshaper.utils.config import load_config, resolve_env_vars, setup_logger
from searchshaper.utils.hit_document_converter import HitDocumentConverter
from searchshaper.utils.logging import LoggerFactory


__all__ = [
    # Config
    "load_config",
    "resolve_env_vars",
    "setup_logger",
    # Document Converters
    "HitDocumentConverter",
    # Logging
    "LoggerFactory",
]
