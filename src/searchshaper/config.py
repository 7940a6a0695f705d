"""Shaping configuration of a search component.

``ShaperConfig`` holds the subset of a search component's settings that
decides how its responses are shaped, together with the connection settings
the surrounding request layer validates up front. Invalid settings are
rejected here so the shaping functions themselves never have to fail.

Example YAML:

    search:
      index: products
      url: ${SEARCH_URL:-http://localhost:9200}
      component_id: search-box
      data_field:
        - field: title
          weight: 3
        - description
      show_distinct_suggestions: true
      aggregation_field: brand

Usage:
    >>> from searchshaper.config import ShaperConfig
    >>> config = ShaperConfig.load("shaper.yaml")
    >>> config.data_field
    [{'field': 'title', 'weight': 3}, 'description']
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from searchshaper.constants import (
    ERROR_MESSAGES,
    QUERY_FORMATS,
    QUERY_TYPES,
    SORT_OPTIONS,
    get_error_message,
)
from searchshaper.errors import ConfigurationError
from searchshaper.types import FieldSpec
from searchshaper.utils.config import load_config, resolve_env_vars, setup_logger
from searchshaper.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()

CONFIG_SECTION = "search"
LOGGING_SECTION = "logging"

INT_SETTINGS = ("size", "from_")
BOOL_SETTINGS = ("show_distinct_suggestions", "with_click_ids", "highlight")
TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
FALSE_VALUES = frozenset({"false", "no", "off", "0"})


@dataclass
class ShaperConfig:
    """Settings controlling how a component's search responses are shaped.

    Attributes:
        index: Index the component queries.
        url: Search engine URL.
        component_id: Id the component is registered under.
        data_field: Field name or weighted field list suggestions are read from.
        query_type: One of ``QUERY_TYPES``; only "search" accepts a field list.
        query_format: One of ``QUERY_FORMATS``.
        aggregation_field: Field whose buckets are turned into records.
        show_distinct_suggestions: At most one suggestion per document.
        with_click_ids: Tag normalized results with ``_click_id``.
        highlight: Whether the query requests highlighting.
        highlight_field: Field(s) to highlight.
        sort_by: One of ``SORT_OPTIONS``.
        size: Number of hits requested.
        from_: Offset of the first hit.
    """

    index: Optional[str] = None
    url: Optional[str] = None
    component_id: Optional[str] = None
    data_field: FieldSpec = None
    query_type: str = QUERY_TYPES["Search"]
    query_format: str = QUERY_FORMATS["Or"]
    aggregation_field: Optional[str] = None
    show_distinct_suggestions: bool = True
    with_click_ids: bool = False
    highlight: bool = False
    highlight_field: Union[str, list[str], None] = None
    sort_by: Optional[str] = None
    size: int = 10
    from_: int = 0

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "ShaperConfig":
        """Build and validate a config from a mapping.

        The ``search`` section is used when present, otherwise the mapping
        itself. ``from`` is accepted as an alias of ``from_``; unknown keys
        are ignored.

        Raises:
            ConfigurationError: If the settings are invalid.
        """
        return cls._from_section(resolve_env_vars(dict(config)))

    @classmethod
    def _from_section(cls, config: Mapping[str, Any]) -> "ShaperConfig":
        section = dict(config.get(CONFIG_SECTION) or config)
        if "from" in section and "from_" not in section:
            section["from_"] = section.pop("from")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(section) - known)
        if unknown:
            logger.debug("Ignoring unknown shaper settings: %s", unknown)

        shaper_config = cls(**{k: v for k, v in section.items() if k in known})
        shaper_config.validate()
        return shaper_config

    @classmethod
    def load(cls, config_or_path: Union[Mapping[str, Any], str, Path]) -> "ShaperConfig":
        """Build a config from a mapping or a YAML file path.

        A ``logging`` section, when present, configures the package logger
        through ``setup_logger``.
        """
        if isinstance(config_or_path, Mapping):
            config = resolve_env_vars(dict(config_or_path))
        else:
            # load_config has already resolved environment variables
            config = load_config(config_or_path)

        if LOGGING_SECTION in config:
            setup_logger(config)
        return cls._from_section(config)

    def validate(self) -> None:
        """Convert string settings to their types and validate them.

        Environment substitution always yields strings, so integer and
        boolean settings are converted here.

        Raises:
            ConfigurationError: If a setting is missing, out of range or of
                the wrong type.
        """
        for name in INT_SETTINGS:
            setattr(self, name, self._to_int(name, getattr(self, name)))
        for name in BOOL_SETTINGS:
            setattr(self, name, self._to_bool(name, getattr(self, name)))

        if not self.data_field:
            self._fail(ERROR_MESSAGES["invalid_data_field"])
        if not isinstance(self.data_field, str) and self.query_type != QUERY_TYPES["Search"]:
            self._fail(ERROR_MESSAGES["data_field_as_array"])
        if self.query_type not in QUERY_TYPES.values():
            self._fail(get_error_message(f"Unknown query type '{self.query_type}'."))
        if self.query_format not in QUERY_FORMATS.values():
            self._fail(get_error_message(f"Unknown query format '{self.query_format}'."))
        if self.sort_by is not None and self.sort_by not in SORT_OPTIONS.values():
            self._fail(get_error_message(f"Unknown sort option '{self.sort_by}'."))
        if self.size < 0 or self.from_ < 0:
            self._fail(get_error_message("`size` and `from` must not be negative."))

    def validate_connection(self) -> None:
        """Validate the settings the request layer needs to reach the engine.

        Raises:
            ConfigurationError: If index, url or component id is missing.
        """
        if not self.index:
            self._fail(ERROR_MESSAGES["invalid_index"])
        if not self.url:
            self._fail(ERROR_MESSAGES["invalid_url"])
        if not self.component_id:
            self._fail(ERROR_MESSAGES["invalid_component_id"])

    @classmethod
    def _to_int(cls, name: str, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        cls._fail(get_error_message(f"`{name}` must be an integer, got {value!r}."))

    @classmethod
    def _to_bool(cls, name: str, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in TRUE_VALUES:
                return True
            if text in FALSE_VALUES:
                return False
        cls._fail(get_error_message(f"`{name}` must be true or false, got {value!r}."))

    @staticmethod
    def _fail(msg: str) -> None:
        logger.error(msg)
        raise ConfigurationError(msg)
