"""Configuration loading for list views.

Configuration is a JSON object whose keys are list view keyword
arguments (options, pager, sorter, summary, empty, empty_options, layout,
language, and for ListView item_options and separator). It is validated
against schemas/listview.schema.json before use.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import jsonschema

from .errors import ConfigurationError, config_invalid, file_not_found

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schemas" / "listview.schema.json"

_schema_cache: Optional[dict] = None


def load_schema() -> dict:
    """Load the configuration schema."""
    global _schema_cache
    if _schema_cache is None:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            _schema_cache = json.load(f)
    return _schema_cache


def validate_config(config: dict[str, Any]) -> None:
    """Validate configuration against the schema.

    Raises:
        ConfigurationError: With code CONFIG_INVALID naming the failing path.
    """
    validator = jsonschema.Draft7Validator(load_schema())
    errors = sorted(
        validator.iter_errors(config),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    if errors:
        first = errors[0]
        path = "/".join(str(p) for p in first.absolute_path) or "<root>"
        raise ConfigurationError(config_invalid(path, first.message))


def load_config(source: Union[dict, str, Path]) -> dict[str, Any]:
    """Load and validate list view configuration.

    Args:
        source: Configuration dict, or path to a JSON file holding one.

    Returns:
        Keyword arguments for a list view constructor.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    if isinstance(source, dict):
        config = dict(source)
    else:
        path = Path(source)
        if not path.exists():
            raise ConfigurationError(file_not_found(str(path)))
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(config_invalid("<root>", f"invalid JSON: {e}"))
        except UnicodeDecodeError as e:
            raise ConfigurationError(config_invalid("<root>", f"not UTF-8 text: {e}"))
        except OSError as e:
            raise ConfigurationError(
                config_invalid("<root>", f"cannot read file: {e.strerror or e}")
            )
        logger.info("Loaded list view configuration from %s", path)

    if not isinstance(config, dict):
        raise ConfigurationError(config_invalid("<root>", "configuration must be an object"))

    validate_config(config)
    return config
