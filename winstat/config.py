"""
Configuration loading and logging setup.

A winstat configuration file is a YAML mapping with two optional sections:

    window:
      size: 20
      method: welford
      ddof: 0
      strict: false
    logging:
      version: 1
      ...

``window`` holds the StatWindow construction options and ``logging`` a
``logging.config.dictConfig`` schema. Other top-level keys are kept as-is.
"""

import logging
import logging.config
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import InvalidParameterError
from .window import StatWindow

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 20
DEFAULT_METHOD = 'welford'
DEFAULT_DDOF = 0
DEFAULT_STRICT = False

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConfigLoader:
    """Reads a winstat YAML file and hands out its validated sections."""

    def __init__(self, config_path: Union[str, Path]):
        self.config_path = Path(config_path)
        self.config = self._read(self.config_path)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        """
        Parse the file into a dict of sections; an empty file gives ``{}``.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            InvalidParameterError: If the document is not a mapping.
        """
        try:
            with open(path, 'r') as f:
                document = yaml.safe_load(f)
        except FileNotFoundError:
            logger.error(f"Configuration file not found at '{path}'")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Malformed YAML in '{path}': {e}")
            raise

        if document is None:
            logger.debug(f"Empty configuration file '{path}', using defaults")
            return {}
        if not isinstance(document, Mapping):
            raise InvalidParameterError(
                "config", type(document).__name__, "a mapping of sections", component="config"
            )
        return dict(document)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.config[key]

    def get_all(self) -> Dict[str, Any]:
        return self.config

    def section(self, name: str) -> Dict[str, Any]:
        """
        A top-level section as a dict, ``{}`` when it is absent or empty.

        Raises:
            InvalidParameterError: If the section is present but not a mapping.
        """
        value = self.config.get(name)
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise InvalidParameterError(name, value, "a mapping", component="config")
        return dict(value)

    def window_settings(self) -> "WindowSettings":
        """Settings from the ``window`` section, defaults when it is absent."""
        return WindowSettings.from_dict(self.section('window'))

    def logging_config(self) -> Optional[Dict[str, Any]]:
        """The ``logging`` dictConfig schema, None when the file has none."""
        return self.section('logging') or None


@dataclass
class WindowSettings:
    """Construction options for a StatWindow."""

    size: int = DEFAULT_WINDOW_SIZE
    method: str = DEFAULT_METHOD
    ddof: int = DEFAULT_DDOF
    strict: bool = DEFAULT_STRICT

    @classmethod
    def from_dict(cls, data: Mapping) -> "WindowSettings":
        """
        Build settings from a mapping, rejecting unknown keys.

        Raises:
            InvalidParameterError: If ``data`` is not a mapping or has keys
                other than the settings fields.
        """
        if not isinstance(data, Mapping):
            raise InvalidParameterError("window", data, "a mapping", component="config")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidParameterError("window", unknown, f"keys among {sorted(known)}", "config")
        return cls(**data)

    def build(self) -> StatWindow:
        """Create a window from these settings (raises on invalid values)."""
        return StatWindow(self.size, method=self.method, ddof=self.ddof, strict=self.strict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def setup_logging(config: Optional[Mapping] = None, level: int = logging.INFO) -> None:
    """
    Apply a dictConfig schema such as the ``logging`` section of config.yml.

    Without a schema, or when dictConfig rejects it, the root logger gets a
    console handler at ``level`` instead.
    """
    if not config:
        reason = "no logging schema given"
    else:
        try:
            logging.config.dictConfig(dict(config))
            logger.debug("Logging configured from dictConfig schema")
            return
        except (ValueError, TypeError, AttributeError) as e:
            reason = str(e)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.warning(f"Could not configure logging from dict: {reason}. Using basic config.")
