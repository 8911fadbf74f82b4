"""YAML configuration file loading for awsssh."""

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

from awsssh.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_SESSION_NAME,
    DEFAULT_TAG_KEY,
    DEFAULT_TAG_VALUE,
    DEFAULT_USERNAME,
    ConnectionMode,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AWSSSH_CONFIG"


class ConfigLoader:
    """Load YAML configuration and merge it over built-in defaults."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = {
            "region": None,
            "profile": None,
            "tag_key": DEFAULT_TAG_KEY,
            "tag_value": DEFAULT_TAG_VALUE,
            "connection": ConnectionMode.SSH.value,
            "username": DEFAULT_USERNAME,
            "session_name": DEFAULT_SESSION_NAME,
        }

    def resolve_path(self, config_path: str | None = None) -> Path:
        """Return the config file path.

        Parameters
        ----------
        config_path : str | None
            Explicit path. If None, uses AWSSSH_CONFIG, then ~/.awsssh.yaml

        Returns
        -------
        Path
            Path with ``~`` expanded; the file may not exist
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
        return Path(config_path).expanduser()

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks AWSSSH_CONFIG env var,
            then falls back to ~/.awsssh.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with variable interpolations resolved;
            empty when the file does not exist

        Raises
        ------
        ValueError
            If the file is not valid YAML or is not a mapping
        RuntimeError
            If the file exists but cannot be read
        """
        config_file = self.resolve_path(config_path)

        if not config_file.exists():
            return {}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {}

        if not OmegaConf.is_dict(cfg):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        return config

    def merge(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge file configuration over built-in defaults.

        Unknown keys are dropped with a warning.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration loaded by :meth:`load_config`

        Returns
        -------
        dict[str, Any]
            Built-in defaults overridden by file values
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in config.items():
            if key not in merged:
                logger.warning("Ignoring unknown config key '%s'", key)
                continue
            if value is not None:
                merged[key] = str(value)

        return merged

    def get_settings(self, config_path: str | None = None) -> dict[str, Any]:
        """Load the config file and merge it over built-in defaults."""
        return self.merge(self.load_config(config_path))
