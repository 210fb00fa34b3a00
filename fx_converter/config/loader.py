"""
Configuration management and loading.

Handles the API credential file read once at startup.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_BASE_URL = "https://api.fastforex.io"


@dataclass(frozen=True)
class ApiConfig:
    """Credentials and endpoint for the rate-quote service."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        """Validate credential and endpoint are present."""
        if not self.api_key or not self.api_key.strip():
            raise ValueError("api_key must be a non-empty string")
        if not self.base_url or not self.base_url.strip():
            raise ValueError("base_url must be a non-empty string")


def load_api_config(path: str) -> ApiConfig:
    """Load and validate API configuration from a JSON or YAML file.

    JSON documents are valid YAML, so a plain ``config.json`` holding
    ``{"api_key": "..."}`` is accepted as-is.

    Args:
        path: Path to configuration file

    Returns:
        Validated ApiConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If the file cannot be parsed
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    allowed_keys = {'api_key', 'base_url'}
    unknown_keys = set(raw_config.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    if 'api_key' not in raw_config:
        raise ValueError("Missing required 'api_key'")

    return ApiConfig(
        api_key=_require_string(raw_config, 'api_key'),
        base_url=_require_string(raw_config, 'base_url', DEFAULT_BASE_URL).rstrip('/')
    )


def _require_string(data: Dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value
