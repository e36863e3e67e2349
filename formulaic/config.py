"""Configuration management for the Formulaic SDK."""

import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

try:
    import tomllib  # type: ignore[import-not-found]  # Python 3.11+
except ImportError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib

DEFAULT_BASE_URL = "https://formulaic.app"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


@dataclass(frozen=True)
class Config:
    """Client configuration, immutable once built."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    cache_ttl: float = 300  # 5 minutes
    timeout: float = 30
    debug: bool = False

    @classmethod
    def from_env(cls) -> 'Config':
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance loaded from environment variables.

        Raises:
            ValueError: If required API key is not found in environment.
        """
        api_key = os.getenv('FORMULAIC_API_KEY')
        if not api_key:
            raise ValueError("FORMULAIC_API_KEY environment variable is required")

        return cls(
            api_key=api_key,
            base_url=os.getenv('FORMULAIC_BASE_URL', cls.base_url),
            cache_ttl=float(os.getenv('FORMULAIC_CACHE_TTL', str(cls.cache_ttl))),
            timeout=float(os.getenv('FORMULAIC_TIMEOUT', str(cls.timeout))),
            debug=_as_bool(os.getenv('FORMULAIC_DEBUG', 'false')),
        )

    @staticmethod
    def _read_file(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        if path.suffix.lower() == '.json':
            with open(path, 'r') as f:
                return json.load(f)
        if path.suffix.lower() in ['.toml', '.tml']:
            with open(path, 'rb') as f:
                return tomllib.load(f)
        raise ValueError(f"Unsupported configuration file format: {path.suffix}")

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from file.

        Supports JSON and TOML formats based on file extension.

        Args:
            path: Path to configuration file.

        Returns:
            Config: Configuration instance loaded from file.

        Raises:
            FileNotFoundError: If configuration file doesn't exist.
            ValueError: If required API key is not found in file or file format is unsupported.
        """
        data = cls._read_file(path)

        if 'api_key' not in data:
            raise ValueError("api_key is required in configuration file")

        return cls(
            api_key=data['api_key'],
            base_url=data.get('base_url', cls.base_url),
            cache_ttl=float(data.get('cache_ttl', cls.cache_ttl)),
            timeout=float(data.get('timeout', cls.timeout)),
            debug=_as_bool(data.get('debug', cls.debug)),
        )

    @classmethod
    def from_sources(cls, config_file: Optional[Path] = None, **overrides: Any) -> 'Config':
        """Load configuration from multiple sources with precedence.

        Precedence order (highest to lowest):
        1. Keyword overrides that are not None
        2. Configuration file (if provided)
        3. Environment variables
        4. Default values

        Unlike ``from_file``, the file may omit ``api_key`` when the
        environment supplies it.

        Raises:
            ValueError: If no source provides the API key.
        """
        config_data: Dict[str, Any] = {
            'base_url': cls.base_url,
            'cache_ttl': cls.cache_ttl,
            'timeout': cls.timeout,
            'debug': cls.debug,
        }

        if os.getenv('FORMULAIC_API_KEY'):
            config_data['api_key'] = os.getenv('FORMULAIC_API_KEY')
        if os.getenv('FORMULAIC_BASE_URL'):
            config_data['base_url'] = os.getenv('FORMULAIC_BASE_URL')
        if os.getenv('FORMULAIC_CACHE_TTL') is not None:
            config_data['cache_ttl'] = float(os.getenv('FORMULAIC_CACHE_TTL') or "0")
        if os.getenv('FORMULAIC_TIMEOUT') is not None:
            config_data['timeout'] = float(os.getenv('FORMULAIC_TIMEOUT') or "0")
        if os.getenv('FORMULAIC_DEBUG') is not None:
            config_data['debug'] = _as_bool(os.getenv('FORMULAIC_DEBUG'))

        if config_file is not None:
            file_data = cls._read_file(config_file)
            for key in ('api_key', 'base_url', 'cache_ttl', 'timeout', 'debug'):
                if key in file_data:
                    config_data[key] = file_data[key]

        config_data.update({k: v for k, v in overrides.items() if v is not None})

        if not config_data.get('api_key'):
            raise ValueError(
                "API key is required. Set FORMULAIC_API_KEY environment variable "
                "or provide it in a configuration file."
            )

        config_data['cache_ttl'] = float(config_data['cache_ttl'])
        config_data['timeout'] = float(config_data['timeout'])
        config_data['debug'] = _as_bool(config_data['debug'])
        return cls(**config_data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'api_key': self.api_key,
            'base_url': self.base_url,
            'cache_ttl': self.cache_ttl,
            'timeout': self.timeout,
            'debug': self.debug,
        }
