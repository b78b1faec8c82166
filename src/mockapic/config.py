"""
Mockapic Server Configuration

Server settings as a dataclass, loadable from a YAML file and overridable
from the command line.

Example YAML:
    host: 0.0.0.0
    port: 3333
    working_directory: /var/lib/mockapic
    max_delay: 30s
    max_limit: 500
    clean_interval: 5m
    log_level: info
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .common.utils import parse_duration


LOG_LEVELS = ('debug', 'info', 'warning', 'error')


@dataclass
class ServerConfig:
    """Configuration for the mock server."""

    # Server options
    host: str = "127.0.0.1"
    port: int = 3333
    log_level: str = "info"

    # Storage
    working_directory: str = "./mocks"

    # Response behavior
    max_delay: str = "60s"  # Ceiling for the ?delay= request parameter

    # Cleaning
    max_limit: int = 0  # Keep at most this many mocks (0 = unlimited)
    clean_interval: str = "1m"  # Period of the background cleaner

    def __post_init__(self):
        if parse_duration(self.max_delay) < 0:
            raise ValueError(f"max_delay must not be negative: {self.max_delay!r}")
        if parse_duration(self.clean_interval) < 0:
            raise ValueError(f"clean_interval must not be negative: {self.clean_interval!r}")
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}: {self.log_level!r}")
        self.log_level = self.log_level.lower()
        self.port = int(self.port)
        self.max_limit = int(self.max_limit)

    @property
    def max_delay_seconds(self) -> float:
        return parse_duration(self.max_delay)

    @property
    def clean_interval_seconds(self) -> float:
        return parse_duration(self.clean_interval)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ServerConfig':
        """
        Create a ServerConfig from a dictionary.

        Raises:
            ValueError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        # Bare numbers are seconds
        values = {
            key: (f"{value}s" if key in ('max_delay', 'clean_interval') and not isinstance(value, str) else value)
            for key, value in data.items()
        }
        return cls(**values)

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'ServerConfig':
        """Load configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {yaml_path}, got {type(data).__name__}")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
