"""
Configuration for the Inner directive compiler.
"""

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

import yaml


@dataclass
class InnerConfig:
    """Configuration for an Inner facade."""
    cache_size: int = 128  # compiled expansions kept per facade, 0 disables caching
    label_max_length: int = 80
    include_location: bool = True

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)

            # bool is a subclass of int but 'cache_size: true' is a mistake
            if not isinstance(value, f.type) or (f.type is int and isinstance(value, bool)):
                raise ValueError(f"{f.name} must be {f.type.__name__}, got {type(value).__name__}: {value!r}")

        if self.cache_size < 0:
            raise ValueError(f"cache_size must not be negative, got {self.cache_size}")

        if self.label_max_length < 4:
            raise ValueError(f"label_max_length must be at least 4, got {self.label_max_length}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InnerConfig':
        """Create a configuration from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        return cls(**data)

    @classmethod
    def load_from_file(cls, config_path: str) -> 'InnerConfig':
        """Load configuration from a YAML file."""
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {config_path}")

        return cls.from_dict(data)

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to a YAML file."""
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(asdict(self), f, default_flow_style=False, sort_keys=False)
