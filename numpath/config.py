from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class GeneratorConfig:
    grid_size: int = 5
    target_min: int = 20
    target_max: int = 100
    value_min: int = 1
    value_max: int = 9
    blocked_min: int = 3
    blocked_max: int = 7
    max_refills: int = 1000

    def __post_init__(self) -> None:
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        for low, high in (
            ("target_min", "target_max"),
            ("value_min", "value_max"),
            ("blocked_min", "blocked_max"),
        ):
            if getattr(self, low) > getattr(self, high):
                raise ValueError(f"{low} ({getattr(self, low)}) is greater than {high} ({getattr(self, high)})")
        if self.blocked_min < 0:
            raise ValueError(f"blocked_min must not be negative, got {self.blocked_min}")
        # The start cell can never be blocked.
        if self.blocked_max > self.grid_size * self.grid_size - 1:
            raise ValueError(f"blocked_max ({self.blocked_max}) does not fit a {self.grid_size}x{self.grid_size} grid")
        if self.max_refills < 1:
            raise ValueError(f"max_refills must be positive, got {self.max_refills}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**{key: int(value) for key, value in data.items()})


def default_config_file() -> Path:
    # config/puzzle.yaml relative to the project root
    return Path(__file__).parent.parent / "config" / "puzzle.yaml"


def load_config(config_file: str | Path | None = None) -> GeneratorConfig:
    """
    Load generation parameters from a YAML file.

    Args:
        config_file: Path to the YAML file. If None, uses config/puzzle.yaml

    Returns:
        A GeneratorConfig; keys missing from the file keep their defaults.
    """
    config_file = default_config_file() if config_file is None else Path(config_file)

    with open(config_file) as f:
        data = yaml.safe_load(f)

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ValueError(f"{config_file} must contain a mapping, got {type(data).__name__}")
    return GeneratorConfig.from_dict(data)
