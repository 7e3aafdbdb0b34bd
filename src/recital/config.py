"""
Configuration management for Recital.

Centralized configuration with YAML loading, environment variable
overrides, and sensible defaults.  The config drives the default
optimizer strategy, the recursion guards, and the modulation search
bounds.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from recital.core.exceptions import ConfigError


FESTIVAL_STRATEGIES = ("exhaustive", "memoized", "tabulated")
MODULATION_STRATEGIES = ("bfs", "dfs")


# ---------------------------------------------------------------------------
# Section configs
# ---------------------------------------------------------------------------

class FestivalConfig(BaseModel):
    """Event selection optimizer settings."""

    default_strategy: str = Field(default="tabulated", description="exhaustive, memoized or tabulated")
    max_exhaustive_events: int | None = Field(
        default=None, ge=0, description="Optional cap on the events the exhaustive search accepts",
    )
    recursion_headroom: int = Field(default=100, ge=0, description="Extra frames reserved above len(events)")

    @field_validator("default_strategy")
    @classmethod
    def known_strategy(cls, v: str) -> str:
        if v not in FESTIVAL_STRATEGIES:
            raise ValueError(f"unknown festival strategy '{v}'")
        return v


class ModulationConfig(BaseModel):
    """Key modulation search settings."""

    default_strategy: str = Field(default="bfs", description="bfs or dfs")
    default_relations: list[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4, 5])
    max_depth: int = Field(default=24, ge=0, description="Depth ceiling for iterative deepening")

    @field_validator("default_strategy")
    @classmethod
    def known_strategy(cls, v: str) -> str:
        if v not in MODULATION_STRATEGIES:
            raise ValueError(f"unknown modulation strategy '{v}'")
        return v

    @field_validator("default_relations")
    @classmethod
    def relations_in_range(cls, v: list[int]) -> list[int]:
        bad = [r for r in v if not 0 <= r <= 5]
        if bad:
            raise ValueError(f"relation indices must be in 0..5, got {bad}")
        return v


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------

class RecitalConfig(BaseModel):
    """Root configuration for Recital."""

    project_name: str = Field(default="Recital")
    environment: str = Field(default="development")

    festival: FestivalConfig = Field(default_factory=FestivalConfig)
    modulation: ModulationConfig = Field(default_factory=ModulationConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "RecitalConfig":
        """Load config from a YAML file."""
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
            raise ConfigError(f"Could not load config from {path}: {e}", path=str(path)) from e

    def to_yaml(self, path: Path | str) -> None:
        """Write config to a YAML file."""
        with open(Path(path), "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False)

    def to_flat_dict(self) -> dict[str, Any]:
        """Return a flat dict of dotted keys, e.g. ``festival.max_exhaustive_events``."""
        flat: dict[str, Any] = {}
        for section, value in self.model_dump().items():
            if isinstance(value, dict):
                for key, inner in value.items():
                    flat[f"{section}.{key}"] = inner
            else:
                flat[section] = value
        return flat

    def apply_env_overrides(self) -> "RecitalConfig":
        """Apply RECITAL_* environment variables on top of the loaded values."""
        festival = os.environ.get("RECITAL_FESTIVAL_STRATEGY")
        modulation = os.environ.get("RECITAL_MODULATION_STRATEGY")
        try:
            if festival:
                self.festival = FestivalConfig(
                    **{**self.festival.model_dump(), "default_strategy": festival}
                )
            if modulation:
                self.modulation = ModulationConfig(
                    **{**self.modulation.model_dump(), "default_strategy": modulation}
                )
        except ValidationError as e:
            raise ConfigError(f"Invalid environment override: {e}") from e
        return self


# ---------------------------------------------------------------------------
# Global singleton
# ---------------------------------------------------------------------------

_config: RecitalConfig | None = None


def get_config() -> RecitalConfig:
    """Return the global config instance (creates default if needed)."""
    global _config
    if _config is None:
        _config = RecitalConfig().apply_env_overrides()
    return _config


def set_config(config: RecitalConfig | None) -> None:
    """Override the global config instance (``None`` resets to defaults)."""
    global _config
    _config = config


def load_config(path: Path | str | None = None) -> RecitalConfig:
    """
    Load config from file, falling back to standard locations, then defaults.
    """
    global _config

    if path is not None:
        _config = RecitalConfig.from_yaml(path)
    else:
        for candidate in [Path("recital.yaml"), Path("config/recital.yaml")]:
            if candidate.exists():
                _config = RecitalConfig.from_yaml(candidate)
                break
        else:
            _config = RecitalConfig()

    return _config.apply_env_overrides()
