"""Load simulation parameters from JSON files merged over built-in defaults."""

from __future__ import annotations

import json
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dataclasses_json import dataclass_json

from .logic import RuleParameters
from .logic import element_by_name
from .logic.rules import DEFAULT_DIFFUSION_RATE
from .logic.rules import DEFAULT_DISPERSION_RATE
from .logic.rules import DEFAULT_FIRE_RISE_PROBABILITY

DEFAULT_WIDTH, DEFAULT_HEIGHT = 226, 126
DEFAULT_GENERATOR_MATERIAL = "Water"


@dataclass_json
@dataclass(frozen=True)
class SimulationConfig:
    """Grid dimensions, random seed and rule tuning for one simulation."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    random_seed: Optional[int] = None
    dispersion_rate: int = DEFAULT_DISPERSION_RATE
    diffusion_rate: float = DEFAULT_DIFFUSION_RATE
    fire_rise_probability: float = DEFAULT_FIRE_RISE_PROBABILITY
    generator_material: str = DEFAULT_GENERATOR_MATERIAL

    def __post_init__(self) -> None:
        for field_name in ("width", "height"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{field_name} must be a positive integer")
        if self.random_seed is not None and (
            isinstance(self.random_seed, bool) or not isinstance(self.random_seed, int)
        ):
            raise ValueError("random_seed must be an integer or null")
        # Validates the rule values and the material name.
        self.rule_parameters()

    def rule_parameters(self) -> RuleParameters:
        """Return the rule tuning described by this configuration."""

        try:
            return RuleParameters(
                dispersion_rate=self.dispersion_rate,
                diffusion_rate=self.diffusion_rate,
                fire_rise_probability=self.fire_rise_probability,
                generator_material=element_by_name(self.generator_material),
            )
        except TypeError as exc:
            raise ValueError(str(exc)) from exc


def _known_keys() -> set[str]:
    return {field.name for field in fields(SimulationConfig)}


def config_from_mapping(data: Mapping[str, Any]) -> SimulationConfig:
    """Merge known keys from ``data`` over the defaults; unknown keys are ignored."""

    if not isinstance(data, Mapping):
        raise ValueError("Configuration must be a JSON object")
    merged = asdict(SimulationConfig())
    merged.update({key: value for key, value in data.items() if key in _known_keys()})
    return SimulationConfig(**merged)


def load_config(path: Optional[Union[Path, str]] = None) -> SimulationConfig:
    """Return the configuration stored at ``path``, or the defaults when omitted."""

    if path is None:
        return SimulationConfig()
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    with open(config_path, "r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid configuration JSON in {config_path}: {exc}") from exc
    return config_from_mapping(data)


__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "SimulationConfig",
    "config_from_mapping",
    "load_config",
]
