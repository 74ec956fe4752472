from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


@dataclass
class SteeringConfig:
    separation_radius: float = 16.0
    alignment_radius: float = 32.0
    cohesion_radius: float = 16.0
    separation_weight: float = 4.0
    alignment_weight: float = 3.0
    cohesion_weight: float = 2.0
    # seek is computed on demand but only joins the weighted sum when enabled
    seek_enabled: bool = False
    seek_weight: float = 1.0
    max_force: float = 0.05
    max_velocity: float = 6.0
    orient_to_velocity: bool = False

    def __post_init__(self) -> None:
        for name in ("separation_radius", "alignment_radius", "cohesion_radius", "max_force", "max_velocity"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass
class SimulationConfig:
    population: int = 50
    width: float = 800.0
    height: float = 600.0
    spawn_extent: float = 400.0
    seed: int = 42
    config_version: str = "v1"
    steering: SteeringConfig = field(default_factory=SteeringConfig)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


def load_config(raw: dict) -> SimulationConfig:
    steering = SteeringConfig(**(raw.get("steering") or {}))
    sim_values = {k: v for k, v in raw.items() if k != "steering"}
    return SimulationConfig(steering=steering, **sim_values)


def dump_config(config: SimulationConfig) -> dict:
    raw = {f.name: getattr(config, f.name) for f in fields(config) if f.name != "steering"}
    raw["steering"] = {f.name: getattr(config.steering, f.name) for f in fields(config.steering)}
    return raw
