from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from floc.sim.core.config import SimulationConfig, SteeringConfig, dump_config, load_config

ROOT = Path(__file__).resolve().parents[2]


def test_steering_defaults():
    config = SteeringConfig()
    assert (config.separation_radius, config.alignment_radius, config.cohesion_radius) == (16.0, 32.0, 16.0)
    assert (config.separation_weight, config.alignment_weight, config.cohesion_weight) == (4.0, 3.0, 2.0)
    assert config.max_force == 0.05
    assert config.max_velocity == 6.0
    assert config.seek_enabled is False


def test_load_config_overrides_nested_values():
    config = load_config({"population": 7, "seed": 3, "steering": {"alignment_radius": 20.0, "seek_enabled": True}})
    assert config.population == 7
    assert config.seed == 3
    assert config.steering.alignment_radius == 20.0
    assert config.steering.seek_enabled is True
    assert config.steering.cohesion_radius == 16.0


def test_dump_config_round_trips_through_yaml(tmp_path):
    config = SimulationConfig(population=12, width=320.0, steering=SteeringConfig(max_force=0.2))
    path = tmp_path / "flock.yaml"
    path.write_text(yaml.safe_dump(dump_config(config)))

    assert SimulationConfig.from_yaml(path) == config


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SimulationConfig.from_yaml(path) == SimulationConfig()


def test_unknown_keys_are_rejected():
    with pytest.raises(TypeError):
        load_config({"steering": {"max_acceleration": 1.0}})
    with pytest.raises(TypeError):
        load_config({"world_size": 10.0})


@pytest.mark.parametrize("name", ["separation_radius", "alignment_radius", "cohesion_radius", "max_force", "max_velocity"])
def test_negative_limits_are_rejected(name):
    with pytest.raises(ValueError):
        SteeringConfig(**{name: -1.0})


@pytest.mark.config_change
def test_bundled_config_matches_defaults():
    assert SimulationConfig.from_yaml(ROOT / "configs" / "default.yaml") == SimulationConfig()


def test_empty_steering_block_gives_steering_defaults(tmp_path):
    path = tmp_path / "flock.yaml"
    path.write_text("population: 3\nsteering:\n")

    config = SimulationConfig.from_yaml(path)
    assert config.population == 3
    assert config.steering == SteeringConfig()
