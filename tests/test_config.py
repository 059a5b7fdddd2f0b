"""Tests for run configuration."""

import dataclasses
import json
import pytest
from nbody_mpi.utils.config import (
    ConfigurationError, SimulationConfig, load_config, save_config
)


def _config(**overrides):
    values = dict(body_count=4, time_period=1.0, delta_time=0.25,
                  initial_body_mass=10.0, softening_length=0.1)
    values.update(overrides)
    return SimulationConfig(**values)


def test_derived_quantities():
    config = _config(softening_length=3.0)
    assert config.softening_length_squared == 9.0
    assert config.iterations == 4
    assert config.debug_acceleration_scale == 100.0


@pytest.mark.parametrize("time_period,delta_time,expected", [
    (1.0, 0.25, 4),
    (1.0, 0.3, 3),
    (0.5, 1.0, 0),
    (0.0, 0.1, 0),
])
def test_iterations_rounds_down(time_period, delta_time, expected):
    assert _config(time_period=time_period, delta_time=delta_time).iterations == expected


def test_config_is_immutable():
    config = _config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.body_count = 8


@pytest.mark.parametrize("overrides", [
    {"body_count": 0},
    {"body_count": 2.5},
    {"body_count": 4.0},
    {"body_count": "4"},
    {"body_count": True},
    {"delta_time": "0.1"},
    {"initial_body_mass": None},
    {"debug_acceleration_scale": "fast"},
    {"seed": 1.5},
    {"delta_time": 0.0},
    {"delta_time": -0.1},
    {"time_period": -1.0},
    {"initial_body_mass": 0.0},
    {"softening_length": -1.0},
])
def test_validate_rejects_bad_values(overrides):
    with pytest.raises(ConfigurationError):
        _config(**overrides).validate()


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_json_config_round_trip(tmp_path):
    path = tmp_path / "run.json"
    config = _config(seed=7, debug_acceleration_scale=5.0)
    
    save_config(config, str(path))
    
    assert json.loads(path.read_text())["body_count"] == 4
    assert load_config(str(path)) == config


def test_yaml_config(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "run.yaml"
    config = _config(seed=1)
    
    save_config(config, str(path))
    
    assert load_config(str(path)) == config


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({
        "body_count": 4, "time_period": 1.0, "delta_time": 0.25,
        "initial_body_mass": 10.0, "softening_length": 0.1, "gravity": 9.81,
    }))
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_load_config_rejects_missing_keys(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"body_count": 4}))
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_load_config_validates(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({
        "body_count": 4, "time_period": 1.0, "delta_time": 0.0,
        "initial_body_mass": 10.0, "softening_length": 0.1,
    }))
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "run.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_load_config_rejects_float_body_count(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({
        "body_count": 4.0, "time_period": 1.0, "delta_time": 0.25,
        "initial_body_mass": 10.0, "softening_length": 0.1,
    }))
    with pytest.raises(ConfigurationError, match="body_count"):
        load_config(str(path))


def test_load_config_rejects_string_values(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({
        "body_count": 4, "time_period": 1.0, "delta_time": "0.1",
        "initial_body_mass": 10.0, "softening_length": 0.1,
    }))
    with pytest.raises(ConfigurationError, match="delta_time"):
        load_config(str(path))


def test_integer_valued_floats_are_accepted():
    config = _config(time_period=1, delta_time=1, softening_length=0).validate()
    assert config.iterations == 1
