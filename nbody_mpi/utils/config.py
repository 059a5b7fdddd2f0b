"""Configuration management."""

import json
import math
import numbers
from typing import Optional
from pathlib import Path
from dataclasses import dataclass, asdict

DEFAULT_DEBUG_ACCELERATION_SCALE = 100.0
REAL_FIELDS = (
    "time_period", "delta_time", "initial_body_mass",
    "softening_length", "debug_acceleration_scale",
)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class ConfigurationError(ValueError):
    """Raised when run parameters are missing or out of range."""


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable parameters of one run."""
    body_count: int
    time_period: float
    delta_time: float
    initial_body_mass: float
    softening_length: float
    
    # Only scales the initial velocities of generated bodies
    debug_acceleration_scale: float = DEFAULT_DEBUG_ACCELERATION_SCALE
    
    # Reproducibility
    seed: Optional[int] = None
    
    @property
    def softening_length_squared(self) -> float:
        return self.softening_length * self.softening_length
    
    @property
    def iterations(self) -> int:
        """Number of fixed steps: floor(time_period / delta_time)."""
        return int(math.floor(self.time_period / self.delta_time))
    
    def validate(self) -> "SimulationConfig":
        """Check parameter ranges.
        
        Returns:
            self, so construction and validation can be chained
            
        Raises:
            ConfigurationError: If any parameter has the wrong type or is out of range
        """
        for field in REAL_FIELDS:
            value = getattr(self, field)
            if not _is_real(value):
                raise ConfigurationError(f"{field} must be a number, got {value!r}")
        if self.seed is not None and not _is_integer(self.seed):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")
        if not _is_integer(self.body_count) or self.body_count < 1:
            raise ConfigurationError(f"body_count must be a positive integer, got {self.body_count}")
        if not self.delta_time > 0:
            raise ConfigurationError(f"delta_time must be positive, got {self.delta_time}")
        if not self.time_period >= 0:
            raise ConfigurationError(f"time_period must be non-negative, got {self.time_period}")
        if not self.initial_body_mass > 0:
            raise ConfigurationError(f"initial_body_mass must be positive, got {self.initial_body_mass}")
        if not self.softening_length >= 0:
            raise ConfigurationError(f"softening_length must be non-negative, got {self.softening_length}")
        return self


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        Validated SimulationConfig
        
    Raises:
        ConfigurationError: If the file has unknown or missing keys, or invalid values
    """
    config_path = Path(config_path)
    
    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} does not contain a mapping")
    try:
        config = SimulationConfig(**data)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc
    return config.validate()


def save_config(config: SimulationConfig, output_path: str):
    """Save configuration to file.
    
    Args:
        config: SimulationConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)
    
    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            try:
                import yaml
            except ImportError:
                raise ImportError("YAML support requires PyYAML. Install with: pip install pyyaml")
            yaml.dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
