"""Utility functions for reproducibility and configuration."""

from nbody_mpi.utils.reproducibility import set_all_seeds
from nbody_mpi.utils.config import (
    load_config, save_config, SimulationConfig, ConfigurationError
)

__all__ = ["set_all_seeds", "load_config", "save_config", "SimulationConfig", "ConfigurationError"]
