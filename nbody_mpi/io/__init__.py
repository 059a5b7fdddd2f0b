"""I/O utilities for trajectory output and state management."""

from nbody_mpi.io.trajectory_io import (
    Trajectory, TrajectoryRecorder, read_trajectory,
    write_initial_snapshot, write_acceleration_history
)
from nbody_mpi.io.state_io import save_state, load_state

__all__ = [
    "Trajectory",
    "TrajectoryRecorder",
    "read_trajectory",
    "write_initial_snapshot",
    "write_acceleration_history",
    "save_state",
    "load_state",
]
