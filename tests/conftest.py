"""Shared helpers for running simulations on a simulated group of ranks."""

import io
import pytest
import numpy as np
from nbody_mpi.comm.threaded import run_threaded
from nbody_mpi.physics.bodies import BodyStore
from nbody_mpi.physics.engine import StepCoordinator
from nbody_mpi.physics.force_kernel import ForceKernel
from nbody_mpi.physics.roles import select_role
from nbody_mpi.utils.config import SimulationConfig


def _run_group(config, store, world_size=1, method="vectorized"):
    """Run ``config`` from ``store`` on ``world_size`` threaded ranks.
    
    Returns:
        Tuple of (coordinator RunResult, trajectory text written by the coordinator)
    """
    streams = {}
    
    def target(comm):
        stream = io.StringIO()
        role = select_role(comm, config, stream=stream)
        kernel = ForceKernel(config.softening_length_squared, method=method)
        sim = StepCoordinator(comm, config, role, kernel=kernel)
        result = sim.run(store.copy() if comm.is_coordinator else None)
        if comm.is_coordinator:
            streams["text"] = stream.getvalue()
        return result
    
    results = run_threaded(world_size, target)
    return results[0], streams["text"]


@pytest.fixture
def run_group():
    return _run_group


@pytest.fixture
def two_body_config():
    return SimulationConfig(
        body_count=2,
        time_period=0.01,
        delta_time=0.01,
        initial_body_mass=1.0,
        softening_length=0.0,
    )


@pytest.fixture
def two_body_store():
    return BodyStore.from_arrays(
        positions=[[0.0, 0.0], [1.0, 0.0]],
        velocities=[[0.0, 0.0], [0.0, 0.0]],
        masses=[1.0, 1.0],
    )


@pytest.fixture
def random_store():
    rng = np.random.default_rng(2024)
    return BodyStore.from_arrays(
        positions=rng.uniform(0, 1, (8, 2)),
        velocities=rng.normal(0, 0.1, (8, 2)),
        masses=rng.uniform(0.5, 1.5, 8),
    )
