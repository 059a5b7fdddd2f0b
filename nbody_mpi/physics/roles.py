"""Coordinator and worker roles.

Every rank runs the same step loop. What differs between rank 0 and the
others (who owns the authoritative store, who integrates, who writes
output) is captured by a role chosen once at startup.
"""

import sys
from abc import ABC, abstractmethod
from typing import IO, NamedTuple, Optional
import numpy as np
from tqdm import tqdm
from nbody_mpi.backends.base import Backend
from nbody_mpi.backends.numpy_backend import NumPyBackend
from nbody_mpi.comm.base import Communicator
from nbody_mpi.io.trajectory_io import TrajectoryRecorder
from nbody_mpi.physics.bodies import BodyStore
from nbody_mpi.physics.integrators.base import Integrator
from nbody_mpi.physics.integrators.semi_implicit_euler import SemiImplicitEulerIntegrator
from nbody_mpi.utils.config import SimulationConfig


class RunResult(NamedTuple):
    """Final state of a run, available on the coordinator only."""
    store: BodyStore
    accelerations: np.ndarray  # (iterations * N, 2)
    iterations: int


class Role(ABC):
    """Per-rank behaviour around the shared broadcast/compute/gather cycle."""

    @property
    @abstractmethod
    def is_coordinator(self) -> bool:
        pass

    @abstractmethod
    def start(self, store: Optional[BodyStore]) -> BodyStore:
        """Prepare before the first iteration.

        Returns:
            The store this rank broadcasts from (coordinator) or into (worker)
        """
        pass

    @abstractmethod
    def after_gather(self, store: BodyStore, iteration: int):
        """Called once per iteration after the gather completes."""
        pass

    @abstractmethod
    def finish(self, store: BodyStore) -> Optional[RunResult]:
        """Called once after the last iteration."""
        pass


class CoordinatorRole(Role):
    """Rank 0: owns the body store, integrates, records and writes output."""

    def __init__(
        self,
        config: SimulationConfig,
        recorder: Optional[TrajectoryRecorder] = None,
        integrator: Optional[Integrator] = None,
        backend: Optional[Backend] = None,
        show_progress: bool = False,
        stream: Optional[IO[str]] = None,
    ):
        """Initialize coordinator role.

        Args:
            config: Run configuration
            recorder: Acceleration history recorder (created from config if None)
            integrator: Integrator to use (default: semi-implicit Euler)
            backend: Compute backend for the integrator
            show_progress: Show a tqdm progress bar on stderr
            stream: Output stream for the trajectory (default: stdout)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config.validate()
        self.recorder = recorder or TrajectoryRecorder(config.body_count, config.iterations, stream)
        self.integrator = integrator or SemiImplicitEulerIntegrator()
        self.backend = backend or NumPyBackend()
        self.show_progress = show_progress
        self._progress = None

    @property
    def is_coordinator(self) -> bool:
        return True

    def start(self, store: Optional[BodyStore]) -> BodyStore:
        if store is None:
            raise ValueError("The coordinator needs an initial body store")
        if store.body_count != self.config.body_count:
            raise ValueError(
                f"Initial store holds {store.body_count} bodies, "
                f"configuration expects {self.config.body_count}"
            )
        self.recorder.emit_initial(self.config, store)
        self._progress = tqdm(
            total=self.config.iterations,
            desc="Simulating",
            unit="step",
            file=sys.stderr,
            disable=not self.show_progress,
        )
        return store

    def after_gather(self, store: BodyStore, iteration: int):
        new_positions, new_velocities = self.integrator.step(
            store.positions,
            store.velocities,
            store.accelerations,
            self.config.delta_time,
            self.backend,
        )
        store.velocities[:] = self.backend.to_numpy(new_velocities)
        store.positions[:] = self.backend.to_numpy(new_positions)
        self.recorder.record(iteration, store.accelerations)
        if self._progress is not None:
            self._progress.update(1)

    def finish(self, store: BodyStore) -> RunResult:
        if self._progress is not None:
            self._progress.close()
            self._progress = None
        self.recorder.emit_history()
        return RunResult(store, self.recorder.history, self.config.iterations)


class WorkerRole(Role):
    """Ranks other than 0: hold a disposable replica and compute only."""

    def __init__(self, config: SimulationConfig):
        self.config = config.validate()

    @property
    def is_coordinator(self) -> bool:
        return False

    def start(self, store: Optional[BodyStore]) -> BodyStore:
        # Contents are overwritten by the first broadcast
        return BodyStore.empty(self.config.body_count)

    def after_gather(self, store: BodyStore, iteration: int):
        pass

    def finish(self, store: BodyStore) -> None:
        return None


def select_role(comm: Communicator, config: SimulationConfig, **coordinator_kwargs) -> Role:
    """Coordinator role on rank 0, worker role everywhere else.

    Args:
        comm: This rank's communicator
        config: Run configuration
        **coordinator_kwargs: Passed to CoordinatorRole on rank 0
    """
    if comm.is_coordinator:
        return CoordinatorRole(config, **coordinator_kwargs)
    return WorkerRole(config)
