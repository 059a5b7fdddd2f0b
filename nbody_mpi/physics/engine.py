"""Step coordinator: the per-iteration broadcast, compute, gather cycle."""

import time
import warnings
from typing import Callable, Optional
from nbody_mpi.backends.base import Backend
from nbody_mpi.comm.base import Communicator
from nbody_mpi.physics.bodies import AX, AY, BodyStore, allocate_partition_buffer
from nbody_mpi.physics.force_kernel import ForceKernel
from nbody_mpi.physics.partition import partition_for
from nbody_mpi.physics.roles import Role, RunResult
from nbody_mpi.utils.config import SimulationConfig


class StepCoordinator:
    """Drives a run on one rank.

    Every rank of the group constructs one and calls ``run``. Each of
    ``config.iterations`` steps is:

    1. broadcast the coordinator's store to all ranks
    2. compute accelerations for this rank's partition against the full set
    3. gather the partitions back into the coordinator's store, in rank order
    4. hand the store to the role (the coordinator integrates and records)

    The collectives are the only synchronization; between them each rank
    only reads its replica and writes its private partition buffer.
    """

    def __init__(
        self,
        comm: Communicator,
        config: SimulationConfig,
        role: Role,
        kernel: Optional[ForceKernel] = None,
        backend: Optional[Backend] = None,
    ):
        """Initialize step coordinator.

        Validation happens here, before any collective is entered, so a bad
        configuration fails identically on every rank.

        Args:
            comm: Communicator for this rank
            config: Run configuration
            role: Coordinator or worker role for this rank
            kernel: Force kernel (default: vectorized kernel bound to the config's softening)
            backend: Compute backend for the default kernel

        Raises:
            ConfigurationError: If the configuration is invalid
            PartitionError: If the body count does not divide evenly across ranks
        """
        if role.is_coordinator != comm.is_coordinator:
            raise ValueError(f"Role does not match rank {comm.rank}")
        self.comm = comm
        self.config = config.validate()
        self.role = role
        self.partition = partition_for(comm.rank, config.body_count, comm.size)
        self.kernel = kernel or ForceKernel(config.softening_length_squared, backend)
        self._buffer = allocate_partition_buffer(self.partition.size)

        self.time = 0.0
        self.step_count = 0

        # Profiling: accumulated wall time (ms)
        self._profile: bool = False
        self._compute_ms = 0.0
        self._communication_ms = 0.0

        # Callbacks
        self.on_step_callback: Optional[Callable] = None

    def set_profiling(self, enabled: bool = True):
        """Enable or disable step timing (compute ms, communication ms)."""
        self._profile = enabled

    def get_timing(self) -> dict:
        """Return accumulated timing in ms: compute_ms, communication_ms."""
        return {
            "compute_ms": self._compute_ms,
            "communication_ms": self._communication_ms,
        }

    def run(self, store: Optional[BodyStore] = None) -> Optional[RunResult]:
        """Run all iterations.

        Args:
            store: Initial bodies. Required on the coordinator, ignored on workers.

        Returns:
            RunResult on the coordinator, None on workers
        """
        store = self.role.start(store)
        iterations = self.config.iterations
        if iterations == 0 and self.role.is_coordinator:
            warnings.warn(
                f"time_period {self.config.time_period} is shorter than "
                f"delta_time {self.config.delta_time}; no steps will run",
                stacklevel=2,
            )
        for iteration in range(iterations):
            self.step(store, iteration)
        return self.role.finish(store)

    def step(self, store: BodyStore, iteration: int):
        """Perform one broadcast, compute, gather, integrate cycle."""
        if self._profile:
            t0 = time.perf_counter()
        self.comm.broadcast(store.data)
        if self._profile:
            t1 = time.perf_counter()
        self._compute_partition(store)
        if self._profile:
            t2 = time.perf_counter()
        self.comm.gather(self._buffer, store.data if self.comm.is_coordinator else None)
        if self._profile:
            t3 = time.perf_counter()
            self._communication_ms += (t1 - t0 + t3 - t2) * 1000.0
            self._compute_ms += (t2 - t1) * 1000.0

        self.role.after_gather(store, iteration)
        self.time += self.config.delta_time
        self.step_count += 1

        if self.on_step_callback:
            self.on_step_callback(self)

    def _compute_partition(self, store: BodyStore):
        """Fill the partition buffer: carried-over records with fresh accelerations."""
        part = self.partition
        self._buffer[:] = store.data[part.as_slice()]
        self._buffer[:, AX:AY + 1] = self.kernel.compute(
            store.positions, store.masses, part.start, part.stop
        )
