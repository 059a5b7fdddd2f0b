"""Physics engine for distributed N-body simulations."""

from nbody_mpi.physics.bodies import BodyStore
from nbody_mpi.physics.engine import StepCoordinator
from nbody_mpi.physics.force_kernel import ForceKernel, pairwise_acceleration
from nbody_mpi.physics.partition import Partition, PartitionError, assign_partitions, partition_for
from nbody_mpi.physics.roles import CoordinatorRole, WorkerRole, RunResult, select_role

__all__ = [
    "BodyStore",
    "StepCoordinator",
    "ForceKernel",
    "pairwise_acceleration",
    "Partition",
    "PartitionError",
    "assign_partitions",
    "partition_for",
    "CoordinatorRole",
    "WorkerRole",
    "RunResult",
    "select_role",
]
