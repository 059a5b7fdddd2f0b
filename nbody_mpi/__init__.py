"""
nbody-mpi - distributed direct-summation N-body simulation.

Features:
- Static domain decomposition of bodies across ranks
- Broadcast / compute / gather step over MPI, threads or a single process
- Plummer-softened pairwise gravity, semi-implicit Euler integration
- Plain-text trajectory output and plotting
"""

__version__ = "0.1.0"

from nbody_mpi.physics.bodies import BodyStore
from nbody_mpi.physics.engine import StepCoordinator
from nbody_mpi.utils.config import SimulationConfig
from nbody_mpi.comm.factory import get_communicator

__all__ = [
    "BodyStore",
    "StepCoordinator",
    "SimulationConfig",
    "get_communicator",
]
