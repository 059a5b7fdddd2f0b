"""MPI communicator backed by mpi4py."""

from typing import Optional
import numpy as np
from mpi4py import MPI
from nbody_mpi.comm.base import Communicator, COORDINATOR_RANK


class MPICommunicator(Communicator):
    """Wraps an mpi4py communicator (``COMM_WORLD`` by default).
    
    Uses the buffer-based (upper-case) collectives, so body stores move as
    raw float64 blocks without pickling.
    """
    
    def __init__(self, comm=None):
        self._comm = comm if comm is not None else MPI.COMM_WORLD
        self._rank = self._comm.Get_rank()
        self._size = self._comm.Get_size()
    
    @property
    def name(self) -> str:
        return "mpi"
    
    @property
    def rank(self) -> int:
        return self._rank
    
    @property
    def size(self) -> int:
        return self._size
    
    def broadcast(self, buffer: np.ndarray, root: int = COORDINATOR_RANK) -> None:
        self._comm.Bcast(buffer, root=root)
    
    def gather(self, sendbuf: np.ndarray, recvbuf: Optional[np.ndarray], root: int = COORDINATOR_RANK) -> None:
        if self._rank == root and recvbuf is None:
            raise ValueError("gather on the root rank requires a receive buffer")
        self._comm.Gather(sendbuf, recvbuf if self._rank == root else None, root=root)
    
    def barrier(self) -> None:
        self._comm.Barrier()
    
    def abort(self, code: int = 1) -> None:
        self._comm.Abort(code)
