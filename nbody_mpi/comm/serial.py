"""Single-rank communicator."""

from typing import Optional
import numpy as np
from nbody_mpi.comm.base import Communicator, COORDINATOR_RANK


class SerialCommunicator(Communicator):
    """Group of one: the coordinator is the only rank."""
    
    @property
    def name(self) -> str:
        return "serial"
    
    @property
    def rank(self) -> int:
        return 0
    
    @property
    def size(self) -> int:
        return 1
    
    def broadcast(self, buffer: np.ndarray, root: int = COORDINATOR_RANK) -> None:
        _check_root(root)
    
    def gather(self, sendbuf: np.ndarray, recvbuf: Optional[np.ndarray], root: int = COORDINATOR_RANK) -> None:
        _check_root(root)
        if recvbuf is None:
            raise ValueError("gather on the root rank requires a receive buffer")
        recvbuf[:len(sendbuf)] = sendbuf
    
    def barrier(self) -> None:
        pass
    
    def abort(self, code: int = 1) -> None:
        raise SystemExit(code)


def _check_root(root: int):
    if root != 0:
        raise ValueError(f"Invalid root rank {root} for a single-rank group")
