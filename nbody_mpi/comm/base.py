"""Abstract base class for collective communicators."""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np

COORDINATOR_RANK = 0


class Communicator(ABC):
    """Abstract interface for a group of cooperating ranks.
    
    Both collectives are blocking: every rank of the group must call the
    same operation before any of them returns. Buffers are NumPy arrays
    and are filled in place.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this transport."""
        pass
    
    @property
    @abstractmethod
    def rank(self) -> int:
        """Rank of the calling process, in ``[0, size)``."""
        pass
    
    @property
    @abstractmethod
    def size(self) -> int:
        """Number of ranks in the group."""
        pass
    
    @property
    def is_coordinator(self) -> bool:
        return self.rank == COORDINATOR_RANK
    
    @abstractmethod
    def broadcast(self, buffer: np.ndarray, root: int = COORDINATOR_RANK) -> None:
        """Replicate ``buffer`` from ``root`` into every rank's ``buffer``.
        
        Args:
            buffer: Array of identical shape and dtype on every rank
            root: Rank whose contents are sent
        """
        pass
    
    @abstractmethod
    def gather(self, sendbuf: np.ndarray, recvbuf: Optional[np.ndarray], root: int = COORDINATOR_RANK) -> None:
        """Concatenate every rank's ``sendbuf`` into ``recvbuf`` on ``root``.
        
        Segments are placed in rank order along the first axis, so with
        equal segment sizes rank ``r`` lands at rows
        ``[r * len(sendbuf), (r + 1) * len(sendbuf))``.
        
        Args:
            sendbuf: This rank's contribution
            recvbuf: Destination on ``root``; ignored (may be None) elsewhere
            root: Receiving rank
        """
        pass
    
    @abstractmethod
    def barrier(self) -> None:
        """Block until every rank has reached the barrier."""
        pass
    
    @abstractmethod
    def abort(self, code: int = 1) -> None:
        """Terminate the whole group after a fatal error on one rank."""
        pass
