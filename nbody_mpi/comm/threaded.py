"""In-process communicator that simulates a group of ranks with threads.

Every rank runs the same target function on its own thread. The
collectives exchange array references through a shared slot table and
synchronize on a ``threading.Barrier``, which gives the same blocking
semantics as the MPI transport without launching processes.
"""

import threading
from typing import Any, Callable, List, Optional
import numpy as np
from nbody_mpi.comm.base import Communicator, COORDINATOR_RANK


class _ThreadGroup:
    """State shared by all ranks of one threaded group."""
    
    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Group size must be at least 1, got {size}")
        self.size = size
        self.barrier = threading.Barrier(size)
        self.slots: List[Optional[np.ndarray]] = [None] * size


class ThreadCommunicator(Communicator):
    """One rank of a threaded group. Create groups with ``run_threaded``."""
    
    def __init__(self, rank: int, group: _ThreadGroup):
        if not 0 <= rank < group.size:
            raise ValueError(f"Rank {rank} outside group of size {group.size}")
        self._rank = rank
        self._group = group
    
    @property
    def name(self) -> str:
        return "threaded"
    
    @property
    def rank(self) -> int:
        return self._rank
    
    @property
    def size(self) -> int:
        return self._group.size
    
    def broadcast(self, buffer: np.ndarray, root: int = COORDINATOR_RANK) -> None:
        if self._rank == root:
            self._group.slots[root] = buffer
        self.barrier()
        if self._rank != root:
            np.copyto(buffer, self._group.slots[root])
        # root must not touch its buffer until every rank has copied it
        self.barrier()
    
    def gather(self, sendbuf: np.ndarray, recvbuf: Optional[np.ndarray], root: int = COORDINATOR_RANK) -> None:
        if self._rank == root and recvbuf is None:
            raise ValueError("gather on the root rank requires a receive buffer")
        self._group.slots[self._rank] = sendbuf
        self.barrier()
        if self._rank == root:
            offset = 0
            for segment in self._group.slots:
                recvbuf[offset:offset + len(segment)] = segment
                offset += len(segment)
        self.barrier()
    
    def barrier(self) -> None:
        self._group.barrier.wait()
    
    def abort(self, code: int = 1) -> None:
        self._group.barrier.abort()
        raise SystemExit(code)


def run_threaded(size: int, target: Callable[[Communicator], Any]) -> List[Any]:
    """Run ``target(comm)`` on ``size`` threads forming one group.
    
    If any rank raises, the shared barrier is aborted so the remaining
    ranks leave their collectives with ``BrokenBarrierError`` instead of
    deadlocking. The originating error is then re-raised in the caller.
    
    Args:
        size: Number of ranks
        target: Callable executed once per rank with that rank's communicator
        
    Returns:
        List of per-rank return values, indexed by rank
    """
    group = _ThreadGroup(size)
    results: List[Any] = [None] * size
    errors: List[Optional[BaseException]] = [None] * size
    
    def _run(rank: int):
        comm = ThreadCommunicator(rank, group)
        try:
            results[rank] = target(comm)
        except BaseException as exc:
            errors[rank] = exc
            group.barrier.abort()
    
    threads = [
        threading.Thread(target=_run, args=(rank,), name=f"rank-{rank}")
        for rank in range(size)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    
    raised = [error for error in errors if error is not None]
    if raised:
        origin = [e for e in raised if not isinstance(e, threading.BrokenBarrierError)]
        raise (origin or raised)[0]
    return results
