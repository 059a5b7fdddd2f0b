"""Static assignment of contiguous body ranges to ranks."""

from typing import List, NamedTuple


class PartitionError(ValueError):
    """Raised when bodies cannot be split evenly across ranks."""


class Partition(NamedTuple):
    """Half-open range ``[start, stop)`` of body indices owned by ``rank``."""
    rank: int
    start: int
    stop: int
    
    @property
    def size(self) -> int:
        return self.stop - self.start
    
    def as_slice(self) -> slice:
        return slice(self.start, self.stop)


def _check(body_count: int, world_size: int):
    if world_size < 1:
        raise PartitionError(f"world_size must be at least 1, got {world_size}")
    if body_count < 0:
        raise PartitionError(f"body_count must be non-negative, got {body_count}")
    if body_count % world_size != 0:
        raise PartitionError(
            f"body count {body_count} is not evenly divisible by "
            f"{world_size} processes"
        )


def partition_for(rank: int, body_count: int, world_size: int) -> Partition:
    """Range of body indices evaluated by ``rank``.
    
    Args:
        rank: Rank in ``[0, world_size)``
        body_count: Total number of bodies N
        world_size: Number of ranks W; must divide N exactly
        
    Returns:
        Partition ``[rank * N/W, (rank + 1) * N/W)``
        
    Raises:
        PartitionError: If W does not divide N or rank is out of range
    """
    _check(body_count, world_size)
    if not 0 <= rank < world_size:
        raise PartitionError(f"rank {rank} outside [0, {world_size})")
    per_rank = body_count // world_size
    return Partition(rank, rank * per_rank, (rank + 1) * per_rank)


def assign_partitions(body_count: int, world_size: int) -> List[Partition]:
    """Partitions for every rank, in rank order."""
    _check(body_count, world_size)
    return [partition_for(rank, body_count, world_size) for rank in range(world_size)]
