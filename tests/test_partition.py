"""Tests for the static partition assigner."""

import pytest
from nbody_mpi.physics.partition import (
    Partition, PartitionError, assign_partitions, partition_for
)


@pytest.mark.parametrize("body_count,world_size", [
    (1, 1), (2, 2), (8, 1), (8, 2), (8, 4), (8, 8), (12, 3), (1000, 10),
])
def test_partitions_cover_all_bodies_exactly_once(body_count, world_size):
    """Union of all ranges is {0..N-1} with no overlap and no gap."""
    partitions = assign_partitions(body_count, world_size)
    
    assert len(partitions) == world_size
    covered = []
    for rank, part in enumerate(partitions):
        assert part.rank == rank
        assert part.size == body_count // world_size
        covered.extend(range(part.start, part.stop))
    assert covered == list(range(body_count))


def test_partitions_are_contiguous_in_rank_order():
    """Each range starts where the previous one stops."""
    partitions = assign_partitions(12, 4)
    
    assert partitions[0].start == 0
    for previous, current in zip(partitions, partitions[1:]):
        assert current.start == previous.stop
    assert partitions[-1].stop == 12


def test_partition_for_matches_formula():
    """Rank r gets [r * N/W, (r + 1) * N/W)."""
    part = partition_for(2, 12, 4)
    
    assert part == Partition(2, 6, 9)
    assert part.as_slice() == slice(6, 9)


def test_indivisible_body_count_is_rejected():
    """N % W != 0 fails instead of padding."""
    with pytest.raises(PartitionError):
        assign_partitions(10, 3)
    with pytest.raises(PartitionError):
        partition_for(0, 5, 2)


def test_invalid_rank_or_world_size_is_rejected():
    """Out-of-range ranks and empty groups are rejected."""
    with pytest.raises(PartitionError):
        partition_for(4, 8, 4)
    with pytest.raises(PartitionError):
        partition_for(-1, 8, 4)
    with pytest.raises(PartitionError):
        assign_partitions(8, 0)


def test_partition_error_is_value_error():
    assert issubclass(PartitionError, ValueError)
