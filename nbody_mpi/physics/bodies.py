"""Body Store: the replicated state of all N bodies."""

from typing import Tuple
import numpy as np

# Column layout of one body record
X, Y, AX, AY, VX, VY, MASS = range(7)
FIELDS = ("x", "y", "ax", "ay", "vx", "vy", "mass")
RECORD_SIZE = len(FIELDS)


class BodyStore:
    """All bodies in one contiguous ``(N, 7)`` float64 buffer.
    
    Rows are bodies in index order; columns follow ``FIELDS``. Keeping the
    whole set in a single buffer lets collectives move it as one block, and
    a slice of rows is exactly one partition.
    
    The ``positions``, ``accelerations``, ``velocities`` and ``masses``
    attributes are views into that buffer, so writes through them update
    the store.
    """
    
    def __init__(self, data: np.ndarray):
        data = np.asarray(data)
        if data.ndim != 2 or data.shape[1] != RECORD_SIZE:
            raise ValueError(f"Body data must have shape (n, {RECORD_SIZE}), got {data.shape}")
        if data.dtype != np.float64 or not data.flags.c_contiguous:
            data = np.ascontiguousarray(data, dtype=np.float64)
        self.data = data
    
    @classmethod
    def empty(cls, body_count: int) -> "BodyStore":
        """Allocate a zeroed store, e.g. as a worker's broadcast target."""
        return cls(np.zeros((body_count, RECORD_SIZE), dtype=np.float64))
    
    @classmethod
    def from_arrays(cls, positions, velocities, masses, accelerations=None) -> "BodyStore":
        """Build a store from per-field arrays.
        
        Args:
            positions: Array of shape (n, 2)
            velocities: Array of shape (n, 2)
            masses: Array of shape (n,)
            accelerations: Optional array of shape (n, 2), zero if omitted
        """
        positions = np.asarray(positions, dtype=np.float64)
        n = positions.shape[0]
        store = cls.empty(n)
        store.positions[:] = positions
        store.velocities[:] = np.asarray(velocities, dtype=np.float64)
        store.masses[:] = np.asarray(masses, dtype=np.float64).reshape(n)
        if accelerations is not None:
            store.accelerations[:] = np.asarray(accelerations, dtype=np.float64)
        return store
    
    @property
    def body_count(self) -> int:
        return self.data.shape[0]
    
    def __len__(self) -> int:
        return self.body_count
    
    @property
    def positions(self) -> np.ndarray:
        return self.data[:, X:Y + 1]
    
    @property
    def accelerations(self) -> np.ndarray:
        return self.data[:, AX:AY + 1]
    
    @property
    def velocities(self) -> np.ndarray:
        return self.data[:, VX:VY + 1]
    
    @property
    def masses(self) -> np.ndarray:
        return self.data[:, MASS]
    
    def copy(self) -> "BodyStore":
        return BodyStore(self.data.copy())
    
    def get_state(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Get current state (positions, velocities, masses) as copies."""
        return self.positions.copy(), self.velocities.copy(), self.masses.copy()


def allocate_partition_buffer(size: int) -> np.ndarray:
    """Private per-rank buffer holding one partition's records."""
    return np.empty((size, RECORD_SIZE), dtype=np.float64)
