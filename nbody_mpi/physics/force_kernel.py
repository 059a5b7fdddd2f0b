"""Softened pairwise gravity (G = 1, Plummer softening).

The acceleration imparted on body A by body B is

    r  = x_B - x_A
    d2 = |r|^2 + eps^2
    a  = m_B / d2^(3/2) * r

``eps^2`` keeps ``d2`` away from zero, so coincident distinct bodies
produce a bounded acceleration. A body never acts on itself: the
identical pair is skipped, not evaluated.
"""

from typing import Literal, Optional
import numpy as np
from nbody_mpi.backends.base import Backend
from nbody_mpi.backends.numpy_backend import NumPyBackend

DIMENSIONS = 2


def pairwise_acceleration(
    subject_position,
    source_position,
    source_mass: float,
    softening_length_squared: float,
) -> np.ndarray:
    """Acceleration on the subject body caused by the source body.

    Args:
        subject_position: (x, y) of the body being accelerated
        source_position: (x, y) of the attracting body
        source_mass: Mass of the attracting body
        softening_length_squared: eps^2

    Returns:
        (ax, ay) as a NumPy array
    """
    r = np.asarray(source_position, dtype=np.float64) - np.asarray(subject_position, dtype=np.float64)
    distance_squared = r[0] * r[0] + r[1] * r[1] + softening_length_squared
    scale = source_mass / distance_squared ** 1.5
    return r * scale


class ForceKernel:
    """Total accelerations over the full body set, for a range of subjects.

    The softening constant is bound at construction; the kernel holds no
    other state, so calls are pure and can run on any rank in any order.
    """

    METHODS = ("direct", "vectorized")

    def __init__(
        self,
        softening_length_squared: float,
        backend: Optional[Backend] = None,
        method: Literal["direct", "vectorized"] = "vectorized",
    ):
        """Initialize force kernel.

        Args:
            softening_length_squared: eps^2, shared by every pair
            backend: Compute backend for the vectorized path (default: NumPy)
            method: 'direct' (explicit pair loop) or 'vectorized' (block of
                array ops per partition)
        """
        if method not in self.METHODS:
            raise ValueError(f"Unknown force method '{method}'. Available: {list(self.METHODS)}")
        self.softening_length_squared = float(softening_length_squared)
        self.backend = backend or NumPyBackend()
        self.method = method

    def acceleration_on(self, positions: np.ndarray, masses: np.ndarray, index: int) -> np.ndarray:
        """Total acceleration on body ``index`` from every other body."""
        total = np.zeros(DIMENSIONS, dtype=np.float64)
        subject = positions[index]
        for j in range(positions.shape[0]):
            if j == index:
                continue
            total += pairwise_acceleration(
                subject, positions[j], masses[j], self.softening_length_squared
            )
        return total

    def compute(
        self,
        positions: np.ndarray,
        masses: np.ndarray,
        start: int = 0,
        stop: Optional[int] = None,
    ) -> np.ndarray:
        """Accelerations for bodies ``[start, stop)`` summed over all N bodies.

        Args:
            positions: (n, 2) positions of the complete body set
            masses: (n,) masses of the complete body set
            start: First subject index
            stop: One past the last subject index (default: n)

        Returns:
            (stop - start, 2) NumPy array of accelerations
        """
        n = positions.shape[0]
        stop = n if stop is None else stop
        if not 0 <= start <= stop <= n:
            raise IndexError(f"Subject range [{start}, {stop}) outside [0, {n})")

        if self.method == "direct":
            accelerations = np.zeros((stop - start, DIMENSIONS), dtype=np.float64)
            for row, index in enumerate(range(start, stop)):
                accelerations[row] = self.acceleration_on(positions, masses, index)
            return accelerations

        return self.backend.to_numpy(self._compute_vectorized(positions, masses, start, stop))

    def _compute_vectorized(self, positions, masses, start: int, stop: int):
        """Block evaluation of subjects [start, stop) against all sources."""
        backend = self.backend
        n = positions.shape[0]
        p = stop - start
        # r_diff: (1,n,2) - (p,1,2) -> (p,n,2)
        pos_i = backend.reshape(backend.array(positions[start:stop]), (p, 1, DIMENSIONS))
        pos_j = backend.reshape(backend.array(positions), (1, n, DIMENSIONS))
        r_diff = backend.subtract(pos_j, pos_i)
        distance_squared = backend.add(
            backend.sum(backend.square(r_diff), axis=2), self.softening_length_squared
        )
        # Self-pairs sit on the diagonal offset by the partition start
        self_pair = backend.eye(p, n, k=start, dtype=bool)
        distance_squared = backend.where(self_pair, 1.0, distance_squared)
        m_j = backend.expand_dims(backend.array(masses), 0)
        weights = backend.divide(m_j, backend.power(distance_squared, 1.5))
        weights = backend.where(self_pair, 0.0, weights)
        return backend.sum(backend.multiply(backend.expand_dims(weights, 2), r_diff), axis=1)
