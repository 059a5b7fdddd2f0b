"""Uniform scatter on the unit square with a rotating outward velocity bias."""

import numpy as np
from nbody_mpi.backends.base import Backend
from nbody_mpi.physics.bodies import BodyStore
from nbody_mpi.presets.base import Preset
from nbody_mpi.utils.config import DEFAULT_DEBUG_ACCELERATION_SCALE


class DebugScatter(Preset):
    """Bodies placed uniformly at random in [0, 1) x [0, 1).
    
    Body ``i`` gets velocity direction ``i / N * 2pi`` jittered by up to
    +/-0.25 rad, and a random fraction of ``debug_acceleration_scale`` as
    its speed. Masses are ``initial_body_mass * u`` with ``u`` in [0.5, 1.5).
    """
    
    def __init__(
        self,
        backend: Backend,
        body_count: int = 100,
        initial_body_mass: float = 10000.0,
        debug_acceleration_scale: float = DEFAULT_DEBUG_ACCELERATION_SCALE,
        seed: int = None
    ):
        """Initialize debug scatter preset.
        
        Args:
            backend: Compute backend
            body_count: Number of bodies
            initial_body_mass: Mean body mass
            debug_acceleration_scale: Upper bound of initial speed
            seed: Random seed
        """
        super().__init__(backend, body_count, seed)
        self.initial_body_mass = initial_body_mass
        self.debug_acceleration_scale = debug_acceleration_scale
    
    @property
    def name(self) -> str:
        return "debug"
    
    def generate(self) -> BodyStore:
        """Generate debug scatter initial conditions."""
        n = self.body_count
        rng = np.random.default_rng(self.seed)
        
        index = np.arange(n, dtype=np.float64)
        angle = index / n * 2.0 * np.pi + (rng.uniform(0.0, 1.0, n) - 0.5) * 0.5
        
        positions = rng.uniform(0.0, 1.0, (n, 2))
        masses = self.initial_body_mass * (rng.uniform(0.0, 1.0, n) + 0.5)
        
        speed = self.debug_acceleration_scale * rng.uniform(0.0, 1.0, n)
        velocities = np.stack([np.cos(angle) * speed, np.sin(angle) * speed], axis=1)
        
        return BodyStore.from_arrays(positions, velocities, masses)
