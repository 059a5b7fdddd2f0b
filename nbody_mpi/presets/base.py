"""Base class for initial condition generators."""

from abc import ABC, abstractmethod
from nbody_mpi.backends.base import Backend
from nbody_mpi.physics.bodies import BodyStore


class Preset(ABC):
    """Abstract base class for initial condition generators."""
    
    def __init__(self, backend: Backend, body_count: int = 100, seed: int = None):
        """Initialize preset.
        
        Args:
            backend: Compute backend
            body_count: Number of bodies
            seed: Random seed for reproducibility
        """
        self.backend = backend
        self.body_count = body_count
        self.seed = seed
        
        if seed is not None:
            backend.set_seed(seed)
    
    @abstractmethod
    def generate(self) -> BodyStore:
        """Generate initial conditions.
        
        Returns:
            BodyStore with positions, velocities and masses set and zero accelerations
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
