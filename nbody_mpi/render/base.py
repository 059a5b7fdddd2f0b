"""Base renderer interface."""

from abc import ABC, abstractmethod
import numpy as np
from nbody_mpi.io.trajectory_io import Trajectory


class Renderer(ABC):
    """Abstract base class for renderers."""
    
    @abstractmethod
    def render(self, trajectory: Trajectory):
        """Draw a parsed trajectory.
        
        Args:
            trajectory: Output of ``read_trajectory``
        """
        pass
    
    @abstractmethod
    def capture_frame(self) -> np.ndarray:
        """Capture current figure as image array.
        
        Returns:
            Image array (H, W, 3) uint8
        """
        pass
    
    @abstractmethod
    def save(self, output_path: str):
        """Write the current figure to an image file."""
        pass
    
    @abstractmethod
    def close(self):
        """Close the renderer."""
        pass
