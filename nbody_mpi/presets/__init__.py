"""Initial condition generators."""

from nbody_mpi.presets.base import Preset
from nbody_mpi.presets.debug_scatter import DebugScatter

__all__ = ["Preset", "DebugScatter"]
