"""Plotting of trajectory documents."""

from nbody_mpi.render.base import Renderer
from nbody_mpi.render.renderer_2d import TrajectoryPlot

__all__ = ["Renderer", "TrajectoryPlot"]
