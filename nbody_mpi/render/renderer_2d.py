"""2D trajectory plot using matplotlib."""

import numpy as np
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg
from typing import Optional, Tuple
from nbody_mpi.io.trajectory_io import Trajectory
from nbody_mpi.render.base import Renderer


class TrajectoryPlot(Renderer):
    """Two panels: the initial bodies, and each body's |a| over time.
    
    Renders off-screen (Agg), so it works on cluster nodes without a display.
    """
    
    def __init__(
        self,
        figsize: Tuple[int, int] = (12, 6),
        dpi: int = 100,
        max_bodies: int = 50,
        show_velocities: bool = True
    ):
        """Initialize trajectory plot.
        
        Args:
            figsize: Figure size (width, height)
            dpi: Dots per inch
            max_bodies: Maximum number of per-body history lines drawn
            show_velocities: Draw initial velocity arrows
        """
        self.figsize = figsize
        self.dpi = dpi
        self.max_bodies = max_bodies
        self.show_velocities = show_velocities
        
        self.fig: Optional[Figure] = None
        self.canvas: Optional[FigureCanvasAgg] = None
    
    def render(self, trajectory: Trajectory):
        """Draw the initial snapshot and the acceleration history."""
        self.close()
        self.fig = Figure(figsize=self.figsize, dpi=self.dpi)
        self.canvas = FigureCanvasAgg(self.fig)
        ax_bodies, ax_history = self.fig.subplots(1, 2)
        
        store = trajectory.initial
        positions = store.positions
        masses = store.masses
        
        # Prepare sizes by mass
        if masses.max() > 0:
            sizes = 10 + 50 * (masses / masses.max())
        else:
            sizes = 5.0
        
        ax_bodies.scatter(
            positions[:, 0], positions[:, 1],
            s=sizes, c=masses, cmap='viridis',
            alpha=0.6, edgecolors='black', linewidths=0.5
        )
        if self.show_velocities:
            velocities = store.velocities
            ax_bodies.quiver(
                positions[:, 0], positions[:, 1],
                velocities[:, 0], velocities[:, 1],
                angles='xy', alpha=0.4
            )
        ax_bodies.set_aspect('equal')
        ax_bodies.set_xlabel('X')
        ax_bodies.set_ylabel('Y')
        ax_bodies.set_title(f'Initial bodies (N={trajectory.body_count})')
        ax_bodies.grid(True, alpha=0.3)
        
        # Acceleration evaluated at the start of step k
        times = np.arange(trajectory.iterations) * trajectory.delta_time
        magnitudes = np.linalg.norm(trajectory.accelerations, axis=2)
        for body in range(min(trajectory.body_count, self.max_bodies)):
            ax_history.plot(times, magnitudes[:, body], linewidth=0.8, alpha=0.7)
        ax_history.set_xlabel('Time')
        ax_history.set_ylabel('|a|')
        ax_history.set_title('Acceleration history')
        if trajectory.iterations > 0 and np.all(magnitudes > 0):
            ax_history.set_yscale('log')
        ax_history.grid(True, alpha=0.3)
        
        self.fig.tight_layout()
    
    def capture_frame(self) -> np.ndarray:
        """Capture current figure as image array."""
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")
        
        self.canvas.draw()
        buf = np.asarray(self.canvas.buffer_rgba())
        return buf[:, :, :3].copy()
    
    def save(self, output_path: str):
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")
        self.fig.savefig(output_path)
    
    def close(self):
        """Close the renderer."""
        self.fig = None
        self.canvas = None
