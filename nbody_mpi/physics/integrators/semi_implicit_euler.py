"""Semi-implicit (symplectic) Euler integrator."""

from typing import Tuple
from nbody_mpi.backends.base import Backend
from nbody_mpi.physics.integrators.base import Integrator


class SemiImplicitEulerIntegrator(Integrator):
    """Symplectic Euler: kick the velocity, then drift with the new velocity.
    
    First order like explicit Euler, but the position update uses the
    already-updated velocity, which keeps long runs from gaining energy
    steadily.
    """
    
    @property
    def name(self) -> str:
        return "semi_implicit_euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def step(self, positions, velocities, accelerations, dt: float, backend: Backend) -> Tuple:
        """Step: v_new = v + a*dt, r_new = r + v_new*dt.
        
        Args:
            positions: Current positions
            velocities: Current velocities
            accelerations: Current accelerations
            dt: Time step
            backend: Compute backend
            
        Returns:
            Tuple of (new_positions, new_velocities)
        """
        new_velocities = backend.add(velocities, backend.multiply(accelerations, dt))
        new_positions = backend.add(positions, backend.multiply(new_velocities, dt))
        return new_positions, new_velocities
