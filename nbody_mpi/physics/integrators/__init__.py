"""Numerical integrators for N-body simulations."""

from nbody_mpi.physics.integrators.base import Integrator
from nbody_mpi.physics.integrators.semi_implicit_euler import SemiImplicitEulerIntegrator

__all__ = ["Integrator", "SemiImplicitEulerIntegrator"]
