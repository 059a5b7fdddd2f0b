"""Compute backend abstractions for the force kernel and integrator."""

from nbody_mpi.backends.base import Backend
from nbody_mpi.backends.factory import get_backend, list_available_backends

__all__ = ["Backend", "get_backend", "list_available_backends"]
