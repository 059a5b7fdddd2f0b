"""Tests for numerical integrators."""

import numpy as np
from nbody_mpi.backends.numpy_backend import NumPyBackend
from nbody_mpi.physics.integrators.semi_implicit_euler import SemiImplicitEulerIntegrator


def test_semi_implicit_euler_integrator():
    """Test semi-implicit Euler integrator."""
    backend = NumPyBackend()
    integrator = SemiImplicitEulerIntegrator()
    
    positions = backend.array([[0.0, 0.0], [1.0, 0.0]])
    velocities = backend.array([[0.0, 0.0], [0.0, 0.0]])
    accelerations = backend.array([[1.0, 0.0], [-1.0, 0.0]])
    dt = 0.01
    
    new_pos, new_vel = integrator.step(positions, velocities, accelerations, dt, backend)
    
    assert np.allclose(backend.to_numpy(new_vel), [[0.01, 0.0], [-0.01, 0.0]])
    assert np.allclose(backend.to_numpy(new_pos), [[0.0001, 0.0], [0.9999, 0.0]])
    assert integrator.name == "semi_implicit_euler"
    assert integrator.order == 1


def test_position_uses_updated_velocity():
    """p' = p + (v + a dt) dt, not p + v dt."""
    backend = NumPyBackend()
    integrator = SemiImplicitEulerIntegrator()
    
    positions = backend.array([[2.0, -1.0]])
    velocities = backend.array([[3.0, 0.5]])
    accelerations = backend.array([[-4.0, 2.0]])
    dt = 0.1
    
    new_pos, new_vel = integrator.step(positions, velocities, accelerations, dt, backend)
    
    expected_vel = np.array([[3.0 - 0.4, 0.5 + 0.2]])
    assert np.allclose(new_vel, expected_vel)
    assert np.allclose(new_pos, np.array([[2.0, -1.0]]) + expected_vel * dt)
    # Explicit Euler would have used the old velocity
    assert not np.allclose(new_pos, np.array([[2.0, -1.0]]) + np.array([[3.0, 0.5]]) * dt)


def test_integrator_is_deterministic_and_pure():
    """Identical inputs give identical outputs; inputs are not modified."""
    backend = NumPyBackend()
    integrator = SemiImplicitEulerIntegrator()
    rng = np.random.default_rng(5)
    
    positions = rng.normal(size=(10, 2))
    velocities = rng.normal(size=(10, 2))
    accelerations = rng.normal(size=(10, 2))
    snapshot = (positions.copy(), velocities.copy(), accelerations.copy())
    
    first = integrator.step(positions, velocities, accelerations, 0.05, backend)
    second = integrator.step(positions, velocities, accelerations, 0.05, backend)
    
    assert np.array_equal(first[0], second[0])
    assert np.array_equal(first[1], second[1])
    assert np.array_equal(positions, snapshot[0])
    assert np.array_equal(velocities, snapshot[1])
    assert np.array_equal(accelerations, snapshot[2])
