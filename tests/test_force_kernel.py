"""Tests for the softened pairwise force kernel."""

import warnings
import pytest
import numpy as np
from nbody_mpi.backends.numpy_backend import NumPyBackend
from nbody_mpi.physics.force_kernel import ForceKernel, pairwise_acceleration


def test_unit_separation_unit_mass():
    """Two unit masses at distance 1 pull each other with |a| = 1."""
    a = pairwise_acceleration([0.0, 0.0], [1.0, 0.0], 1.0, 0.0)
    
    assert np.allclose(a, [1.0, 0.0])


def test_force_symmetry_mass_weighted():
    """|a(A,B)| * mA == |a(B,A)| * mB for distinct bodies."""
    rng = np.random.default_rng(7)
    eps_sq = 0.01
    for _ in range(20):
        pos_a, pos_b = rng.uniform(-1, 1, 2), rng.uniform(-1, 1, 2)
        m_a, m_b = rng.uniform(0.5, 5.0, 2)
        
        a_on_a = pairwise_acceleration(pos_a, pos_b, m_b, eps_sq)
        a_on_b = pairwise_acceleration(pos_b, pos_a, m_a, eps_sq)
        
        assert np.isclose(np.linalg.norm(a_on_a) * m_a, np.linalg.norm(a_on_b) * m_b, rtol=1e-12)
        # Opposite directions
        assert np.allclose(a_on_a / np.linalg.norm(a_on_a), -a_on_b / np.linalg.norm(a_on_b))


def test_softening_bounds_acceleration():
    """As separation -> 0 the magnitude stays finite and below m * 2 / (3 sqrt(3) eps^2)."""
    eps = 0.1
    mass = 3.0
    bound = mass * 2.0 / (3.0 * np.sqrt(3.0) * eps ** 2)
    
    for separation in [1.0, 1e-1, 1e-2, 1e-4, 1e-8, 1e-12, 0.0]:
        a = pairwise_acceleration([0.0, 0.0], [separation, 0.0], mass, eps ** 2)
        magnitude = np.linalg.norm(a)
        assert np.all(np.isfinite(a))
        assert magnitude <= bound * (1 + 1e-12)


def test_single_body_has_zero_acceleration():
    """N = 1: the self pair is skipped, result is exactly (0, 0)."""
    positions = np.array([[0.3, 0.7]])
    masses = np.array([5.0])
    
    for method in ForceKernel.METHODS:
        kernel = ForceKernel(0.0, method=method)
        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            result = kernel.compute(positions, masses)
        assert result.shape == (1, 2)
        assert np.array_equal(result, np.zeros((1, 2)))


def test_direct_skips_identical_pair_without_softening():
    """With eps = 0 the self pair would be 0/0; it must never be evaluated."""
    positions = np.array([[0.0, 0.0], [1.0, 0.0]])
    masses = np.array([1.0, 1.0])
    kernel = ForceKernel(0.0, method="direct")
    
    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        a0 = kernel.acceleration_on(positions, masses, 0)
        a1 = kernel.acceleration_on(positions, masses, 1)
    
    assert np.allclose(a0, [1.0, 0.0])
    assert np.allclose(a1, [-1.0, 0.0])


def test_vectorized_matches_direct():
    """Both evaluation methods agree on a random set."""
    rng = np.random.default_rng(11)
    positions = rng.uniform(0, 1, (16, 2))
    masses = rng.uniform(0.5, 1.5, 16)
    
    direct = ForceKernel(0.01, method="direct").compute(positions, masses)
    vectorized = ForceKernel(0.01, NumPyBackend(), method="vectorized").compute(positions, masses)
    
    assert np.allclose(direct, vectorized, rtol=1e-12, atol=1e-12)


def test_partition_range_uses_full_body_set():
    """Accelerations for a sub-range equal the matching rows of the full evaluation."""
    rng = np.random.default_rng(3)
    positions = rng.uniform(0, 1, (12, 2))
    masses = rng.uniform(0.5, 1.5, 12)
    kernel = ForceKernel(0.05)
    
    full = kernel.compute(positions, masses)
    part = kernel.compute(positions, masses, start=4, stop=8)
    
    assert part.shape == (4, 2)
    assert np.allclose(part, full[4:8], rtol=1e-12, atol=0)


def test_total_is_sum_of_pairwise_terms():
    """Total acceleration is the vector sum over all other bodies."""
    positions = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 2.0]])
    masses = np.array([1.0, 2.0, 4.0])
    eps_sq = 0.25
    
    expected = (
        pairwise_acceleration(positions[0], positions[1], masses[1], eps_sq)
        + pairwise_acceleration(positions[0], positions[2], masses[2], eps_sq)
    )
    result = ForceKernel(eps_sq).compute(positions, masses, 0, 1)
    
    assert np.allclose(result[0], expected)


def test_invalid_method_and_range():
    with pytest.raises(ValueError):
        ForceKernel(0.1, method="tree")
    kernel = ForceKernel(0.1)
    with pytest.raises(IndexError):
        kernel.compute(np.zeros((4, 2)), np.ones(4), start=2, stop=6)
