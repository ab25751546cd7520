"""Tests for initial-condition generators."""

import numpy as np
import pytest
from nbody_sim.backends.numpy_backend import NumPyBackend
from nbody_sim.presets import get_initializer
from nbody_sim.presets.random_field import RandomInitializer
from nbody_sim.presets.orbital import OrbitalInitializer, circular_orbit_velocities


def test_random_initializer():
    """Test random field defaults."""
    backend = NumPyBackend()
    initializer = RandomInitializer(backend, n_bodies=200, seed=42)
    
    positions, velocities, masses = initializer.generate()
    pos = backend.to_numpy(positions)
    vel = backend.to_numpy(velocities)
    mass = backend.to_numpy(masses)
    
    assert pos.shape == (200, 2)
    assert vel.shape == (200, 2)
    assert mass.shape == (200,)
    assert np.all((pos >= 0.0) & (pos < 1000.0))
    assert np.all(vel == 0.0)
    assert np.all((mass >= 1e5) & (mass < 1.1e5))
    assert initializer.name == "random"


def test_random_initializer_reproducible():
    """Same seed gives identical initial conditions."""
    backend = NumPyBackend()
    first = RandomInitializer(backend, n_bodies=10, seed=7).generate()
    second = RandomInitializer(backend, n_bodies=10, seed=7).generate()
    other = RandomInitializer(backend, n_bodies=10, seed=8).generate()
    
    for a, b in zip(first, second):
        assert np.array_equal(backend.to_numpy(a), backend.to_numpy(b))
    assert not np.array_equal(backend.to_numpy(first[0]), backend.to_numpy(other[0]))


def test_initializer_requires_seed():
    backend = NumPyBackend()
    with pytest.raises(ValueError, match="seed"):
        RandomInitializer(backend, n_bodies=10)
    with pytest.raises(ValueError, match="seed"):
        OrbitalInitializer(backend, n_bodies=10)


def test_initializer_rejects_empty():
    backend = NumPyBackend()
    with pytest.raises(ValueError):
        RandomInitializer(backend, n_bodies=0, seed=1)


def test_circular_orbit_velocities():
    """Speed sqrt(G*M/r) along (-r_y, r_x)/|r|."""
    positions = np.array([[0.0, 0.0], [2.0, 0.0], [0.0, 3.0]])
    masses = np.array([8.0, 1.0, 1.0])
    
    velocities = circular_orbit_velocities(positions, masses, G=1.0)
    
    assert np.allclose(velocities[0], [0.0, 0.0])
    assert np.allclose(velocities[1], [0.0, 2.0])
    assert np.allclose(velocities[2], [-np.sqrt(8.0 / 3.0), 0.0])


def test_circular_orbit_velocities_off_origin_center():
    positions = np.array([[5.0, 5.0], [5.0, 4.0]])
    masses = np.array([4.0, 1.0])
    velocities = circular_orbit_velocities(positions, masses, G=1.0)
    assert np.allclose(velocities[1], [2.0, 0.0])


def test_circular_orbit_velocities_coincident_raises():
    positions = np.array([[1.0, 1.0], [1.0, 1.0]])
    with pytest.raises(ValueError, match="coincides"):
        circular_orbit_velocities(positions, np.array([1.0, 1.0]), G=1.0)


def test_orbital_initializer():
    """Test central body plus satellites on circular orbits."""
    backend = NumPyBackend()
    initializer = OrbitalInitializer(
        backend, n_bodies=50, seed=3, G=1.0, central_mass=100.0, r_min=1.0, r_max=5.0
    )
    
    positions, velocities, masses = initializer.generate()
    pos = backend.to_numpy(positions)
    vel = backend.to_numpy(velocities)
    mass = backend.to_numpy(masses)
    
    assert pos.shape == (50, 2)
    assert np.allclose(pos[0], [0.0, 0.0])
    assert np.allclose(vel[0], [0.0, 0.0])
    assert mass[0] == 100.0
    
    radii = np.linalg.norm(pos[1:], axis=1)
    speeds = np.linalg.norm(vel[1:], axis=1)
    assert np.all((radii >= 1.0) & (radii < 5.0))
    assert np.allclose(speeds, np.sqrt(100.0 / radii))
    # Tangential and counter-clockwise
    assert np.allclose(np.sum(pos[1:] * vel[1:], axis=1), 0.0, atol=1e-9)
    assert np.all(pos[1:, 0] * vel[1:, 1] - pos[1:, 1] * vel[1:, 0] > 0)
    assert initializer.name == "orbital"


def test_orbital_initializer_rejects_bad_annulus():
    backend = NumPyBackend()
    with pytest.raises(ValueError, match="r_min"):
        OrbitalInitializer(backend, n_bodies=5, seed=1, r_min=0.0)


def test_get_initializer():
    backend = NumPyBackend()
    initializer = get_initializer("orbital", backend, 5, seed=1, G=1.0)
    assert isinstance(initializer, OrbitalInitializer)
    assert initializer.G == 1.0
    with pytest.raises(ValueError, match="Unknown initializer"):
        get_initializer("plummer", backend, 5, seed=1)


def test_get_initializer_rejects_unknown_parameter():
    backend = NumPyBackend()
    with pytest.raises(ValueError, match="Invalid parameters"):
        get_initializer("random", backend, 5, seed=1, radius=3.0)
