"""Tests for compute backends."""

import pytest
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.backends.factory import get_backend, list_available_backends
from nbody_sim.backends.numpy_backend import NumPyBackend


def test_numpy_backend_basic():
    """Test basic NumPy backend operations."""
    backend = NumPyBackend()
    
    arr = backend.array([1, 2, 3])
    assert backend.to_numpy(arr).shape == (3,)
    assert backend.to_numpy(arr).dtype == np.float64
    
    zeros = backend.zeros((3, 2))
    assert backend.to_numpy(zeros).shape == (3, 2)
    assert np.allclose(backend.to_numpy(zeros), 0)
    
    a = backend.array([1.0, 2.0, 3.0])
    b = backend.array([4.0, 5.0, 6.0])
    
    assert np.allclose(backend.to_numpy(backend.add(a, b)), [5, 7, 9])
    assert np.allclose(backend.to_numpy(backend.subtract(b, a)), [3, 3, 3])
    assert np.allclose(backend.to_numpy(backend.multiply(a, b)), [4, 10, 18])
    assert np.allclose(backend.to_numpy(backend.divide(b, a)), [4, 2.5, 2])
    assert np.allclose(backend.to_numpy(backend.power(a, 1.5)), [1, 2 ** 1.5, 3 ** 1.5])
    assert np.allclose(backend.to_numpy(backend.where(a > 1.5, a, 0.0)), [0, 2, 3])


def test_broadcast_helpers():
    """reshape/expand_dims/sum build the pairwise (n, n, 2) layout."""
    backend = NumPyBackend()
    positions = backend.array([[0.0, 0.0], [1.0, 2.0], [3.0, 1.0]])
    
    r_diff = backend.subtract(
        backend.reshape(positions, (1, 3, 2)), backend.reshape(positions, (3, 1, 2))
    )
    assert r_diff.shape == (3, 3, 2)
    assert np.allclose(r_diff[0, 1], [1.0, 2.0])
    
    r_sq = backend.sum(backend.square(r_diff), axis=2)
    assert np.allclose(r_sq, r_sq.T)
    assert backend.expand_dims(backend.array([1.0, 2.0]), 1).shape == (2, 1)
    assert backend.eye(3, dtype=bool).dtype == bool
    assert backend.zeros_like(positions).shape == (3, 2)


def test_backend_factory():
    """Test backend factory."""
    backends = list_available_backends()
    assert "numpy" in backends
    
    backend = get_backend("numpy")
    assert isinstance(backend, Backend)
    assert backend.name == "numpy"
    
    backend = get_backend()
    assert backend is not None


def test_unknown_backend_raises():
    with pytest.raises(ValueError, match="Unknown backend"):
        get_backend("fortran")
