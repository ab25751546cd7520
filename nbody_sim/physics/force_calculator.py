"""Softened pairwise gravity, evaluated directly in O(N^2).

The evaluator is a pure function of positions and masses: it never writes to
its inputs, so every acceleration of a step is computed against the same
snapshot. A sub-quadratic method can replace it behind the same signature.
"""

from typing import Any, Literal
import numpy as np
from nbody_sim.backends.base import Backend

# Above this many bodies the (n, n, 2) temporaries of the vectorized path get
# large, so 'auto' switches to the per-body loop.
VECTORIZED_N_THRESHOLD = 4096


class ForceCalculator:
    """Gravitational acceleration on every body from every other body.

    For each ordered pair i != j body i accumulates

        a_i += G * m_j * (p_j - p_i) / (|p_j - p_i|^2 + eps^2)^(3/2)

    The softening length eps keeps coincident bodies finite. Overflow to inf
    is accepted as a numerical outcome, so floating-point warnings are
    silenced here.
    """

    def __init__(self, method: Literal["auto", "vectorized", "direct"] = "auto"):
        if method not in ("auto", "vectorized", "direct"):
            raise ValueError(f"Unknown force method: {method}")
        self.method = method

    def compute_accelerations(
        self,
        positions: Any,
        masses: Any,
        backend: Backend,
        G: float = 1.0,
        epsilon: float = 1e-3,
    ) -> Any:
        """Compute the acceleration of every body.

        Args:
            positions: (n, 2) backend array
            masses: (n,) backend array
            backend: Compute backend
            G: Gravitational constant
            epsilon: Softening length (> 0)

        Returns:
            (n, 2) backend array; empty for n == 0, zeros for n == 1
        """
        n = positions.shape[0]
        dim = positions.shape[1] if len(positions.shape) > 1 else 2
        if n == 0:
            return backend.zeros((0, dim))

        use_vectorized = self.method == "vectorized" or (
            self.method == "auto" and n <= VECTORIZED_N_THRESHOLD
        )
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            if use_vectorized:
                return self._accelerations_vectorized(positions, masses, backend, G, epsilon)
            return self._accelerations_direct(positions, masses, backend, G, epsilon)

    def pairwise_forces(
        self,
        positions: Any,
        masses: Any,
        backend: Backend,
        G: float = 1.0,
        epsilon: float = 1e-3,
    ) -> Any:
        """Force matrix F[i, j] exerted on body i by body j.

        F[i, j] = G m_i m_j (p_j - p_i) / (r_ij^2 + eps^2)^(3/2), with a zero
        diagonal. The expression is symmetric in everything except the sign
        of p_j - p_i, so F[i, j] == -F[j, i] holds exactly.

        Returns:
            (n, n, 2) backend array
        """
        n = positions.shape[0]
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            r_diff, inv_soft_cubed = self._pair_terms(positions, backend, epsilon)
            m_i = backend.expand_dims(masses, 1)
            m_j = backend.expand_dims(masses, 0)
            force_magnitude = backend.multiply(
                G, backend.multiply(backend.multiply(m_i, m_j), inv_soft_cubed)
            )
            force_magnitude = backend.where(backend.eye(n, dtype=bool), 0.0, force_magnitude)
            return backend.multiply(backend.expand_dims(force_magnitude, 2), r_diff)

    def _pair_terms(self, positions: Any, backend: Backend, epsilon: float):
        """Separation vectors p_j - p_i and 1 / (r^2 + eps^2)^(3/2), both over all pairs."""
        n = positions.shape[0]
        dim = positions.shape[1]
        # r_diff: (1,n,dim) - (n,1,dim) -> (n,n,dim)
        pos_i = backend.reshape(positions, (n, 1, dim))
        pos_j = backend.reshape(positions, (1, n, dim))
        r_diff = backend.subtract(pos_j, pos_i)
        r_sq = backend.sum(backend.square(r_diff), axis=2)
        r_soft_cubed = backend.power(backend.add(r_sq, epsilon ** 2), 1.5)
        return r_diff, backend.divide(1.0, r_soft_cubed)

    def _accelerations_vectorized(
        self, positions: Any, masses: Any, backend: Backend, G: float, epsilon: float
    ) -> Any:
        """All pairs at once through backend broadcasting."""
        n = positions.shape[0]
        r_diff, inv_soft_cubed = self._pair_terms(positions, backend, epsilon)
        m_j = backend.expand_dims(masses, 0)
        magnitude = backend.multiply(G, backend.multiply(m_j, inv_soft_cubed))
        # Zero diagonal: no self-interaction
        magnitude = backend.where(backend.eye(n, dtype=bool), 0.0, magnitude)
        contributions = backend.multiply(backend.expand_dims(magnitude, 2), r_diff)
        return backend.sum(contributions, axis=1)

    def _accelerations_direct(
        self, positions: Any, masses: Any, backend: Backend, G: float, epsilon: float
    ) -> Any:
        """One body at a time; O(n) memory."""
        positions_np = np.asarray(backend.to_numpy(positions))
        masses_np = np.asarray(backend.to_numpy(masses)).reshape(-1)
        n, dim = positions_np.shape
        accelerations = np.zeros((n, dim), dtype=positions_np.dtype)

        for i in range(n):
            # r_ij = p_j - p_i
            r_diff = positions_np - positions_np[i]
            r_sq = np.sum(r_diff ** 2, axis=1)
            magnitude = G * masses_np / (r_sq + epsilon ** 2) ** 1.5
            magnitude[i] = 0.0
            accelerations[i] = np.sum(magnitude[:, np.newaxis] * r_diff, axis=0)

        return backend.array(accelerations)
