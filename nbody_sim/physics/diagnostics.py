"""Conserved-quantity diagnostics for N-body simulations."""

import numpy as np
from typing import Tuple
from nbody_sim.backends.base import Backend


class Diagnostics:
    """Compute energy and momentum diagnostics consistent with the force law."""
    
    def __init__(self, backend: Backend, G: float = 1.0, epsilon: float = 1e-3):
        """Initialize diagnostics.
        
        Args:
            backend: Compute backend
            G: Gravitational constant
            epsilon: Softening length (must match the force calculation)
        """
        self.backend = backend
        self.G = G
        self.epsilon = epsilon
    
    def _to_numpy(self, positions, velocities, masses):
        return (
            np.asarray(self.backend.to_numpy(positions)),
            np.asarray(self.backend.to_numpy(velocities)),
            np.asarray(self.backend.to_numpy(masses)).flatten(),
        )
    
    def compute_energies(self, positions, velocities, masses) -> Tuple[float, float, float]:
        """Compute kinetic, potential and total energy.
        
        Potential uses the same Plummer softening as the force law:
        U = -G * Σ_{i<j} m_i * m_j / sqrt(r_ij^2 + eps^2)
        
        Args:
            positions: Body positions (n, 2)
            velocities: Body velocities (n, 2)
            masses: Body masses (n,)
            
        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        positions_np, velocities_np, masses_np = self._to_numpy(positions, velocities, masses)
        
        # K = 0.5 * Σ m_i * v_i^2
        v_sq = np.sum(velocities_np ** 2, axis=1)
        K = 0.5 * np.sum(masses_np * v_sq)
        
        i_idx, j_idx = np.triu_indices(len(masses_np), k=1)
        r_diff = positions_np[j_idx] - positions_np[i_idx]
        r_soft = np.sqrt(np.sum(r_diff ** 2, axis=1) + self.epsilon ** 2)
        U = -self.G * np.sum(masses_np[i_idx] * masses_np[j_idx] / r_soft)
        
        return float(K), float(U), float(K + U)
    
    def compute_momentum(self, velocities, masses) -> np.ndarray:
        """Total linear momentum Σ m_i v_i, shape (2,)."""
        velocities_np = np.asarray(self.backend.to_numpy(velocities))
        masses_np = np.asarray(self.backend.to_numpy(masses)).flatten()
        return np.sum(masses_np[:, np.newaxis] * velocities_np, axis=0)
    
    def compute_angular_momentum(self, positions, velocities, masses) -> float:
        """Total angular momentum about the origin, L_z = Σ m_i (x_i v_y,i - y_i v_x,i)."""
        positions_np, velocities_np, masses_np = self._to_numpy(positions, velocities, masses)
        return float(np.sum(masses_np * (positions_np[:, 0] * velocities_np[:, 1] -
                                         positions_np[:, 1] * velocities_np[:, 0])))
    
    def compute_center_of_mass(self, positions, masses) -> np.ndarray:
        """Mass-weighted mean position, shape (2,)."""
        positions_np = np.asarray(self.backend.to_numpy(positions))
        masses_np = np.asarray(self.backend.to_numpy(masses)).flatten()
        return np.sum(masses_np[:, np.newaxis] * positions_np, axis=0) / np.sum(masses_np)
