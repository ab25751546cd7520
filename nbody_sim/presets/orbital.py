"""Satellites on circular orbits around a designated central mass."""

import numpy as np
from typing import Tuple, Sequence
from nbody_sim.backends.base import Backend
from nbody_sim.presets.base import Initializer


def circular_orbit_velocities(positions, masses, G: float, central_index: int = 0) -> np.ndarray:
    """Velocities that put every satellite on a circular orbit about one body.
    
    For satellite i with r = p_i - p_c the speed is s = sqrt(G * m_c / |r|),
    directed along (-r_y, r_x) / |r|. Satellite-satellite attraction is
    ignored here; the central body is left at rest.
    
    Args:
        positions: (n, 2) positions
        masses: (n,) masses
        G: Gravitational constant
        central_index: Index of the central body
        
    Returns:
        (n, 2) numpy array of velocities
        
    Raises:
        ValueError: If a satellite sits exactly on the central body
    """
    positions = np.asarray(positions, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64).reshape(-1)
    
    r = positions - positions[central_index]
    radii = np.linalg.norm(r, axis=1)
    satellites = np.arange(len(masses)) != central_index
    if np.any(radii[satellites] == 0.0):
        raise ValueError("A satellite coincides with the central body; circular speed is undefined")
    
    velocities = np.zeros_like(positions)
    speed = np.sqrt(G * masses[central_index] / radii[satellites])
    tangent = np.column_stack([-r[satellites, 1], r[satellites, 0]]) / radii[satellites, np.newaxis]
    velocities[satellites] = speed[:, np.newaxis] * tangent
    return velocities


class OrbitalInitializer(Initializer):
    """Central mass at rest with satellites on circular orbits.
    
    Body 0 is the central mass. Satellites are scattered over the annulus
    r_min <= r < r_max with uniform angles, then given circular velocities.
    """
    
    def __init__(
        self,
        backend: Backend,
        n_bodies: int = 100,
        seed: int = None,
        G: float = 6.67430e-11,
        central_mass: float = 1e12,
        center: Sequence[float] = (0.0, 0.0),
        r_min: float = 50.0,
        r_max: float = 400.0,
        mass_min: float = 1e5,
        mass_range: float = 1e4,
    ):
        """Initialize orbital system.
        
        Args:
            backend: Compute backend
            n_bodies: Number of bodies including the central one
            seed: Random seed (required)
            G: Gravitational constant used for the circular speeds
            central_mass: Mass of body 0
            center: Position of body 0
            r_min: Inner radius of the satellite annulus (> 0)
            r_max: Outer radius of the satellite annulus
            mass_min: Lower satellite mass bound
            mass_range: Width of the satellite mass interval
        """
        super().__init__(backend, n_bodies, seed)
        if not 0 < r_min <= r_max:
            raise ValueError(f"Need 0 < r_min <= r_max, got r_min={r_min}, r_max={r_max}")
        if central_mass <= 0 or mass_min <= 0 or mass_range < 0:
            raise ValueError("Masses must be positive")
        self.G = G
        self.central_mass = central_mass
        self.center = tuple(center)
        self.r_min = r_min
        self.r_max = r_max
        self.mass_min = mass_min
        self.mass_range = mass_range
    
    @property
    def name(self) -> str:
        return "orbital"
    
    def generate(self) -> Tuple:
        """Generate central body plus satellites on circular orbits.
        
        Returns:
            Tuple of (positions, velocities, masses)
        """
        n_satellites = self.n_bodies - 1
        rng = np.random.default_rng(self.seed)
        
        radii = rng.uniform(self.r_min, self.r_max, n_satellites)
        angles = rng.uniform(0, 2 * np.pi, n_satellites)
        satellite_masses = self.mass_min + self.mass_range * rng.random(n_satellites)
        
        center = np.array(self.center, dtype=np.float64)
        satellite_positions = center + np.column_stack([radii * np.cos(angles), radii * np.sin(angles)])
        
        positions = np.vstack([center[np.newaxis, :], satellite_positions])
        masses = np.concatenate([[self.central_mass], satellite_masses])
        velocities = circular_orbit_velocities(positions, masses, self.G, central_index=0)
        
        return (
            self.backend.array(positions),
            self.backend.array(velocities),
            self.backend.array(masses),
        )
