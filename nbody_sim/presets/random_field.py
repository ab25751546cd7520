"""Bodies at rest scattered uniformly over a square."""

import numpy as np
from typing import Tuple
from nbody_sim.backends.base import Backend
from nbody_sim.presets.base import Initializer


class RandomInitializer(Initializer):
    """Uniform random placement with zero velocities.
    
    Defaults follow the reference setup: positions in [0, 1000)^2 and masses
    in [1e5, 1.1e5).
    """
    
    def __init__(
        self,
        backend: Backend,
        n_bodies: int = 100,
        seed: int = None,
        box_size: float = 1000.0,
        mass_min: float = 1e5,
        mass_range: float = 1e4,
    ):
        """Initialize random field.
        
        Args:
            backend: Compute backend
            n_bodies: Number of bodies
            seed: Random seed (required)
            box_size: Side of the square [0, box_size)^2
            mass_min: Lower mass bound (> 0)
            mass_range: Width of the mass interval
        """
        super().__init__(backend, n_bodies, seed)
        if box_size <= 0:
            raise ValueError(f"box_size must be positive, got {box_size}")
        if mass_min <= 0 or mass_range < 0:
            raise ValueError("mass_min must be positive and mass_range non-negative")
        self.box_size = box_size
        self.mass_min = mass_min
        self.mass_range = mass_range
    
    @property
    def name(self) -> str:
        return "random"
    
    def generate(self) -> Tuple:
        """Generate bodies at rest.
        
        Returns:
            Tuple of (positions, velocities, masses)
        """
        n = self.n_bodies
        rng = np.random.default_rng(self.seed)
        
        positions = rng.uniform(0.0, self.box_size, (n, 2))
        velocities = np.zeros((n, 2))
        masses = self.mass_min + self.mass_range * rng.random(n)
        
        return (
            self.backend.array(positions),
            self.backend.array(velocities),
            self.backend.array(masses),
        )
