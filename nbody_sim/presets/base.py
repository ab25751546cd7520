"""Base class for initial-condition generators."""

from abc import ABC, abstractmethod
from typing import Tuple
from nbody_sim.backends.base import Backend


class Initializer(ABC):
    """Abstract base class for initial-condition generators.

    Randomized generators need an explicit seed. Passing ``seed=None`` is
    rejected rather than silently falling back to global random state; use
    ``nbody_sim.utils.clock_seed()`` for a deliberately non-reproducible run.
    """
    
    def __init__(self, backend: Backend, n_bodies: int = 100, seed: int = None):
        """Initialize generator.
        
        Args:
            backend: Compute backend
            n_bodies: Number of bodies (>= 1)
            seed: Random seed
        """
        if n_bodies < 1:
            raise ValueError(f"n_bodies must be >= 1, got {n_bodies}")
        if seed is None:
            raise ValueError(
                f"{type(self).__name__} needs an explicit seed; "
                "use nbody_sim.utils.clock_seed() for a time-derived one"
            )
        self.backend = backend
        self.n_bodies = n_bodies
        self.seed = seed
    
    @abstractmethod
    def generate(self) -> Tuple:
        """Generate initial conditions.
        
        Returns:
            Tuple of (positions, velocities, masses)
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this initializer."""
        pass
