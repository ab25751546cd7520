"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Tuple


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    A strategy is chosen once per run. Each one owns whatever per-body state
    it has to carry between steps, so the body collection itself only ever
    holds positions, velocities and masses.
    """
    
    def initialize(self, positions, velocities, dt: float, backend) -> None:
        """Prepare retained state before the first step.
        
        Args:
            positions: Initial positions (n, 2)
            velocities: Initial velocities (n, 2)
            dt: Time step
            backend: Compute backend
        """
        pass
    
    @abstractmethod
    def step(self, positions, velocities, accelerations, dt: float, backend) -> Tuple:
        """Perform one integration step.
        
        Args:
            positions: Current positions array
            velocities: Current velocities array
            accelerations: Accelerations evaluated at the current positions
            dt: Time step
            backend: Compute backend
            
        Returns:
            Tuple of (new_positions, new_velocities), both fresh arrays
        """
        pass
    
    def synchronized_positions(self, positions):
        """Positions at the instant the reported velocities refer to."""
        return positions
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass
    
    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler, 2 for Verlet)."""
        pass
