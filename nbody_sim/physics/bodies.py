"""Fixed-size collection of point masses."""

from typing import NamedTuple, Tuple
import numpy as np
from nbody_sim.backends.base import Backend


class Body(NamedTuple):
    """Snapshot of a single point mass."""
    x: float
    y: float
    vx: float
    vy: float
    mass: float


class BodyCollection:
    """Ordered set of N bodies in the plane.
    
    Positions and velocities are (n, 2) backend arrays, masses are (n,).
    The index is a body's only identity and N never changes after
    construction.
    """
    
    DIM = 2
    
    def __init__(self, backend: Backend, positions, velocities, masses):
        """Initialize collection.
        
        Args:
            backend: Compute backend for array operations
            positions: Array of shape (n, 2)
            velocities: Array of shape (n, 2)
            masses: Array of shape (n,), strictly positive
            
        Raises:
            ValueError: If shapes disagree, the collection is empty or a mass is not positive
        """
        self.backend = backend
        masses_np = np.asarray(backend.to_numpy(backend.array(masses))).reshape(-1)
        if masses_np.shape[0] < 1:
            raise ValueError("A body collection needs at least one body")
        if not np.all(masses_np > 0):
            raise ValueError("All body masses must be positive")
        self.n_bodies = masses_np.shape[0]
        self._masses = backend.array(masses_np)
        self._positions = self._checked(positions, "positions")
        self._velocities = self._checked(velocities, "velocities")
    
    def _checked(self, data, label: str):
        array = self.backend.array(data)
        if tuple(array.shape) != (self.n_bodies, self.DIM):
            raise ValueError(
                f"{label} must have shape ({self.n_bodies}, {self.DIM}), got {tuple(array.shape)}"
            )
        return array
    
    @property
    def positions(self):
        return self._positions
    
    @positions.setter
    def positions(self, value):
        self._positions = self._checked(value, "positions")
    
    @property
    def velocities(self):
        return self._velocities
    
    @velocities.setter
    def velocities(self, value):
        self._velocities = self._checked(value, "velocities")
    
    @property
    def masses(self):
        return self._masses
    
    def __len__(self) -> int:
        return self.n_bodies
    
    def __getitem__(self, index: int) -> Body:
        if not -self.n_bodies <= index < self.n_bodies:
            raise IndexError(f"body index {index} out of range for {self.n_bodies} bodies")
        pos = self.backend.to_numpy(self._positions)[index]
        vel = self.backend.to_numpy(self._velocities)[index]
        mass = self.backend.to_numpy(self._masses)[index]
        return Body(float(pos[0]), float(pos[1]), float(vel[0]), float(vel[1]), float(mass))
    
    def __iter__(self):
        for i in range(self.n_bodies):
            yield self[i]
    
    def get_state(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Get current state (positions, velocities, masses) as numpy copies."""
        return (
            np.array(self.backend.to_numpy(self._positions), copy=True),
            np.array(self.backend.to_numpy(self._velocities), copy=True),
            np.array(self.backend.to_numpy(self._masses), copy=True),
        )
    
    def copy(self) -> "BodyCollection":
        """Independent copy sharing nothing with this collection."""
        positions, velocities, masses = self.get_state()
        return BodyCollection(self.backend, positions, velocities, masses)
