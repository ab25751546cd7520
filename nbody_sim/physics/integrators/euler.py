"""Semi-implicit Euler integrator (first order)."""

from typing import Tuple
from nbody_sim.backends.base import Backend
from nbody_sim.physics.integrators.base import Integrator


class EulerIntegrator(Integrator):
    """Semi-implicit (symplectic) Euler.
    
    The velocity is advanced first and the position update uses the new
    velocity. Only the current state plus the freshly computed acceleration
    is needed; the acceleration of the last step is kept in
    ``accelerations``.
    """
    
    def __init__(self):
        self.accelerations = None
    
    @property
    def name(self) -> str:
        return "euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def initialize(self, positions, velocities, dt: float, backend: Backend) -> None:
        self.accelerations = backend.zeros_like(positions)
    
    def step(self, positions, velocities, accelerations, dt: float, backend: Backend) -> Tuple:
        """Euler step: v_new = v + a*dt, r_new = r + v_new*dt.
        
        Args:
            positions: Current positions
            velocities: Current velocities
            accelerations: Accelerations at the current positions
            dt: Time step
            backend: Compute backend
            
        Returns:
            Tuple of (new_positions, new_velocities)
        """
        self.accelerations = accelerations
        
        new_velocities = backend.add(velocities, backend.multiply(accelerations, dt))
        new_positions = backend.add(positions, backend.multiply(new_velocities, dt))
        
        return new_positions, new_velocities
