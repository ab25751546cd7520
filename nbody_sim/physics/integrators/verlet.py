"""Position (Stormer) Verlet integrator (second order, time-reversible)."""

from typing import Tuple
from nbody_sim.backends.base import Backend
from nbody_sim.physics.integrators.base import Integrator


class VerletIntegrator(Integrator):
    """Position Verlet on a two-slot rolling window.
    
    Update rule:
    1. x_next = 2*x - x_prev + a*dt^2
    2. v = (x_next - x_prev) / (2*dt)
    3. x_prev <- x
    
    The velocity is a central-difference estimate centred on x, reported to
    callers but never fed back into the position update. Before the first
    step the window is bootstrapped with a fictitious prior step,
    x_prev = x - v0*dt.
    """
    
    def __init__(self):
        self.previous_positions = None
        self.steps_taken = 0
    
    @property
    def name(self) -> str:
        return "verlet"
    
    @property
    def order(self) -> int:
        return 2
    
    def initialize(self, positions, velocities, dt: float, backend: Backend) -> None:
        """Synthesize x_prev = x - v0*dt from the initial velocities."""
        self.previous_positions = backend.subtract(positions, backend.multiply(velocities, dt))
        self.steps_taken = 0
    
    def step(self, positions, velocities, accelerations, dt: float, backend: Backend) -> Tuple:
        """Advance the window by one step.
        
        Args:
            positions: Current positions x
            velocities: Ignored; the window carries the momentum information
            accelerations: Accelerations at x
            dt: Time step
            backend: Compute backend
            
        Returns:
            Tuple of (x_next, v) where v is the central-difference velocity at x
            
        Raises:
            RuntimeError: If initialize() was not called first
        """
        if self.previous_positions is None:
            raise RuntimeError("VerletIntegrator.step() called before initialize()")
        
        new_positions = backend.add(
            backend.subtract(backend.multiply(positions, 2.0), self.previous_positions),
            backend.multiply(accelerations, dt * dt),
        )
        new_velocities = backend.divide(
            backend.subtract(new_positions, self.previous_positions), 2.0 * dt
        )
        
        self.previous_positions = positions
        self.steps_taken += 1
        
        return new_positions, new_velocities
    
    def synchronized_positions(self, positions):
        # After a step the reported velocity is centred on the pre-update position.
        if self.steps_taken == 0:
            return positions
        return self.previous_positions
