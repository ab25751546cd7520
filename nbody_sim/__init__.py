"""
N-body Simulator - direct-summation gravitational dynamics in the plane.

Features:
- Softened O(N^2) force evaluation (vectorized or per-body loop)
- Two integrators (semi-implicit Euler, position Verlet)
- Random and circular-orbit initial conditions
- Trajectory recording, matplotlib animation and GIF export
- CLI interface
"""

__version__ = "0.1.0"

from nbody_sim.physics.simulator import Simulator, SimulationStatus
from nbody_sim.backends.factory import get_backend, list_available_backends
from nbody_sim.utils.config import SimulationConfig

__all__ = [
    "Simulator",
    "SimulationStatus",
    "SimulationConfig",
    "get_backend",
    "list_available_backends",
]
