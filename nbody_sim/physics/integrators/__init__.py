"""Numerical integrators for N-body simulations."""

from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import EulerIntegrator
from nbody_sim.physics.integrators.verlet import VerletIntegrator

INTEGRATORS = {
    "euler": EulerIntegrator,
    "verlet": VerletIntegrator,
}


def get_integrator(name: str) -> Integrator:
    """Create a fresh integrator by name ('euler' or 'verlet')."""
    integrator_class = INTEGRATORS.get(name.lower())
    if integrator_class is None:
        raise ValueError(f"Unknown integrator: {name}. Available: {list(INTEGRATORS.keys())}")
    return integrator_class()


__all__ = ["Integrator", "EulerIntegrator", "VerletIntegrator", "INTEGRATORS", "get_integrator"]
