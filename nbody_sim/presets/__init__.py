"""Initial-condition generators for N-body simulations."""

from nbody_sim.presets.base import Initializer
from nbody_sim.presets.random_field import RandomInitializer
from nbody_sim.presets.orbital import OrbitalInitializer, circular_orbit_velocities

INITIALIZERS = {
    "random": RandomInitializer,
    "orbital": OrbitalInitializer,
}


def get_initializer(name: str, backend, n_bodies: int, seed: int = None, **kwargs) -> Initializer:
    """Get initializer by name."""
    initializer_class = INITIALIZERS.get(name.lower())
    if initializer_class is None:
        raise ValueError(f"Unknown initializer: {name}. Available: {list(INITIALIZERS.keys())}")
    try:
        return initializer_class(backend, n_bodies=n_bodies, seed=seed, **kwargs)
    except TypeError as exc:
        # Unknown or wrongly typed keyword parameters
        raise ValueError(f"Invalid parameters for initializer '{name}': {exc}") from exc


__all__ = [
    "Initializer",
    "RandomInitializer",
    "OrbitalInitializer",
    "circular_orbit_velocities",
    "INITIALIZERS",
    "get_initializer",
]
