"""Utility functions for reproducibility and configuration."""

from nbody_sim.utils.reproducibility import clock_seed
from nbody_sim.utils.config import load_config, save_config, SimulationConfig

__all__ = ["clock_seed", "load_config", "save_config", "SimulationConfig"]
