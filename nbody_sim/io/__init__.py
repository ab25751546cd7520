"""I/O utilities for export and state management."""

from nbody_sim.io.gif_exporter import GIFExporter
from nbody_sim.io.state_io import save_state, load_state, save_trajectory, load_trajectory

__all__ = ["GIFExporter", "save_state", "load_state", "save_trajectory", "load_trajectory"]
