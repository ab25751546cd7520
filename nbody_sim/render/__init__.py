"""Rendering of recorded trajectories."""

from nbody_sim.render.base import Renderer
from nbody_sim.render.animation import TrajectoryAnimation

__all__ = ["Renderer", "TrajectoryAnimation"]
