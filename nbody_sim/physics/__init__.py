"""Physics engine for N-body simulations."""

from nbody_sim.physics.bodies import Body, BodyCollection
from nbody_sim.physics.force_calculator import ForceCalculator
from nbody_sim.physics.trajectory import TrajectoryLog
from nbody_sim.physics.simulator import Simulator, SimulationStatus

__all__ = ["Body", "BodyCollection", "ForceCalculator", "TrajectoryLog", "Simulator", "SimulationStatus"]
