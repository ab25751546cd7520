"""Main simulator controller."""

from enum import Enum
from typing import Optional, Callable
import time
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.physics.bodies import BodyCollection
from nbody_sim.physics.force_calculator import ForceCalculator
from nbody_sim.physics.diagnostics import Diagnostics
from nbody_sim.physics.trajectory import TrajectoryLog
from nbody_sim.physics.integrators import Integrator, get_integrator
from nbody_sim.utils.config import SimulationConfig


class SimulationStatus(Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    COMPLETED = "completed"


class Simulator:
    """Main simulation controller.

    Sequences the force evaluator and the integrator for exactly
    ``config.n_steps`` steps and optionally records every post-step position
    set. It does no numerical work of its own.

    Lifecycle: UNINITIALIZED -> RUNNING (initialize) -> COMPLETED (after the
    last step). Stepping again requires another initialize().
    """

    def __init__(
        self,
        backend: Backend,
        integrator: Optional[Integrator] = None,
        config: Optional[SimulationConfig] = None,
        force_calculator: Optional[ForceCalculator] = None,
    ):
        """Initialize simulator.

        Args:
            backend: Compute backend
            integrator: Integrator to use (default: the one named in config)
            config: Run configuration (default: SimulationConfig())
            force_calculator: Force evaluator (default: ForceCalculator(config.force_method))
        """
        self.backend = backend
        self.config = config or SimulationConfig()
        self.integrator = integrator or get_integrator(self.config.integrator)
        self.force_calculator = force_calculator or ForceCalculator(method=self.config.force_method)
        self.diagnostics = Diagnostics(backend, G=self.config.G, epsilon=self.config.epsilon)

        self.bodies: Optional[BodyCollection] = None
        self.trajectory: Optional[TrajectoryLog] = None
        self.status = SimulationStatus.UNINITIALIZED
        self.time = 0.0
        self.step_count = 0

        # Profiling: last step timing (ms)
        self._last_forces_ms: Optional[float] = None
        self._last_integrator_ms: Optional[float] = None
        self._profile: bool = False

        # Callbacks
        self.on_step_callback: Optional[Callable] = None
        self.diagnostics_interval: int = 0

    @property
    def dt(self) -> float:
        return self.config.dt

    @property
    def n_steps(self) -> int:
        return self.config.n_steps

    def set_profiling(self, enabled: bool = True):
        """Enable or disable step timing (forces ms, integrator ms)."""
        self._profile = enabled

    def get_timing(self) -> dict:
        """Return last step timing in ms: forces_ms, integrator_ms."""
        return {
            "forces_ms": self._last_forces_ms,
            "integrator_ms": self._last_integrator_ms,
        }

    def initialize(self, positions, velocities, masses):
        """Populate the body collection and enter the RUNNING state.

        May be called again at any time to start a fresh run.

        Args:
            positions: Initial positions (n, 2)
            velocities: Initial velocities (n, 2)
            masses: Body masses (n,)
        """
        self.bodies = BodyCollection(self.backend, positions, velocities, masses)
        self.integrator.initialize(
            self.bodies.positions, self.bodies.velocities, self.dt, self.backend
        )
        self.trajectory = None
        if self.config.record_trajectory:
            self.trajectory = TrajectoryLog(self.bodies.n_bodies, self.n_steps)

        self.time = 0.0
        self.step_count = 0
        self.status = SimulationStatus.RUNNING

    def step(self):
        """Perform one simulation step.

        Raises:
            RuntimeError: If the simulation is not RUNNING
        """
        if self.status is not SimulationStatus.RUNNING:
            raise RuntimeError(f"Cannot step a simulation that is {self.status.value}")

        if self._profile:
            t0 = time.perf_counter()
        accelerations = self.force_calculator.compute_accelerations(
            self.bodies.positions,
            self.bodies.masses,
            self.backend,
            G=self.config.G,
            epsilon=self.config.epsilon,
        )
        if self._profile:
            t1 = time.perf_counter()
        new_positions, new_velocities = self.integrator.step(
            self.bodies.positions,
            self.bodies.velocities,
            accelerations,
            self.dt,
            self.backend,
        )
        if self._profile:
            t2 = time.perf_counter()
            self._last_forces_ms = (t1 - t0) * 1000.0
            self._last_integrator_ms = (t2 - t1) * 1000.0

        self.bodies.positions = new_positions
        self.bodies.velocities = new_velocities
        if self.trajectory is not None:
            self.trajectory.record(self.backend.to_numpy(self.bodies.positions))

        self.time += self.dt
        self.step_count += 1
        if self.step_count >= self.n_steps:
            self.status = SimulationStatus.COMPLETED

        if self.diagnostics_interval and self.step_count % self.diagnostics_interval == 0:
            self._log_diagnostics_table()

        if self.on_step_callback:
            self.on_step_callback(self)

    def _log_diagnostics_table(self):
        """Log E, total momentum and L_z."""
        E = self.get_energy()
        P = self.get_momentum()
        L = self.get_angular_momentum()
        print(f"[Diag] step={self.step_count} t={self.time:.4f} E={E:.6e} "
              f"P=({P[0]:.6e}, {P[1]:.6e}) L={L:.6e}")

    def run_steps(self, k: int):
        """Run up to k steps, stopping early once the run completes."""
        for _ in range(k):
            if self.status is not SimulationStatus.RUNNING:
                return
            self.step()

    def run(self) -> float:
        """Run the remaining steps to completion.

        Returns:
            Wall-clock seconds spent in the step loop
        """
        if self.status is not SimulationStatus.RUNNING:
            raise RuntimeError(f"Cannot run a simulation that is {self.status.value}")
        start = time.perf_counter()
        while self.status is SimulationStatus.RUNNING:
            self.step()
        return time.perf_counter() - start

    def get_state(self):
        """Get current simulation state.

        Returns:
            Tuple of (positions, velocities, masses, time, step_count)
        """
        if self.bodies is None:
            raise RuntimeError("Simulation has not been initialized")
        pos, vel, mass = self.bodies.get_state()
        return pos, vel, mass, self.time, self.step_count

    def get_energies(self):
        """Kinetic, potential and total energy, evaluated at a common instant."""
        if self.bodies is None:
            raise RuntimeError("Simulation has not been initialized")
        positions = self.integrator.synchronized_positions(self.bodies.positions)
        return self.diagnostics.compute_energies(
            positions, self.bodies.velocities, self.bodies.masses
        )

    def get_energy(self) -> float:
        """Get current total energy (kinetic + potential)."""
        return self.get_energies()[2]

    def get_momentum(self) -> np.ndarray:
        """Get total linear momentum (2,)."""
        if self.bodies is None:
            raise RuntimeError("Simulation has not been initialized")
        return self.diagnostics.compute_momentum(self.bodies.velocities, self.bodies.masses)

    def get_angular_momentum(self) -> float:
        """Get total angular momentum about the origin."""
        if self.bodies is None:
            raise RuntimeError("Simulation has not been initialized")
        positions = self.integrator.synchronized_positions(self.bodies.positions)
        return self.diagnostics.compute_angular_momentum(
            positions, self.bodies.velocities, self.bodies.masses
        )
