"""Satellites on circular orbits, played back with matplotlib."""

from nbody_sim import Simulator, SimulationConfig, get_backend
from nbody_sim.presets import OrbitalInitializer
from nbody_sim.render import TrajectoryAnimation


def main():
    backend = get_backend("numpy")
    config = SimulationConfig(
        n_bodies=8, n_steps=3000, G=1.0, dt=0.005, epsilon=1e-3,
        integrator="verlet", initializer="orbital", record_trajectory=True,
    )
    preset = OrbitalInitializer(
        backend, n_bodies=config.n_bodies, seed=3, G=config.G,
        central_mass=1.0, r_min=0.5, r_max=2.0, mass_min=1e-5, mass_range=1e-5,
    )
    sim = Simulator(backend, config=config)
    sim.initialize(*preset.generate())
    elapsed = sim.run()
    print(f"Simulated {config.n_steps} steps in {elapsed:.2f} s")
    
    TrajectoryAnimation(sim.trajectory.positions, interval_ms=10).show()


if __name__ == "__main__":
    main()
