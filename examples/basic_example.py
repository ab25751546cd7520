"""Basic example of using the N-body simulator."""

from nbody_sim import Simulator, SimulationConfig, get_backend
from nbody_sim.physics.integrators import VerletIntegrator
from nbody_sim.presets import RandomInitializer


def main():
    """Run a small random cluster with position Verlet."""
    backend = get_backend("numpy")
    config = SimulationConfig(n_bodies=50, n_steps=500, integrator="verlet")
    
    preset = RandomInitializer(backend, n_bodies=config.n_bodies, seed=42)
    positions, velocities, masses = preset.generate()
    
    sim = Simulator(backend, VerletIntegrator(), config)
    sim.initialize(positions, velocities, masses)
    
    print("Running simulation...")
    print(f"Initial energy: {sim.get_energy():.6e}")
    
    while sim.step_count < config.n_steps:
        sim.run_steps(100)
        print(f"Step {sim.step_count}: Time={sim.time:.2f}, Energy={sim.get_energy():.6e}")
    
    print("Simulation complete!")


if __name__ == "__main__":
    main()
