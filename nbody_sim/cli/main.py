"""CLI main entry point."""

import argparse
import dataclasses
import sys
from typing import List, Optional, Tuple
from nbody_sim.backends.factory import get_backend
from nbody_sim.physics.simulator import Simulator
from nbody_sim.physics.force_calculator import ForceCalculator
from nbody_sim.physics.integrators import get_integrator
from nbody_sim.presets import get_initializer
from nbody_sim.io.state_io import (
    save_state, save_trajectory, check_output_format, STATE_FORMATS, TRAJECTORY_FORMATS,
)
from nbody_sim.utils.config import SimulationConfig, load_config
from nbody_sim.utils.reproducibility import clock_seed

# Number of bodies echoed after the run
REPORT_BODIES = 5


def positive_int(value: str) -> int:
    """argparse type for strictly positive integers."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def non_negative_int(value: str) -> int:
    """argparse type for integers >= 0."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def positive_float(value: str) -> float:
    """argparse type for strictly positive floats."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nbody-sim",
        description="N-body Simulator - direct-summation gravity in 2D",
    )

    # Positional run size; checked by hand so a bare invocation prints usage to stdout
    parser.add_argument('num_bodies', type=positive_int, nargs='?',
                       help='Number of bodies')
    parser.add_argument('num_steps', type=positive_int, nargs='?',
                       help='Number of time steps')

    # Physics
    parser.add_argument('--dt', type=positive_float, default=None,
                       help='Time step (default: 0.01)')
    parser.add_argument('--G', type=float, default=None,
                       help='Gravitational constant (default: 6.67430e-11)')
    parser.add_argument('--epsilon', type=positive_float, default=None,
                       help='Softening length (default: 1e-5)')
    parser.add_argument('--force-method', type=str, default=None,
                       choices=['auto', 'vectorized', 'direct'],
                       help='Force evaluation method (default: auto)')

    # Strategies
    parser.add_argument('--integrator', type=str, default=None,
                       choices=['euler', 'verlet'],
                       help='Numerical integrator (default: euler)')
    parser.add_argument('--init', dest='initializer', type=str, default=None,
                       choices=['random', 'orbital'],
                       help='Initial conditions (default: random)')
    parser.add_argument('--config', type=str, default=None,
                       help='JSON/YAML configuration file; explicit flags take precedence')

    # Reproducibility
    parser.add_argument('--seed', type=int, default=None,
                       help='Random seed (default: derived from the clock and printed)')

    # Diagnostics
    parser.add_argument('--diagnostics-every', type=non_negative_int, default=0,
                       help='Print energy/momentum every N steps (0 = off)')
    parser.add_argument('--profile', action='store_true',
                       help='Print force/integrator timing of the last step')

    # Output
    parser.add_argument('--save-state', type=str, default=None,
                       help='Save final state to file (.npz or .json)')
    parser.add_argument('--save-trajectory', type=str, default=None,
                       help='Save recorded trajectory to file (.npz)')
    parser.add_argument('--animate', action='store_true',
                       help='Play back the trajectory in a matplotlib window')
    parser.add_argument('--gif', type=str, default=None,
                       help='Export the trajectory as an animated GIF')
    parser.add_argument('--interval', type=positive_int, default=20,
                       help='Milliseconds between animation frames')
    parser.add_argument('--frame-every', type=positive_int, default=1,
                       help='Use every N-th step as a GIF frame')
    return parser


def build_config(args) -> SimulationConfig:
    """Merge config file values with explicit command-line flags."""
    base = load_config(args.config) if args.config else SimulationConfig()
    overrides = {
        'n_bodies': args.num_bodies,
        'n_steps': args.num_steps,
        'dt': args.dt,
        'G': args.G,
        'epsilon': args.epsilon,
        'force_method': args.force_method,
        'integrator': args.integrator,
        'initializer': args.initializer,
        'seed': args.seed,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if args.animate or args.gif or args.save_trajectory:
        overrides['record_trajectory'] = True
    return dataclasses.replace(base, **overrides)


def check_output_paths(args):
    """Reject unsupported output formats before the run starts."""
    if args.save_state:
        check_output_format(args.save_state, STATE_FORMATS)
    if args.save_trajectory:
        check_output_format(args.save_trajectory, TRAJECTORY_FORMATS)


def prepare_simulation(args, config: SimulationConfig) -> Tuple[Simulator, int]:
    """Generate initial conditions and return an initialized simulator and its seed."""
    backend = get_backend(config.backend)

    seed = config.seed
    if seed is None:
        seed = clock_seed()
        print(f"Seed: {seed} (derived from clock)")

    initializer_params = dict(config.initializer_params)
    if config.initializer.lower() == 'orbital':
        initializer_params.setdefault('G', config.G)
    initializer = get_initializer(
        config.initializer, backend, config.n_bodies, seed, **initializer_params
    )
    positions, velocities, masses = initializer.generate()

    sim = Simulator(
        backend,
        get_integrator(config.integrator),
        config,
        ForceCalculator(method=config.force_method),
    )
    sim.diagnostics_interval = args.diagnostics_every
    sim.set_profiling(args.profile)
    sim.initialize(positions, velocities, masses)
    return sim, seed


def run_simulation(args, sim: Simulator, seed: int) -> Simulator:
    """Run a prepared simulation, report the first bodies and write outputs."""
    config = sim.config
    elapsed = sim.run()

    print(f"Simulation completed in {elapsed:.4f} seconds")
    for i in range(min(config.n_bodies, REPORT_BODIES)):
        body = sim.bodies[i]
        print(f"Body {i}: pos({body.x:.2f}, {body.y:.2f}) vel({body.vx:.2f}, {body.vy:.2f})")

    if args.profile:
        timing = sim.get_timing()
        print(f"Last step: forces {timing['forces_ms']:.3f} ms, integrator {timing['integrator_ms']:.3f} ms")

    if args.save_state:
        pos, vel, mass, t, steps = sim.get_state()
        save_state(pos, vel, mass, args.save_state, metadata={
            'time': t,
            'steps': steps,
            'integrator': config.integrator,
            'initializer': config.initializer,
            'seed': seed,
        })
        print(f"State saved to {args.save_state}")

    if args.save_trajectory:
        save_trajectory(sim.trajectory.positions, args.save_trajectory, dt=config.dt)
        print(f"Trajectory saved to {args.save_trajectory}")

    if args.gif or args.animate:
        export_animation(sim, args)

    return sim


def export_animation(sim: Simulator, args):
    """Render the trajectory to a GIF and/or an interactive window."""
    from nbody_sim.render.animation import TrajectoryAnimation

    animation = TrajectoryAnimation(sim.trajectory.positions, interval_ms=args.interval)
    try:
        if args.gif:
            from nbody_sim.io.gif_exporter import GIFExporter
            exporter = GIFExporter(args.gif, fps=max(1, round(1000 / max(1, args.interval))))
            for frame in animation.iter_frames(every=args.frame_every):
                exporter.add_frame(frame)
            print(f"Exporting GIF to {exporter.output_path}...")
            exporter.export()
        if args.animate:
            animation.show()
    finally:
        animation.close()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.num_bodies is None or args.num_steps is None:
        parser.print_usage(sys.stdout)
        return 1

    try:
        config = build_config(args)
        check_output_paths(args)
        sim, seed = prepare_simulation(args, config)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    run_simulation(args, sim, seed)
    return 0


if __name__ == '__main__':
    sys.exit(main())
