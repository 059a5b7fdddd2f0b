"""CLI main entry point.

Launch under MPI with one process per rank, e.g.::

    mpiexec -n 4 nbody-mpi 10 0.01 1000 10000 100 > trajectory.txt
"""

import argparse
import dataclasses
import sys
from nbody_mpi.backends.factory import get_backend
from nbody_mpi.comm.base import Communicator
from nbody_mpi.comm.factory import get_communicator, list_available_communicators
from nbody_mpi.io.state_io import save_state
from nbody_mpi.physics.engine import StepCoordinator
from nbody_mpi.physics.force_kernel import ForceKernel
from nbody_mpi.physics.integrators.semi_implicit_euler import SemiImplicitEulerIntegrator
from nbody_mpi.physics.roles import select_role
from nbody_mpi.presets.debug_scatter import DebugScatter
from nbody_mpi.utils.config import (
    DEFAULT_DEBUG_ACCELERATION_SCALE, SimulationConfig, load_config, save_config
)
from nbody_mpi.utils.reproducibility import set_all_seeds

REQUIRED_PARAMETERS = (
    'time_period', 'delta_time', 'body_count', 'initial_body_mass', 'softening_length'
)


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the simulation entry point."""
    parser = argparse.ArgumentParser(
        prog="nbody-mpi",
        description="Distributed N-body simulation. Writes the trajectory to stdout."
    )

    # Run parameters (positional, optional only when --config is given)
    parser.add_argument('time_period', type=float, nargs='?',
                       help='Simulated duration (~10-100)')
    parser.add_argument('delta_time', type=float, nargs='?',
                       help='Time step (~0.01-0.1)')
    parser.add_argument('body_count', type=int, nargs='?',
                       help='Number of bodies (~100-1000), divisible by the number of processes')
    parser.add_argument('initial_body_mass', type=float, nargs='?',
                       help='Mean body mass (~10000)')
    parser.add_argument('softening_length', type=float, nargs='?',
                       help='Softening length (~100)')
    parser.add_argument('debug_acceleration_scale', type=float, nargs='?',
                       default=None,
                       help=f'Initial speed scale (default: {DEFAULT_DEBUG_ACCELERATION_SCALE})')

    parser.add_argument('--config', type=str, default=None,
                       help='Load run parameters from a .json/.yaml file instead of positionals')
    parser.add_argument('--seed', type=int, default=None,
                       help='Random seed for reproducibility')

    # Execution
    parser.add_argument('--communicator', type=str, default=None,
                       choices=['serial', 'mpi'],
                       help='Transport (auto-select if not specified)')
    parser.add_argument('--method', type=str, default='vectorized',
                       choices=['direct', 'vectorized'],
                       help='Force evaluation method')
    parser.add_argument('--progress', dest='progress', action='store_const', const=True,
                       default=None,
                       help='Show a progress bar on stderr')
    parser.add_argument('--no-progress', dest='progress', action='store_const', const=False,
                       help='Never show a progress bar')
    parser.add_argument('--profile', action='store_true',
                       help='Report compute/communication time on stderr')

    # Output
    parser.add_argument('--save-state', type=str, default=None,
                       help='Save final bodies to file (.npz or .json)')
    parser.add_argument('--dump-config', type=str, default=None,
                       help='Save the effective configuration to file (.json or .yaml)')
    parser.add_argument('--quiet', action='store_true',
                       help='Suppress status messages on stderr')

    # Info
    parser.add_argument('--list-communicators', action='store_true',
                       help='List available communicators and exit')
    return parser


def resolve_config(args) -> SimulationConfig:
    """Build and validate the run configuration from parsed arguments."""
    if args.config is not None:
        config = load_config(args.config)
        if args.seed is not None:
            config = dataclasses.replace(config, seed=args.seed)
        return config

    scale = args.debug_acceleration_scale
    config = SimulationConfig(
        body_count=args.body_count,
        time_period=args.time_period,
        delta_time=args.delta_time,
        initial_body_mass=args.initial_body_mass,
        softening_length=args.softening_length,
        debug_acceleration_scale=DEFAULT_DEBUG_ACCELERATION_SCALE if scale is None else scale,
        seed=args.seed,
    )
    return config.validate()


def default_progress() -> bool:
    """Show progress only when stdout is redirected and stderr is a terminal."""
    return not sys.stdout.isatty() and sys.stderr.isatty()


def run_simulation(args, config: SimulationConfig, comm: Communicator):
    """Run a simulation on this rank."""
    backend = get_backend()

    # Set seed
    if config.seed is not None:
        set_all_seeds(config.seed, backend)

    show_progress = args.progress if args.progress is not None else default_progress()
    role = select_role(
        comm, config,
        integrator=SemiImplicitEulerIntegrator(),
        backend=backend,
        show_progress=show_progress,
        stream=sys.stdout,
    )
    kernel = ForceKernel(config.softening_length_squared, backend, method=args.method)

    # Validates the partition on every rank before anything is generated or sent
    sim = StepCoordinator(comm, config, role, kernel=kernel)
    sim.set_profiling(args.profile)

    store = None
    if comm.is_coordinator:
        if not args.quiet:
            print(f"Running simulation: {config.body_count} bodies on {comm.size} "
                  f"process(es) via {comm.name}", file=sys.stderr)
            print(f"Iterations: {config.iterations}, dt: {config.delta_time}, "
                  f"softening: {config.softening_length}, method: {kernel.method}",
                  file=sys.stderr)
        if args.dump_config:
            save_config(config, args.dump_config)
        store = DebugScatter(
            backend,
            body_count=config.body_count,
            initial_body_mass=config.initial_body_mass,
            debug_acceleration_scale=config.debug_acceleration_scale,
            seed=config.seed,
        ).generate()

    result = sim.run(store)

    if comm.is_coordinator:
        if args.profile:
            timing = sim.get_timing()
            print(f"Compute: {timing['compute_ms']:.1f} ms, "
                  f"communication: {timing['communication_ms']:.1f} ms", file=sys.stderr)

        # Save state
        if args.save_state:
            save_state(result.store, args.save_state, metadata={
                'time': sim.time,
                'steps': sim.step_count,
                'processes': comm.size,
                'communicator': comm.name,
            })
            if not args.quiet:
                print(f"State saved to {args.save_state}", file=sys.stderr)

        if not args.quiet:
            print("Simulation complete!", file=sys.stderr)


def _usage_error(parser: argparse.ArgumentParser, comm: Communicator, message: str) -> int:
    if comm.is_coordinator:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {message}", file=sys.stderr)
    return 2


def main(argv=None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_communicators:
        print("Available communicators:")
        for name in list_available_communicators():
            print(f"  - {name}")
        return 0

    try:
        comm = get_communicator(args.communicator)
    except ValueError as exc:
        parser.error(str(exc))

    if args.config is None:
        missing = [name for name in REQUIRED_PARAMETERS if getattr(args, name) is None]
        if missing:
            return _usage_error(
                parser, comm, "the following arguments are required: " + ", ".join(missing)
            )

    try:
        config = resolve_config(args)
        run_simulation(args, config, comm)
    except (ValueError, OSError, MemoryError) as exc:
        if comm.is_coordinator:
            print(f"Error: {exc}", file=sys.stderr)
        if comm.size > 1:
            comm.abort(1)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
