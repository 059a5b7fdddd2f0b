"""Plot a trajectory document written by ``nbody-mpi``."""

import argparse
import sys
from nbody_mpi.io.trajectory_io import read_trajectory
from nbody_mpi.render.renderer_2d import TrajectoryPlot


def main(argv=None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="nbody-mpi-plot",
        description="Plot initial bodies and acceleration history of a trajectory file"
    )
    parser.add_argument('trajectory', type=str,
                       help="Trajectory file ('-' for stdin)")
    parser.add_argument('-o', '--output', type=str, default='trajectory.png',
                       help='Output image path')
    parser.add_argument('--max-bodies', type=int, default=50,
                       help='Maximum number of per-body history lines')
    parser.add_argument('--no-velocities', action='store_true',
                       help='Do not draw initial velocity arrows')
    args = parser.parse_args(argv)

    try:
        if args.trajectory == '-':
            trajectory = read_trajectory(sys.stdin)
        else:
            with open(args.trajectory, 'r') as f:
                trajectory = read_trajectory(f)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    renderer = TrajectoryPlot(
        max_bodies=args.max_bodies,
        show_velocities=not args.no_velocities
    )
    renderer.render(trajectory)
    renderer.save(args.output)
    renderer.close()
    print(f"Plot saved to {args.output}", file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
