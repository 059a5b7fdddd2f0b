"""Example: write a trajectory document and plot it."""

import io
from nbody_mpi import SimulationConfig, StepCoordinator
from nbody_mpi.backends.factory import get_backend
from nbody_mpi.comm import SerialCommunicator
from nbody_mpi.io import read_trajectory
from nbody_mpi.physics import select_role
from nbody_mpi.presets import DebugScatter
from nbody_mpi.render import TrajectoryPlot

def main():
    """Simulate a debug scatter and save a plot of its acceleration history."""
    backend = get_backend("numpy")
    config = SimulationConfig(
        body_count=32,
        time_period=2.0,
        delta_time=0.02,
        initial_body_mass=1.0,
        softening_length=0.05,
        debug_acceleration_scale=0.1,
        seed=123
    )
    store = DebugScatter(
        backend,
        body_count=config.body_count,
        initial_body_mass=config.initial_body_mass,
        debug_acceleration_scale=config.debug_acceleration_scale,
        seed=config.seed
    ).generate()
    
    stream = io.StringIO()
    comm = SerialCommunicator()
    StepCoordinator(comm, config, select_role(comm, config, stream=stream, show_progress=True)).run(store)
    
    stream.seek(0)
    renderer = TrajectoryPlot()
    renderer.render(read_trajectory(stream))
    renderer.save("trajectory.png")
    renderer.close()
    print("Plot saved to trajectory.png")

if __name__ == "__main__":
    main()
