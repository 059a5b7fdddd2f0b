"""Basic example: the same run on one rank and on a threaded group of four."""

import io
import numpy as np
from nbody_mpi import SimulationConfig, StepCoordinator
from nbody_mpi.backends.factory import get_backend
from nbody_mpi.comm import SerialCommunicator, run_threaded
from nbody_mpi.physics import select_role
from nbody_mpi.presets import DebugScatter

def main():
    """Run a small debug scatter serially and on four simulated ranks."""
    # Get backend (NumPy is always available)
    backend = get_backend("numpy")
    
    config = SimulationConfig(
        body_count=64,
        time_period=1.0,
        delta_time=0.01,
        initial_body_mass=1.0,
        softening_length=0.05,
        debug_acceleration_scale=0.1,
        seed=42
    )
    
    # Generate initial conditions
    store = DebugScatter(
        backend,
        body_count=config.body_count,
        initial_body_mass=config.initial_body_mass,
        debug_acceleration_scale=config.debug_acceleration_scale,
        seed=config.seed
    ).generate()
    
    print("Running simulation on 1 rank...")
    comm = SerialCommunicator()
    role = select_role(comm, config, stream=io.StringIO())
    serial = StepCoordinator(comm, config, role).run(store.copy())
    
    print("Running simulation on 4 threaded ranks...")
    def rank_main(comm):
        role = select_role(comm, config, stream=io.StringIO())
        return StepCoordinator(comm, config, role).run(
            store.copy() if comm.is_coordinator else None
        )
    threaded = run_threaded(4, rank_main)[0]
    
    difference = np.max(np.abs(serial.store.positions - threaded.store.positions))
    print(f"Iterations: {serial.iterations}")
    print(f"Max position difference between runs: {difference:.3e}")
    print("Simulation complete!")

if __name__ == "__main__":
    main()
