"""Communicator factory: pick the transport a run executes over."""

from typing import List, Optional
from nbody_mpi.comm.base import Communicator
from nbody_mpi.comm.serial import SerialCommunicator

# Optional transports - available only when their library imports
_mpi_communicator = None

try:
    from nbody_mpi.comm.mpi_comm import MPICommunicator
    _mpi_communicator = MPICommunicator
except ImportError:
    pass


def list_available_communicators() -> List[str]:
    """List the transports that can be instantiated from a launched process.
    
    The threaded transport is not listed: it forms its groups through
    ``run_threaded`` rather than from the process environment.
    """
    communicators = ["serial"]
    
    if _mpi_communicator is not None:
        communicators.append("mpi")
    
    return communicators


def get_communicator(name: Optional[str] = None) -> Communicator:
    """Get the communicator for this process.
    
    Args:
        name: 'serial' or 'mpi'. If None, uses MPI when mpi4py is installed
            and the process was launched as part of a multi-rank group,
            otherwise serial.
        
    Returns:
        Communicator instance
        
    Raises:
        ValueError: If the requested transport is not available
    """
    if name is None:
        if _mpi_communicator is not None:
            comm = _mpi_communicator()
            if comm.size > 1:
                return comm
        return SerialCommunicator()
    
    name_lower = name.lower()
    
    if name_lower == "serial":
        return SerialCommunicator()
    elif name_lower == "mpi":
        if _mpi_communicator is None:
            raise ValueError("MPI communicator not available. Install with: pip install mpi4py")
        return _mpi_communicator()
    else:
        available = list_available_communicators()
        raise ValueError(f"Unknown communicator '{name}'. Available: {available}")
