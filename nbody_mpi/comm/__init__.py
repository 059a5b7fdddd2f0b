"""Collective communication layer (broadcast, gather) over interchangeable transports."""

from nbody_mpi.comm.base import Communicator
from nbody_mpi.comm.serial import SerialCommunicator
from nbody_mpi.comm.threaded import ThreadCommunicator, run_threaded
from nbody_mpi.comm.factory import get_communicator, list_available_communicators

__all__ = [
    "Communicator",
    "SerialCommunicator",
    "ThreadCommunicator",
    "run_threaded",
    "get_communicator",
    "list_available_communicators",
]
