"""Plain-text trajectory output.

A run emits one document in two phases:

1. Header and initial bodies: ``N``, ``time_period`` and ``delta_time`` on
   their own lines, then four lines per body: ``"x y"``, ``"ax ay"``,
   ``"vx vy"`` and ``"mass"``.
2. Acceleration history: ``iterations * N`` lines of ``"ax ay"``,
   iterations in order, bodies in index order within an iteration.

Floats are written with ``%f``.
"""

import sys
from typing import IO, Iterable, NamedTuple, Optional
import numpy as np
from nbody_mpi.physics.bodies import BodyStore

LINES_PER_BODY = 4


class Trajectory(NamedTuple):
    """Parsed trajectory document."""
    body_count: int
    time_period: float
    delta_time: float
    initial: BodyStore
    accelerations: np.ndarray  # (iterations, N, 2)

    @property
    def iterations(self) -> int:
        return self.accelerations.shape[0]


def _pair(a: float, b: float) -> str:
    return f"{a:f} {b:f}"


def write_initial_snapshot(stream: IO[str], body_count: int, time_period: float,
                           delta_time: float, store: BodyStore):
    """Write phase 1: header plus every body's record."""
    lines = [str(body_count), f"{time_period:f}", f"{delta_time:f}"]
    for x, y, ax, ay, vx, vy, mass in store.data:
        lines.append(_pair(x, y))
        lines.append(_pair(ax, ay))
        lines.append(_pair(vx, vy))
        lines.append(f"{mass:f}")
    stream.write("\n".join(lines) + "\n")


def write_acceleration_history(stream: IO[str], accelerations: np.ndarray):
    """Write phase 2: one ``"ax ay"`` line per recorded pair."""
    pairs = np.asarray(accelerations).reshape(-1, 2)
    if len(pairs) == 0:
        return
    stream.write("\n".join(_pair(ax, ay) for ax, ay in pairs) + "\n")


def _parse_pair(line: str, line_number: int) -> tuple:
    parts = line.split()
    if len(parts) != 2:
        raise ValueError(f"Line {line_number}: expected two values, got {line!r}")
    return float(parts[0]), float(parts[1])


def read_trajectory(stream: Iterable[str]) -> Trajectory:
    """Parse a trajectory document.

    Args:
        stream: Open text file or any iterable of lines

    Returns:
        Trajectory with the initial store and the history shaped
        (iterations, N, 2)

    Raises:
        ValueError: If the document is truncated or malformed
    """
    lines = [line.strip() for line in stream]
    lines = [line for line in lines if line]
    if len(lines) < 3:
        raise ValueError("Trajectory header is incomplete")

    body_count = int(lines[0])
    time_period = float(lines[1])
    delta_time = float(lines[2])
    if body_count < 1:
        raise ValueError(f"Invalid body count {body_count}")

    body_end = 3 + LINES_PER_BODY * body_count
    if len(lines) < body_end:
        raise ValueError(
            f"Expected {body_count} body records, document ends after "
            f"{(len(lines) - 3) // LINES_PER_BODY}"
        )

    data = np.empty((body_count, 7), dtype=np.float64)
    for i in range(body_count):
        offset = 3 + LINES_PER_BODY * i
        data[i, 0:2] = _parse_pair(lines[offset], offset + 1)
        data[i, 2:4] = _parse_pair(lines[offset + 1], offset + 2)
        data[i, 4:6] = _parse_pair(lines[offset + 2], offset + 3)
        data[i, 6] = float(lines[offset + 3])

    history_lines = lines[body_end:]
    if len(history_lines) % body_count != 0:
        raise ValueError(
            f"Acceleration history has {len(history_lines)} entries, "
            f"not a multiple of {body_count} bodies"
        )
    if history_lines:
        pairs = np.array([
            _parse_pair(line, body_end + k + 1) for k, line in enumerate(history_lines)
        ])
    else:
        pairs = np.empty((0, 2))

    return Trajectory(
        body_count=body_count,
        time_period=time_period,
        delta_time=delta_time,
        initial=BodyStore(data),
        accelerations=pairs.reshape(-1, body_count, 2),
    )


class TrajectoryRecorder:
    """Coordinator-side accumulator of the acceleration history.

    The history is allocated in full up front, one ``(ax, ay)`` per body
    per iteration, and written out once at the end of the run.
    """

    def __init__(self, body_count: int, iterations: int, stream: Optional[IO[str]] = None):
        """Initialize recorder.

        Args:
            body_count: Number of bodies N
            iterations: Number of iterations the run will record
            stream: Output stream (default: sys.stdout at emit time)
        """
        self.body_count = body_count
        self.iterations = iterations
        self.stream = stream
        self._history = np.zeros((iterations, body_count, 2), dtype=np.float64)
        self._recorded = 0

    def _out(self) -> IO[str]:
        return self.stream if self.stream is not None else sys.stdout

    def record(self, iteration: int, accelerations: np.ndarray):
        """Store the accelerations used for ``iteration``'s update."""
        if not 0 <= iteration < self.iterations:
            raise IndexError(f"Iteration {iteration} outside [0, {self.iterations})")
        self._history[iteration] = accelerations
        self._recorded = max(self._recorded, iteration + 1)

    @property
    def history(self) -> np.ndarray:
        """Recorded pairs flattened to (recorded_iterations * N, 2)."""
        return self._history[:self._recorded].reshape(-1, 2)

    def emit_initial(self, config, store: BodyStore):
        write_initial_snapshot(
            self._out(), config.body_count, config.time_period, config.delta_time, store
        )

    def emit_history(self):
        write_acceleration_history(self._out(), self.history)
        self._out().flush()
