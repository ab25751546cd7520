"""Append-only record of body positions across a run."""

import warnings
import numpy as np

# Allocations above this size trigger a warning before the array is created.
LARGE_TRAJECTORY_BYTES = 1 << 30


class TrajectoryLog:
    """Dense (n_bodies, n_steps, 2) position history indexed [body][step][axis].

    Storage is allocated once up front. Steps are written strictly in order
    and a slot is never rewritten; consumers only ever receive read-only
    views.
    """

    def __init__(self, n_bodies: int, n_steps: int, dim: int = 2):
        nbytes = n_bodies * n_steps * dim * np.dtype(np.float64).itemsize
        if nbytes > LARGE_TRAJECTORY_BYTES:
            warnings.warn(
                f"Trajectory log for {n_bodies} bodies x {n_steps} steps needs "
                f"{nbytes / (1 << 30):.1f} GiB",
                ResourceWarning,
                stacklevel=2,
            )
        # MemoryError propagates: there is no fallback storage
        self._data = np.full((n_bodies, n_steps, dim), np.nan, dtype=np.float64)
        self.n_bodies = n_bodies
        self.n_steps = n_steps
        self.n_recorded = 0

    @property
    def is_full(self) -> bool:
        return self.n_recorded == self.n_steps

    def record(self, positions: np.ndarray):
        """Write positions (n_bodies, 2) into the next step slot.

        Raises:
            RuntimeError: If every slot has already been written
            ValueError: If positions has the wrong shape
        """
        if self.is_full:
            raise RuntimeError(f"Trajectory log is full ({self.n_steps} steps)")
        positions = np.asarray(positions, dtype=np.float64)
        if positions.shape != (self.n_bodies, self._data.shape[2]):
            raise ValueError(
                f"Expected positions of shape {(self.n_bodies, self._data.shape[2])}, got {positions.shape}"
            )
        self._data[:, self.n_recorded, :] = positions
        self.n_recorded += 1

    @property
    def positions(self) -> np.ndarray:
        """Read-only view of the recorded steps, shape (n_bodies, n_recorded, 2)."""
        view = self._data[:, :self.n_recorded, :]
        view.flags.writeable = False
        return view

    def body_path(self, index: int) -> np.ndarray:
        """Read-only (n_recorded, 2) path of one body."""
        return self.positions[index]

    def step_positions(self, step: int) -> np.ndarray:
        """Read-only (n_bodies, 2) positions after the given recorded step."""
        if not 0 <= step < self.n_recorded:
            raise IndexError(f"step {step} not recorded (have {self.n_recorded})")
        return self.positions[:, step, :]

    def __len__(self) -> int:
        return self.n_recorded
