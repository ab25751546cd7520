"""2D trajectory playback using matplotlib."""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.figure import Figure
from typing import Optional, Tuple
from nbody_sim.render.base import Renderer


class TrajectoryAnimation(Renderer):
    """Plays back a trajectory log one step per frame.
    
    Each body keeps a fixed colour (cycled through a qualitative colormap)
    and a fixed marker size; the central body is drawn larger.
    """
    
    def __init__(
        self,
        trajectory: np.ndarray,
        interval_ms: int = 20,
        central_index: Optional[int] = 0,
        body_size: float = 12.0,
        central_size: float = 120.0,
        cmap: str = "tab10",
        figsize: Tuple[int, int] = (8, 8),
        dpi: int = 100,
        margin: float = 0.1,
    ):
        """Initialize animation.
        
        Args:
            trajectory: Array indexed [body][step][axis], shape (n, steps, 2)
            interval_ms: Delay between frames
            central_index: Body drawn larger (None for none)
            body_size: Marker area of ordinary bodies
            central_size: Marker area of the central body
            cmap: Matplotlib colormap used to assign body colours
            figsize: Figure size (width, height)
            dpi: Dots per inch
            margin: Fractional padding around the data extent
        """
        trajectory = np.asarray(trajectory)
        if trajectory.ndim != 3 or trajectory.shape[2] != 2:
            raise ValueError(f"Trajectory must have shape (n, steps, 2), got {trajectory.shape}")
        if trajectory.shape[1] == 0:
            raise ValueError("Trajectory has no recorded steps")
        self.trajectory = trajectory
        self.n_bodies, self.n_frames = trajectory.shape[:2]
        self.interval_ms = interval_ms
        self.central_index = central_index
        self.figsize = figsize
        self.dpi = dpi
        self.margin = margin
        
        colormap = plt.get_cmap(cmap)
        self.colors = np.array([colormap(i % colormap.N) for i in range(self.n_bodies)])
        self.sizes = np.full(self.n_bodies, body_size, dtype=float)
        if central_index is not None and 0 <= central_index < self.n_bodies:
            self.sizes[central_index] = central_size
        
        self.fig: Optional[Figure] = None
        self.ax = None
        self.scatter = None
        self.animation: Optional[FuncAnimation] = None
    
    def _initialize(self):
        """Create the figure on first use."""
        if self.fig is not None:
            return
        self.fig, self.ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)
        self.ax.set_aspect('equal')
        self.ax.set_xlabel('X')
        self.ax.set_ylabel('Y')
        self.ax.set_title('N-body Simulation')
        self.ax.grid(True, alpha=0.3)
        
        # Fixed limits covering the whole run (non-finite samples ignored)
        finite = self.trajectory[np.isfinite(self.trajectory).all(axis=2)]
        if finite.size:
            lo = finite.min(axis=0)
            hi = finite.max(axis=0)
            center = (lo + hi) / 2
            half = max(float(np.max(hi - lo)), 1e-9) * (1 + self.margin) / 2
            self.ax.set_xlim(center[0] - half, center[0] + half)
            self.ax.set_ylim(center[1] - half, center[1] + half)
        
        self.scatter = self.ax.scatter(
            self.trajectory[:, 0, 0], self.trajectory[:, 0, 1],
            c=self.colors, s=self.sizes, edgecolors='black', linewidths=0.5
        )
    
    def _update(self, frame: int):
        self.scatter.set_offsets(self.trajectory[:, frame, :])
        self.ax.set_title(f'N-body Simulation (step {frame + 1}/{self.n_frames})')
        return (self.scatter,)
    
    def render(self, step: int):
        """Draw the bodies as they were after the given step."""
        if not 0 <= step < self.n_frames:
            raise IndexError(f"step {step} outside 0..{self.n_frames - 1}")
        self._initialize()
        self._update(step)
    
    def animate(self) -> FuncAnimation:
        """Build the animation (one frame per recorded step, fixed interval)."""
        self._initialize()
        self.animation = FuncAnimation(
            self.fig, self._update, frames=self.n_frames,
            interval=self.interval_ms, blit=False, repeat=True
        )
        return self.animation
    
    def show(self):
        """Open an interactive window and play the animation (blocking)."""
        self.animate()
        plt.show()
    
    def capture_frame(self, step: int) -> np.ndarray:
        """Render one step and return it as an RGB image."""
        self.render(step)
        self.fig.canvas.draw()
        rgba = np.asarray(self.fig.canvas.buffer_rgba())
        return np.ascontiguousarray(rgba[..., :3])
    
    def iter_frames(self, every: int = 1):
        """Yield RGB images for every ``every``-th step."""
        for step in range(0, self.n_frames, max(1, every)):
            yield self.capture_frame(step)
    
    def close(self):
        """Close the renderer."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
            self.scatter = None
            self.animation = None
