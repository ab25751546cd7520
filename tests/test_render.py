"""Tests for trajectory playback and GIF export."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
from nbody_sim.render.animation import TrajectoryAnimation
from nbody_sim.io.gif_exporter import GIFExporter


def circle_trajectory(n_bodies=3, n_steps=5):
    angles = np.linspace(0.0, np.pi, n_steps)
    radii = np.arange(n_bodies, dtype=float)[:, np.newaxis]
    return np.stack([radii * np.cos(angles), radii * np.sin(angles)], axis=2)


def test_capture_frame():
    """Frames come back as (H, W, 3) uint8 images."""
    animation = TrajectoryAnimation(circle_trajectory(), figsize=(4, 4), dpi=50)
    try:
        frame = animation.capture_frame(2)
        assert frame.shape == (200, 200, 3)
        assert frame.dtype == np.uint8
        assert len(list(animation.iter_frames(every=2))) == 3
    finally:
        animation.close()


def test_body_styles():
    """Each body has a fixed colour; the central body is drawn larger."""
    animation = TrajectoryAnimation(circle_trajectory(n_bodies=4), central_index=0)
    assert animation.colors.shape == (4, 4)
    assert animation.sizes[0] > animation.sizes[1]
    assert np.all(animation.sizes[1:] == animation.sizes[1])
    assert not np.allclose(animation.colors[1], animation.colors[2])


def test_animate_builds_one_frame_per_step():
    animation = TrajectoryAnimation(circle_trajectory(n_steps=7), interval_ms=5)
    try:
        anim = animation.animate()
        assert anim is animation.animation
        assert animation.n_frames == 7
        with pytest.raises(IndexError):
            animation.render(7)
    finally:
        animation.close()


def test_invalid_trajectory_rejected():
    with pytest.raises(ValueError):
        TrajectoryAnimation(np.zeros((3, 5)))
    with pytest.raises(ValueError):
        TrajectoryAnimation(np.zeros((3, 0, 2)))


def test_gif_export_without_frames_raises(tmp_path):
    exporter = GIFExporter(str(tmp_path / "empty.gif"))
    with pytest.raises(ValueError, match="No frames"):
        exporter.export()


def test_gif_export(tmp_path):
    pytest.importorskip("imageio")
    path = tmp_path / "orbit.gif"
    exporter = GIFExporter(str(path), fps=20)
    
    animation = TrajectoryAnimation(circle_trajectory(), figsize=(2, 2), dpi=40)
    try:
        for frame in animation.iter_frames():
            exporter.add_frame(frame)
    finally:
        animation.close()
    exporter.export()
    
    assert len(exporter.frames) == 5
    assert path.exists()
    assert path.stat().st_size > 0


def test_cli_gif_export(tmp_path, capsys):
    pytest.importorskip("imageio")
    from nbody_sim.cli.main import main
    
    path = tmp_path / "run.gif"
    assert main(["3", "4", "--seed", "2", "--gif", str(path), "--frame-every", "2"]) == 0
    assert path.exists()
    assert "Exporting GIF" in capsys.readouterr().out
