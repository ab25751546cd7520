"""Tests for the command-line interface."""

import numpy as np
import pytest
from nbody_sim.cli.main import main, build_parser, build_config
from nbody_sim.io.state_io import load_state, load_trajectory


def test_missing_arguments_prints_usage(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert out.startswith("usage:")
    
    assert main(["10"]) == 1


@pytest.mark.parametrize("argv", [
    ["abc", "10"],
    ["10", "1.5"],
    ["0", "10"],
    ["10", "-3"],
    ["10", "10", "--integrator", "rk4"],
])
def test_malformed_arguments_exit(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_run_reports_first_bodies(capsys):
    assert main(["8", "5", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    
    assert "Simulation completed in " in out
    assert "Seed:" not in out
    body_lines = [line for line in out.splitlines() if line.startswith("Body ")]
    assert len(body_lines) == 5
    assert body_lines[0].startswith("Body 0: pos(")
    assert " vel(" in body_lines[0]


def test_run_fewer_bodies_than_report(capsys):
    assert main(["2", "3", "--seed", "1", "--integrator", "verlet"]) == 0
    out = capsys.readouterr().out
    assert len([line for line in out.splitlines() if line.startswith("Body ")]) == 2


def test_clock_seed_is_reported(capsys):
    assert main(["2", "1"]) == 0
    assert "(derived from clock)" in capsys.readouterr().out


def test_same_seed_same_output(capsys):
    main(["4", "10", "--seed", "3"])
    first = capsys.readouterr().out.splitlines()[1:]
    main(["4", "10", "--seed", "3"])
    second = capsys.readouterr().out.splitlines()[1:]
    assert first == second


def test_save_outputs(tmp_path, capsys):
    state_path = tmp_path / "state.json"
    trajectory_path = tmp_path / "trajectory.npz"
    argv = [
        "3", "6", "--seed", "4", "--init", "orbital",
        "--save-state", str(state_path), "--save-trajectory", str(trajectory_path),
    ]
    assert main(argv) == 0
    
    positions, velocities, masses, metadata = load_state(str(state_path))
    assert positions.shape == (3, 2)
    assert metadata["steps"] == 6
    assert metadata["initializer"] == "orbital"
    assert metadata["seed"] == 4
    
    trajectory, dt = load_trajectory(str(trajectory_path))
    assert trajectory.shape == (3, 6, 2)
    assert dt == 0.01
    assert np.allclose(trajectory[:, -1, :], positions)


def test_config_file_with_flag_override(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("integrator: verlet\ndt: 0.5\nG: 1.0\n")
    args = build_parser().parse_args(["5", "7", "--config", str(path), "--dt", "0.25"])
    
    config = build_config(args)
    assert config.integrator == "verlet"
    assert config.G == 1.0
    assert config.dt == 0.25
    assert config.n_bodies == 5
    assert config.n_steps == 7
    assert config.record_trajectory is False


def test_invalid_config_file_reports_error(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text('{"dt": -1.0}')
    assert main(["2", "2", "--config", str(path)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_diagnostics_and_profile_output(capsys):
    assert main(["3", "4", "--seed", "1", "--diagnostics-every", "2", "--profile"]) == 0
    out = capsys.readouterr().out
    assert out.count("[Diag]") == 2
    assert "Last step: forces" in out


def test_yaml_config_with_exponents_runs(tmp_path, capsys):
    path = tmp_path / "run.yaml"
    path.write_text("epsilon: 1e-5\ndt: 1e-2\n")
    assert main(["2", "2", "--seed", "1", "--config", str(path)]) == 0
    assert "Simulation completed in " in capsys.readouterr().out


@pytest.mark.parametrize("text", ["- 1\n- 2\n", "dt: [0.1\n", "epsilon: tiny\n"])
def test_unreadable_yaml_config_reports_error(tmp_path, capsys, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    assert main(["2", "2", "--seed", "1", "--config", str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error:")
    assert "Simulation completed" not in captured.out


@pytest.mark.parametrize("flag, filename", [
    ("--save-state", "state.txt"),
    ("--save-state", "state"),
    ("--save-trajectory", "trajectory.json"),
])
def test_unsupported_output_format_rejected_before_run(tmp_path, capsys, flag, filename):
    assert main(["2", "3", "--seed", "1", flag, str(tmp_path / filename)]) == 1
    captured = capsys.readouterr()
    assert "Unsupported file format" in captured.err
    assert "Simulation completed" not in captured.out
    assert not (tmp_path / filename).exists()


def test_orbital_initializer_uses_config_gravity(tmp_path, monkeypatch):
    """Circular speeds are computed with the run's G whatever the name's case."""
    from nbody_sim.cli import main as cli_main
    
    captured = {}
    real_get_initializer = cli_main.get_initializer
    
    def recording_get_initializer(name, backend, n_bodies, seed=None, **kwargs):
        captured.update(kwargs)
        return real_get_initializer(name, backend, n_bodies, seed, **kwargs)
    
    monkeypatch.setattr(cli_main, "get_initializer", recording_get_initializer)
    path = tmp_path / "orbit.json"
    path.write_text('{"initializer": "Orbital", "G": 1.0, "initializer_params": {"central_mass": 1.0}}')
    
    assert main(["3", "2", "--seed", "5", "--config", str(path)]) == 0
    assert captured["G"] == 1.0


def test_unknown_initializer_parameter_reports_error(tmp_path, capsys):
    path = tmp_path / "run.json"
    path.write_text('{"initializer_params": {"radius": 3.0}}')
    assert main(["2", "2", "--seed", "1", "--config", str(path)]) == 1
    assert "Error:" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["2", "2", "--diagnostics-every", "-1"],
    ["2", "2", "--interval", "0"],
    ["2", "2", "--frame-every", "-2"],
])
def test_negative_frequency_flags_rejected(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_diagnostics_every_zero_is_off(capsys):
    assert main(["2", "2", "--seed", "1", "--diagnostics-every", "0"]) == 0
    assert "[Diag]" not in capsys.readouterr().out
