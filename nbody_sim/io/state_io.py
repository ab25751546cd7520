"""State I/O for saving and loading simulation states and trajectories."""

import numpy as np
import json
from typing import Tuple, Dict, Any, Optional
from pathlib import Path

STATE_FORMATS = (".npz", ".json")
TRAJECTORY_FORMATS = (".npz",)


def check_output_format(output_path: str, formats: Tuple[str, ...]) -> Path:
    """Validate an output path suffix before anything is computed.

    Raises:
        ValueError: If the suffix is not one of formats
    """
    output_path = Path(output_path)
    if output_path.suffix not in formats:
        raise ValueError(
            f"Unsupported file format: {output_path.suffix or '(none)'}. Use {' or '.join(formats)}"
        )
    return output_path


def save_state(
    positions: np.ndarray,
    velocities: np.ndarray,
    masses: np.ndarray,
    output_path: str,
    metadata: Optional[Dict[str, Any]] = None
):
    """Save simulation state to file.
    
    Args:
        positions: Body positions
        velocities: Body velocities
        masses: Body masses
        output_path: Output file path (.npz or .json)
        metadata: Optional metadata dictionary
    """
    output_path = Path(output_path)
    
    if output_path.suffix == '.npz':
        save_dict = {
            'positions': np.asarray(positions),
            'velocities': np.asarray(velocities),
            'masses': np.asarray(masses)
        }
        if metadata:
            # Scalars only in npz
            for key, value in metadata.items():
                if isinstance(value, (int, float, str)):
                    save_dict[f'metadata_{key}'] = value
        np.savez_compressed(output_path, **save_dict)
    
    elif output_path.suffix == '.json':
        state_dict = {
            'positions': np.asarray(positions).tolist(),
            'velocities': np.asarray(velocities).tolist(),
            'masses': np.asarray(masses).tolist(),
            'metadata': metadata or {}
        }
        with open(output_path, 'w') as f:
            json.dump(state_dict, f, indent=2)
    
    else:
        raise ValueError(f"Unsupported file format: {output_path.suffix}. Use .npz or .json")


def load_state(input_path: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray, Dict[str, Any]]:
    """Load simulation state from file.
    
    Args:
        input_path: Input file path
        
    Returns:
        Tuple of (positions, velocities, masses, metadata)
    """
    input_path = Path(input_path)
    
    if input_path.suffix == '.npz':
        with np.load(input_path) as data:
            positions = data['positions']
            velocities = data['velocities']
            masses = data['masses']
            
            metadata = {}
            for key in data.keys():
                if key.startswith('metadata_'):
                    metadata[key[len('metadata_'):]] = data[key].item()
        
        return positions, velocities, masses, metadata
    
    elif input_path.suffix == '.json':
        with open(input_path, 'r') as f:
            state_dict = json.load(f)
        
        positions = np.array(state_dict['positions'], dtype=np.float64).reshape(-1, 2)
        velocities = np.array(state_dict['velocities'], dtype=np.float64).reshape(-1, 2)
        masses = np.array(state_dict['masses'], dtype=np.float64)
        metadata = state_dict.get('metadata', {})
        
        return positions, velocities, masses, metadata
    
    else:
        raise ValueError(f"Unsupported file format: {input_path.suffix}. Use .npz or .json")


def save_trajectory(trajectory: np.ndarray, output_path: str, dt: Optional[float] = None):
    """Save a [body][step][axis] trajectory array to a compressed .npz file."""
    output_path = check_output_format(output_path, TRAJECTORY_FORMATS)
    save_dict = {'trajectory': np.asarray(trajectory)}
    if dt is not None:
        save_dict['dt'] = dt
    np.savez_compressed(output_path, **save_dict)


def load_trajectory(input_path: str) -> Tuple[np.ndarray, Optional[float]]:
    """Load a trajectory saved by save_trajectory.
    
    Returns:
        Tuple of (trajectory, dt) where dt is None if it was not stored
    """
    with np.load(Path(input_path)) as data:
        trajectory = data['trajectory']
        dt = data['dt'].item() if 'dt' in data.files else None
    return trajectory, dt
