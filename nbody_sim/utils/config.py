"""Configuration management."""

import json
import math
from typing import Dict, Any, Mapping, Optional
from pathlib import Path
from dataclasses import dataclass, asdict, field, fields
from nbody_sim.backends.factory import list_available_backends

INTEGRATOR_NAMES = ("euler", "verlet")
INITIALIZER_NAMES = ("random", "orbital")
FORCE_METHODS = ("auto", "vectorized", "direct")

_INT_FIELDS = ("n_bodies", "n_steps", "seed")
_FLOAT_FIELDS = ("G", "dt", "epsilon")
_STR_FIELDS = ("integrator", "initializer", "force_method", "backend")


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not number.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(number)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass(frozen=True)
class SimulationConfig:
    """Run configuration, immutable for the lifetime of a simulation.

    Defaults reproduce the reference program: SI gravitational constant,
    dt = 0.01 and a softening length whose square is 1e-10.
    """
    # Run size
    n_bodies: int = 100
    n_steps: int = 1000
    
    # Physics
    G: float = 6.67430e-11
    dt: float = 0.01
    epsilon: float = 1e-5
    
    # Strategies
    integrator: str = "euler"
    initializer: str = "random"
    initializer_params: Dict[str, Any] = field(default_factory=dict, hash=False)
    force_method: str = "auto"
    backend: str = "numpy"
    
    # Output
    record_trajectory: bool = False
    
    # Reproducibility
    seed: Optional[int] = None
    
    def __post_init__(self):
        # Strategy names are case-insensitive; store them lowercase
        for name in ("integrator", "initializer"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")
            object.__setattr__(self, name, value.lower())
        if self.n_bodies < 1:
            raise ValueError(f"n_bodies must be >= 1, got {self.n_bodies}")
        if self.n_steps < 1:
            raise ValueError(f"n_steps must be >= 1, got {self.n_steps}")
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")
        if not math.isfinite(self.G):
            raise ValueError(f"G must be finite, got {self.G}")
        if self.integrator not in INTEGRATOR_NAMES:
            raise ValueError(f"Unknown integrator: {self.integrator}. Available: {list(INTEGRATOR_NAMES)}")
        if self.initializer not in INITIALIZER_NAMES:
            raise ValueError(f"Unknown initializer: {self.initializer}. Available: {list(INITIALIZER_NAMES)}")
        if self.force_method not in FORCE_METHODS:
            raise ValueError(f"Unknown force method: {self.force_method}. Available: {list(FORCE_METHODS)}")
        if self.backend.lower() not in list_available_backends():
            raise ValueError(f"Unknown backend: {self.backend}. Available: {list_available_backends()}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """Build a config from a mapping, rejecting unknown keys.

        Values read from files are coerced to the field types, so YAML
        scalars such as ``1e-5`` (loaded as strings) are accepted.

        Raises:
            ValueError: If data is not a mapping, has unknown keys or holds
                values that cannot be converted
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")

        values = dict(data)
        for key, value in data.items():
            if key in _INT_FIELDS:
                if not (key == "seed" and value is None):
                    values[key] = _as_int(key, value)
            elif key in _FLOAT_FIELDS:
                values[key] = _as_float(key, value)
            elif key in _STR_FIELDS and not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {value!r}")
            elif key == "record_trajectory" and not isinstance(value, bool):
                raise ValueError(f"record_trajectory must be true or false, got {value!r}")
            elif key == "initializer_params" and not isinstance(value, Mapping):
                raise ValueError(f"initializer_params must be a mapping, got {value!r}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.
    
    Args:
        config_path: Path to config file (.json or .yaml)
        
    Returns:
        SimulationConfig object

    Raises:
        ValueError: If the file cannot be parsed or holds invalid values
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            import yaml
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Cannot parse {config_path}: {exc}") from exc
            if data is None:
                data = {}
        else:
            # JSONDecodeError is a ValueError
            data = json.load(f)
    
    return SimulationConfig.from_dict(data)


def save_config(config: SimulationConfig, output_path: str):
    """Save configuration to file.
    
    Args:
        config: SimulationConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = config.to_dict()
    
    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            import yaml
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
