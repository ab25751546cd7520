"""NumPy backend implementation."""

from typing import Any, Tuple, Union
import numpy as np
from nbody_sim.backends.base import Backend


class NumPyBackend(Backend):
    """NumPy-based backend (always available)."""
    
    def __init__(self, dtype=np.float64):
        self._dtype = dtype
    
    @property
    def name(self) -> str:
        return "numpy"
    
    def array(self, data: Any, dtype=None) -> np.ndarray:
        return np.array(data, dtype=dtype or self._dtype)
    
    def zeros(self, shape: Tuple[int, ...], dtype=None) -> np.ndarray:
        return np.zeros(shape, dtype=dtype or self._dtype)
    
    def zeros_like(self, array: Any) -> np.ndarray:
        return np.zeros_like(array)
    
    def sum(self, array: Any, axis: Union[int, Tuple[int, ...]] = None, keepdims: bool = False) -> np.ndarray:
        return np.sum(array, axis=axis, keepdims=keepdims)
    
    def square(self, array: Any) -> np.ndarray:
        return np.square(array)
    
    def add(self, a: Any, b: Any) -> np.ndarray:
        return np.add(a, b)
    
    def subtract(self, a: Any, b: Any) -> np.ndarray:
        return np.subtract(a, b)
    
    def multiply(self, a: Any, b: Any) -> np.ndarray:
        return np.multiply(a, b)
    
    def divide(self, a: Any, b: Any) -> np.ndarray:
        return np.divide(a, b)
    
    def power(self, base: Any, exponent: Any) -> np.ndarray:
        return np.power(base, exponent)
    
    def where(self, condition: Any, x: Any, y: Any) -> np.ndarray:
        return np.where(condition, x, y)
    
    def reshape(self, array: Any, newshape: Tuple[int, ...]) -> np.ndarray:
        return np.reshape(array, newshape)

    def expand_dims(self, array: Any, axis: int) -> np.ndarray:
        return np.expand_dims(array, axis=axis)

    def eye(self, n: int, dtype=None) -> np.ndarray:
        return np.eye(n, dtype=dtype or self._dtype)

    def to_numpy(self, array: Any) -> np.ndarray:
        return np.asarray(array)

