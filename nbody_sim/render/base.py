"""Base renderer interface."""

from abc import ABC, abstractmethod
import numpy as np


class Renderer(ABC):
    """Abstract base class for renderers."""
    
    @abstractmethod
    def render(self, step: int):
        """Draw the bodies as they were after the given step."""
        pass
    
    @abstractmethod
    def capture_frame(self, step: int) -> np.ndarray:
        """Render a step and return it as an image array.
        
        Returns:
            Image array (H, W, 3) uint8
        """
        pass
    
    @abstractmethod
    def close(self):
        """Close the renderer."""
        pass
