"""Abstract base class for compute backends."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union
import numpy as np


class Backend(ABC):
    """Abstract interface for array computation backends.
    
    The force kernel and integrator are written against this API so the
    same physics runs on any array engine. Collective communication always
    happens on NumPy buffers, see ``to_numpy``.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this backend."""
        pass
    
    @abstractmethod
    def array(self, data: Any, dtype=None) -> Any:
        """Create an array from data.
        
        Args:
            data: Input data (list, numpy array, etc.)
            dtype: Optional data type
            
        Returns:
            Backend array object
        """
        pass
    
    @abstractmethod
    def zeros(self, shape: Tuple[int, ...], dtype=None) -> Any:
        """Create an array of zeros."""
        pass
    
    @abstractmethod
    def sum(self, array: Any, axis: Union[int, Tuple[int, ...]] = None, keepdims: bool = False) -> Any:
        """Sum array elements along axis."""
        pass
    
    @abstractmethod
    def square(self, array: Any) -> Any:
        """Compute square."""
        pass
    
    @abstractmethod
    def add(self, a: Any, b: Any) -> Any:
        """Element-wise addition."""
        pass
    
    @abstractmethod
    def subtract(self, a: Any, b: Any) -> Any:
        """Element-wise subtraction."""
        pass
    
    @abstractmethod
    def multiply(self, a: Any, b: Any) -> Any:
        """Element-wise multiplication."""
        pass
    
    @abstractmethod
    def divide(self, a: Any, b: Any) -> Any:
        """Element-wise division."""
        pass
    
    @abstractmethod
    def power(self, base: Any, exponent: Any) -> Any:
        """Element-wise power."""
        pass
    
    @abstractmethod
    def where(self, condition: Any, x: Any, y: Any) -> Any:
        """Conditional selection."""
        pass
    
    @abstractmethod
    def reshape(self, array: Any, newshape: Tuple[int, ...]) -> Any:
        """Reshape array to newshape (for broadcasting, etc.)."""
        pass

    @abstractmethod
    def expand_dims(self, array: Any, axis: int) -> Any:
        """Expand the shape by inserting a new axis at axis (e.g. (n,) -> (n, 1))."""
        pass

    @abstractmethod
    def eye(self, n: int, m: Optional[int] = None, k: int = 0, dtype=None) -> Any:
        """Matrix (n, m) with ones on the k-th diagonal.
        
        With ``k`` set to a partition's start offset this selects the
        self-pairs of a partition block against the full body set.
        """
        pass

    @abstractmethod
    def to_numpy(self, array: Any) -> np.ndarray:
        """Convert backend array to NumPy array.
        
        Needed at the communication and I/O boundaries.
        """
        pass
    
    @abstractmethod
    def set_seed(self, seed: int) -> None:
        """Set random seed for reproducibility."""
        pass
