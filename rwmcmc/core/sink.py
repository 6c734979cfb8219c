"""
Template file for sample sinks
"""

# Imports
import numpy as np
from typing import Any, Protocol, runtime_checkable

@runtime_checkable
class SinkProtocol(Protocol):
    """
    Protocol for consumers of kept samples.

    The sampling loop only ever calls ``emit``; the caller that created the
    sink is responsible for ``finalize`` once the loop is done.
    """

    def emit(self, position: np.ndarray) -> None:
        """Store one kept position of shape (d, 1)"""
        ...

    def finalize(self) -> Any:
        """Complete the collection and return whatever the sink produces"""
        ...
