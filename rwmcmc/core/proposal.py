"""
Template file for the proposal capability
"""

# Imports
import numpy as np
from typing import Protocol, runtime_checkable

@runtime_checkable
class ProposalProtocol(Protocol):
    """
    Protocol for random walk proposals.

    A proposal is any callable that draws one zero-mean step of shape (d, 1).
    The covariance of the step must not change during a run.
    """

    def __call__(self) -> np.ndarray:
        """Draw a random walk step"""
        ...
