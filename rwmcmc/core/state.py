"""
Chain state representation for random walk Metropolis sampling.

This module provides the ChainState dataclass which holds everything the
Metropolis update needs to know about the current point of a single chain:
its position, the log-kernel value at that position, and the outcome of the
most recent step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from rwmcmc.core.model import RWMetropolisModel


@dataclass
class ChainState:
    """
    Represents the current state of a random walk Metropolis chain.

    The state is mutated in place by every Metropolis step. ``log_kernel`` is
    kept in sync with ``position``: it is only replaced when a move is
    accepted, so rejected steps never re-evaluate the kernel.

    Attributes:
        position (np.ndarray):
            Current position in parameter space. Must have shape (d, 1).

        log_kernel (float):
            Log posterior kernel evaluated at ``position``.

        accepted (bool):
            Whether the most recent step moved the chain. Only used for
            acceptance-rate bookkeeping, not part of the Markov state.
            Default: False.

    Examples:
        >>> state = ChainState(position=np.array([[1.0], [2.0]]), log_kernel=-2.5)
        >>> state.accepted
        False
    """

    position: np.ndarray
    """Current position in parameter space (d, 1)."""

    log_kernel: float
    """Log posterior kernel at ``position``."""

    accepted: bool = False
    """Outcome of the most recent Metropolis step."""

    def __post_init__(self) -> None:
        """Check that the position is a column vector."""
        if not isinstance(self.position, np.ndarray):
            raise TypeError("position must be a numpy.ndarray with shape (d, 1).")
        if self.position.ndim != 2 or self.position.shape[1] != 1:
            raise ValueError(
                f"position must have shape (d, 1), got {self.position.shape}."
            )

    @property
    def dim(self) -> int:
        """Number of parameters."""
        return self.position.shape[0]

    @classmethod
    def initial(cls, model: RWMetropolisModel, position) -> "ChainState":
        """
        Build the starting state of a chain.

        The log kernel is evaluated once at ``position``. A flat vector is
        accepted and reshaped to a column vector.

        Args:
            model: Model whose ``log_kernel`` is evaluated.
            position: Starting point, shape (d,) or (d, 1).

        Returns:
            ChainState: A fresh state with ``accepted`` set to False.

        Raises:
            ValueError: If the number of entries does not match ``model.dim``.
        """
        position = np.asarray(position, dtype=float)
        if position.ndim <= 1:
            position = position.reshape(-1, 1)
        if position.shape != (model.dim, 1):
            raise ValueError(
                f"initial position must have shape ({model.dim}, 1), got {position.shape}."
            )
        return cls(position=position, log_kernel=float(model.log_kernel(position)))

    def __repr__(self) -> str:
        return (
            f"ChainState(position_shape={self.position.shape}, "
            f"log_kernel={self.log_kernel:.4f}, accepted={self.accepted})"
        )
