"""
In-memory collection of kept samples
"""

import numpy as np

from rwmcmc.core.sink import SinkProtocol


class InMemorySink(SinkProtocol):
    """
    Collects every kept sample into a pre-allocated (d, n_samples) array.

    Attributes:
        dim (int): Number of parameters.
        n_samples (int): Number of samples the array holds.
    """

    def __init__(self, dim: int, n_samples: int):
        if dim < 1 or n_samples < 1:
            raise ValueError(
                f"dim and n_samples must be positive, got dim={dim}, n_samples={n_samples}."
            )
        self.dim = dim
        self.n_samples = n_samples
        self._samples = np.empty((dim, n_samples), dtype=np.float64)
        self._count = 0

    @property
    def count(self) -> int:
        """Number of samples emitted so far."""
        return self._count

    def emit(self, position: np.ndarray) -> None:
        if self._count >= self.n_samples:
            raise IndexError(f"InMemorySink is full ({self.n_samples} samples).")
        self._samples[:, self._count] = np.ravel(position)
        self._count += 1

    def finalize(self) -> np.ndarray:
        """Return the (d, n_samples) array of kept samples."""
        if self._count != self.n_samples:
            raise RuntimeError(
                f"InMemorySink finalized after {self._count} of {self.n_samples} samples."
            )
        return self._samples
