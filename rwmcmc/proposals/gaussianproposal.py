"""
Gaussian random walk proposal for Metropolis sampling
"""

from typing import Union

import numpy as np

from rwmcmc.core.proposal import ProposalProtocol
from rwmcmc.utils.tools import is_positive_definite


class GaussianRandomWalk(ProposalProtocol):
    """Zero-mean multivariate normal step with a fixed covariance"""

    def __init__(self, sigma: Union[float, np.ndarray]):
        sigma = np.atleast_2d(np.asarray(sigma, dtype=float))
        if sigma.ndim != 2 or sigma.shape[0] != sigma.shape[1]:
            raise ValueError(f"sigma must be a square (d, d) matrix, got shape {sigma.shape}.")
        if not np.allclose(sigma, sigma.T):
            raise ValueError("sigma must be symmetric.")
        if not is_positive_definite(sigma):
            raise ValueError("sigma must be positive definite.")

        self.dim = sigma.shape[0]
        # Read-only so the covariance cannot drift during a run
        self.sigma = sigma.copy()
        self.sigma.setflags(write=False)
        self._chol = np.linalg.cholesky(self.sigma)

    def __call__(self) -> np.ndarray:
        """Draw one step of shape (d, 1)"""
        return self._chol @ np.random.randn(self.dim, 1)

    def __repr__(self) -> str:
        return f"GaussianRandomWalk(dim={self.dim})"
