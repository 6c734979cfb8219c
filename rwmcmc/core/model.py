"""
Model description for random walk Metropolis sampling.

This module provides the LogKernel protocol that target densities must
implement and the immutable RWMetropolisModel that bundles the problem
dimension, the log kernel and the proposal for the lifetime of a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

import numpy as np

from rwmcmc.core.proposal import ProposalProtocol
from rwmcmc.proposals.gaussianproposal import GaussianRandomWalk


@runtime_checkable
class LogKernel(Protocol):
    """
    Protocol for log posterior kernels.

    A log kernel is any callable that takes a parameter vector of shape
    (d, 1) and returns the log of a density proportional to the target
    (log prior + log likelihood, unnormalized). Points outside the support
    should return ``-np.inf``; such proposals are always rejected.

    Examples:
        Function::

            def standard_normal(x: np.ndarray) -> float:
                return -0.5 * float(np.sum(x ** 2))

        Class::

            class Posterior:
                def __init__(self, data):
                    self.data = data

                def __call__(self, x: np.ndarray) -> float:
                    return log_prior(x) + log_likelihood(x, self.data)
    """

    def __call__(self, params: np.ndarray) -> float:
        """
        Evaluate the log kernel.

        Args:
            params: Parameter vector of shape (d, 1).

        Returns:
            Log kernel value (may be -inf).
        """
        ...


@dataclass(frozen=True)
class RWMetropolisModel:
    """
    Immutable description of a random walk Metropolis problem.

    Attributes:
        dim (int): Number of parameters being estimated.
        log_kernel (LogKernel): Log posterior kernel (log prior + log likelihood).
        proposal (ProposalProtocol): Draws zero-mean steps of shape (dim, 1).
    """

    dim: int
    log_kernel: LogKernel
    proposal: ProposalProtocol

    def __post_init__(self) -> None:
        if isinstance(self.dim, bool) or not hasattr(self.dim, "__index__") or self.dim < 1:
            raise ValueError(f"dim must be a positive integer, got {self.dim!r}.")
        if not callable(self.log_kernel):
            raise TypeError("log_kernel must be callable.")
        if not callable(self.proposal):
            raise TypeError("proposal must be callable.")

    @classmethod
    def from_covariance(
        cls, log_kernel: LogKernel, sigma: Union[float, np.ndarray]
    ) -> "RWMetropolisModel":
        """
        Build a model with a Gaussian random walk proposal.

        Args:
            log_kernel: Log posterior kernel.
            sigma: Step covariance, (d, d) array or a scalar variance for d = 1.

        Returns:
            RWMetropolisModel: Model whose dimension is read off ``sigma``.
        """
        proposal = GaussianRandomWalk(sigma)
        return cls(dim=proposal.dim, log_kernel=log_kernel, proposal=proposal)
