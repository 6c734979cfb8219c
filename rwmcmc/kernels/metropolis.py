"""
Random walk Metropolis update
"""

# Imports
from typing import Tuple

import numpy as np

from rwmcmc.core.model import RWMetropolisModel
from rwmcmc.core.state import ChainState


def propose(model: RWMetropolisModel, state: ChainState) -> Tuple[np.ndarray, float]:
    """
    Generate a candidate position and evaluate the log kernel there.

    Exactly one draw is taken from the model's proposal. A flat (d,) step is
    reshaped to the (d, 1) position; a step of any other size raises ValueError.
    """
    candidate = state.position + np.reshape(model.proposal(), state.position.shape)
    return candidate, float(model.log_kernel(candidate))


def log_acceptance_ratio(candidate_kernel: float, current_kernel: float) -> float:
    """
    Log Metropolis acceptance ratio for a symmetric proposal.

    A candidate with kernel -inf gives -inf. The undefined -inf - -inf gives
    nan, which also compares False against any log(u) and therefore rejects.
    """
    with np.errstate(invalid="ignore"):
        return float(np.subtract(candidate_kernel, current_kernel))


def metropolis_step(model: RWMetropolisModel, state: ChainState) -> None:
    """
    Advance the chain by one random walk Metropolis step, in place.

    The candidate is accepted when log(u) < log acceptance ratio with
    u ~ Uniform(0, 1). On acceptance both position and log kernel are
    replaced; on rejection only ``state.accepted`` changes.
    """
    candidate, candidate_kernel = propose(model, state)
    log_ratio = log_acceptance_ratio(candidate_kernel, state.log_kernel)

    # rand() can return exactly 0.0
    with np.errstate(divide="ignore"):
        log_u = np.log(np.random.rand())

    if log_u < log_ratio:
        state.position = candidate
        state.log_kernel = candidate_kernel
        state.accepted = True
    else:
        state.accepted = False
