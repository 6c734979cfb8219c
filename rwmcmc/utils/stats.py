"""
Statistical helpers for analysing sampler output.

These functions are independent of the sampler itself and operate on plain
arrays.
"""

# Imports
from typing import Tuple

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import spsolve

from rwmcmc.utils.logging import RWMLogger

logger = RWMLogger.get_logger(__name__)

def credible_set(data: np.ndarray, cs_percent: float) -> Tuple[float, float]:
    """
    Order-statistic credible set of a one-dimensional sample.

    Parameters
    ----------
    data : (N,) array
        Samples of a single parameter
    cs_percent : float
        Mass of the set, either as a fraction in (0, 1) or a percentage in
        (0, 100). Any other value logs a warning and a 90% set is returned.

    Returns
    -------
    (lower, upper) : tuple of float
        Entries of the sorted data at ranks floor(tail/2 * N) and
        floor((1 - tail/2) * N), 0-indexed, where tail = 1 - mass.
    """
    data = np.ravel(np.asarray(data, dtype=float))
    n = data.size
    if n == 0:
        raise ValueError("credible_set needs at least one sample.")

    # Mass left in the two tails
    if 0 < cs_percent < 1:
        tail_mass = 1.0 - cs_percent
    elif 0 < cs_percent < 100:
        tail_mass = 1.0 - cs_percent / 100
    else:
        logger.warning(f"Invalid cs_percent={cs_percent}; returning 90% credible set")
        tail_mass = 0.1

    sorted_data = np.sort(data)
    lb = int(np.floor((tail_mass / 2) * n))
    ub = min(int(np.floor((1.0 - tail_mass / 2) * n)), n - 1)

    return float(sorted_data[lb]), float(sorted_data[ub])

def hp_filter(y: np.ndarray, lamb: float = 1600.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Hodrick-Prescott decomposition of a series into cycle and trend.

    The trend solves (I + lamb * K'K) trend = y with K the second difference
    operator. The system matrix is pentadiagonal and is assembled directly.

    Parameters
    ----------
    y : (n,) array
        Series to decompose, n >= 4
    lamb : float
        Smoothing parameter (1600 for quarterly data)

    Returns
    -------
    cycle : (n,) array
        y - trend
    trend : (n,) array
        Smooth component
    """
    y = np.ravel(np.asarray(y, dtype=float))
    n = y.size
    if n < 4:
        raise ValueError(f"hp_filter needs at least 4 observations, got {n}.")

    diag2 = lamb * np.ones(n - 2)
    diag1 = np.concatenate(([-2 * lamb], -4 * lamb * np.ones(n - 3), [-2 * lamb]))
    diag0 = np.concatenate((
        [1 + lamb, 1 + 5 * lamb],
        (1 + 6 * lamb) * np.ones(n - 4),
        [1 + 5 * lamb, 1 + lamb],
    ))

    D = sparse.diags([diag2, diag1, diag0, diag1, diag2], [-2, -1, 0, 1, 2], format="csc")

    trend = spsolve(D, y)
    cycle = y - trend

    return cycle, trend

def inverse_gamma_params(mean: float, std: float) -> Tuple[float, float]:
    """
    Method of moments parameters of an inverse gamma distribution.

    Parameters
    ----------
    mean : float
        Target mean
    std : float
        Target standard deviation

    Returns
    -------
    (alpha, beta) : tuple of float
        Shape and scale with alpha = (std/mean)^2 + 2, beta = mean * (alpha - 1)
    """
    if mean == 0:
        raise ValueError("mean must be non-zero.")

    alpha = (std / mean) ** 2 + 2
    beta = mean * (alpha - 1)

    return alpha, beta
