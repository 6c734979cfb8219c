"""
Example: Bayesian linear regression sampled with random walk Metropolis.

The noise variance gets an inverse gamma prior whose parameters are matched to
a prior mean and standard deviation. The chain is streamed to an HDF5 file,
read back and summarised with credible sets.
"""

import os

import numpy as np
from scipy import stats

from rwmcmc import (
    ChainState,
    RWMetropolisModel,
    credible_set,
    inverse_gamma_params,
    load_samples,
    run_rwm,
)


class RegressionPosterior:
    """
    Log posterior kernel of y = b0 + b1 * x + e, e ~ N(0, s2).

    Parameters are (b0, b1, s2); s2 <= 0 is outside the support.
    """

    def __init__(self, x: np.ndarray, y: np.ndarray, s2_mean: float = 1.0, s2_std: float = 1.0):
        self.x = x
        self.y = y
        self.alpha, self.beta = inverse_gamma_params(s2_mean, s2_std)

    def __call__(self, params: np.ndarray) -> float:
        b0, b1, s2 = params[:, 0]
        if s2 <= 0:
            return -np.inf

        log_prior = (
            stats.norm.logpdf(b0, 0.0, 10.0)
            + stats.norm.logpdf(b1, 0.0, 10.0)
            + stats.invgamma.logpdf(s2, self.alpha, scale=self.beta)
        )
        resid = self.y - b0 - b1 * self.x
        log_likelihood = np.sum(stats.norm.logpdf(resid, 0.0, np.sqrt(s2)))

        return float(log_prior + log_likelihood)


def main(output_dir: str = "regression_output"):
    np.random.seed(0)
    os.makedirs(output_dir, exist_ok=True)

    # Simulated data
    x = np.linspace(0.0, 5.0, 200)
    y = 1.0 + 2.0 * x + np.sqrt(0.5) * np.random.randn(x.size)

    model = RWMetropolisModel.from_covariance(
        RegressionPosterior(x, y), np.diag([0.01, 0.001, 0.005])
    )
    state = ChainState.initial(model, np.array([0.0, 0.0, 1.0]))

    path = os.path.join(output_dir, "Samples")
    run_rwm(model, state, 20000, burn=2000, skip=5, persist=True,
            dataset_name=path, buffer_capacity=5000, print_iteration=20000)

    samples = load_samples(path)
    for name, row in zip(["b0", "b1", "s2"], samples):
        lower, upper = credible_set(row, 95)
        print(f"{name}: mean {np.mean(row):.3f}, 95% C.S. [{lower:.3f}, {upper:.3f}]")


if __name__ == "__main__":
    main()
