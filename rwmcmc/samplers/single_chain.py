"""
Class file for a single chain random walk Metropolis sampler.
"""

from typing import Optional

import numpy as np

from rwmcmc.core.config import SamplerConfig, validate_n_samples
from rwmcmc.core.model import RWMetropolisModel
from rwmcmc.core.sink import SinkProtocol
from rwmcmc.core.state import ChainState
from rwmcmc.kernels.metropolis import metropolis_step
from rwmcmc.sinks.hdf5 import ChunkedHDF5Sink
from rwmcmc.sinks.memory import InMemorySink
from rwmcmc.utils.logging import RWMLogger

logger = RWMLogger.get_logger(__name__)


class RWMsampler:
    """
    Class for a single chain random walk Metropolis sampler.

    The sampler owns the chain state for the duration of ``run``; nothing
    else reads or writes it until the run returns.

    Attributes:
        model (RWMetropolisModel): Dimension, log kernel and proposal.
        state (ChainState): The chain state, mutated in place by ``run``.
        n_samples (int): Number of samples kept after burn-in and thinning.
        config (SamplerConfig): Burn-in, thinning and logging settings.
        acceptance_rate (Optional[float]): Fraction of kept samples whose step
            was accepted. None until ``run`` has completed.
    """

    def __init__(self, model: RWMetropolisModel, initial_state: ChainState, n_samples: int, config: Optional[SamplerConfig] = None):

        validate_n_samples(n_samples)
        if initial_state.dim != model.dim:
            raise ValueError(
                f"initial_state has dimension {initial_state.dim}, model expects {model.dim}."
            )

        self.model = model
        self.state = initial_state
        self.n_samples = n_samples
        self.config = config if config is not None else SamplerConfig()
        self.acceptance_rate: Optional[float] = None

    @property
    def n_iterations(self) -> int:
        """Total number of Metropolis steps taken by ``run``."""
        return self.config.burn + self.n_samples * self.config.skip

    def burn_in(self) -> None:
        """Take ``config.burn`` steps and discard them."""
        for _ in range(self.config.burn):
            metropolis_step(self.model, self.state)

    def run(self, sink: SinkProtocol) -> float:
        """
        Run burn-in followed by the thinned collection phase.

        Parameters:
        ----------
            sink (SinkProtocol): Receives the position after every
                ``skip``-th collection step. The caller finalizes it.

        Returns:
        -------
            acceptance_rate (float): Accepted kept steps over ``n_samples``.
            Burn-in steps do not count.
        """
        skip = self.config.skip
        print_iteration = self.config.print_iteration
        n_collect = self.n_samples * skip

        self.burn_in()

        accepted = 0
        for i in range(1, n_collect + 1):

            metropolis_step(self.model, self.state)

            if i % skip == 0:
                sink.emit(self.state.position)
                accepted += self.state.accepted

            if print_iteration and i % print_iteration == 0:
                logger.info(f"Iteration {i}/{n_collect}")

        self.acceptance_rate = accepted / self.n_samples
        logger.info(f"Acceptance rate was {self.acceptance_rate:.4f}")
        return self.acceptance_rate


def run_rwm(
    model: RWMetropolisModel,
    initial_state: ChainState,
    n_samples: int,
    burn: int = 1000,
    skip: int = 5,
    persist: bool = False,
    dataset_name: str = "Samples",
    buffer_capacity: int = 25000,
    flush_partial: bool = True,
    print_iteration: int = 0,
) -> Optional[np.ndarray]:
    """
    Run a random walk Metropolis chain and collect its samples.

    All arguments are validated before the first step. With ``persist`` the
    samples go to the HDF5 file ``dataset_name`` (dataset "params") and
    nothing is returned; otherwise the (d, n_samples) array is returned.
    ``initial_state`` is advanced in place and holds the final position of
    the chain afterwards.

    The acceptance rate is only logged here. To read it programmatically,
    build ``RWMsampler(model, initial_state, n_samples, config)`` and use the
    value returned by ``run(sink)``, also stored on ``acceptance_rate``.

    Parameters:
    ----------
        model: Model to sample from.
        initial_state: Starting state, e.g. ``ChainState.initial(model, x0)``.
        n_samples: Number of samples kept.
        burn: Steps discarded before collection.
        skip: Thinning interval.
        persist: Stream samples to disk instead of returning them.
        dataset_name: Path of the HDF5 file when ``persist`` is True.
        buffer_capacity: Samples held in memory between disk flushes.
        flush_partial: Write a final partially filled buffer to disk.
        print_iteration: Progress logging interval, 0 to disable.

    Returns:
    -------
        samples (np.ndarray or None): (d, n_samples) array, or None when persisted.

    Raises:
    ------
        ValueError: If any count is invalid.
        DatasetAllocationError: If the HDF5 dataset cannot be created.
    """
    config = SamplerConfig(
        burn=burn,
        skip=skip,
        persist=persist,
        dataset_name=dataset_name,
        buffer_capacity=buffer_capacity,
        flush_partial=flush_partial,
        print_iteration=print_iteration,
    )
    sampler = RWMsampler(model, initial_state, n_samples, config)

    if not config.persist:
        sink = InMemorySink(model.dim, n_samples)
        sampler.run(sink)
        return sink.finalize()

    with ChunkedHDF5Sink(
        config.dataset_name,
        model.dim,
        n_samples,
        buffer_capacity=config.buffer_capacity,
        flush_partial=config.flush_partial,
    ) as sink:
        sampler.run(sink)
        sink.finalize()
        logger.info(f"Saved {sink.populated} of {n_samples} samples to {config.dataset_name}")
    return None
