"""Random walk Metropolis sampling with chunked HDF5 persistence."""

from rwmcmc.core.config import SamplerConfig
from rwmcmc.core.errors import DatasetAllocationError
from rwmcmc.core.model import LogKernel, RWMetropolisModel
from rwmcmc.core.state import ChainState
from rwmcmc.kernels.metropolis import metropolis_step
from rwmcmc.proposals.gaussianproposal import GaussianRandomWalk
from rwmcmc.samplers.single_chain import RWMsampler, run_rwm
from rwmcmc.sinks.hdf5 import ChunkedHDF5Sink
from rwmcmc.sinks.memory import InMemorySink
from rwmcmc.utils.io import load_samples
from rwmcmc.utils.stats import credible_set, hp_filter, inverse_gamma_params

__version__ = "0.1.0"

__all__ = [
    "ChainState",
    "ChunkedHDF5Sink",
    "DatasetAllocationError",
    "GaussianRandomWalk",
    "InMemorySink",
    "LogKernel",
    "RWMetropolisModel",
    "RWMsampler",
    "SamplerConfig",
    "credible_set",
    "hp_filter",
    "inverse_gamma_params",
    "load_samples",
    "metropolis_step",
    "run_rwm",
]
