import os

import h5py
import numpy as np
import pytest
from unittest.mock import patch

from rwmcmc.core.config import SamplerConfig
from rwmcmc.core.errors import DatasetAllocationError
from rwmcmc.core.model import RWMetropolisModel
from rwmcmc.core.state import ChainState
from rwmcmc.kernels.metropolis import metropolis_step
from rwmcmc.samplers import single_chain
from rwmcmc.samplers.single_chain import RWMsampler, run_rwm
from rwmcmc.sinks.memory import InMemorySink
from rwmcmc.utils.io import load_samples

# --------------------------------------------------
# Mock classes
# --------------------------------------------------
def standard_normal(x):
    return -0.5 * float(np.sum(x**2))

class RecordingSink:
    """Sink that records every emitted position."""
    def __init__(self):
        self.positions = []

    def emit(self, position):
        self.positions.append(position.copy())

    def finalize(self):
        return self.positions

class AlternatingKernel:
    """Accepts every other step: uphill on odd calls, -inf on even calls."""
    def __init__(self):
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return 0.0 if self.calls % 2 == 1 else -np.inf

# --------------------------------------------------
# Fixtures
# --------------------------------------------------
@pytest.fixture
def model():
    return RWMetropolisModel.from_covariance(standard_normal, np.eye(2))

@pytest.fixture
def initial_state(model):
    return ChainState.initial(model, np.zeros(2))

# --------------------------------------------------
# Tests
# --------------------------------------------------
def test_sampler_initialization(model, initial_state):
    sampler = RWMsampler(model, initial_state, 100)
    assert sampler.model is model
    assert sampler.state is initial_state
    assert sampler.n_samples == 100
    assert sampler.config == SamplerConfig()
    assert sampler.n_iterations == 1000 + 100 * 5
    assert sampler.acceptance_rate is None

def test_sampler_rejects_dimension_mismatch(model):
    state = ChainState(position=np.zeros((3, 1)), log_kernel=0.0)
    with pytest.raises(ValueError):
        RWMsampler(model, state, 10)

@pytest.mark.parametrize("n_samples", [0, -5, 2.5])
def test_sampler_rejects_bad_n_samples(model, initial_state, n_samples):
    with pytest.raises(ValueError):
        RWMsampler(model, initial_state, n_samples)

def test_step_count_and_emissions(model, initial_state):
    """burn + n_samples * skip steps, one emission every skip-th collection step."""
    sampler = RWMsampler(model, initial_state, 7, SamplerConfig(burn=11, skip=3))
    sink = RecordingSink()
    with patch.object(single_chain, "metropolis_step", wraps=metropolis_step) as step:
        sampler.run(sink)
    assert step.call_count == 11 + 7 * 3
    assert len(sink.positions) == 7

def test_acceptance_rate_excludes_burn_in():
    """Kernel accepts on odd calls only; with skip=2 every kept step is a rejection."""
    kernel = AlternatingKernel()
    model = RWMetropolisModel(dim=1, log_kernel=kernel, proposal=lambda: np.ones((1, 1)))
    state = ChainState(position=np.zeros((1, 1)), log_kernel=-1.0)

    # Burn-in of 3 uses calls 1-3; collection step i is kernel call 3 + i,
    # so kept steps (i even) land on odd calls and are accepted.
    sampler = RWMsampler(model, state, 5, SamplerConfig(burn=3, skip=2))
    rate = sampler.run(RecordingSink())
    assert rate == 1.0

    kernel.calls = 0
    state = ChainState(position=np.zeros((1, 1)), log_kernel=-1.0)
    sampler = RWMsampler(model, state, 5, SamplerConfig(burn=2, skip=2))
    rate = sampler.run(RecordingSink())
    assert rate == 0.0
    assert sampler.acceptance_rate == 0.0

def test_acceptance_rate_in_unit_interval(model, initial_state):
    np.random.seed(3)
    sampler = RWMsampler(model, initial_state, 200, SamplerConfig(burn=10, skip=2))
    rate = sampler.run(InMemorySink(2, 200))
    assert 0.0 <= rate <= 1.0

def test_skip_one_returns_raw_trajectory(model):
    """With skip=1 the output equals the chain positions after burn-in."""
    np.random.seed(7)
    state = ChainState.initial(model, np.zeros(2))
    samples = run_rwm(model, state, 50, burn=20, skip=1)

    np.random.seed(7)
    manual = ChainState.initial(model, np.zeros(2))
    for _ in range(20):
        metropolis_step(model, manual)
    trajectory = []
    for _ in range(50):
        metropolis_step(model, manual)
        trajectory.append(manual.position.ravel().copy())

    assert samples.shape == (2, 50)
    assert np.array_equal(samples, np.column_stack(trajectory))
    # The caller's state ends at the last kept sample
    assert np.array_equal(state.position.ravel(), samples[:, -1])

def test_thinning_keeps_every_skip_th_position(model):
    np.random.seed(11)
    state = ChainState.initial(model, np.zeros(2))
    thinned = run_rwm(model, state, 10, burn=5, skip=3)

    np.random.seed(11)
    state = ChainState.initial(model, np.zeros(2))
    raw = run_rwm(model, state, 30, burn=5, skip=1)

    assert np.array_equal(thinned, raw[:, 2::3])

def test_run_rwm_defaults(model, initial_state):
    np.random.seed(0)
    samples = run_rwm(model, initial_state, 20)
    assert samples.shape == (2, 20)

def test_standard_normal_moments():
    """dim 1, N(0, 1) target, unit proposal variance: moments match the target."""
    model = RWMetropolisModel.from_covariance(standard_normal, 1.0)
    for seed in (1, 2, 3):
        np.random.seed(seed)
        state = ChainState.initial(model, 0.0)
        samples = run_rwm(model, state, 10000, burn=1000, skip=5)

        assert samples.shape == (1, 10000)
        assert abs(np.mean(samples)) < 0.05
        assert abs(np.var(samples) - 1.0) < 0.1

def test_out_of_support_is_never_visited():
    """Kernel -inf for negative values: the chain stays on the support."""
    def half_normal(x):
        return -0.5 * float(x[0, 0] ** 2) if x[0, 0] >= 0 else -np.inf

    np.random.seed(5)
    model = RWMetropolisModel.from_covariance(half_normal, 1.0)
    state = ChainState.initial(model, 1.0)
    samples = run_rwm(model, state, 500, burn=100, skip=2)
    assert np.all(samples >= 0.0)

def test_run_rwm_validates_before_sampling(model, initial_state):
    with patch.object(single_chain, "metropolis_step") as step:
        for kwargs in ({"skip": 0}, {"burn": -1}, {"burn": 0}, {"buffer_capacity": 0, "persist": True}):
            with pytest.raises(ValueError):
                run_rwm(model, initial_state, 10, **kwargs)
        with pytest.raises(ValueError):
            run_rwm(model, initial_state, 0)
    step.assert_not_called()

def test_run_rwm_persist_dataset_shape(model, initial_state, tmp_path):
    """Persisted runs return None and write a (dim, n_samples) dataset."""
    np.random.seed(21)
    path = str(tmp_path / "Samples")
    result = run_rwm(model, initial_state, 100, burn=10, skip=2, persist=True,
                     dataset_name=path, buffer_capacity=30)

    assert result is None
    assert os.path.exists(path)
    with h5py.File(path, "r") as f:
        assert f["params"].shape == (2, 100)
        assert f["params"].attrs["populated"] == 100

def test_run_rwm_persist_matches_memory(model, tmp_path):
    path = str(tmp_path / "Samples")

    np.random.seed(99)
    state = ChainState.initial(model, np.zeros(2))
    in_memory = run_rwm(model, state, 100, burn=10, skip=2)

    np.random.seed(99)
    state = ChainState.initial(model, np.zeros(2))
    run_rwm(model, state, 100, burn=10, skip=2, persist=True, dataset_name=path, buffer_capacity=30)

    assert np.array_equal(load_samples(path), in_memory)

def test_run_rwm_persist_baseline_drops_tail(model, tmp_path):
    """flush_partial=False: only flush_count * buffer_capacity columns are populated."""
    path = str(tmp_path / "Samples")

    np.random.seed(4)
    state = ChainState.initial(model, np.zeros(2))
    in_memory = run_rwm(model, state, 100, burn=10, skip=2)

    np.random.seed(4)
    state = ChainState.initial(model, np.zeros(2))
    run_rwm(model, state, 100, burn=10, skip=2, persist=True, dataset_name=path,
            buffer_capacity=30, flush_partial=False)

    full = load_samples(path)
    populated = load_samples(path, populated_only=True)
    assert full.shape == (2, 100)
    assert populated.shape == (2, 90)
    assert np.array_equal(populated, in_memory[:, :90])
    assert np.all(full[:, 90:] == 0.0)

def test_run_rwm_allocation_failure_before_sampling(model, initial_state, tmp_path):
    path = str(tmp_path / "no_such_dir" / "Samples")
    with patch.object(single_chain, "metropolis_step") as step:
        with pytest.raises(DatasetAllocationError):
            run_rwm(model, initial_state, 10, persist=True, dataset_name=path)
    step.assert_not_called()

def test_progress_logging(model, initial_state):
    sampler = RWMsampler(model, initial_state, 10, SamplerConfig(burn=1, skip=2, print_iteration=5))
    with patch.object(single_chain.logger, "info") as info:
        sampler.run(RecordingSink())
    messages = [call[0][0] for call in info.call_args_list]
    assert [m for m in messages if m.startswith("Iteration")] == [
        "Iteration 5/20", "Iteration 10/20", "Iteration 15/20", "Iteration 20/20"
    ]
    assert messages[-1].startswith("Acceptance rate was")
