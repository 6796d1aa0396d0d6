import math

import numpy as np
import pytest

from chain_diagnostics.diagnostics.ess import effective_sample_size
from chain_diagnostics.diagnostics.mcse import monte_carlo_standard_error
from chain_diagnostics.errors import DegenerateError, EmptyInputError, InsufficientDrawsError


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_mcse_identity(seed):
    rng = np.random.default_rng(seed)
    chains = rng.normal(loc=1.0, scale=2.0, size=(3, 200)).cumsum(axis=1) * 0.1
    expected = math.sqrt(np.var(chains.ravel(), ddof=1) / effective_sample_size(chains))
    assert monte_carlo_standard_error(chains) == pytest.approx(expected, rel=1e-12)


def test_mcse_pools_trimmed_draws():
    rng = np.random.default_rng(5)
    a, b = rng.normal(size=80), rng.normal(size=60)
    trimmed = [a[:60], b]
    assert monte_carlo_standard_error([a, b]) == pytest.approx(monte_carlo_standard_error(trimmed))


def test_iid_mcse_near_sd_over_sqrt_n():
    chains = np.random.default_rng(6).normal(scale=3.0, size=(4, 1000))
    assert monte_carlo_standard_error(chains) == pytest.approx(3.0 / math.sqrt(4000.0), rel=0.3)


def test_mcse_propagates_ess_failures():
    with pytest.raises(EmptyInputError):
        monte_carlo_standard_error([])
    with pytest.raises(InsufficientDrawsError):
        monte_carlo_standard_error([[1.0, 2.0, 3.0]])
    with pytest.raises(DegenerateError):
        monte_carlo_standard_error([[0.5, 0.5, 0.5, 0.5]])


def test_nonpositive_ess_is_a_typed_failure():
    chain = [[0.3554, -0.6538, -0.1296, 0.7840, 1.4934, -1.2591, 1.5139]]
    assert effective_sample_size(chain) < 0.0
    with pytest.raises(DegenerateError) as info:
        monte_carlo_standard_error(chain)
    assert info.value.data["ess"] < 0.0
    assert info.value.data["tau_hat"] == pytest.approx(7.0 / info.value.data["ess"])
