"""
Potential scale reduction (Rhat) following the Stan reference manual.

Based on stan/analyze/mcmc/compute_potential_scale_reduction.hpp (Stan v2.24.0).
"""

from __future__ import annotations

import math

import numpy as np

from chain_diagnostics.diagnostics.splitting import split_chains
from chain_diagnostics.errors import DegenerateError, EmptyInputError, InsufficientDrawsError
from chain_diagnostics.stats.summary import (
    ChainsLike,
    as_chain_set,
    effective_length,
    mean,
    require_finite,
    sample_variance,
    trim_chains,
)


def potential_scale_reduction(chains: ChainsLike) -> float:
    """
    Rhat for one parameter. Chains are trimmed from the back to the shortest
    chain; each needs at least 2 draws and there must be at least 2 chains.

    Raises NonFiniteError for NaN or infinite draws and DegenerateError when
    the pooled within-chain variance is zero (every chain constant), where
    the ratio is undefined.
    """

    chain_set = as_chain_set(chains)
    if not chain_set:
        raise EmptyInputError("No chains supplied")
    n = effective_length(chain_set)
    if n < 2:
        raise InsufficientDrawsError(
            "Each chain needs at least 2 draws to compute Rhat", data={"n_draws": n, "required": 2}
        )
    if len(chain_set) < 2:
        raise InsufficientDrawsError(
            "Rhat needs at least 2 chains for the between-chain variance",
            data={"n_chains": len(chain_set), "required": 2},
        )
    trimmed = trim_chains(chain_set)
    require_finite(trimmed)

    chain_mean = np.array([mean(c) for c in trimmed])
    chain_var = np.array([sample_variance(c) for c in trimmed])

    var_between = n * sample_variance(chain_mean)
    var_within = mean(chain_var)
    if var_within <= 0.0:
        raise DegenerateError("Within-chain variance is zero", data={"chain_means": chain_mean.tolist()})
    return math.sqrt((var_between / var_within + n - 1.0) / n)


def split_potential_scale_reduction(chains: ChainsLike) -> float:
    """Rhat after splitting each chain in half (odd N drops the middle draw)."""

    return potential_scale_reduction(split_chains(chains))
