"""
Effective sample size (ESS) following the Stan reference manual.

The estimator combines within-chain autocovariances and between-chain
variance into a rho-hat sequence over lags, truncates it with Geyer's initial
positive sequence, smooths it into an initial monotone sequence and converts
the truncated sum into the integrated autocorrelation time tau-hat.

Based on stan/analyze/mcmc/compute_effective_sample_size.hpp (Stan v2.24.0).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from chain_diagnostics.autocov.providers import AutocovarianceProvider, FFTAutocovariance
from chain_diagnostics.diagnostics.splitting import split_chains
from chain_diagnostics.errors import DegenerateError, EmptyInputError, InsufficientDrawsError
from chain_diagnostics.stats.summary import (
    ChainSet,
    ChainsLike,
    as_chain_set,
    effective_length,
    mean,
    require_finite,
    sample_variance,
    trim_chains,
)

MIN_DRAWS = 4
DEGENERATE_TOL = 1e-10


@dataclass
class RhoHat:
    """Rho-hat sequence after the Geyer passes; `max_s` is where truncation stopped."""

    rho: np.ndarray
    max_s: int
    num_chains: int
    num_draws: int

    def tau_hat(self) -> float:
        # Improved estimate: the trailing rho_even reduces variance for antithetic chains.
        return float(-1.0 + 2.0 * self.rho[: self.max_s].sum() + self.rho[self.max_s + 1])


def _validate(chains: ChainSet, tolerance: float) -> ChainSet:
    if not chains:
        raise EmptyInputError("No chains supplied")
    num_draws = effective_length(chains)
    if num_draws == 0:
        raise EmptyInputError("No draws common to all chains", data={"n_chains": len(chains)})
    if num_draws < MIN_DRAWS:
        raise InsufficientDrawsError(
            f"Must have at least {MIN_DRAWS} samples to compute ESS",
            data={"n_draws": num_draws, "required": MIN_DRAWS},
        )
    trimmed = trim_chains(chains)
    require_finite(trimmed)
    flat = np.concatenate(trimmed)
    if float(flat.max() - flat.min()) < tolerance:
        raise DegenerateError(
            "No ESS when elements are all constant",
            data={"value": float(flat[-1]), "tolerance": tolerance},
        )
    return trimmed


def initial_positive(
    rho: np.ndarray,
    chain_acov: np.ndarray,
    mean_var: float,
    var_plus: float,
) -> int:
    """
    Fill `rho` with Geyer's initial positive sequence and return max_s.

    `rho[0]` and `rho[1]` must already be set. Pairs (rho[s+1], rho[s+2]) are
    committed while their sum stays non-negative; the walk stops at
    num_draws - 4 so the last pair is left for the bias term. If the last
    computed even-lag value is positive it is stored at rho[max_s + 1].
    """

    num_draws = rho.shape[0]
    rho_even = rho[0]
    rho_odd = rho[1]
    s = 1
    while s < num_draws - 4 and rho_even + rho_odd > 0.0:
        rho_even = 1.0 - (mean_var - chain_acov[:, s + 1].mean()) / var_plus
        rho_odd = 1.0 - (mean_var - chain_acov[:, s + 2].mean()) / var_plus
        if rho_even + rho_odd >= 0.0:
            rho[s + 1] = rho_even
            rho[s + 2] = rho_odd
        s += 2

    max_s = s
    if rho_even > 0.0:
        rho[max_s + 1] = rho_even
    return max_s


def initial_monotone(rho: np.ndarray, max_s: int) -> None:
    """Clamp paired sums in place so they are non-increasing up to max_s."""

    s = 1
    while s <= max_s - 3:
        prev_pair = rho[s - 1] + rho[s]
        if rho[s + 1] + rho[s + 2] > prev_pair:
            rho[s + 1] = prev_pair / 2.0
            rho[s + 2] = rho[s + 1]
        s += 2


def rho_hat_sequence(
    chains: ChainsLike,
    autocov: Optional[AutocovarianceProvider] = None,
    tolerance: float = DEGENERATE_TOL,
) -> RhoHat:
    """Validated chains -> monotone rho-hat sequence."""

    provider = autocov or FFTAutocovariance()
    trimmed = _validate(as_chain_set(chains), tolerance)
    num_chains = len(trimmed)
    num_draws = trimmed[0].shape[0]

    chain_acov = np.empty((num_chains, num_draws), dtype=np.float64)
    chain_mean = np.empty(num_chains, dtype=np.float64)
    chain_var = np.empty(num_chains, dtype=np.float64)
    for c, chain in enumerate(trimmed):
        acov = np.asarray(provider(chain), dtype=np.float64)
        if acov.shape[0] != num_draws:
            raise ValueError(
                f"Autocovariance provider returned {acov.shape[0]} lags for a chain of {num_draws} draws"
            )
        chain_acov[c] = acov
        chain_mean[c] = mean(chain)
        chain_var[c] = acov[0] * num_draws / (num_draws - 1.0)

    mean_var = mean(chain_var)
    var_plus = mean_var * (num_draws - 1.0) / num_draws
    if num_chains > 1:
        var_plus += sample_variance(chain_mean)

    rho = np.zeros(num_draws, dtype=np.float64)
    rho[0] = 1.0
    rho[1] = 1.0 - (mean_var - chain_acov[:, 1].mean()) / var_plus

    max_s = initial_positive(rho, chain_acov, mean_var, var_plus)
    initial_monotone(rho, max_s)
    return RhoHat(rho=rho, max_s=max_s, num_chains=num_chains, num_draws=num_draws)


def effective_sample_size(
    chains: ChainsLike,
    autocov: Optional[AutocovarianceProvider] = None,
    tolerance: float = DEGENERATE_TOL,
) -> float:
    """
    Effective sample size of one parameter across chains.

    Chains are trimmed from the back to the shortest chain. Needs at least
    four draws per chain, finite values, and not all draws identical (within
    `tolerance`). The result is capped at total_draws * log10(total_draws).

    Parameters
    ----------
    chains : sequence of 1-D sequences or 2-D array
        One chain per row, all for the same parameter.
    autocov : callable, optional
        Autocovariance provider with biased normalization; FFT by default.
    tolerance : float
        Absolute spread below which all draws count as identical.
    """

    rh = rho_hat_sequence(chains, autocov=autocov, tolerance=tolerance)
    num_total_draws = float(rh.num_chains * rh.num_draws)
    return min(num_total_draws / rh.tau_hat(), num_total_draws * math.log10(num_total_draws))


def split_effective_sample_size(
    chains: ChainsLike,
    autocov: Optional[AutocovarianceProvider] = None,
    tolerance: float = DEGENERATE_TOL,
) -> float:
    """ESS of the chains after splitting each one in half (odd N drops the middle draw)."""

    return effective_sample_size(split_chains(chains), autocov=autocov, tolerance=tolerance)
