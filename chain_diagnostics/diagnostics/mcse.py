"""
Monte Carlo standard error of the posterior mean.

See the Stan reference manual section "Estimation of MCMC Standard Error".
"""

from __future__ import annotations

import math
from typing import Optional

from chain_diagnostics.autocov.providers import AutocovarianceProvider
from chain_diagnostics.diagnostics.ess import DEGENERATE_TOL, effective_sample_size
from chain_diagnostics.errors import DegenerateError, EmptyInputError
from chain_diagnostics.stats.summary import ChainsLike, as_chain_set, pooled_draws, sample_variance, trim_chains


def monte_carlo_standard_error(
    chains: ChainsLike,
    autocov: Optional[AutocovarianceProvider] = None,
    tolerance: float = DEGENERATE_TOL,
) -> float:
    """
    sqrt(sample variance of the pooled draws / ESS).

    Short chains can yield tau_hat <= 0 and hence a non-positive ESS; the
    standard error is undefined then and DegenerateError is raised.
    """

    chain_set = as_chain_set(chains)
    ess = effective_sample_size(chain_set, autocov=autocov, tolerance=tolerance)
    draws = pooled_draws(trim_chains(chain_set))
    if draws.size == 0:
        raise EmptyInputError("No pooled draws")
    if not math.isfinite(ess) or ess <= 0.0:
        # The log10 cap is positive, so a non-positive ESS is total_draws / tau_hat uncapped.
        tau_hat = draws.size / ess if ess != 0.0 else float("inf")
        raise DegenerateError(
            "No MCSE when the effective sample size is not positive",
            data={"ess": ess, "tau_hat": tau_hat},
        )
    return math.sqrt(sample_variance(draws) / ess)
