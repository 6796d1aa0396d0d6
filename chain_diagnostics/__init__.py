"""
MCMC convergence diagnostics for posterior draws.

Implements the Stan reference-manual estimators for effective sample size
(Geyer's initial monotone sequence), potential scale reduction (Rhat), their
split-chain variants, and the Monte Carlo standard error. Estimators are pure
functions of the supplied chains and are independent of the sampler that
produced them.
"""

from chain_diagnostics.diagnostics.ess import effective_sample_size, split_effective_sample_size
from chain_diagnostics.diagnostics.mcse import monte_carlo_standard_error
from chain_diagnostics.diagnostics.rhat import potential_scale_reduction, split_potential_scale_reduction
from chain_diagnostics.diagnostics.splitting import split_chains
from chain_diagnostics.errors import (
    DegenerateError,
    DiagnosticError,
    EmptyInputError,
    FailureKind,
    InsufficientDrawsError,
    NonFiniteError,
)

__all__ = [
    "split_chains",
    "effective_sample_size",
    "split_effective_sample_size",
    "potential_scale_reduction",
    "split_potential_scale_reduction",
    "monte_carlo_standard_error",
    "DiagnosticError",
    "EmptyInputError",
    "InsufficientDrawsError",
    "NonFiniteError",
    "DegenerateError",
    "FailureKind",
]
