"""
Summary statistics and chain-set helpers shared by the estimators.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Union

import numpy as np

from chain_diagnostics.errors import EmptyInputError, InsufficientDrawsError, NonFiniteError

ChainSet = List[np.ndarray]
ChainsLike = Union[np.ndarray, Sequence[Sequence[float]]]


def _as_array(values: Iterable[float]) -> np.ndarray:
    if isinstance(values, np.ndarray):
        return values.astype(float, copy=False).reshape(-1)
    return np.asarray(list(values), dtype=float)


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean."""

    arr = _as_array(values)
    if arr.size == 0:
        raise EmptyInputError("Can't take mean of empty array")
    return float(arr.sum() / arr.size)


def sample_variance(values: Iterable[float]) -> float:
    """Sample variance with Bessel's correction (divide by n - 1)."""

    arr = _as_array(values)
    if arr.size == 0:
        raise EmptyInputError("Can't take variance of empty array")
    if arr.size < 2:
        raise InsufficientDrawsError(
            "Sample variance needs at least 2 values", data={"n": int(arr.size), "required": 2}
        )
    xbar = mean(arr)
    return float(((arr - xbar) ** 2).sum() / (arr.size - 1.0))


def as_chain_set(chains: ChainsLike) -> ChainSet:
    """Convert the input to a list of 1-D float64 arrays, one per chain."""

    if isinstance(chains, np.ndarray):
        if chains.ndim == 1:
            raise ValueError("chains must be 2-D (one row per chain); wrap a single chain in a list")
        return [np.asarray(row, dtype=np.float64) for row in chains]
    chain_set = [np.asarray(c, dtype=np.float64) for c in chains]
    if any(c.ndim == 0 for c in chain_set):
        raise ValueError("chains must be 2-D (one row per chain); wrap a single chain in a list")
    return [c.reshape(-1) for c in chain_set]


def effective_length(chains: ChainSet) -> int:
    """Number of draws common to every chain (the shortest chain's length)."""

    if len(chains) == 0:
        raise EmptyInputError("No chains supplied")
    return min(int(c.shape[0]) for c in chains)


def trim_chains(chains: ChainSet) -> ChainSet:
    """Trim every chain from the back to the effective length."""

    n = effective_length(chains)
    return [c[:n] for c in chains]


def pooled_draws(chains: ChainSet) -> np.ndarray:
    """All draws of the chain set concatenated in chain order."""

    if len(chains) == 0:
        return np.empty(0, dtype=np.float64)
    return np.concatenate(chains)


def require_finite(chains: ChainSet) -> None:
    """Raise NonFiniteError at the first NaN or infinite draw."""

    for c_idx, chain in enumerate(chains):
        bad = np.flatnonzero(~np.isfinite(chain))
        if bad.size:
            i = int(bad[0])
            raise NonFiniteError(
                "All values must be finite",
                data={"chain": c_idx, "index": i, "value": float(chain[i])},
            )
