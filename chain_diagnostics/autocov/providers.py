"""
Lag autocovariance of a single chain.

Both providers return a sequence of the same length as the chain where
index k is the lag-k autocovariance with biased (divide-by-N) normalization,
so index 0 is the biased variance. The ESS estimator relies on exactly this
normalization.
"""

from __future__ import annotations

from typing import Dict, Protocol, Type

import numpy as np


class AutocovarianceProvider(Protocol):
    def __call__(self, draws: np.ndarray) -> np.ndarray:
        ...


class FFTAutocovariance:
    """Autocovariance via zero-padded FFT, O(N log N)."""

    name = "fft"

    def __call__(self, draws: np.ndarray) -> np.ndarray:
        x = np.asarray(draws, dtype=np.float64)
        n = x.shape[0]
        if n == 0:
            return np.empty(0, dtype=np.float64)
        centered = x - x.mean()
        # Pad to at least 2N so the circular correlation equals the linear one.
        n_fft = 1 << int(2 * n - 1).bit_length()
        spec = np.fft.rfft(centered, n=n_fft)
        acov = np.fft.irfft(np.abs(spec) ** 2, n=n_fft)[:n]
        return acov / n


class DirectAutocovariance:
    """Autocovariance by direct summation over lags, O(N^2)."""

    name = "direct"

    def __call__(self, draws: np.ndarray) -> np.ndarray:
        x = np.asarray(draws, dtype=np.float64)
        n = x.shape[0]
        centered = x - x.mean() if n else x
        acov = np.empty(n, dtype=np.float64)
        for lag in range(n):
            acov[lag] = np.dot(centered[: n - lag], centered[lag:]) / n
        return acov


_PROVIDERS: Dict[str, Type] = {
    FFTAutocovariance.name: FFTAutocovariance,
    DirectAutocovariance.name: DirectAutocovariance,
}


def get_provider(name: str = "fft") -> AutocovarianceProvider:
    """Look up a provider by name ("fft" or "direct")."""

    try:
        return _PROVIDERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown autocovariance provider {name!r}; expected one of {sorted(_PROVIDERS)}") from None
