"""
Delimited-text chain ingestion.

Assumptions:
- One file per chain, one row per draw, one comma-separated column per parameter.
- No header row after `skip_rows` lines have been skipped (sampler comments
  and the header line are skipped by count).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from chain_diagnostics.stats.summary import ChainSet


def read_chain_csv(
    path: str,
    skip_rows: int = 0,
    n_rows: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> List[np.ndarray]:
    """
    Read one chain file and return one float array per column.

    Parameters
    ----------
    path : str
        CSV file path.
    skip_rows : int
        Leading lines to skip before the first draw.
    n_rows : int, optional
        Maximum number of draws to keep.
    """

    log = logger or logging.getLogger(__name__)
    df = pd.read_csv(path, header=None, skiprows=skip_rows, nrows=n_rows, skip_blank_lines=True)
    missing = df.isna().any(axis=1).to_numpy()
    if missing.any():
        first = int(np.flatnonzero(missing)[0])
        raise ValueError(f"Ragged or empty fields in {path} at draw {first} (line {skip_rows + first + 1})")
    try:
        values = df.to_numpy(dtype=np.float64)
    except ValueError as exc:
        raise ValueError(f"Non-numeric draws in {path}: {exc}") from exc
    log.info("Loaded %d draws x %d parameters from %s (skip_rows=%d)", values.shape[0], values.shape[1], path, skip_rows)
    return [values[:, j].copy() for j in range(values.shape[1])]


def load_chain_sets(
    paths: Iterable[str],
    skip_rows: int = 0,
    n_rows: Optional[int] = None,
    columns: Optional[Iterable[int]] = None,
    logger: Optional[logging.Logger] = None,
) -> Dict[int, ChainSet]:
    """Read one file per chain and regroup the columns into one chain set per parameter."""

    log = logger or logging.getLogger(__name__)
    per_file = [read_chain_csv(p, skip_rows=skip_rows, n_rows=n_rows, logger=log) for p in paths]
    if not per_file:
        return {}
    n_params = {len(cols) for cols in per_file}
    if len(n_params) != 1:
        raise ValueError(f"Chain files disagree on parameter count: {sorted(n_params)}")
    n_cols = n_params.pop()
    wanted = list(columns) if columns is not None else list(range(n_cols))
    out_of_range = [j for j in wanted if not 0 <= j < n_cols]
    if out_of_range:
        raise ValueError(f"Column indices out of range (n_cols={n_cols}): {out_of_range}")
    return {j: [cols[j] for cols in per_file] for j in wanted}
