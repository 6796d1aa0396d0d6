"""
Per-parameter diagnostic table.

A parameter whose chains cannot be diagnosed gets NaN metrics and the failure
kind in the `error` column; the failure is logged, never dropped.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from chain_diagnostics.autocov.providers import get_provider
from chain_diagnostics.config import DiagnosticsConfig
from chain_diagnostics.data.chain_loader import load_chain_sets
from chain_diagnostics.diagnostics.ess import effective_sample_size, split_effective_sample_size
from chain_diagnostics.diagnostics.mcse import monte_carlo_standard_error
from chain_diagnostics.diagnostics.rhat import potential_scale_reduction, split_potential_scale_reduction
from chain_diagnostics.errors import DiagnosticError
from chain_diagnostics.stats.summary import ChainSet, as_chain_set

COLUMNS = ["parameter", "n_chains", "n_draws", "ess", "rhat", "mcse", "error"]


def summarize_parameter(
    name: str,
    chains: ChainSet,
    cfg: Optional[DiagnosticsConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> pd.DataFrame:
    cfg = cfg or DiagnosticsConfig()
    log = logger or logging.getLogger(__name__)
    chain_set = as_chain_set(chains)
    provider = get_provider(cfg.autocovariance)
    tol = cfg.degenerate_tolerance
    row: Dict[str, object] = {
        "parameter": name,
        "n_chains": len(chain_set),
        "n_draws": min((len(c) for c in chain_set), default=0),
        "ess": np.nan,
        "rhat": np.nan,
        "mcse": np.nan,
        "error": None,
    }
    try:
        if cfg.split:
            ess = split_effective_sample_size(chain_set, autocov=provider, tolerance=tol)
            rhat = split_potential_scale_reduction(chain_set)
        else:
            ess = effective_sample_size(chain_set, autocov=provider, tolerance=tol)
            rhat = potential_scale_reduction(chain_set)
        mcse = monte_carlo_standard_error(chain_set, autocov=provider, tolerance=tol)
        row.update(ess=ess, rhat=rhat, mcse=mcse)
    except DiagnosticError as exc:
        log.warning("Parameter %s not diagnosable: %s", name, exc)
        row["error"] = exc.kind.value
    return pd.DataFrame([row], columns=COLUMNS)


def summarize_chain_sets(
    chain_sets: Dict[int, ChainSet],
    cfg: Optional[DiagnosticsConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> pd.DataFrame:
    frames = [summarize_parameter(f"param_{j}", chains, cfg=cfg, logger=logger) for j, chains in chain_sets.items()]
    if not frames:
        return pd.DataFrame(columns=COLUMNS)
    return pd.concat(frames, ignore_index=True)


def summarize_chain_files(
    paths: Iterable[str],
    cfg: Optional[DiagnosticsConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> pd.DataFrame:
    """Load one CSV per chain and diagnose every selected column."""

    cfg = cfg or DiagnosticsConfig()
    log = logger or logging.getLogger(__name__)
    chain_sets = load_chain_sets(
        paths,
        skip_rows=cfg.skip_rows,
        n_rows=cfg.n_rows,
        columns=cfg.columns,
        logger=log,
    )
    log.info("Diagnostics start (parameters=%d, split=%s)", len(chain_sets), cfg.split)
    table = summarize_chain_sets(chain_sets, cfg=cfg, logger=log)
    n_failed = int(table["error"].notna().sum()) if len(table) else 0
    log.info("Diagnostics end (parameters=%d, not diagnosable=%d)", len(table), n_failed)
    return table
