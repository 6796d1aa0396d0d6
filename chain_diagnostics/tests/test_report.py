import logging

import numpy as np
import pandas as pd
import pytest

from chain_diagnostics.config import DiagnosticsConfig
from chain_diagnostics.diagnostics.ess import effective_sample_size, split_effective_sample_size
from chain_diagnostics.diagnostics.report import COLUMNS, summarize_chain_files, summarize_parameter
from chain_diagnostics.scripts.run_diagnostics import main


def _write_chains(tmp_path, n_chains=2, n_draws=200, seed=0):
    rng = np.random.default_rng(seed)
    paths = []
    for c in range(n_chains):
        draws = np.column_stack([rng.normal(size=n_draws), np.full(n_draws, 1.5)])
        path = tmp_path / f"chain{c}.csv"
        with open(path, "w", encoding="utf-8") as f:
            f.write("mu,sigma\n")
            for row in draws:
                f.write(f"{row[0]:.17g},{row[1]:.17g}\n")
        paths.append(str(path))
    return paths


def test_summarize_parameter_split_and_plain():
    chains = np.random.default_rng(1).normal(size=(2, 100))
    split_row = summarize_parameter("mu", chains)
    assert list(split_row.columns) == COLUMNS
    assert split_row.loc[0, "ess"] == pytest.approx(split_effective_sample_size(chains))
    assert split_row.loc[0, "error"] is None

    plain_row = summarize_parameter("mu", chains, cfg=DiagnosticsConfig(split=False))
    assert plain_row.loc[0, "ess"] == pytest.approx(effective_sample_size(chains))
    assert plain_row.loc[0, "n_chains"] == 2
    assert plain_row.loc[0, "n_draws"] == 100


def test_summarize_parameter_records_failure(caplog):
    with caplog.at_level(logging.WARNING, logger="chain_diagnostics"):
        row = summarize_parameter("const", [[2.0] * 10, [2.0] * 10])
    assert row.loc[0, "error"] == "degenerate"
    assert np.isnan(row.loc[0, "ess"])
    assert "const" in caplog.text


def test_summarize_chain_files(tmp_path):
    paths = _write_chains(tmp_path)
    table = summarize_chain_files(paths, cfg=DiagnosticsConfig(skip_rows=1))
    assert list(table["parameter"]) == ["param_0", "param_1"]
    assert pd.isna(table.loc[0, "error"])
    assert np.isfinite(table.loc[0, "rhat"])
    assert table.loc[1, "error"] == "degenerate"


def test_cli_writes_table(tmp_path):
    paths = _write_chains(tmp_path, n_chains=3, n_draws=60, seed=2)
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("skip_rows: 1\nlogging:\n  level: ERROR\n")
    out = tmp_path / "out" / "table.csv"
    assert main([*paths, "--config", str(cfg_path), "--n_rows", "50", "--out", str(out)]) == 0
    table = pd.read_csv(out)
    assert list(table.columns) == COLUMNS
    assert table.loc[0, "n_draws"] == 50
    assert table.loc[0, "n_chains"] == 3


def test_failed_parameter_keeps_no_partial_metrics():
    # ESS succeeds on chains constant at different values; Rhat then fails.
    row = summarize_parameter("x", [[1.0] * 10, [2.0] * 10])
    assert row.loc[0, "error"] == "degenerate"
    assert row[["ess", "rhat", "mcse"]].isna().to_numpy().all()
