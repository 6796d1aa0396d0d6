#!/usr/bin/env python
"""
CLI entrypoint: ESS, Rhat and MCSE for every parameter column of a set of chain CSVs.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from chain_diagnostics.config import DiagnosticsConfig
from chain_diagnostics.diagnostics.report import summarize_chain_files

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default_diagnostics.yaml"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute MCMC convergence diagnostics (one CSV file per chain).")
    parser.add_argument("chains", nargs="+", help="Chain CSV files, one per chain.")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG), help="Diagnostics config YAML.")
    parser.add_argument("--skip_rows", type=int, default=None, help="Leading lines to skip (overrides config).")
    parser.add_argument("--n_rows", type=int, default=None, help="Maximum draws per chain (overrides config).")
    parser.add_argument(
        "--no_split",
        action="store_true",
        help="Use plain ESS/Rhat instead of the split-chain variants.",
    )
    parser.add_argument("--out", default=None, help="Write the table to this CSV instead of stdout.")
    return parser.parse_args(argv)


def build_logger(level: int) -> logging.Logger:
    log = logging.getLogger("chain_diagnostics")
    log.setLevel(level)
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    if not log.handlers:
        log.addHandler(ch)
    return log


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = DiagnosticsConfig.from_yaml(args.config)
    if args.skip_rows is not None:
        cfg.skip_rows = args.skip_rows
    if args.n_rows is not None:
        cfg.n_rows = args.n_rows
    if args.no_split:
        cfg.split = False

    log = build_logger(cfg.log_level)
    table = summarize_chain_files(args.chains, cfg=cfg, logger=log)
    if args.out:
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(args.out, index=False)
        log.info("Wrote %d rows to %s", len(table), args.out)
    else:
        print(table.to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
