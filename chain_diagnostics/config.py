"""
Run configuration for the diagnostics driver.

Values come from a YAML file; unknown keys are ignored so one file can carry
settings for other tools.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from chain_diagnostics.diagnostics.ess import DEGENERATE_TOL


@dataclass
class DiagnosticsConfig:
    skip_rows: int = 0
    n_rows: Optional[int] = None
    columns: Optional[List[int]] = None  # None = every column
    autocovariance: str = "fft"  # or "direct"
    degenerate_tolerance: float = DEGENERATE_TOL
    split: bool = True
    logging: Dict[str, Any] = field(default_factory=lambda: {"level": "INFO"})

    @property
    def log_level(self) -> int:
        return getattr(logging, str(self.logging.get("level", "INFO")).upper())

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DiagnosticsConfig":
        valid = set(cls.__dataclass_fields__)
        cfg = cls(**{k: v for k, v in d.items() if k in valid})
        if cfg.skip_rows < 0:
            raise ValueError(f"skip_rows must be >= 0, got {cfg.skip_rows}")
        if cfg.n_rows is not None and cfg.n_rows < 1:
            raise ValueError(f"n_rows must be >= 1 or null, got {cfg.n_rows}")
        if cfg.degenerate_tolerance < 0.0:
            raise ValueError("degenerate_tolerance must be non-negative")
        return cfg

    @classmethod
    def from_yaml(cls, path: str) -> "DiagnosticsConfig":
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        return cls.from_dict(raw or {})
