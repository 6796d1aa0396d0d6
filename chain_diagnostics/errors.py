"""
Failure taxonomy for the diagnostics.

Every estimator validates its input eagerly and raises one of the errors
below before computing anything. Each error carries a `kind` and a `data`
payload with the offending value or the violated requirement so the caller
can decide whether the parameter is diagnosable at all.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class FailureKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    INSUFFICIENT_DRAWS = "insufficient_draws"
    NON_FINITE = "non_finite"
    DEGENERATE = "degenerate"


class DiagnosticError(ValueError):
    """Raised when chains cannot be diagnosed."""

    kind: FailureKind

    def __init__(self, message: str, data: Optional[Dict[str, Any]] = None):
        self.message = message
        self.data = data or {}
        super().__init__(f"[{self.kind.value}] {message} | data={self.data}")


class EmptyInputError(DiagnosticError):
    """No chains, or no draws common to all chains."""

    kind = FailureKind.EMPTY_INPUT


class InsufficientDrawsError(DiagnosticError):
    """Fewer draws (or chains) than the operation needs."""

    kind = FailureKind.INSUFFICIENT_DRAWS


class NonFiniteError(DiagnosticError):
    kind = FailureKind.NON_FINITE


class DegenerateError(DiagnosticError):
    """All draws are identical, so the estimate is undefined."""

    kind = FailureKind.DEGENERATE
