"""Centralized failure policy.

Contract violations always fail fast. Recoverable per-scan failures
(bad headers, failed conversions) follow the run's FailurePolicy.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """What to do when one scan fails.

    SKIP_SCAN: Record the failure and continue with the next scan (batch)
    ABORT_RUN: Stop the whole run and exit non-zero (single scan)
    """
    SKIP_SCAN = "skip_scan"
    ABORT_RUN = "abort_run"


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad raw data. It means a
    stage did not produce the invariants it promised.
    """
    pass
