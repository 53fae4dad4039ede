"""Pipeline contracts: fail-fast enforcement of stage invariants.

Contracts fail immediately and loudly when a pipeline stage does not
produce its promised invariants. Bad raw data is not a contract violation
(see ``rawbatch.core.errors``); a stage handing the next stage an
inconsistent record is.

Key principle:
- Pydantic validates config and record field types
- Contracts validate pipeline correctness
- Domain errors handle bad data and failed conversions
"""

from rawbatch.contracts.failure import ContractViolation, FailurePolicy
from rawbatch.contracts.base import require
from rawbatch.contracts.scan import assert_scan_group
from rawbatch.contracts.params import assert_processing_params
from rawbatch.contracts.conversion import assert_conversion_succeeded

__all__ = [
    "ContractViolation",
    "FailurePolicy",
    "require",
    "assert_scan_group",
    "assert_processing_params",
    "assert_conversion_succeeded",
]
