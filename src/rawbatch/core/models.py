"""Immutable per-scan records passed between pipeline stages.

Every stage takes an explicit record and returns an explicit record;
nothing is shared across scans. Records are frozen pydantic models so a
stage cannot mutate what an earlier stage produced.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class RawBatchRecord(BaseModel):
    """Base for all runtime records (frozen, no extra fields)."""

    model_config = ConfigDict(
        extra='forbid',
        frozen=True,
        use_enum_values=False,
    )


class ScanGroup(RawBatchRecord):
    """Raw segments and header files of one scan in one directory.

    ``segment_files`` and ``metadata_files`` are ordered by segment index.
    """
    scan_name: str
    source_dir: Path
    segment_files: tuple[Path, ...] = ()
    metadata_files: tuple[Path, ...] = ()


class ScanMetadata(RawBatchRecord):
    """Instrument header values of one scan.

    ``channels`` and ``sampling_time_usec`` are only read when binning is
    auto-derived; otherwise they are None.
    """
    date: str
    ist_time: str
    beams_per_host: int
    channels: Optional[int] = None
    sampling_time_usec: Optional[float] = None


class ProcessingParams(RawBatchRecord):
    """Final converter parameters for one scan."""
    fbin: int = Field(ge=1)
    tbin: int = Field(ge=1)
    njobs: int = Field(ge=1)
    nbeams: int
    offset: int
    dual: bool


class RunMode(str, Enum):
    """Input mode resolved from the first positional argument."""
    SINGLE_SCAN = "single_scan"
    DIRECTORY_BATCH = "directory_batch"


class OutputPlan(RawBatchRecord):
    """Resolved destination for converted output and relocated headers."""
    root_dir: Path
    relative_subpath: Path = Path(".")

    @property
    def destination(self) -> Path:
        return self.root_dir / self.relative_subpath


class ScanStatus(str, Enum):
    """Outcome of one scan (or one dropped directory)."""
    SUCCESS = "success"
    SKIPPED_INVALID_METADATA = "skipped_invalid_metadata"
    SKIPPED_DISCOVERY_EMPTY = "skipped_discovery_empty"
    CONVERSION_FAILED = "conversion_failed"
    POSTPROCESS_FAILED = "postprocess_failed"


class ScanOutcome(RawBatchRecord):
    """Reported result of one unit of work."""
    scan_name: Optional[str] = None
    source_dir: Path
    status: ScanStatus
    exit_code: Optional[int] = None
    message: Optional[str] = None
    destination: Optional[Path] = None


class BatchReport(RawBatchRecord):
    """Everything a finished run has to report."""
    mode: RunMode
    outcomes: tuple[ScanOutcome, ...] = ()
    exit_code: int = 0

    def counts(self) -> dict[str, int]:
        """Number of outcomes per status (statuses with zero are included)."""
        counts = {status.value: 0 for status in ScanStatus}
        for outcome in self.outcomes:
            counts[outcome.status.value] += 1
        return counts

    def to_frame(self) -> pd.DataFrame:
        """Outcomes as a DataFrame, one row per scan, in processing order."""
        columns = ["scan_name", "source_dir", "status", "exit_code", "destination", "message"]
        rows = [
            {
                "scan_name": o.scan_name,
                "source_dir": str(o.source_dir),
                "status": o.status.value,
                "exit_code": o.exit_code,
                "destination": str(o.destination) if o.destination else None,
                "message": o.message,
            }
            for o in self.outcomes
        ]
        return pd.DataFrame(rows, columns=columns)
