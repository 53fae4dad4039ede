"""Domain errors raised by pipeline stages.

Key distinction:
- ValueError / ValidationError: user or config error (handled by Pydantic)
- RawBatchError: bad input data or a failed external tool (recoverable per scan)
- ContractViolation: pipeline bug (see ``rawbatch.contracts``)
"""

from pathlib import Path
from typing import Optional


class RawBatchError(Exception):
    """Base class for recoverable, per-scan failures."""
    pass


class InputNotFound(RawBatchError):
    """A user-supplied file or directory does not exist."""

    def __init__(self, path: Path, kind: str = "file"):
        self.path = Path(path)
        super().__init__(f"{kind} not found: {self.path}")


class EmptyDiscovery(RawBatchError):
    """A directory yielded no raw segment files."""

    def __init__(self, directory: Path):
        self.path = Path(directory)
        super().__init__(f"no raw files found in directory: {self.path}")


class MetadataError(RawBatchError):
    """Scan header could not be used."""
    pass


class MetadataMissingFile(MetadataError):
    """No header file exists (or it cannot be read) for the scan."""

    def __init__(self, scan_name: str, path: Optional[Path] = None):
        self.scan_name = scan_name
        self.path = path
        where = f": {path}" if path else ""
        super().__init__(f"AHDR file not found for scan {scan_name}{where}")


class MissingRequiredField(MetadataError):
    """A required header key is absent."""

    def __init__(self, field: str, path: Path):
        self.field = field
        self.path = Path(path)
        super().__init__(f"'{field}' line missing in AHDR file: {self.path}")


class MalformedField(MetadataError):
    """A header value does not parse as the expected numeric type."""

    def __init__(self, field: str, value: str, path: Path):
        self.field = field
        self.value = value
        self.path = Path(path)
        super().__init__(f"Failed to parse '{field}' = '{value}' from AHDR file: {self.path}")


class ConversionFailed(RawBatchError):
    """The converter exited with a non-zero status."""

    def __init__(self, scan_name: str, exit_code: int):
        self.scan_name = scan_name
        self.exit_code = exit_code
        super().__init__(f"xtract2fil failed for scan {scan_name} with exit code: {exit_code}")


class PostProcessFailed(RawBatchError):
    """Segment deletion or header copy failed after a successful conversion.

    The scan may be left half cleaned up: some segments deleted, some
    headers not copied.
    """

    def __init__(self, scan_name: str, reason: str):
        self.scan_name = scan_name
        self.reason = reason
        super().__init__(f"post-processing failed for scan {scan_name}: {reason}")


class EnvironmentBootstrapError(RawBatchError):
    """The converter toolchain environment could not be prepared."""
    pass
