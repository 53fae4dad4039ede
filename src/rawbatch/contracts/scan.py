"""Scan group contract.

Enforces the partition invariant of a discovered scan: every file belongs
to the scan, lives in the source directory, and is either a segment or a
header, never both.
"""

from rawbatch.contracts.base import require
from rawbatch.core.models import ScanGroup

METADATA_SUFFIX = ".ahdr"


def assert_scan_group(group: ScanGroup) -> None:
    """Enforce scan group contract.

    Called on every group before metadata parsing.

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        len(group.segment_files) > 0,
        f"Scan contract violated: scan '{group.scan_name}' has no segment files"
    )

    for path in group.segment_files + group.metadata_files:
        require(
            path.name.startswith(group.scan_name),
            f"Scan contract violated: '{path.name}' does not belong to scan '{group.scan_name}'"
        )
        require(
            path.parent == group.source_dir,
            f"Scan contract violated: '{path}' is outside '{group.source_dir}'"
        )

    require(
        not any(p.name.endswith(METADATA_SUFFIX) for p in group.segment_files),
        f"Scan contract violated: header file listed as segment in scan '{group.scan_name}'"
    )
    require(
        all(p.name.endswith(METADATA_SUFFIX) for p in group.metadata_files),
        f"Scan contract violated: segment file listed as header in scan '{group.scan_name}'"
    )
