"""Per-scan stages that decide *what* to run.

- discovery: Group raw files into scans
- metadata: Parse and validate AHDR headers
- params: Derive converter parameters
- layout: Plan output directories
"""

from rawbatch.scan.discovery import discover_scans, filter_observation_dirs, group_from_files
from rawbatch.scan.metadata import parse_metadata, parse_scan_metadata
from rawbatch.scan.params import derive_binning, derive_parameters
from rawbatch.scan.layout import plan_output, metadata_destinations

__all__ = [
    "discover_scans",
    "filter_observation_dirs",
    "group_from_files",
    "parse_metadata",
    "parse_scan_metadata",
    "derive_binning",
    "derive_parameters",
    "plan_output",
    "metadata_destinations",
]
