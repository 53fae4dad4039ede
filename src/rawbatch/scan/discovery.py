"""Scan discovery.

Groups the raw files of an observation directory into per-scan sets of
segments (``<scan>.raw.<index>``) and headers (``<scan>.raw.<index>.ahdr``),
and resolves the explicit file list of a single-scan run into the same
ScanGroup record.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Union

from rawbatch.core.errors import EmptyDiscovery, InputNotFound
from rawbatch.core.models import ScanGroup

__all__ = [
    'RAW_FILE_PATTERN',
    'METADATA_SUFFIX',
    'is_metadata_file',
    'scan_name_from_path',
    'discover_scans',
    'filter_observation_dirs',
    'filter_existing_files',
    'group_from_files',
]

logger = logging.getLogger(__name__)

RAW_FILE_PATTERN = re.compile(r"^(?P<scan>.+)\.raw\.(?P<index>\d+)(?P<ahdr>\.ahdr)?$")
METADATA_SUFFIX = ".ahdr"
FIRST_SEGMENT_SUFFIX = ".raw.0"


def is_metadata_file(path: Path) -> bool:
    return Path(path).name.endswith(METADATA_SUFFIX)


def _segment_index(path: Path) -> int:
    match = RAW_FILE_PATTERN.match(path.name)
    return int(match.group("index")) if match else -1


def scan_name_from_path(path: Path) -> str:
    """Scan name of a raw file: its name with ``.raw.0`` stripped.

    Like ``basename --suffix .raw.0``, a name without that suffix is
    returned unchanged.
    """
    name = Path(path).name
    if name.endswith(FIRST_SEGMENT_SUFFIX) and name != FIRST_SEGMENT_SUFFIX:
        return name[: -len(FIRST_SEGMENT_SUFFIX)]
    return name


def _raw_files(directory: Path) -> list[Path]:
    return [p for p in directory.iterdir() if p.is_file() and RAW_FILE_PATTERN.match(p.name)]


def discover_scans(directory: Path) -> tuple[ScanGroup, ...]:
    """Group the raw files of ``directory`` into ScanGroups.

    Parameters
    ----------
    directory : Path
        Observation directory holding ``*.raw.*`` files.

    Returns
    -------
    tuple of ScanGroup
        Sorted by scan name. Scans that only have header files are left out
        (with a warning); a scan without headers is still returned so the
        metadata stage can report it.
    """
    directory = Path(directory)
    segments: dict[str, list[Path]] = {}
    headers: dict[str, list[Path]] = {}

    for path in _raw_files(directory):
        scan = RAW_FILE_PATTERN.match(path.name).group("scan")
        target = headers if is_metadata_file(path) else segments
        target.setdefault(scan, []).append(path)

    for scan in sorted(set(headers) - set(segments)):
        logger.warning("Header files without raw segments ignored for scan %s in %s", scan, directory)

    groups = tuple(
        ScanGroup(
            scan_name=scan,
            source_dir=directory,
            segment_files=tuple(sorted(segments[scan], key=_segment_index)),
            metadata_files=tuple(sorted(headers.get(scan, []), key=_segment_index)),
        )
        for scan in sorted(segments)
    )
    logger.debug("Discovered %d scan(s) in %s", len(groups), directory)
    return groups


def filter_observation_dirs(
    directories: Iterable[Path],
) -> tuple[tuple[Path, ...], tuple[Union[InputNotFound, EmptyDiscovery], ...]]:
    """Split input directories into usable and dropped ones.

    A directory is dropped (with a warning) when it does not exist or holds
    no raw files. The input is never modified.

    Returns
    -------
    kept : tuple of Path
    dropped : tuple of InputNotFound or EmptyDiscovery
        One entry per dropped directory, in input order.
    """
    kept = []
    dropped = []
    for directory in directories:
        directory = Path(directory)
        if not directory.is_dir():
            reason = InputNotFound(directory, "directory")
        elif not _raw_files(directory):
            reason = EmptyDiscovery(directory)
        else:
            kept.append(directory)
            continue
        logger.warning("Warning: %s", reason)
        dropped.append(reason)
    return tuple(kept), tuple(dropped)


def filter_existing_files(files: Iterable[Path]) -> tuple[Path, ...]:
    """Keep the files that exist, warning about each one that does not."""
    existing = []
    for path in files:
        path = Path(path)
        if path.exists():
            existing.append(path)
        else:
            logger.warning("Warning: %s", InputNotFound(path))
    return tuple(existing)


def group_from_files(files: Iterable[Path], scan_name: Optional[str] = None) -> ScanGroup:
    """Build the ScanGroup of a single-scan run from explicit file paths.

    Header files given on the command line are treated as headers; the
    ``<segment>.ahdr`` sibling of each segment is picked up when it exists.
    Segment order follows the command line.

    Parameters
    ----------
    files : iterable of Path
        Absolute paths of existing raw files.
    scan_name : str, optional
        Scan name override. Defaults to the first file name with
        ``.raw.0`` stripped.
    """
    files = [Path(f) for f in files]
    segment_files = tuple(f for f in files if not is_metadata_file(f))
    explicit_headers = [f for f in files if is_metadata_file(f)]

    metadata_files = []
    for segment in segment_files:
        sibling = segment.with_name(segment.name + METADATA_SUFFIX)
        if sibling.is_file() and sibling not in metadata_files:
            metadata_files.append(sibling)
    for header in explicit_headers:
        if header not in metadata_files:
            metadata_files.append(header)

    first = segment_files[0] if segment_files else files[0]
    return ScanGroup(
        scan_name=scan_name or scan_name_from_path(first),
        source_dir=first.parent,
        segment_files=segment_files,
        metadata_files=tuple(metadata_files),
    )
