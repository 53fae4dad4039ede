"""AHDR header parsing.

Header files are plain text with one ``Key = Value`` pair per line. Only
five keys matter to the launcher; all other lines are ignored.

Example header (abridged)::

    Date                     = 05/03/2025
    IST Time                 = 15:04:31.250
    Total No. of Beams/host  = 10
    Channels                 = 4096
    Sampling time (uSec)     = 1310.72
"""

import logging
from pathlib import Path
from typing import Optional

from rawbatch.core.errors import (
    MalformedField,
    MetadataMissingFile,
    MissingRequiredField,
)
from rawbatch.core.models import ScanGroup, ScanMetadata

__all__ = ['read_header', 'parse_metadata', 'parse_scan_metadata']

logger = logging.getLogger(__name__)

DATE = "Date"
IST_TIME = "IST Time"
BEAMS_PER_HOST = "Total No. of Beams/host"
CHANNELS = "Channels"
SAMPLING_TIME = "Sampling time"

# Numeric keys may carry a unit qualifier after the name, e.g. "Sampling time (uSec)".
_EXACT_KEYS = (DATE, IST_TIME)
_PREFIX_KEYS = (BEAMS_PER_HOST, CHANNELS, SAMPLING_TIME)


def _recognize(key: str) -> Optional[str]:
    if key in _EXACT_KEYS:
        return key
    for name in _PREFIX_KEYS:
        if key == name:
            return name
        if key.startswith(name) and not key[len(name)].isalnum():
            return name
    return None


def read_header(path: Path) -> dict[str, str]:
    """Read recognized ``Key = Value`` pairs from a header file.

    Lines are split on the first ``=`` and both sides are stripped. Only
    the first occurrence of each key is kept.

    Raises
    ------
    MetadataMissingFile
        If the file does not exist or cannot be read.
    """
    path = Path(path)
    try:
        text = path.read_text(errors="replace")
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        raise MetadataMissingFile(scan_name=path.name, path=path) from e

    values = {}
    for line in text.splitlines():
        if "=" not in line:
            continue
        raw_key, raw_value = line.split("=", 1)
        key = _recognize(raw_key.strip())
        if key is not None and key not in values:
            values[key] = raw_value.strip()
    return values


def _require(values: dict, key: str, path: Path) -> str:
    if key not in values:
        raise MissingRequiredField(key, path)
    return values[key]


def _as_int(values: dict, key: str, path: Path) -> int:
    raw = _require(values, key, path)
    try:
        return int(raw)
    except ValueError:
        raise MalformedField(key, raw, path) from None


def _as_float(values: dict, key: str, path: Path) -> float:
    raw = _require(values, key, path)
    try:
        return float(raw)
    except ValueError:
        raise MalformedField(key, raw, path) from None


def parse_metadata(path: Path, require_binning_fields: bool = False) -> ScanMetadata:
    """Parse and validate one header file.

    Parameters
    ----------
    path : Path
        Header file (``*.raw.<n>.ahdr``).
    require_binning_fields : bool
        If True, ``Channels`` and ``Sampling time`` must be present
        (binning will be derived from them).

    Returns
    -------
    ScanMetadata

    Raises
    ------
    MetadataMissingFile
        If the file cannot be read.
    MissingRequiredField
        If ``Date``/``IST Time`` are absent (raw files may be corrupted or
        empty), if beams-per-host is absent, or if a binning field is absent
        while required.
    MalformedField
        If a numeric field does not parse.
    """
    path = Path(path)
    values = read_header(path)

    date = _require(values, DATE, path)
    ist_time = _require(values, IST_TIME, path)
    beams_per_host = _as_int(values, BEAMS_PER_HOST, path)
    logger.info("Total No. of Beams/host = %d", beams_per_host)

    channels = None
    sampling_time_usec = None
    if require_binning_fields:
        channels = _as_int(values, CHANNELS, path)
        sampling_time_usec = _as_float(values, SAMPLING_TIME, path)
        logger.info("Channels: %d, Sampling Time (uSec): %s", channels, sampling_time_usec)

    return ScanMetadata(
        date=date,
        ist_time=ist_time,
        beams_per_host=beams_per_host,
        channels=channels,
        sampling_time_usec=sampling_time_usec,
    )


def parse_scan_metadata(group: ScanGroup, require_binning_fields: bool = False) -> ScanMetadata:
    """Parse the first header file of a scan.

    Raises
    ------
    MetadataMissingFile
        If the scan has no header file.
    """
    if not group.metadata_files:
        raise MetadataMissingFile(group.scan_name)
    if len(group.metadata_files) > 1:
        logger.debug("Scan %s has %d header files, using %s",
                     group.scan_name, len(group.metadata_files), group.metadata_files[0].name)
    try:
        return parse_metadata(group.metadata_files[0], require_binning_fields)
    except MetadataMissingFile as e:
        raise MetadataMissingFile(group.scan_name, e.path) from e
