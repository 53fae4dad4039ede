"""Processing parameter derivation.

Precedence: explicit (non-default) binning always wins; in dual mode the
default sentinel ``fbin = tbin = 1`` is replaced by binning derived from
the header so that the downsampled product lands near the target channel
count and sampling time.
"""

import logging
import math
from typing import Optional

from rawbatch.core.models import ProcessingParams, ScanMetadata

__all__ = [
    'DEFAULT_TARGET_CHANNELS',
    'DEFAULT_TARGET_TSAMP_USEC',
    'needs_binning_derivation',
    'derive_binning',
    'derive_parameters',
]

logger = logging.getLogger(__name__)

DEFAULT_TARGET_CHANNELS = 1024
DEFAULT_TARGET_TSAMP_USEC = 13107.2


def needs_binning_derivation(fbin: int, tbin: int, dual: bool) -> bool:
    """True when binning will be taken from the header."""
    return dual and fbin == 1 and tbin == 1


def derive_binning(
    channels: int,
    sampling_time_usec: float,
    target_channels: int = DEFAULT_TARGET_CHANNELS,
    target_tsamp_usec: float = DEFAULT_TARGET_TSAMP_USEC,
) -> tuple[int, int]:
    """Default (fbin, tbin) for a header.

    Examples
    --------
    >>> derive_binning(2048, 40.0)
    (2, 327)
    >>> derive_binning(512, 20000.0)
    (1, 1)
    """
    if channels > target_channels:
        fbin = channels // target_channels
    else:
        fbin = 1

    if sampling_time_usec < target_tsamp_usec:
        tbin = math.floor(target_tsamp_usec / sampling_time_usec)
    else:
        tbin = 1

    return max(fbin, 1), max(tbin, 1)


def derive_parameters(
    metadata: ScanMetadata,
    fbin: int = 1,
    tbin: int = 1,
    dual: bool = True,
    njobs: int = 16,
    offset: int = 0,
    nbeams: Optional[int] = None,
    target_channels: int = DEFAULT_TARGET_CHANNELS,
    target_tsamp_usec: float = DEFAULT_TARGET_TSAMP_USEC,
) -> ProcessingParams:
    """Final converter parameters for one scan.

    Parameters
    ----------
    metadata : ScanMetadata
        Parsed header. Must carry ``channels`` and ``sampling_time_usec``
        when derivation applies.
    fbin, tbin : int
        Caller binning. ``(1, 1)`` means "not overridden".
    dual : bool
        Dual mode. Derivation only happens in dual mode.
    njobs, offset : int
        Passed through.
    nbeams : int, optional
        Explicit beam count; defaults to the header's beams per host.
    """
    if needs_binning_derivation(fbin, tbin, dual):
        if metadata.channels is None or metadata.sampling_time_usec is None:
            raise ValueError("channels and sampling_time_usec are required to derive binning")
        fbin, tbin = derive_binning(
            metadata.channels,
            metadata.sampling_time_usec,
            target_channels,
            target_tsamp_usec,
        )
        logger.info("Derived binning from header: fbin=%d, tbin=%d", fbin, tbin)

    return ProcessingParams(
        fbin=fbin,
        tbin=tbin,
        njobs=njobs,
        nbeams=nbeams if nbeams is not None else metadata.beams_per_host,
        offset=offset,
        dual=dual,
    )
