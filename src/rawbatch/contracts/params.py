"""Parameter derivation contract."""

from rawbatch.contracts.base import require
from rawbatch.core.models import ProcessingParams


def assert_processing_params(params: ProcessingParams, fbin: int, tbin: int) -> None:
    """Enforce parameter derivation contract.

    Binning factors are never below 1, and explicit (non-default) caller
    binning is never replaced by derived values.

    Parameters
    ----------
    params : ProcessingParams
        Output of ``derive_parameters``
    fbin, tbin : int
        Binning factors supplied by the caller

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        params.fbin >= 1 and params.tbin >= 1,
        f"Parameter contract violated: fbin={params.fbin}, tbin={params.tbin}, expected >= 1"
    )
    if not (fbin == 1 and tbin == 1):
        require(
            (params.fbin, params.tbin) == (fbin, tbin),
            f"Parameter contract violated: explicit binning ({fbin}, {tbin}) "
            f"replaced by ({params.fbin}, {params.tbin})"
        )
