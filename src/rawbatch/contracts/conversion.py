"""Post-processing precondition.

Source segments are destroyed after conversion; this must never happen
unless the converter reported success for the same scan.
"""

from rawbatch.contracts.base import require


def assert_conversion_succeeded(result, scan_name: str) -> None:
    """Enforce that ``result`` is a successful conversion of ``scan_name``.

    Raises
    ------
    ContractViolation
        If the result is missing, failed, or belongs to another scan
    """
    require(
        result is not None,
        f"Conversion contract violated: no conversion result for scan '{scan_name}'"
    )
    require(
        result.scan_name == scan_name,
        f"Conversion contract violated: result for '{result.scan_name}' used for '{scan_name}'"
    )
    require(
        result.succeeded,
        f"Conversion contract violated: scan '{scan_name}' exited with {result.exit_code}, "
        "refusing to delete source segments"
    )
