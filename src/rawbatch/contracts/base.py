"""Base contract enforcement utility."""

from rawbatch.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a pipeline contract.

    Parameters
    ----------
    condition : bool
        The invariant that must be true.
    message : str
        Error message explaining the violation.

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require(group.segment_files, "Scan contract: no segment files")
    """
    if not condition:
        raise ContractViolation(message)
