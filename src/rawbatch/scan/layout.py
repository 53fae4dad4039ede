"""Output directory layout.

Follows the SPOTLIGHT data tree: full-resolution filterbanks go under
``FilData`` and downsampled ones under ``FilData_dwnsmp``. In dual mode
the converter writes both trees itself below the planned destination.

Batch mode (observation directories ``<data>/<obs>/<raw dir>``)::

    dual              -> <root>/<obs>
    no binning        -> <root>/<obs>/FilData
    binning applied   -> <root>/<obs>/FilData_dwnsmp

Single-scan mode::

    dual              -> <root>
    no binning        -> <root>/FilData/<scan>
    binning applied   -> <root>/FilData_dwnsmp/<scan>
"""

from pathlib import Path
from typing import Optional

from rawbatch.core.models import OutputPlan, RunMode

__all__ = [
    'FULL_RES_DIR',
    'DOWNSAMPLED_DIR',
    'default_root',
    'observation_name',
    'plan_output',
    'metadata_destinations',
]

FULL_RES_DIR = "FilData"
DOWNSAMPLED_DIR = "FilData_dwnsmp"


def default_root(first_input: Path) -> Path:
    """Grandparent of the first input (file or directory)."""
    return Path(first_input).parent.parent


def observation_name(directory: Path) -> str:
    """Observation name of a raw directory: the name of its parent."""
    return Path(directory).parent.name


def plan_output(
    mode: RunMode,
    dual: bool,
    fbin: int,
    tbin: int,
    root: Path,
    scan_name: str,
    obs_name: Optional[str] = None,
) -> OutputPlan:
    """Destination of one scan's converted output.

    Raises
    ------
    ValueError
        If ``obs_name`` is missing in batch mode.
    """
    mode = RunMode(mode)
    binned = not (fbin == 1 and tbin == 1)
    tree = DOWNSAMPLED_DIR if binned else FULL_RES_DIR

    if mode is RunMode.DIRECTORY_BATCH:
        if not obs_name:
            raise ValueError("observation name is required in batch mode")
        subpath = Path(obs_name) if dual else Path(obs_name) / tree
    else:
        subpath = Path(".") if dual else Path(tree) / scan_name

    return OutputPlan(root_dir=Path(root), relative_subpath=subpath)


def metadata_destinations(plan: OutputPlan, scan_name: str, dual: bool) -> tuple[Path, ...]:
    """Directories that receive copies of a scan's header files."""
    destination = plan.destination
    if dual:
        return (
            destination / FULL_RES_DIR / scan_name,
            destination / DOWNSAMPLED_DIR / scan_name,
        )
    return (destination,)
