"""Post-conversion cleanup.

After a successful conversion the raw segments are deleted and the AHDR
headers are copied next to the filterbank output. Deletion is
irreversible; it is guarded by a contract on the conversion result.
Headers are copied, not moved: the originals stay in the raw directory.
"""

import logging
import shutil
from pathlib import Path
from typing import Sequence

from rawbatch.contracts import assert_conversion_succeeded
from rawbatch.core.errors import PostProcessFailed
from rawbatch.core.models import ScanGroup

__all__ = ['PostProcessor']

logger = logging.getLogger(__name__)


class PostProcessor:
    """Deletes consumed segments and relocates headers for one scan."""

    def run(self, group: ScanGroup, result, header_destinations: Sequence[Path]) -> list[Path]:
        """Clean up after a successful conversion.

        Parameters
        ----------
        group : ScanGroup
            The converted scan.
        result : ConversionResult
            Result of the conversion; must be a success for ``group``.
        header_destinations : sequence of Path
            Directories receiving a copy of every header file.

        Returns
        -------
        list of Path
            Paths of the copied header files.

        Raises
        ------
        ContractViolation
            If ``result`` is not a successful conversion of this scan.
        PostProcessFailed
            If a segment cannot be deleted or a header cannot be copied.
        """
        assert_conversion_succeeded(result, group.scan_name)

        try:
            self.delete_segments(group.segment_files)
            return self.copy_headers(group.metadata_files, header_destinations)
        except OSError as e:
            raise PostProcessFailed(group.scan_name, str(e)) from e

    @staticmethod
    def delete_segments(segment_files: Sequence[Path]) -> None:
        for path in segment_files:
            path.unlink()
        logger.info("Deleted %d raw segment(s)", len(segment_files))

    @staticmethod
    def copy_headers(metadata_files: Sequence[Path], destinations: Sequence[Path]) -> list[Path]:
        copied = []
        for destination in destinations:
            destination = Path(destination)
            destination.mkdir(parents=True, exist_ok=True)
            for header in metadata_files:
                copied.append(Path(shutil.copy2(header, destination)))
        logger.info("Copied %d header file(s) to %s",
                    len(metadata_files), ", ".join(str(d) for d in destinations))
        return copied
