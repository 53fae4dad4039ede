"""CLIConfig: Command-line operational overrides.

Settings that commonly change between runs: binning, parallelism,
dual mode, output root, scan name, verbosity. Values arrive as parsed by
argparse; ``dual`` is accepted as ``true``/``false`` text.
"""

from typing import Literal, Optional
from pydantic import Field
from rawbatch.schemas.base import RawBatchBaseModel


class CLIConfig(RawBatchBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(fbin=4, tbin=10, dual="false")
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    fbin: Optional[int] = Field(None, ge=1)
    tbin: Optional[int] = Field(None, ge=1)
    njobs: Optional[int] = Field(None, ge=1)
    nbeams: Optional[int] = Field(None, ge=1)
    offset: Optional[int] = None
    dual: Optional[bool] = None
    output_dir: Optional[str] = None
    scan: Optional[str] = None
    converter: Optional[str] = None
    env_script: Optional[str] = None
    summary_csv: Optional[str] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        for key in ("fbin", "tbin", "njobs", "nbeams", "offset", "dual", "output_dir", "scan"):
            value = getattr(self, key)
            if value is not None:
                overrides[key] = value

        converter = {}
        if self.converter is not None:
            converter["executable"] = self.converter
        if self.env_script is not None:
            converter["env_script"] = self.env_script
        if converter:
            overrides["converter"] = converter

        if self.summary_csv is not None:
            overrides["report"] = {"summary_csv": self.summary_csv}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
