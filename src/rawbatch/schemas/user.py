"""UserConfig: Forgiving, minimal user-facing configuration.

Accepts the flat upper-case keys used in user config files (e.g.
``FBIN``, ``DUAL``, ``OUTPUT_DIR``) as well as their lower-case names.
Users only specify what they want to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from rawbatch.schemas.base import RawBatchBaseModel


class UserConverterConfig(RawBatchBaseModel):
    """User-facing converter config."""
    executable: Optional[str] = None
    env_script: Optional[str] = None
    extra_path: Optional[list[str]] = None


class UserBinningConfig(RawBatchBaseModel):
    """User-facing binning targets."""
    target_channels: Optional[int] = None
    target_tsamp_usec: Optional[float] = None


class UserConfig(RawBatchBaseModel):
    """User-facing configuration schema.

    Usage
    -----
        user_cfg = UserConfig(
            NJOBS=32,
            DUAL=False,
            OUTPUT_DIR="/data/filterbanks",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    fbin: Optional[int] = Field(None, alias="FBIN")
    tbin: Optional[int] = Field(None, alias="TBIN")
    njobs: Optional[int] = Field(None, alias="NJOBS")
    nbeams: Optional[int] = Field(None, alias="NBEAMS")
    offset: Optional[int] = Field(None, alias="OFFSET")
    dual: Optional[bool] = Field(None, alias="DUAL")
    output_dir: Optional[str] = Field(None, alias="OUTPUT_DIR")

    # Converter settings (flat aliases)
    converter_executable: Optional[str] = Field(None, alias="CONVERTER")
    env_script: Optional[str] = Field(None, alias="ENV_SCRIPT")

    # Logging and report settings (flat aliases)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, alias="LOG_FILE")
    summary_csv: Optional[str] = Field(None, alias="SUMMARY_CSV")

    # Nested overrides (advanced users)
    converter: Optional[UserConverterConfig] = None
    binning: Optional[UserBinningConfig] = None

    model_config = RawBatchBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        for key in ("fbin", "tbin", "njobs", "nbeams", "offset", "dual", "output_dir"):
            value = getattr(self, key)
            if value is not None:
                overrides[key] = value

        # Converter section
        converter = {}
        if self.converter_executable is not None:
            converter["executable"] = self.converter_executable
        if self.env_script is not None:
            converter["env_script"] = self.env_script
        if self.converter is not None:
            converter.update(self.converter.model_dump(exclude_none=True))
        if converter:
            overrides["converter"] = converter

        if self.binning is not None:
            binning = self.binning.model_dump(exclude_none=True)
            if binning:
                overrides["binning"] = binning

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["log_file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        if self.summary_csv is not None:
            overrides["report"] = {"summary_csv": self.summary_csv}

        return overrides
