"""ParamConfig: Expert defaults for the rawbatch launcher.

ALL tunable parameters must have defaults here. Runtime code never reads
ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from rawbatch.schemas.base import RawBatchBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class BinningConfig(RawBatchBaseModel):
    """Targets used to derive default binning in dual mode."""
    target_channels: int = Field(1024, ge=1, description="Channel count after downsampling")
    target_tsamp_usec: float = Field(13107.2, gt=0, description="Sampling time after downsampling (us)")

    @field_validator("target_tsamp_usec", mode="before")
    @classmethod
    def coerce_tsamp_to_float(cls, v):
        """Allow int or float for the target sampling time."""
        return float(v)


class ConverterConfig(RawBatchBaseModel):
    """External converter and its environment."""
    executable: str = "xtract2fil"
    env_script: Optional[str] = Field(None, description="Shell profile sourced once before conversions")
    extra_path: list[str] = Field(default_factory=list, description="Directories prepended to PATH")


class LoggingConfig(RawBatchBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None


class ReportConfig(RawBatchBaseModel):
    """End-of-run summary output."""
    summary_csv: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(RawBatchBaseModel):
    """Complete expert configuration with all defaults.

    ``fbin = tbin = 1`` is the "not overridden" sentinel: in dual mode it
    lets the header drive binning. ``nbeams = None`` means the header's
    beams-per-host is used.
    """

    fbin: int = Field(1, ge=1)
    tbin: int = Field(1, ge=1)
    njobs: int = Field(16, ge=1)
    nbeams: Optional[int] = Field(None, ge=1)
    offset: int = 0
    dual: bool = True
    output_dir: Optional[str] = None
    scan: Optional[str] = None
    binning: BinningConfig = Field(default_factory=BinningConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
