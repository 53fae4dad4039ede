"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully
validated and frozen; runtime code reads fields directly, never with
``.get()`` or fallback defaults.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from rawbatch.schemas.base import RawBatchBaseModel


class InternalBinningConfig(RawBatchBaseModel):
    """Runtime binning targets."""
    target_channels: int = Field(ge=1)
    target_tsamp_usec: float = Field(gt=0)


class InternalConverterConfig(RawBatchBaseModel):
    """Runtime converter configuration."""
    executable: str
    env_script: Optional[str]
    extra_path: list[str]


class InternalLoggingConfig(RawBatchBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    log_file: Optional[str]


class InternalReportConfig(RawBatchBaseModel):
    """Runtime report configuration."""
    summary_csv: Optional[str]


class InternalConfig(RawBatchBaseModel):
    """Authoritative runtime configuration.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.executable = config.converter.executable  # NOT .get()
    """

    fbin: int = Field(ge=1)
    tbin: int = Field(ge=1)
    njobs: int = Field(ge=1)
    nbeams: Optional[int] = Field(ge=1)
    offset: int
    dual: bool
    output_dir: Optional[str]
    scan: Optional[str]
    binning: InternalBinningConfig
    converter: InternalConverterConfig
    logging: InternalLoggingConfig
    report: InternalReportConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
