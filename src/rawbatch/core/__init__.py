"""Core records and domain errors shared by every pipeline stage."""

from rawbatch.core.models import (
    ScanGroup,
    ScanMetadata,
    ProcessingParams,
    OutputPlan,
    RunMode,
    ScanStatus,
    ScanOutcome,
    BatchReport,
)
from rawbatch.core.errors import (
    RawBatchError,
    InputNotFound,
    EmptyDiscovery,
    MetadataError,
    MetadataMissingFile,
    MissingRequiredField,
    MalformedField,
    ConversionFailed,
    PostProcessFailed,
    EnvironmentBootstrapError,
)

__all__ = [
    'ScanGroup',
    'ScanMetadata',
    'ProcessingParams',
    'OutputPlan',
    'RunMode',
    'ScanStatus',
    'ScanOutcome',
    'BatchReport',
    'RawBatchError',
    'InputNotFound',
    'EmptyDiscovery',
    'MetadataError',
    'MetadataMissingFile',
    'MissingRequiredField',
    'MalformedField',
    'ConversionFailed',
    'PostProcessFailed',
    'EnvironmentBootstrapError',
]
