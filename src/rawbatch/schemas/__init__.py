"""Pydantic configuration schemas for rawbatch.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from rawbatch.schemas.resolve import resolve_config
from rawbatch.schemas.internal import InternalConfig
from rawbatch.schemas.param import ParamConfig
from rawbatch.schemas.user import UserConfig
from rawbatch.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
