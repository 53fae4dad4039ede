"""Base Pydantic model with strict defaults for rawbatch configs.

All config schemas inherit from this base to ensure consistent validation
behavior across parameter, user, CLI, and internal configs.
"""

from pydantic import BaseModel, ConfigDict


class RawBatchBaseModel(BaseModel):
    """Base model for all rawbatch configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Strips whitespace from strings
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
