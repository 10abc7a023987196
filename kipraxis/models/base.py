"""Base model for all data models in the usage core.

This module provides a base Pydantic model with the shared configuration
used by usage records, billing rules and calendar entries.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Models are validated on construction and on assignment, reject unknown
    fields, and are immutable: every computation builds fresh values from
    caller-supplied arguments and discards them afterwards.

    Example:
        >>> class Counter(BaseDataModel):
        ...     minutes: int
        >>> Counter(minutes=5).model_dump()
        {'minutes': 5}
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        frozen=True,
        use_enum_values=False,
    )
