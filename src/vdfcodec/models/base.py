"""Base record class and vdfcodec-specific Pydantic configuration.

This module provides the BaseRecord class that typed VDF records should inherit from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BaseRecord(BaseModel):
    """Base class for all typed VDF records.

    Records declare their wire attributes with ``VDFField()``. The schema used for
    decoding and encoding is derived once from those declarations, in declaration
    order; that order is also the order attributes are written to the stream, and
    the last one must be a ``list[str]``.

    Example:
        >>> from typing import Optional
        >>> class Game(BaseRecord):
        ...     app_id: int = VDFField("appid", default=0)
        ...     name: Optional[str] = VDFField("AppName", default=None)
        ...     tags: list[str] = VDFField("tags", default_factory=list)

    Attributes:
        index: Position of the entry in the stream. Filled in from the parsed entry
            index on decode; ignored on encode, where entries are numbered 0, 1, 2...
    """

    model_config = ConfigDict(
        # Strict validation by default
        strict=False,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    index: int = Field(default=0, ge=0)
