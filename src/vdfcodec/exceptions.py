"""Exception hierarchy for vdfcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from VDFError for easy catching of any vdfcodec-specific error.

Parsing-level anomalies (malformed entry indices, unrecognized field type bytes,
unknown field names) are absorbed by the decoders and never raised; only problems
that indicate a programming or schema mistake surface as exceptions.
"""

from __future__ import annotations


class VDFError(Exception):
    """Base exception for all vdfcodec errors."""

    pass


class SchemaError(VDFError):
    """Raised when a record schema is invalid or cannot be handled.

    Examples:
        - Attribute annotation has no wire type (e.g. float, dict)
        - Unknown wire type passed to the binder or encoder
        - Schema with no attributes
        - Last attribute is not list-typed (entry ends would never be detected)
    """

    pass


class EncodeError(VDFError):
    """Raised when writing records fails.

    Examples:
        - Integer outside the signed 32-bit range
        - String or list element containing the sentinel byte
        - Record is not an instance of the schema's model
    """

    pass


class DecodeError(VDFError):
    """Raised when a byte stream cannot be decoded at all.

    Examples:
        - Stream does not start with the expected header
        - Input is not a bytes-like object
    """

    pass
