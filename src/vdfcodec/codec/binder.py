"""Binding of decoded fields onto typed records.

The binder maps a raw ``(name, value)`` pair onto the attribute of a record
schema and coerces the bytes according to the attribute's declared wire type.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import SchemaError
from ..log import logger
from .list_decoder import decode_list
from .schema import AttributeSpec, RecordSchema
from .wire import WireType


@dataclass
class DecodeStats:
    """Counters for anomalies absorbed during decoding.

    Attributes:
        resyncs: Unrecognized type bytes that forced a field resynchronization
        malformed_indices: Entries dropped because their index was not a number
        truncated_entries: Entries committed by flush() without an end marker
        unknown_fields: Fields whose name matched no schema attribute
        dropped_fields: Fields whose value could not be coerced to the declared type
    """

    resyncs: int = 0
    malformed_indices: int = 0
    truncated_entries: int = 0
    unknown_fields: int = 0
    dropped_fields: int = 0


class SchemaBinder:
    """Resolves decoded fields against a record schema.

    Example:
        >>> binder = SchemaBinder(RecordSchema.from_model(Shortcut))
        >>> values = {}
        >>> binder.bind("APPID", b"\\x2a\\x00\\x00\\x00", values)
        True
        >>> values
        {'app_id': 42}
    """

    def __init__(self, schema: RecordSchema, config: CodecConfig = DEFAULT_CONFIG) -> None:
        self.schema = schema
        self.config = config
        self.stats = DecodeStats()

    def bind(self, name: str, raw: bytes, values: dict[str, Any]) -> bool:
        """Coerce a raw field value and store it in a pending record.

        Args:
            name: Decoded field name (matched case-insensitively)
            raw: Raw value bytes
            values: Attribute values of the record under construction

        Returns:
            True if the field was stored, False if it was dropped

        Raises:
            SchemaError: If the matched attribute declares a wire type the binder
                cannot coerce
        """
        attr = self.schema.lookup(name)
        if attr is None:
            self.stats.unknown_fields += 1
            logger.debug("Ignoring field %r: not in %s schema", name, self.schema.model_class.__name__)
            return False

        try:
            value = self.coerce(attr, raw)
        except (ValueError, struct.error) as e:
            self.stats.dropped_fields += 1
            logger.warning("Dropping field %r: %s", name, e)
            return False

        attr.set(values, value)
        return True

    def coerce(self, attr: AttributeSpec, raw: bytes) -> Any:
        """Convert raw value bytes to the Python value of an attribute.

        Raises:
            ValueError: If an integer value is not exactly four bytes
            SchemaError: If the wire type is not supported
        """
        if attr.wire_type is WireType.INTEGER:
            if len(raw) != 4:
                raise ValueError(f"integer value must be 4 bytes, got {len(raw)}")
            return struct.unpack("<i", raw)[0]

        if attr.wire_type is WireType.STRING:
            return raw.decode(self.config.encoding, self.config.errors)

        if attr.wire_type is WireType.STRING_LIST:
            return decode_list(raw, self.config)

        raise SchemaError(
            f"Field {attr.wire_name}: unsupported wire type {attr.wire_type!r} "
            f"for attribute {attr.attribute}"
        )
