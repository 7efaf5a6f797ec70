"""VDF encoder for Pydantic records.

This module provides the Encoder, which writes typed records to any binary sink
in exactly the byte grammar the EntryDecoder accepts, and the encode() helper
that returns the stream as bytes.
"""

from __future__ import annotations

import io
import struct
from typing import Any, BinaryIO, Optional, Sequence

from pydantic import BaseModel

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError
from .schema import AttributeSpec, RecordSchema
from .wire import END_PAIR, INT32_MAX, INT32_MIN, SENTINEL, FieldType, WireType

_SENTINEL = bytes([SENTINEL])


class Encoder:
    """Schema-driven writer for VDF streams.

    Attributes are written in schema order, entries are numbered by position
    (0, 1, 2, ...) whatever index the records carry, and every entry is closed
    by an end-marker pair. That pair also terminates the trailing list attribute,
    which is why schemas must end with one.

    Example:
        >>> encoder = Encoder(RecordSchema.from_model(Shortcut))
        >>> with open("shortcuts.vdf", "wb") as f:
        ...     encoder.encode(shortcuts, f)
    """

    def __init__(self, schema: RecordSchema, config: CodecConfig = DEFAULT_CONFIG) -> None:
        self.schema = schema
        self.config = config

    def encode(self, records: Sequence[BaseModel], writer: BinaryIO) -> int:
        """Write a complete stream: header, entries and stream terminator.

        Args:
            records: Records to write, in order
            writer: Any object with a ``write(bytes)`` method

        Returns:
            Number of entries written

        Raises:
            EncodeError: If a record or one of its values cannot be written
        """
        writer.write(bytes(self.config.header))
        count = 0
        for index, record in enumerate(records):
            self.write_entry(record, index, writer)
            count += 1
        writer.write(END_PAIR)
        return count

    def write_entry(self, record: BaseModel, index: int, writer: BinaryIO) -> None:
        """Write one entry with the given positional index."""
        if not isinstance(record, self.schema.model_class):
            raise EncodeError(
                f"Expected {self.schema.model_class.__name__}, got {type(record).__name__}"
            )

        writer.write(_SENTINEL + str(index).encode("ascii") + _SENTINEL)
        for attr in self.schema:
            self._write_attribute(attr, attr.get(record), writer)
        writer.write(END_PAIR)

    def _write_attribute(self, attr: AttributeSpec, value: Any, writer: BinaryIO) -> None:
        writer.write(bytes([attr.wire_type.type_code]))
        writer.write(self._text(attr, attr.wire_name) + _SENTINEL)

        if attr.wire_type is WireType.INTEGER:
            writer.write(self._integer(attr, value))
        elif attr.wire_type is WireType.STRING:
            if value is not None:
                writer.write(self._text(attr, value))
            writer.write(_SENTINEL)
        else:
            writer.write(self._string_list(attr, value))

    def _integer(self, attr: AttributeSpec, value: Any) -> bytes:
        if value is None:
            value = 0
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"Field {attr.wire_name}: expected int, got {type(value).__name__}")
        if value < INT32_MIN or value > INT32_MAX:
            raise EncodeError(
                f"Field {attr.wire_name}: value {value} out of bounds [{INT32_MIN}, {INT32_MAX}]"
            )
        return struct.pack("<i", value)

    def _string_list(self, attr: AttributeSpec, value: Any) -> bytes:
        if value is None:
            value = []
        if isinstance(value, (str, bytes)):
            raise EncodeError(
                f"Field {attr.wire_name}: expected list of str, got {type(value).__name__}"
            )

        out = bytearray()
        for position, item in enumerate(value):
            data = self._text(attr, item)
            if END_PAIR in data:
                raise EncodeError(
                    f"Field {attr.wire_name}: element {position} contains the end-marker pair"
                )
            out.append(FieldType.STRING)
            out += str(position).encode("ascii") + _SENTINEL
            out += data + _SENTINEL
        # The closing end-marker pair is written once per entry, after all attributes
        return bytes(out)

    def _text(self, attr: AttributeSpec, value: Any) -> bytes:
        if not isinstance(value, str):
            raise EncodeError(f"Field {attr.wire_name}: expected str, got {type(value).__name__}")
        try:
            data = value.encode(self.config.encoding)
        except UnicodeEncodeError as e:
            raise EncodeError(f"Field {attr.wire_name}: cannot encode text: {e}") from e
        if SENTINEL in data:
            raise EncodeError(f"Field {attr.wire_name}: text contains a NUL byte")
        return data


def encode(
    records: Sequence[BaseModel],
    model_class: Optional[type[BaseModel]] = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> bytes:
    """Encode records to a complete VDF stream.

    Args:
        records: Records to encode, in order
        model_class: Record model; defaults to the type of the first record
        config: Codec configuration

    Returns:
        Stream bytes, starting with the configured header

    Raises:
        SchemaError: If the model schema is invalid
        EncodeError: If a value cannot be written

    Examples:
        ```python
        from vdfcodec import Shortcut, encode

        data = encode([Shortcut(app_name="Game", exe='"/usr/bin/game"', tags=["rpg"])])
        ```
    """
    if model_class is None:
        if not records:
            return bytes(config.header) + END_PAIR
        model_class = type(records[0])

    buffer = io.BytesIO()
    Encoder(RecordSchema.from_model(model_class), config).encode(records, buffer)
    return buffer.getvalue()
