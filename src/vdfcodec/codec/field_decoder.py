"""Decoder for the field run of one entry.

An entry's fields are written back to back with no separator between them:

    S (type name S value)*

String values end on a sentinel, integer values after exactly four bytes, and
list values on a doubled end marker. The list terminator is also the entry
terminator, which is reported to the caller as ``FieldEvent.ENTRY_COMPLETE``.
"""

from __future__ import annotations

import enum
from typing import Callable, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..log import logger
from .wire import END_MARKER, SENTINEL, FieldType

INTEGER_WIDTH = 4


class FieldEvent(enum.Enum):
    """Result of feeding one byte to a FieldDecoder."""

    NONE = enum.auto()
    FIELD_COMPLETE = enum.auto()
    ENTRY_COMPLETE = enum.auto()


class FieldState(enum.Enum):
    FIELD_START = enum.auto()
    TYPE = enum.auto()
    NAME = enum.auto()
    VALUE = enum.auto()


class FieldDecoder:
    """Byte-driven state machine for the fields of one entry.

    The decoder only records ``name -> raw value`` pairs; it knows nothing of
    entries or schemas. It must be reset before each entry.

    Unexpected bytes where a type code is due send the machine back to looking for
    a field start sentinel. This silent resynchronization is counted in
    ``resyncs`` and reported to ``on_resync`` if given.

    Example:
        >>> decoder = FieldDecoder()
        >>> for b in b"\\x00\\x01AppName\\x00Game\\x00":
        ...     event = decoder.feed(b)
        >>> event
        <FieldEvent.FIELD_COMPLETE: 2>
        >>> decoder.fields
        {'AppName': b'Game'}
    """

    def __init__(
        self,
        config: CodecConfig = DEFAULT_CONFIG,
        on_resync: Optional[Callable[[int], None]] = None,
    ) -> None:
        """Initialize a field decoder.

        Args:
            config: Codec configuration (text encoding of field names)
            on_resync: Called with the offending byte whenever an unrecognized type
                code forces a resynchronization
        """
        self._config = config
        self._on_resync = on_resync
        self.fields: dict[str, bytes] = {}
        self.resyncs = 0
        self._buffer = bytearray()
        self._state = FieldState.FIELD_START
        self._last_byte = SENTINEL
        self._field_type = FieldType.LIST
        self._field_name = ""

    @property
    def state(self) -> FieldState:
        return self._state

    def reset(self) -> None:
        """Clear buffers and produced fields, ready for a new entry.

        The resynchronization counter is cumulative and survives resets.
        """
        self.fields = {}
        self._buffer.clear()
        self._state = FieldState.FIELD_START
        self._last_byte = SENTINEL
        self._field_type = FieldType.LIST
        self._field_name = ""

    def feed(self, byte: int) -> FieldEvent:
        """Feed one byte.

        Args:
            byte: Incoming byte value (0-255)

        Returns:
            FIELD_COMPLETE when a field was finished, ENTRY_COMPLETE when a list
            field was finished by the doubled end marker, NONE otherwise
        """
        event = FieldEvent.NONE

        if self._state is FieldState.FIELD_START:
            if byte == SENTINEL:
                self._buffer.clear()
                self._state = FieldState.TYPE

        elif self._state is FieldState.TYPE:
            try:
                self._field_type = FieldType(byte)
            except ValueError:
                self._resync(byte)
            else:
                self._state = FieldState.NAME

        elif self._state is FieldState.NAME:
            if byte == SENTINEL:
                self._field_name = self._buffer.decode(self._config.encoding, self._config.errors)
                self._buffer.clear()
                self._state = FieldState.VALUE
            else:
                self._buffer.append(byte)

        else:
            event = self._feed_value(byte)

        self._last_byte = byte
        return event

    def feed_bytes(self, data: bytes) -> FieldEvent:
        """Feed several bytes, stopping right after an entry end.

        Returns:
            ENTRY_COMPLETE if an entry end was reached, else the last event
        """
        event = FieldEvent.NONE
        for byte in data:
            event = self.feed(byte)
            if event is FieldEvent.ENTRY_COMPLETE:
                break
        return event

    def _feed_value(self, byte: int) -> FieldEvent:
        field_type = self._field_type

        if field_type is FieldType.INTEGER:
            self._buffer.append(byte)
            if len(self._buffer) == INTEGER_WIDTH:
                self._complete_field()
                return FieldEvent.FIELD_COMPLETE
            return FieldEvent.NONE

        if field_type is FieldType.STRING:
            if byte == SENTINEL:
                self._complete_field()
                return FieldEvent.FIELD_COMPLETE
            self._buffer.append(byte)
            return FieldEvent.NONE

        if byte == END_MARKER and self._last_byte == END_MARKER and self._buffer:
            # The first marker of the pair was taken as payload
            del self._buffer[-1]
            self._complete_field()
            self._state = FieldState.FIELD_START
            return FieldEvent.ENTRY_COMPLETE

        self._buffer.append(byte)
        return FieldEvent.NONE

    def _complete_field(self) -> None:
        if self._field_name:
            if self._field_name in self.fields:
                logger.debug("Field %r repeated in entry; keeping the later value", self._field_name)
            self.fields[self._field_name] = bytes(self._buffer)
        self._field_name = ""
        self._buffer.clear()
        self._state = FieldState.TYPE

    def _resync(self, byte: int) -> None:
        self.resyncs += 1
        self._state = FieldState.FIELD_START
        logger.debug("Unrecognized field type byte 0x%02x; waiting for next field start", byte)
        if self._on_resync is not None:
            self._on_resync(byte)
