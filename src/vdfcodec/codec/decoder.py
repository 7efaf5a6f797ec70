"""Entry-level VDF decoder.

This module provides the EntryDecoder state machine, which consumes a VDF byte
stream one byte at a time and splits it into entries, and the decode() and
decode_entries() helpers that run it over a complete byte string.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from pydantic import BaseModel

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import DecodeError
from ..log import get_hexdump, logger
from .binder import DecodeStats, SchemaBinder
from .field_decoder import FieldDecoder, FieldEvent, FieldState
from .schema import RecordSchema
from .wire import INT32_MAX, SENTINEL

T = TypeVar("T", bound=BaseModel)

_MAX_INDEX_DIGITS = len(str(INT32_MAX))


@dataclass
class Entry:
    """One decoded entry.

    Attributes:
        index: Index parsed from the entry start (informational only)
        fields: Raw field values by wire name, in wire order
        record: Typed record, or None when decoding without a schema
        complete: False if the entry was committed by flush() before its end
            marker was seen (the stream was truncated)
    """

    index: int
    fields: dict[str, bytes] = field(default_factory=dict)
    record: Optional[BaseModel] = None
    complete: bool = False


class EntryState(enum.Enum):
    ENTRY_START = enum.auto()
    INDEX = enum.auto()
    FIELDS = enum.auto()


class EntryDecoder:
    """Byte-driven state machine for a whole VDF stream (minus its header).

    Each entry starts with a sentinel, its index as ASCII digits and another
    sentinel, which also opens the entry's field run. Field bytes are handed to a
    FieldDecoder until it reports the entry end. An entry is committed to
    ``entries`` when the next entry starts or when ``flush()`` is called, so
    ``flush()`` must be called once the stream is exhausted.

    One instance decodes one stream; it is not safe to share across threads.

    Example:
        >>> decoder = EntryDecoder(RecordSchema.from_model(Shortcut))
        >>> decoder.feed_bytes(body)
        >>> decoder.flush()
        >>> [s.app_name for s in decoder.records]
    """

    def __init__(
        self,
        schema: Optional[RecordSchema] = None,
        config: CodecConfig = DEFAULT_CONFIG,
        on_resync: Optional[Callable[[int], None]] = None,
    ) -> None:
        """Initialize an entry decoder.

        Args:
            schema: Record schema to bind fields with. Without one, entries carry
                raw fields only.
            config: Codec configuration
            on_resync: Called with the offending byte whenever the field decoder
                resynchronizes on an unrecognized type code
        """
        self.schema = schema
        self.config = config
        self._binder = SchemaBinder(schema, config) if schema is not None else None
        self.stats = self._binder.stats if self._binder is not None else DecodeStats()
        self._on_resync = on_resync
        self._fields = FieldDecoder(config, on_resync=self._resynced)
        self._entries: list[Entry] = []
        self._current: Optional[Entry] = None
        self._index_buffer = bytearray()
        self._state = EntryState.ENTRY_START

    @property
    def state(self) -> EntryState:
        return self._state

    @property
    def entries(self) -> list[Entry]:
        """Entries committed so far, in stream order."""
        return list(self._entries)

    @property
    def records(self) -> list[Any]:
        """Typed records of the committed entries."""
        return [entry.record for entry in self._entries if entry.record is not None]

    def feed(self, byte: int) -> bool:
        """Feed one byte.

        Args:
            byte: Incoming byte value (0-255)

        Returns:
            True if the byte ended an entry that will be committed, False
            otherwise (entries dropped for a malformed index never count)
        """
        if self._state is EntryState.ENTRY_START:
            if byte == SENTINEL:
                self.flush()
                self._index_buffer.clear()
                self._fields.reset()
                self._state = EntryState.INDEX
            return False

        if self._state is EntryState.INDEX:
            if byte != SENTINEL:
                self._index_buffer.append(byte)
                return False

            index = _parse_index(self._index_buffer)
            if index is None:
                # Fields are still consumed so decoding picks up at the entry end
                self.stats.malformed_indices += 1
                logger.debug(
                    "Dropping entry with malformed index %r", bytes(self._index_buffer)
                )
            else:
                self._current = Entry(index=index)
            # The index terminator is also the field run's start marker
            self._fields.feed(byte)
            self._state = EntryState.FIELDS
            return False

        if self._fields.feed(byte) is not FieldEvent.ENTRY_COMPLETE:
            if self._current is None and self._fields.state is FieldState.FIELD_START:
                # A dropped entry lost sync; look for the next entry start instead
                self._state = EntryState.ENTRY_START
            return False

        ended = self._current is not None
        if ended:
            self._finish(self._current, complete=True)
        self._state = EntryState.ENTRY_START
        return ended

    def feed_bytes(self, data: bytes) -> int:
        """Feed several bytes.

        Returns:
            Number of entries ended by these bytes
        """
        ended = 0
        for byte in data:
            if self.feed(byte):
                ended += 1
        return ended

    def flush(self) -> Optional[Entry]:
        """Commit the entry in progress, if any.

        An entry whose end marker has not been seen is committed with the fields
        completed so far and ``complete`` set to False.

        Returns:
            The committed entry, or None if there was nothing to commit
        """
        entry = self._current
        if entry is None:
            return None

        if not entry.complete:
            self.stats.truncated_entries += 1
            self._finish(entry, complete=False)
            logger.debug("Entry %d committed before its end marker", entry.index)

        self._entries.append(entry)
        self._current = None
        return entry

    def _finish(self, entry: Entry, complete: bool) -> None:
        entry.fields = dict(self._fields.fields)
        entry.complete = complete

        if self._binder is not None and self.schema is not None:
            values: dict[str, Any] = {}
            for name, raw in entry.fields.items():
                self._binder.bind(name, raw, values)
            entry.record = self.schema.build(values, entry.index)

        logger.debug("Decoded entry %d with %d field(s)", entry.index, len(entry.fields))

    def _resynced(self, byte: int) -> None:
        self.stats.resyncs += 1
        if self._on_resync is not None:
            self._on_resync(byte)


def _parse_index(buffer: bytearray) -> Optional[int]:
    # Indices are non-negative int32 values
    if not buffer or not all(0x30 <= b <= 0x39 for b in buffer):
        return None
    digits = bytes(buffer).lstrip(b"0")
    if len(digits) > _MAX_INDEX_DIGITS:
        return None
    index = int(digits or b"0")
    return index if index <= INT32_MAX else None


def strip_header(data: bytes, config: CodecConfig = DEFAULT_CONFIG) -> bytes:
    """Remove the configured header from the front of a stream.

    Raises:
        DecodeError: If the header is missing and ``config.require_header`` is set
    """
    header = bytes(config.header)
    if not header:
        return data
    if data.startswith(header):
        return data[len(header) :]
    if config.require_header:
        raise DecodeError(
            f"Stream does not start with header {header!r}; "
            f"{get_hexdump(data, 0, window=len(header))}"
        )
    return data


def decode_entries(
    data: bytes,
    model_class: Optional[type[BaseModel]] = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> list[Entry]:
    """Decode a complete VDF stream into entries.

    Args:
        data: Stream bytes, starting with the configured header
        model_class: Record model to bind fields to, or None for raw entries only
        config: Codec configuration

    Returns:
        Entries in stream order

    Raises:
        SchemaError: If the model schema is invalid
        DecodeError: If the header is missing or the data is not bytes
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Expected bytes, got {type(data).__name__}")

    body = strip_header(bytes(data), config)
    schema = RecordSchema.from_model(model_class) if model_class is not None else None

    decoder = EntryDecoder(schema, config)
    decoder.feed_bytes(body)
    decoder.flush()
    return decoder.entries


def decode(model_class: type[T], data: bytes, config: CodecConfig = DEFAULT_CONFIG) -> list[T]:
    """Decode a complete VDF stream into typed records.

    Args:
        model_class: Record model (a BaseRecord subclass) to decode to
        data: Stream bytes, starting with the configured header
        config: Codec configuration

    Returns:
        One record per entry, in stream order. Entries with a malformed index are
        dropped; a truncated final entry is returned with the fields it had.

    Raises:
        SchemaError: If the model schema is invalid
        DecodeError: If the header is missing or the data is not bytes

    Examples:
        ```python
        from vdfcodec import Shortcut, decode

        with open("shortcuts.vdf", "rb") as f:
            shortcuts = decode(Shortcut, f.read())
        for s in shortcuts:
            print(s.index, s.app_name, s.tags)
        ```
    """
    entries = decode_entries(data, model_class, config)
    return [entry.record for entry in entries]  # type: ignore[misc]
