"""Decoder for indexed string lists.

The value of a list-typed field is a flat run of string triples, one per
element, each numbered with its position as decimal text:

    (0x01 idx S elem S)*

Element order is the order triples appear on the wire; the index text is a
positional hint only and is not used to reorder elements.
"""

from __future__ import annotations

import enum

from ..config import DEFAULT_CONFIG, CodecConfig
from ..log import logger
from .wire import END_MARKER, SENTINEL, FieldType


class _State(enum.Enum):
    TYPE = enum.auto()
    INDEX = enum.auto()
    VALUE = enum.auto()


class ListDecoder:
    """Byte-driven state machine for one list value.

    Example:
        >>> decoder = ListDecoder()
        >>> decoder.feed_bytes(b"\\x010\\x00alpha\\x00\\x011\\x00beta\\x00")
        >>> decoder.flush()
        ['alpha', 'beta']
    """

    def __init__(self, config: CodecConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self._items: list[str] = []
        self._buffer = bytearray()
        self._state = _State.TYPE
        self.skipped = 0

    def reset(self) -> None:
        """Clear all parsed elements and buffers."""
        self._items = []
        self._buffer.clear()
        self._state = _State.TYPE
        self.skipped = 0

    def feed(self, byte: int) -> None:
        if self._state is _State.TYPE:
            if byte == FieldType.STRING:
                self._state = _State.INDEX
            elif byte != END_MARKER:
                # Anything but an element start or a stray end marker is noise
                self.skipped += 1
        elif self._state is _State.INDEX:
            if byte == SENTINEL:
                self._buffer.clear()
                self._state = _State.VALUE
            else:
                self._buffer.append(byte)
        else:
            if byte == SENTINEL:
                self._commit()
            else:
                self._buffer.append(byte)

    def feed_bytes(self, data: bytes) -> None:
        for byte in data:
            self.feed(byte)

    def flush(self) -> list[str]:
        """Commit a trailing unterminated element and return the parsed list."""
        if self._state is _State.VALUE:
            self._commit()
        if self.skipped:
            logger.debug("Skipped %d unexpected byte(s) in list value", self.skipped)
        return list(self._items)

    def _commit(self) -> None:
        self._items.append(self._buffer.decode(self._config.encoding, self._config.errors))
        self._buffer.clear()
        self._state = _State.TYPE


def decode_list(data: bytes, config: CodecConfig = DEFAULT_CONFIG) -> list[str]:
    """Decode the raw value bytes of a list-typed field.

    Args:
        data: Value bytes as produced by the field decoder
        config: Codec configuration

    Returns:
        Elements in wire order. Spans shorter than ``config.min_list_span`` yield
        an empty list without being parsed.
    """
    if len(data) < config.min_list_span:
        return []
    decoder = ListDecoder(config)
    decoder.feed_bytes(data)
    return decoder.flush()
