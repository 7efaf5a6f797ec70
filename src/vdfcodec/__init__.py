"""vdfcodec: Binary VDF Record Codec

A Python library for reading and writing the compact binary VDF record format
used by Steam's ``shortcuts.vdf``: a header followed by indexed entries of typed,
named fields (strings, 32-bit integers and indexed string lists), delimited by
sentinel bytes rather than length prefixes.

Key Features:
- Push-based, byte-at-a-time decoding state machines (no lookahead)
- Pydantic-based record modeling with explicit wire schemas
- Byte-exact encoder that round-trips through the decoder
- Tolerant decoding: malformed entries are skipped, truncated streams recovered

Quick Start:
    >>> from vdfcodec import Shortcut, decode, encode
    >>>
    >>> data = encode([Shortcut(app_name="Game", exe="/usr/bin/game", tags=["rpg"])])
    >>> shortcuts = decode(Shortcut, data)
    >>> shortcuts[0].tags
    ['rpg']
"""

from __future__ import annotations

from .codec import (
    DecodeStats,
    Encoder,
    Entry,
    EntryDecoder,
    FieldDecoder,
    FieldEvent,
    ListDecoder,
    RecordSchema,
    SchemaBinder,
    WireType,
    decode,
    decode_entries,
    encode,
)
from .config import DEFAULT_CONFIG, SHORTCUTS_HEADER, CodecConfig
from .exceptions import DecodeError, EncodeError, SchemaError, VDFError
from .files import dump, load, read_file, write_file
from .models import BaseRecord, Shortcut, VDFField

__version__ = "0.1.0"

__all__ = [
    # Core API
    "BaseRecord",
    "VDFField",
    "encode",
    "decode",
    "decode_entries",
    # Files
    "load",
    "dump",
    "read_file",
    "write_file",
    # State machines
    "EntryDecoder",
    "FieldDecoder",
    "ListDecoder",
    "Encoder",
    "Entry",
    "FieldEvent",
    "DecodeStats",
    "SchemaBinder",
    "RecordSchema",
    "WireType",
    # Records
    "Shortcut",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    "SHORTCUTS_HEADER",
    # Exceptions
    "VDFError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    # Version
    "__version__",
]
