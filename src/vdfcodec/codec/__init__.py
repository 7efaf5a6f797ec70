"""Byte-driven VDF codec.

This module provides the decoding state machines, the schema binder, and the
encoder for VDF record streams.
"""

from __future__ import annotations

from .binder import DecodeStats, SchemaBinder
from .decoder import Entry, EntryDecoder, decode, decode_entries, strip_header
from .encoder import Encoder, encode
from .field_decoder import FieldDecoder, FieldEvent
from .list_decoder import ListDecoder, decode_list
from .schema import AttributeSpec, RecordSchema
from .wire import FieldType, WireType

__all__ = [
    "encode",
    "decode",
    "decode_entries",
    "decode_list",
    "strip_header",
    "Encoder",
    "EntryDecoder",
    "FieldDecoder",
    "ListDecoder",
    "Entry",
    "FieldEvent",
    "DecodeStats",
    "SchemaBinder",
    "RecordSchema",
    "AttributeSpec",
    "FieldType",
    "WireType",
]
