"""Wire-level constants for the VDF byte grammar.

    stream := header entry* EE
    entry  := S index S field* EE
    field  := type name S value
    value  := string: byte* S | integer: 4 bytes LE | list: (0x01 idx S elem S)* EE
"""

from __future__ import annotations

import enum

SENTINEL = 0x00
END_MARKER = 0x08
END_PAIR = bytes([END_MARKER, END_MARKER])

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


class FieldType(enum.IntEnum):
    """Type code byte that opens every field."""

    LIST = 0x00
    STRING = 0x01
    INTEGER = 0x02


class WireType(enum.Enum):
    """Declared wire type of a record attribute."""

    STRING = "string"
    INTEGER = "integer"
    STRING_LIST = "list"

    @property
    def type_code(self) -> FieldType:
        return _TYPE_CODES[self]


_TYPE_CODES = {
    WireType.STRING: FieldType.STRING,
    WireType.INTEGER: FieldType.INTEGER,
    WireType.STRING_LIST: FieldType.LIST,
}

# Keys under which VDFField() stores wire declarations in pydantic's json_schema_extra
WIRE_NAME_KEY = "vdf_name"
WIRE_TYPE_KEY = "vdf_type"
