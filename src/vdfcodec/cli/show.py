"""File and schema inspection CLI commands."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from ..codec.decoder import decode_entries
from ..codec.schema import RecordSchema


def dump_file(file_path: Path, model_class: type[BaseModel], raw: bool = False) -> None:
    """Decode a VDF file and print one line per entry.

    Args:
        file_path: Path to the VDF file
        model_class: Record model to decode entries to
        raw: If True, print raw field names with value sizes instead of JSON records
    """
    entries = decode_entries(file_path.read_bytes(), model_class)

    print(f"{len(entries)} entr{'ies' if len(entries) != 1 else 'y'} decoded from {file_path}")

    for entry in entries:
        suffix = "" if entry.complete else "  (truncated)"
        if raw:
            print(f"[{entry.index}]{suffix}")
            for name, value in entry.fields.items():
                print(f"    {name}{'.' * max(1, 30 - len(name))}{len(value)} bytes")
        elif entry.record is not None:
            print(entry.record.model_dump_json() + suffix)


def print_schema(model_class: type[BaseModel]) -> None:
    """Print the wire attributes of a record model in encoding order.

    Args:
        model_class: Record model to describe
    """
    schema = RecordSchema.from_model(model_class)

    print(f"{'=' * 19} {model_class.__name__} {'=' * 19}")
    for i, attr in enumerate(schema, 1):
        field_desc = f"{i}. {attr.wire_name}"
        type_desc = f"{attr.wire_type.value} -> {attr.attribute}"
        dots = "." * max(1, 54 - len(field_desc) - len(type_desc))
        print(f"{field_desc}{dots}{type_desc}")
