"""Field helper for declaring wire attributes on records.

A record attribute is written to the wire only when it is declared with
``VDFField()``; plain pydantic fields stay local to the Python object.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec.wire import WIRE_NAME_KEY, WIRE_TYPE_KEY, WireType


def VDFField(name: str, *, wire_type: WireType | None = None, **kwargs: Any) -> FieldInfo:
    """Declare a record attribute that is carried on the wire.

    Args:
        name: Wire field name (matched case-insensitively when decoding)
        wire_type: Explicit wire type. If omitted, it is inferred from the
            annotation: ``str`` -> STRING, ``int`` -> INTEGER, ``list[str]`` -> STRING_LIST.
        **kwargs: Additional Field() arguments (default, default_factory, description, ...)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Game(BaseRecord):
        ...     app_id: int = VDFField("appid", default=0)
        ...     name: Optional[str] = VDFField("AppName", default=None)
        ...     tags: list[str] = VDFField("tags", default_factory=list)
    """
    if not name:
        raise ValueError("Wire field name must not be empty")
    if b"\x00" in name.encode("utf-8"):
        raise ValueError(f"Wire field name {name!r} contains a NUL byte")

    extra = {WIRE_NAME_KEY: name, WIRE_TYPE_KEY: wire_type.value if wire_type else None}
    return cast(FieldInfo, Field(json_schema_extra=extra, **kwargs))
