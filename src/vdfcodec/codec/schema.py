"""Static record schemas for Pydantic models.

This module turns a record model into an explicit, ordered list of wire attribute
descriptors. The schema is built once per model and then consulted by name at
decode time and iterated in order at encode time.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import DecodeError, SchemaError
from .wire import WIRE_NAME_KEY, WIRE_TYPE_KEY, WireType


@dataclass(frozen=True)
class AttributeSpec:
    """Schema information for a single wire attribute.

    Attributes:
        wire_name: Field name as written on the wire
        wire_type: Declared wire type
        attribute: Name of the attribute on the record model
    """

    wire_name: str
    wire_type: WireType
    attribute: str

    def get(self, record: BaseModel) -> Any:
        """Read this attribute from a record."""
        return getattr(record, self.attribute)

    def set(self, values: dict[str, Any], value: Any) -> None:
        """Store a decoded value for this attribute in a pending record."""
        values[self.attribute] = value


class RecordSchema:
    """Ordered wire schema for a record model.

    The attribute order is the order attributes are written by the encoder and is
    therefore part of the byte stream. The last attribute must be list-typed: its
    closing end-marker pair doubles as the entry terminator, and a decoder would
    never see an entry end otherwise.

    Example:
        >>> schema = RecordSchema.from_model(Shortcut)
        >>> [a.wire_name for a in schema.attributes][:3]
        ['appid', 'AppName', 'Exe']
        >>> schema.lookup("APPNAME").attribute
        'app_name'
    """

    def __init__(self, model_class: Type[BaseModel], attributes: list[AttributeSpec]) -> None:
        """Initialize a schema from explicit attribute descriptors.

        Args:
            model_class: Pydantic model class records are built from
            attributes: Wire attributes in encoding order

        Raises:
            SchemaError: If the attribute list is empty, contains an unsupported wire
                type, or does not end with a list-typed attribute
        """
        self.model_class = model_class
        self.attributes: tuple[AttributeSpec, ...] = tuple(attributes)

        if not self.attributes:
            raise SchemaError(f"{model_class.__name__} declares no wire attributes")

        for attr in self.attributes:
            if not isinstance(attr.wire_type, WireType):
                raise SchemaError(
                    f"Attribute {attr.wire_name}: unsupported wire type {attr.wire_type!r}. "
                    f"Supported: string, integer, list of strings."
                )

        last = self.attributes[-1]
        if last.wire_type is not WireType.STRING_LIST:
            raise SchemaError(
                f"{model_class.__name__}: last wire attribute {last.wire_name!r} is "
                f"{last.wire_type.value}, but must be a list of strings so that entry "
                f"ends can be detected"
            )
        for attr in self.attributes[:-1]:
            if attr.wire_type is WireType.STRING_LIST:
                raise SchemaError(
                    f"{model_class.__name__}: list attribute {attr.wire_name!r} must be the "
                    f"last wire attribute; its end marker would end the entry early"
                )

        # First declaration wins on case-insensitive collisions
        self._by_name: dict[str, AttributeSpec] = {}
        for attr in self.attributes:
            self._by_name.setdefault(attr.wire_name.casefold(), attr)

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> RecordSchema:
        """Create (or fetch the cached) schema for a Pydantic model.

        Args:
            model_class: Pydantic model class whose wire attributes are declared
                with ``VDFField()``

        Returns:
            RecordSchema instance
        """
        schema = _SCHEMA_CACHE.get(model_class)
        if schema is None:
            attributes = [
                _extract_attribute(name, info)
                for name, info in model_class.model_fields.items()
                if _wire_metadata(info) is not None
            ]
            schema = cls(model_class, attributes)
            _SCHEMA_CACHE[model_class] = schema
        return schema

    def __iter__(self) -> Iterator[AttributeSpec]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def lookup(self, wire_name: str) -> Optional[AttributeSpec]:
        """Find the attribute for a wire field name, ignoring case."""
        return self._by_name.get(wire_name.casefold())

    def build(self, values: dict[str, Any], index: int) -> BaseModel:
        """Construct a record from decoded attribute values.

        Attributes absent from ``values`` take the model defaults.

        Raises:
            DecodeError: If the model rejects the decoded values
        """
        kwargs = dict(values)
        if "index" in self.model_class.model_fields:
            kwargs["index"] = index
        try:
            return self.model_class(**kwargs)
        except Exception as e:
            raise DecodeError(
                f"Failed to construct {self.model_class.__name__} for entry {index}: {e}"
            ) from e


_SCHEMA_CACHE: dict[Type[BaseModel], RecordSchema] = {}


def _wire_metadata(field_info: FieldInfo) -> Optional[dict[str, Any]]:
    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and extra.get(WIRE_NAME_KEY):
        return extra
    return None


def _extract_attribute(name: str, field_info: FieldInfo) -> AttributeSpec:
    """Extract an attribute descriptor from a Pydantic FieldInfo.

    Args:
        name: Model attribute name
        field_info: Pydantic FieldInfo carrying VDFField() metadata

    Returns:
        AttributeSpec with the declared or inferred wire type

    Raises:
        SchemaError: If the wire type cannot be determined
    """
    meta = _wire_metadata(field_info)
    assert meta is not None
    wire_name = str(meta[WIRE_NAME_KEY])

    declared = meta.get(WIRE_TYPE_KEY)
    if declared is not None:
        try:
            wire_type = WireType(declared)
        except ValueError as e:
            raise SchemaError(f"Field {name}: unsupported wire type {declared!r}") from e
    else:
        wire_type = _infer_wire_type(name, field_info.annotation)

    return AttributeSpec(wire_name=wire_name, wire_type=wire_type, attribute=name)


def _infer_wire_type(name: str, annotation: Any) -> WireType:
    if annotation is None:
        raise SchemaError(f"Field {name} has no type annotation")

    # Optional[T] / T | None
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(non_none_args) != 1:
            raise SchemaError(f"Field {name}: complex Union types not supported")
        annotation = non_none_args[0]
        origin = get_origin(annotation)

    if annotation is str:
        return WireType.STRING
    if annotation is int:
        return WireType.INTEGER
    if origin is list and get_args(annotation) == (str,):
        return WireType.STRING_LIST

    raise SchemaError(
        f"Field {name}: unsupported type {annotation}. "
        f"Supported: str, int, list[str]."
    )
