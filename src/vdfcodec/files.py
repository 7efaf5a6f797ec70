"""File helpers for VDF streams.

These wrap decode()/encode() for binary file objects and paths.
"""

from __future__ import annotations

import os
from typing import BinaryIO, Optional, Sequence, TypeVar

from pydantic import BaseModel

from .codec.decoder import decode
from .codec.encoder import Encoder
from .codec.schema import RecordSchema
from .codec.wire import END_PAIR
from .config import DEFAULT_CONFIG, CodecConfig

T = TypeVar("T", bound=BaseModel)

PathLike = str | os.PathLike


def load(fp: BinaryIO, model_class: type[T], config: CodecConfig = DEFAULT_CONFIG) -> list[T]:
    """Decode records from a binary file object."""
    return decode(model_class, fp.read(), config)


def dump(
    records: Sequence[BaseModel],
    fp: BinaryIO,
    model_class: Optional[type[BaseModel]] = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """Encode records into a binary file object.

    Returns:
        Number of entries written
    """
    if model_class is None:
        if not records:
            fp.write(bytes(config.header) + END_PAIR)
            return 0
        model_class = type(records[0])
    return Encoder(RecordSchema.from_model(model_class), config).encode(records, fp)


def read_file(path: PathLike, model_class: type[T], config: CodecConfig = DEFAULT_CONFIG) -> list[T]:
    """Decode records from a file on disk.

    Example:
        >>> shortcuts = read_file("~/.steam/steam/userdata/1234/config/shortcuts.vdf", Shortcut)
    """
    with open(os.path.expanduser(path), "rb") as f:
        return load(f, model_class, config)


def write_file(
    path: PathLike,
    records: Sequence[BaseModel],
    model_class: Optional[type[BaseModel]] = None,
    config: CodecConfig = DEFAULT_CONFIG,
) -> int:
    """Encode records to a file on disk, replacing its contents."""
    with open(os.path.expanduser(path), "wb") as f:
        return dump(records, f, model_class, config)
