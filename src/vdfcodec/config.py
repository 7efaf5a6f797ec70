"""Codec configuration.

This module provides the configuration dataclass shared by the decoders and the
encoder. Every public entry point accepts a ``config=`` argument and falls back to
``DEFAULT_CONFIG``.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass

# Magic that opens a Steam shortcuts.vdf file
SHORTCUTS_HEADER = b"\x00shortcuts\x00"


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for VDF encoding and decoding.

    Attributes:
        header: Magic bytes written before the first entry and expected at the
            start of every stream passed to ``decode()``. Opaque to the state
            machines, which never see it.

        require_header: If True (default), ``decode()`` raises DecodeError when the
            stream does not start with ``header``. If False, a stream without the
            header is fed to the entry decoder as-is.

        encoding: Text codec for field names, string values and list elements
            (default "utf-8").

        errors: Error handler used when decoding text (default "replace"), so that
            undecodable bytes never abort a decode.

        min_list_span: List values shorter than this many bytes decode to an empty
            list without being parsed (default 4, the size of the smallest complete
            element: type byte, one index digit, sentinel, empty text, sentinel).
            The classic floor of 5 bytes would decode a list holding a single
            empty string as empty; pass ``min_list_span=5`` to restore it.

    Examples:
        ```python
        from vdfcodec import CodecConfig, decode

        # Headerless stream, latin-1 text
        config = CodecConfig(header=b"", require_header=False, encoding="latin-1")
        records = decode(Shortcut, data, config=config)
        ```
    """

    header: bytes = SHORTCUTS_HEADER
    require_header: bool = True
    encoding: str = "utf-8"
    errors: str = "replace"
    min_list_span: int = 4

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not isinstance(self.header, (bytes, bytearray)):
            raise TypeError(f"header must be bytes, got {type(self.header).__name__}")
        if self.min_list_span < 0:
            raise ValueError(f"min_list_span must be non-negative, got {self.min_list_span}")
        codecs.lookup(self.encoding)


DEFAULT_CONFIG = CodecConfig()
