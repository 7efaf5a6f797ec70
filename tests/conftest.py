"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Optional

import pytest

from vdfcodec import SHORTCUTS_HEADER, BaseRecord, VDFField


class Game(BaseRecord):
    """Small record used across the tests."""

    app_id: int = VDFField("appid", default=0)
    name: Optional[str] = VDFField("AppName", default=None)
    tags: list[str] = VDFField("tags", default_factory=list)


def entry_bytes(index: bytes, app_id: bytes, name: bytes, tags: bytes) -> bytes:
    """Hand-assemble one Game entry (index terminator through end markers)."""
    return (
        b"\x00" + index + b"\x00"
        + b"\x02appid\x00" + app_id
        + b"\x01AppName\x00" + name + b"\x00"
        + b"\x00tags\x00" + tags
        + b"\x08\x08"
    )


@pytest.fixture
def header() -> bytes:
    """Stock shortcuts.vdf header."""
    return SHORTCUTS_HEADER


@pytest.fixture
def doom_entry() -> bytes:
    """Entry 0: appid 42, AppName "Doom", tags ["fps", "retro"]."""
    return entry_bytes(
        b"0",
        b"\x2a\x00\x00\x00",
        b"Doom",
        b"\x010\x00fps\x00\x011\x00retro\x00",
    )


@pytest.fixture
def quake_entry() -> bytes:
    """Entry 1: appid -1, AppName "Quake", no tags."""
    return entry_bytes(b"1", b"\xff\xff\xff\xff", b"Quake", b"")
