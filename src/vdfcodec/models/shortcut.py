"""Steam non-Steam-game shortcut record.

Each entry of a ``shortcuts.vdf`` file describes one shortcut added to the Steam
library. Attribute order matches the order Steam writes them.
"""

from __future__ import annotations

from typing import Optional

from .base import BaseRecord
from .fields import VDFField


class Shortcut(BaseRecord):
    """One shortcut entry."""

    app_id: int = VDFField("appid", default=0)
    app_name: Optional[str] = VDFField("AppName", default=None)
    exe: Optional[str] = VDFField("Exe", default=None)
    start_dir: Optional[str] = VDFField("StartDir", default=None)
    icon: Optional[str] = VDFField("icon", default=None)
    shortcut_path: Optional[str] = VDFField("ShortcutPath", default=None)
    launch_options: Optional[str] = VDFField("LaunchOptions", default=None)
    is_hidden: int = VDFField("IsHidden", default=0)
    allow_desktop_config: int = VDFField("AllowDesktopConfig", default=1)
    allow_overlay: int = VDFField("AllowOverlay", default=1)
    open_vr: int = VDFField("OpenVR", default=0)
    devkit: int = VDFField("Devkit", default=0)
    devkit_game_id: Optional[str] = VDFField("DevkitGameID", default=None)
    devkit_override_app_id: int = VDFField("DevkitOverrideAppID", default=0)
    last_play_time: int = VDFField("LastPlayTime", default=0)
    flatpak_app_id: Optional[str] = VDFField("FlatpakAppID", default=None)
    tags: list[str] = VDFField("tags", default_factory=list)
