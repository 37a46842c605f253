"""Platform identifiers supplied by the hosting environment."""

from __future__ import annotations

from enum import Enum
from typing import Dict

__all__ = ["Platform"]


class Platform(str, Enum):  # str subclass keeps payloads JSON friendly
    IOS = "ios"
    ANDROID = "android"
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    WEB = "web"
    UNKNOWN = "unknown"

    @classmethod
    def from_identifier(cls, identifier: str | None) -> "Platform":
        """Map a free-form platform tag (Qt product type, sys.platform) to a member."""
        if not identifier:
            return cls.UNKNOWN
        key = identifier.strip().lower()
        try:
            return cls(key)
        except ValueError:
            return _ALIASES.get(key, cls.UNKNOWN)


_ALIASES: Dict[str, Platform] = {
    "osx": Platform.MACOS,
    "darwin": Platform.MACOS,
    "win32": Platform.WINDOWS,
    "winrt": Platform.WINDOWS,
    "ipados": Platform.IOS,
    "wasm": Platform.WEB,
    "emscripten": Platform.WEB,
    # Qt reports distribution names for Linux hosts
    "ubuntu": Platform.LINUX,
    "debian": Platform.LINUX,
    "fedora": Platform.LINUX,
    "arch": Platform.LINUX,
}
