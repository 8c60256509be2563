"""Locating the Steam client and the games installed through it."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Optional

__all__ = ["parse_library_folders", "find_steam", "find_steam_game"]

# library lines look like:  "1"  "Path\to\library"
_LIBRARY_LINE = re.compile(r'^\s*"(?P<idx>[0-9]+)"\s*"(?P<path>.*)"')


def parse_library_folders(text: str) -> List[str]:
    """Extract the library paths listed in a ``libraryfolders.vdf`` text.

    Separators are normalised to single backslashes.
    """
    folders = []
    for line in text.splitlines():
        match = _LIBRARY_LINE.match(line)
        if match:
            folder = match.group("path").replace("/", "\\").replace("\\\\", "\\")
            folders.append(folder)
    return folders


def find_steam() -> str:
    """Steam's installation path from the registry, or ``""`` if unknown."""
    try:
        import winreg
    except ImportError:
        return ""
    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, r"Software\Valve\Steam") as key:
            value, _ = winreg.QueryValueEx(key, "SteamPath")
    except OSError:
        return ""
    return str(value)


def _native(path: str) -> str:
    return path.replace("\\", os.sep)


def find_steam_game(
    app_name: str, valid_file: str = "", steam_path: Optional[str] = None
) -> str:
    """Return the installation directory of a Steam game, or ``""``.

    Every Steam library is searched for ``steamapps/common/<app_name>``; when
    ``valid_file`` is given it must exist there. ``steam_path`` defaults to
    :func:`find_steam`.
    """
    steam = find_steam() if steam_path is None else os.fspath(steam_path)
    if not steam:
        return ""
    steam_dir = Path(steam)
    if not steam_dir.is_dir():
        return ""

    libraries = [str(steam_dir.absolute())]
    vdf = steam_dir / "steamapps" / "libraryfolders.vdf"
    try:
        text = vdf.read_text(encoding="utf-8", errors="replace")
    except OSError:
        text = ""
    libraries.extend(_native(folder) for folder in parse_library_folders(text))

    for library in libraries:
        game_dir = Path(library) / "steamapps" / "common" / app_name
        if not game_dir.is_dir():
            continue
        if not valid_file or (game_dir / valid_file).exists():
            return str(game_dir.absolute())
    return ""