"""Configuration files, login checks, file helpers and translation selection."""

from __future__ import annotations

import configparser
import datetime
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

PathLike = Union[str, Path]

_DEFAULT_SECTION = "General"
_LOGIN_PREFIXES = ("user0", "user1")
_LOGIN_DIGITS = "111111"
_LOGIN_LAST_DAY = 20161100


def _parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # keep key case
    return parser


def create_config(path: PathLike, group: str, values: Mapping[str, str]) -> None:
    """Write values into the given section of an INI file, keeping other entries."""
    parser = _parser()
    parser.read(path, encoding="utf-8")
    section = group or _DEFAULT_SECTION
    if not parser.has_section(section):
        parser.add_section(section)
    for key, value in values.items():
        parser.set(section, key, str(value))
    with open(path, "w", encoding="utf-8") as handle:
        parser.write(handle, space_around_delimiters=False)


def load_config(
    path: PathLike,
    group: str,
    values: Mapping[str, str],
    create_if_missing: bool = True,
) -> tuple[dict[str, str], bool]:
    """Read the keys of values from a section of an INI file.

    Keys absent from the file read as empty strings. Returns the loaded
    values and whether any differed from the ones given. When none differed
    and create_if_missing is set, the values are written back to the file.
    """
    parser = _parser()
    parser.read(path, encoding="utf-8")
    section = group or _DEFAULT_SECTION
    loaded = {key: parser.get(section, key, fallback="") for key in values}
    changed = any(values[key] != loaded[key] for key in values)
    if not changed and create_if_missing:
        create_config(path, group, loaded)
    return loaded, changed


def check_login(user: str, password: str, today: Optional[datetime.date] = None) -> bool:
    """Return whether the credentials are accepted.

    Raises PermissionError once the login period has ended.
    """
    today = today or datetime.date.today()
    if int(today.strftime("%Y%m%d")) >= _LOGIN_LAST_DAY:
        raise PermissionError("login period has expired")
    return (
        len(user) == 7
        and user.lower()[:5].strip() in _LOGIN_PREFIXES
        and password == _LOGIN_DIGITS
    )


def read_file(path: PathLike) -> bytes:
    """Return the whole content of a file."""
    return Path(path).read_bytes()


def write_file(path: PathLike, data: bytes) -> None:
    """Replace a file's content with data and flush it."""
    with open(path, "wb") as handle:
        written = handle.write(data)
        if written != len(data):
            raise OSError(f"short write to {path}")
        handle.flush()


class TranslatorSelector:
    """Track which translation file is active among a list of files."""

    def __init__(self, on_change: Optional[Callable[[int], None]] = None) -> None:
        self._on_change = on_change or (lambda index: None)
        self.files: list[str] = []
        self.index = 0

    def set_files(self, files) -> None:
        """Replace the file list, clamping the current index into it."""
        self.files = list(files)
        self.index = max(0, min(self.index, len(self.files) - 1))

    def reload(self, index: int) -> Optional[str]:
        """Switch to the file at index and return the active file.

        Returns None when there are no files or index is already active.
        An index out of range keeps the current file but is still reported.
        """
        if not self.files or index == self.index:
            return None
        if 0 <= index < len(self.files):
            self.index = index
        self._on_change(index)
        return self.files[self.index]