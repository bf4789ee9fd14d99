"""Filesystem abstractions queried by the local loader.

Loaders only query a filesystem, they never modify or close it. Two
implementations are provided:
- LocalFileSystem: the host filesystem via pathlib
- MemoryFileSystem: an in-memory tree with POSIX or Windows path rules
"""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
from abc import ABC
from abc import abstractmethod
from pathlib import Path
from pathlib import PurePath
from pathlib import PurePosixPath
from pathlib import PureWindowsPath
from typing import Literal

from .errors import InvalidPathError

logger = logging.getLogger(__name__)

Flavor = Literal["posix", "windows"]

_WINDOWS_RESERVED = set('<>:"|?*')


class FileSystem(ABC):
    """Capabilities a loader needs from a filesystem."""

    @property
    @abstractmethod
    def separator(self) -> str:
        """Path separator of this filesystem."""

    @abstractmethod
    def get_path(self, location: str) -> PurePath:
        """Build a path object from a string.

        Raises:
            InvalidPathError: The string is not a well-formed path here
        """

    @abstractmethod
    def exists(self, path: PurePath) -> bool:
        """Check whether a path exists."""

    @abstractmethod
    def to_location(self, path: PurePath) -> str:
        """Convert an existing path to an absolute URI string."""

    def is_valid(self, location: str) -> bool:
        """Check whether a string is accepted as a path."""
        try:
            self.get_path(location)
        except InvalidPathError:
            return False
        return True


class LocalFileSystem(FileSystem):
    """The host filesystem."""

    @property
    def separator(self) -> str:
        return os.sep

    def get_path(self, location: str) -> Path:
        if not location:
            raise InvalidPathError(location, "empty path")
        if "\x00" in location:
            raise InvalidPathError(location, "embedded null character")
        if os.name == "nt":
            _check_windows_path(location)
        return Path(location)

    def exists(self, path: PurePath) -> bool:
        try:
            return Path(path).exists()
        except (OSError, ValueError) as e:
            logger.debug(f"[rezolver:fs] Cannot stat {path}: {e}")
            return False

    def to_location(self, path: PurePath) -> str:
        return Path(path).resolve().as_uri()

    def __repr__(self) -> str:
        return "LocalFileSystem()"


class MemoryFileSystem(FileSystem):
    """In-memory filesystem for tests and sandboxed lookups.

    Paths follow POSIX or Windows rules depending on ``flavor``. Windows
    lookups are case-insensitive and accept both separators. Relative paths
    are resolved against ``cwd``.

    Usage:
        fs = MemoryFileSystem("windows")
        fs.write_text("c:\\tmp\\TestFile.txt", "hello")
        fs.exists(fs.get_path("C:/tmp/testfile.txt"))  # True
    """

    def __init__(self, flavor: Flavor = "posix", cwd: str | None = None):
        if flavor not in ("posix", "windows"):
            raise ValueError(f"Unknown filesystem flavor: {flavor}")
        self.flavor = flavor
        self._pathmod = ntpath if flavor == "windows" else posixpath
        self._pure = PureWindowsPath if flavor == "windows" else PurePosixPath
        self.cwd = self._pure(cwd or ("c:\\" if flavor == "windows" else "/"))
        self._entries: dict[str, str | None] = {}
        self._add_directory(self._anchor(self.cwd))
        self._add_directory(self.cwd)

    @property
    def separator(self) -> str:
        return "\\" if self.flavor == "windows" else "/"

    def get_path(self, location: str) -> PurePath:
        if not location:
            raise InvalidPathError(location, "empty path")
        if "\x00" in location:
            raise InvalidPathError(location, "embedded null character")
        if self.flavor == "windows":
            _check_windows_path(location)
        return self._pure(location)

    def exists(self, path: PurePath) -> bool:
        return self._key(path) in self._entries

    def is_file(self, path: PurePath) -> bool:
        return self._entries.get(self._key(path)) is not None

    def to_location(self, path: PurePath) -> str:
        uri = self._absolute(path).as_uri()
        return "memory:" + uri[len("file:") :]

    def mkdir(self, location: str) -> PurePath:
        """Create a directory and any missing parents."""
        path = self._absolute(self.get_path(location))
        for parent in reversed(path.parents):
            self._add_directory(parent)
        self._add_directory(path)
        return path

    def write_text(self, location: str, content: str = "") -> PurePath:
        """Create or replace a file, creating missing parent directories."""
        path = self._absolute(self.get_path(location))
        self.mkdir(str(path.parent))
        self._entries[self._key(path)] = content
        return path

    def read_text(self, location: str) -> str:
        content = self._entries.get(self._key(self.get_path(location)))
        if content is None:
            raise FileNotFoundError(location)
        return content

    def remove(self, location: str) -> None:
        """Remove a file or a directory tree."""
        key = self._key(self.get_path(location))
        if key not in self._entries:
            raise FileNotFoundError(location)
        prefix = key.rstrip(self.separator) + self.separator
        for entry in [k for k in self._entries if k == key or k.startswith(prefix)]:
            del self._entries[entry]

    def _absolute(self, path: PurePath) -> PurePath:
        joined = self.cwd / path
        return self._pure(self._pathmod.normpath(str(joined)))

    def _anchor(self, path: PurePath) -> PurePath:
        return self._pure(path.anchor)

    def _key(self, path: PurePath) -> str:
        key = str(self._absolute(path))
        return key.lower() if self.flavor == "windows" else key

    def _add_directory(self, path: PurePath) -> None:
        self._entries.setdefault(self._key(path), None)

    def __repr__(self) -> str:
        return f"MemoryFileSystem({self.flavor}, {len(self._entries)} entries)"


def _check_windows_path(location: str) -> None:
    """Apply Windows path syntax rules.

    Raises:
        InvalidPathError: UNC prefixes or reserved characters outside the drive
    """
    normalized = location.replace("/", "\\")
    if normalized.startswith("\\\\"):
        raise InvalidPathError(location, "UNC paths are not supported")
    _drive, rest = ntpath.splitdrive(normalized)
    reserved = _WINDOWS_RESERVED.intersection(rest)
    if reserved:
        raise InvalidPathError(location, f"reserved characters {''.join(sorted(reserved))}")
