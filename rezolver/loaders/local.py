"""Local loader: resources on a filesystem."""

import logging
import re
from collections.abc import Iterable

from ..errors import InvalidConfigurationError
from ..errors import InvalidPathError
from ..filesystem import FileSystem
from ..filesystem import LocalFileSystem
from ..scheme import extract_scheme
from .base import ResourceLoader

logger = logging.getLogger(__name__)

_LEADING_SEPARATORS = re.compile(r"^[\\/]+")


class LocalLoader(ResourceLoader):
    """Resolves ``file:`` resources on a filesystem.

    The filesystem is injectable (default: the host filesystem), so lookups
    can run against an in-memory tree with other path conventions.
    """

    def __init__(
        self,
        fallback_paths: Iterable[str] | None = None,
        filesystem: FileSystem | None = None,
    ):
        super().__init__(fallback_paths)
        self.filesystem: FileSystem = filesystem if filesystem is not None else LocalFileSystem()

    @property
    def url_scheme(self) -> str:
        return "file"

    @property
    def path_separator(self) -> str:
        return self.filesystem.separator

    def set_filesystem(self, filesystem: FileSystem) -> None:
        if filesystem is None:
            raise InvalidConfigurationError("LocalLoader filesystem cannot be None")
        self.filesystem = filesystem

    def extract_scheme(self, location: str) -> str:
        """Extract the scheme, taking any bare path this filesystem accepts as ``file``."""
        return extract_scheme(location, self.filesystem)

    def resolve_resource(self, path: str) -> str | None:
        return self.lookup(path)

    def lookup(self, location: str) -> str | None:
        """Find an existing path on the filesystem.

        Malformed paths get one retry with leading slashes and backslashes
        removed (``///tmp/x``, ``\\\\tmp\\x``, ``/c:/tmp/x``).

        Args:
            location: Bare filesystem path

        Returns:
            Location URI if the path exists, None otherwise
        """
        try:
            path = self.filesystem.get_path(location)
        except InvalidPathError as e:
            cleaned = _LEADING_SEPARATORS.sub("", location, count=1)
            if cleaned != location:
                return self.lookup(cleaned)
            logger.debug(f"[rezolver:lookup] {e}")
            return None

        if not self.filesystem.exists(path):
            return None
        return self.filesystem.to_location(path)

    def __repr__(self) -> str:
        return f"LocalLoader(fallback={self.fallback_paths}, filesystem={self.filesystem!r})"
