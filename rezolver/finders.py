"""Resource finders used by the classpath loader.

A finder maps a resource name (``META-INF/app.properties``) to the location
of the first matching entry on its search path. Search path entries may be
directories or zip archives (wheels, eggs, zipped resource bundles).
"""

import logging
import sys
import zipfile
from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from pathlib import Path
from pathlib import PurePosixPath

logger = logging.getLogger(__name__)


class ResourceFinder(ABC):
    """Looks up resources by name."""

    @abstractmethod
    def find_resource(self, name: str) -> str | None:
        """Find a resource.

        Args:
            name: Slash-separated resource name, relative to the search roots.
                A name with a leading separator is not found.

        Returns:
            Location URI of the first match, None if not found
        """


class SearchPathFinder(ResourceFinder):
    """Finds resources under an ordered list of roots.

    When constructed without roots the finder follows ``sys.path`` as it is
    at lookup time, the way the interpreter finds modules.
    """

    def __init__(self, search_paths: Iterable[str | Path] | None = None):
        self._search_paths = [Path(p) for p in search_paths] if search_paths is not None else None

    @property
    def search_paths(self) -> list[Path]:
        if self._search_paths is not None:
            return list(self._search_paths)
        # An empty sys.path entry stands for the current directory
        return [Path(entry) if entry else Path.cwd() for entry in sys.path]

    def find_resource(self, name: str) -> str | None:
        """Find a resource by relative name.

        Names starting with a separator are absolute and never match a root.
        """
        if not name or name[0] in "/\\":
            return None
        name = name.replace("\\", "/")
        if ".." in PurePosixPath(name).parts:
            return None

        for root in self.search_paths:
            try:
                if root.is_dir():
                    location = self._find_in_directory(root, name)
                elif root.is_file() and zipfile.is_zipfile(root):
                    location = self._find_in_archive(root, name)
                else:
                    continue
            except (OSError, ValueError, zipfile.BadZipFile) as e:
                logger.debug(f"[rezolver:finder] Skipping search path {root}: {e}")
                continue

            if location is not None:
                return location

        return None

    def _find_in_directory(self, root: Path, name: str) -> str | None:
        candidate = root / name
        if candidate.exists():
            return candidate.resolve().as_uri()
        return None

    def _find_in_archive(self, archive: Path, name: str) -> str | None:
        entry = name.rstrip("/")
        with zipfile.ZipFile(archive) as zf:
            names = zf.namelist()
        if entry in names or any(n.startswith(entry + "/") for n in names):
            return f"zip:{archive.resolve().as_uri()}!/{entry}"
        return None

    def __repr__(self) -> str:
        if self._search_paths is None:
            return "SearchPathFinder(sys.path)"
        return f"SearchPathFinder({', '.join(str(p) for p in self._search_paths)})"


_system_finder = SearchPathFinder()


def system_finder() -> ResourceFinder:
    """Get the process-wide finder over ``sys.path``."""
    return _system_finder
