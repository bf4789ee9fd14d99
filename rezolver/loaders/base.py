"""Base class for resource loaders.

Every loader resolves paths the same way:
1. Paths carrying another loader's scheme are left alone (unresolved)
2. The loader's own scheme prefix is stripped to get the bare path
3. The bare path is looked up directly
4. Each fallback path, in insertion order, is tried as a prefix
5. The outcome is wrapped in a ResourceInfo naming this loader

Subclasses only provide ``url_scheme`` and ``resolve_resource``.
"""

import logging
from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable

from ..resource_info import ResourceInfo
from ..scheme import extract_scheme
from ..scheme import has_scheme
from ..scheme import strip_scheme

logger = logging.getLogger(__name__)


class ResourceLoader(ABC):
    """A strategy that resolves resource paths it owns."""

    def __init__(self, fallback_paths: Iterable[str] | None = None):
        self.fallback_paths: list[str] = list(fallback_paths or [])

    @property
    def name(self) -> str:
        """Identity reported as ``source_entity``."""
        return type(self).__name__

    @property
    @abstractmethod
    def url_scheme(self) -> str:
        """Scheme owned by this loader."""

    @property
    def path_separator(self) -> str:
        return "/"

    @abstractmethod
    def resolve_resource(self, path: str) -> str | None:
        """Look up a bare path.

        Returns:
            Location URI, or None if nothing matches. Never raises for
            missing or malformed paths.
        """

    def add_fallback_path(self, path: str) -> "ResourceLoader":
        self.fallback_paths.append(path)
        return self

    def extract_scheme(self, location: str) -> str:
        return extract_scheme(location)

    def strip_scheme(self, location: str) -> str:
        return strip_scheme(location)

    def owns(self, location: str) -> bool:
        """Check whether the location is unscoped or carries this loader's scheme."""
        if not has_scheme(location):
            return True
        return self.extract_scheme(location) == self.url_scheme

    def bare_path(self, location: str) -> str:
        """Remove an explicit scheme prefix, if any."""
        if has_scheme(location):
            return self.strip_scheme(location)
        return location

    def join_path(self, prefix: str, path: str) -> str:
        """Join a fallback prefix and a path with a single separator."""
        if not prefix:
            return path
        separators = "/" + self.path_separator
        return prefix.rstrip(separators) + self.path_separator + path.lstrip(separators)

    def resolve(self, path: str) -> ResourceInfo:
        """Resolve a resource path.

        Args:
            path: Resource path, optionally scheme-prefixed

        Returns:
            ResourceInfo for the attempt, resolved or not
        """
        if not self.owns(path):
            logger.debug(f"[rezolver:resolve] {self.name} skips foreign scheme: {path}")
            return ResourceInfo.unresolved(path, self.name)

        bare = self.bare_path(path)
        location = self.resolve_resource(bare)

        if location is None:
            for fallback in self.fallback_paths:
                candidate = self.join_path(fallback, bare)
                location = self.resolve_resource(candidate)
                if location is not None:
                    logger.debug(f"[rezolver:resolve] {self.name}: {path} -> fallback {fallback}")
                    break

        if location is not None:
            logger.debug(f"[rezolver:resolve] {self.name}: {path} -> {location}")

        return ResourceInfo(search_path=path, location=location, source_entity=self.name)

    def __repr__(self) -> str:
        return f"{self.name}(fallback={self.fallback_paths})"
