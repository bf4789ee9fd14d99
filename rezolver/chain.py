"""Ordered chain of resource loaders."""

import logging
from collections.abc import Iterable
from collections.abc import Iterator

from .errors import InvalidConfigurationError
from .loaders import ClasspathLoader
from .loaders import FallbackLoader
from .loaders import LocalLoader
from .loaders import ResourceLoader
from .resource_info import ResourceInfo

logger = logging.getLogger(__name__)


class LoadersChain:
    """Loaders tried in insertion order; the first resolution wins.

    Loaders can be added or removed between resolutions. Duplicates are
    allowed and simply tried again.
    """

    def __init__(self, loaders: Iterable[ResourceLoader] | None = None):
        self._loaders: list[ResourceLoader] = list(loaders) if loaders is not None else []

    @classmethod
    def from_loaders(cls, loaders: Iterable[ResourceLoader]) -> "LoadersChain":
        if loaders is None:
            raise InvalidConfigurationError("Loaders collection cannot be None")
        return cls(loaders)

    @property
    def loaders(self) -> list[ResourceLoader]:
        """Snapshot of the loaders in resolution order."""
        return list(self._loaders)

    def add(self, loader: ResourceLoader) -> "LoadersChain":
        if loader is None:
            raise InvalidConfigurationError("Cannot add None to a loaders chain")
        self._loaders.append(loader)
        return self

    def remove(self, loader: ResourceLoader) -> None:
        """Remove the first occurrence of a loader, if present."""
        if loader in self._loaders:
            self._loaders.remove(loader)

    def clear(self) -> None:
        self._loaders.clear()

    def process(self, path: str) -> ResourceInfo:
        """Pass a path through the loaders, stopping at the first match.

        Args:
            path: Resource path to resolve

        Returns:
            The first resolved ResourceInfo; otherwise the last loader's
            unresolved result, or an "Unknown" one for an empty chain
        """
        info = None
        for loader in self._loaders:
            info = loader.resolve(path)
            if info.is_resolved:
                return info

        if info is None:
            logger.debug(f"[rezolver:process] Empty chain, cannot resolve {path}")
            return ResourceInfo.unresolved(path)

        logger.debug(f"[rezolver:process] {path} not resolved by {len(self._loaders)} loader(s)")
        return info

    def __len__(self) -> int:
        return len(self._loaders)

    def __iter__(self) -> Iterator[ResourceLoader]:
        return iter(list(self._loaders))

    def __repr__(self) -> str:
        return f"LoadersChain({', '.join(repr(loader) for loader in self._loaders)})"


def build_default_chain() -> LoadersChain:
    """Build the default chain: classpath first, then the local filesystem."""
    return LoadersChain().add(ClasspathLoader()).add(FallbackLoader(LocalLoader()))
