"""Resolver facade and builder.

Usage:
    rezolver = Rezolver.builder().with_defaults().build()
    info = rezolver.resolve("classpath:META-INF/app.properties")

    # Process-wide default chain, created on first use
    location = Rezolver.lookup("config/app.yaml")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from .chain import LoadersChain
from .chain import build_default_chain
from .errors import InvalidConfigurationError
from .loaders import FallbackLoader
from .loaders import ResourceLoader
from .resource_info import ResourceInfo

logger = logging.getLogger(__name__)


class Rezolver:
    """Resolves resource paths through a loaders chain."""

    def __init__(self, chain: LoadersChain):
        if chain is None:
            raise InvalidConfigurationError("Rezolver requires a loaders chain")
        self.chain = chain

    def resolve(self, path: str) -> ResourceInfo:
        return self.chain.process(path)

    @staticmethod
    def builder() -> RezolverBuilder:
        return RezolverBuilder()

    @staticmethod
    def fetch(path: str) -> ResourceInfo:
        """Resolve a path with the process-wide default resolver."""
        return get_default().resolve(path)

    @staticmethod
    def lookup(path: str) -> str | None:
        """Resolve a path with the process-wide default resolver.

        Returns:
            Location URI, or None if unresolved
        """
        return get_default().resolve(path).location

    def __repr__(self) -> str:
        return f"Rezolver({self.chain!r})"


class RezolverBuilder:
    """Fluent construction of a Rezolver."""

    def __init__(self):
        self._chain = LoadersChain()

    def with_defaults(self) -> RezolverBuilder:
        """Start from the default chain (classpath, then local filesystem)."""
        self._chain = build_default_chain()
        return self

    def with_chain(self, chain: LoadersChain) -> RezolverBuilder:
        """Use an existing chain; later changes to it affect the built resolver."""
        if chain is None:
            raise InvalidConfigurationError("Loaders chain cannot be None")
        self._chain = chain
        return self

    def add(
        self,
        loader: ResourceLoader | Iterable[ResourceLoader],
        *fallback_paths: str | Iterable[str],
    ) -> RezolverBuilder:
        """Append loaders to the chain.

        Args:
            loader: A loader, or an iterable of loaders added in order
            fallback_paths: Fallback paths, given individually or as lists;
                when present the loader is wrapped in a FallbackLoader

        Raises:
            InvalidConfigurationError: Something other than loaders was given;
                nothing is added in that case
        """
        if loader is None:
            raise InvalidConfigurationError("Cannot add None to a loaders chain")

        if not isinstance(loader, ResourceLoader):
            if isinstance(loader, str | bytes) or not isinstance(loader, Iterable):
                raise InvalidConfigurationError(f"Expected a loader or loaders, got {loader!r}")
            items = list(loader)
            for item in items:
                if not isinstance(item, ResourceLoader):
                    raise InvalidConfigurationError(f"Not a resource loader: {item!r}")
            for item in items:
                self._chain.add(item)
            return self

        paths: list[str] = []
        for entry in fallback_paths:
            if isinstance(entry, str):
                paths.append(entry)
            else:
                paths.extend(entry)

        if paths:
            loader = FallbackLoader.of(loader, *paths)
        self._chain.add(loader)
        return self

    def build(self) -> Rezolver:
        return Rezolver(self._chain)


# Process-wide default resolver
_default: Rezolver | None = None
_default_lock = threading.Lock()


def get_default() -> Rezolver:
    """Get the process-wide resolver, building the default chain on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                logger.debug("[rezolver:default] Building default chain")
                _default = Rezolver(build_default_chain())
    return _default


def set_default(rezolver: Rezolver | None) -> None:
    """Replace the process-wide resolver; None resets it to lazy defaults."""
    global _default
    with _default_lock:
        _default = rezolver
