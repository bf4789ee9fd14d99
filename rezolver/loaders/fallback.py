"""Fallback loader: retries another loader under extra prefixes."""

from ..errors import InvalidConfigurationError
from ..resource_info import ResourceInfo
from .base import ResourceLoader


class FallbackLoader(ResourceLoader):
    """Decorates a loader with fallback paths.

    The raw path goes through the wrapped loader first. If that fails, each
    fallback path is joined with the bare path and tried through the wrapped
    loader, in insertion order. Results always report the caller's path and
    the wrapped loader's name.

    Usage:
        loader = FallbackLoader.of(LocalLoader(), "/etc/app", "/usr/share/app")
        loader.add_fallback_path("/opt/app")
    """

    def __init__(self, loader: ResourceLoader, *fallback_paths: str):
        if loader is None:
            raise InvalidConfigurationError("FallbackLoader requires a loader to wrap")
        super().__init__(fallback_paths)
        self.loader = loader

    @classmethod
    def of(cls, loader: ResourceLoader, *fallback_paths: str) -> "FallbackLoader":
        return cls(loader, *fallback_paths)

    @property
    def name(self) -> str:
        return self.loader.name

    @property
    def url_scheme(self) -> str:
        return self.loader.url_scheme

    @property
    def path_separator(self) -> str:
        return self.loader.path_separator

    def extract_scheme(self, location: str) -> str:
        return self.loader.extract_scheme(location)

    def strip_scheme(self, location: str) -> str:
        return self.loader.strip_scheme(location)

    def owns(self, location: str) -> bool:
        return self.loader.owns(location)

    def resolve_resource(self, path: str) -> str | None:
        return self.loader.resolve_resource(path)

    def resolve(self, path: str) -> ResourceInfo:
        info = self.loader.resolve(path)
        if info.is_resolved or not self.loader.owns(path):
            return info

        bare = self.loader.bare_path(path)
        for fallback in self.fallback_paths:
            attempt = self.loader.resolve(self.join_path(fallback, bare))
            if attempt.is_resolved:
                return ResourceInfo(search_path=path, location=attempt.location, source_entity=attempt.source_entity)

        return info

    def __repr__(self) -> str:
        return f"FallbackLoader({self.loader!r}, fallback={self.fallback_paths})"
