"""Classpath loader: resources on the interpreter's search path."""

from collections.abc import Iterable

from ..errors import InvalidConfigurationError
from ..finders import ResourceFinder
from ..finders import system_finder
from .base import ResourceLoader


DEFAULT_FALLBACK_PATH = "META-INF"


class ClasspathLoader(ResourceLoader):
    """Resolves ``classpath:`` resources through a finder.

    The injected finder is asked first, then the process-wide finder over
    ``sys.path``. Unless told otherwise, ``META-INF`` is tried as a fallback
    prefix.
    """

    def __init__(
        self,
        fallback_paths: Iterable[str] | None = None,
        finder: ResourceFinder | None = None,
    ):
        """Initialize loader.

        Args:
            fallback_paths: Prefixes tried when the bare path is not found
                (default: ["META-INF"]; pass [] for none)
            finder: Primary finder (default: a finder over sys.path)
        """
        super().__init__([DEFAULT_FALLBACK_PATH] if fallback_paths is None else fallback_paths)
        self.finder: ResourceFinder = finder if finder is not None else system_finder()

    @property
    def url_scheme(self) -> str:
        return "classpath"

    def set_finder(self, finder: ResourceFinder) -> None:
        if finder is None:
            raise InvalidConfigurationError("ClasspathLoader finder cannot be None")
        self.finder = finder

    def resolve_resource(self, path: str) -> str | None:
        location = self.finder.find_resource(path)
        if location is None:
            system = system_finder()
            if system is not self.finder:
                location = system.find_resource(path)
        return location

    def __repr__(self) -> str:
        return f"ClasspathLoader(fallback={self.fallback_paths}, finder={self.finder!r})"
