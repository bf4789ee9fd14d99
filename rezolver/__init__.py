"""Rezolver - resolve resource paths through a chain of loaders.

A path such as ``classpath:META-INF/app.properties``, ``file:///etc/app.yaml``
or plain ``app.yaml`` is passed to each loader in order; the first loader that
finds the resource wins.
"""

from .chain import LoadersChain
from .chain import build_default_chain
from .errors import InvalidConfigurationError
from .errors import InvalidPathError
from .errors import RezolverError
from .filesystem import FileSystem
from .filesystem import LocalFileSystem
from .filesystem import MemoryFileSystem
from .finders import ResourceFinder
from .finders import SearchPathFinder
from .loaders import ClasspathLoader
from .loaders import FallbackLoader
from .loaders import LocalLoader
from .loaders import ResourceLoader
from .resource_info import ResourceInfo
from .rezolver import Rezolver
from .rezolver import RezolverBuilder

__all__ = [
    "ClasspathLoader",
    "FallbackLoader",
    "FileSystem",
    "InvalidConfigurationError",
    "InvalidPathError",
    "LoadersChain",
    "LocalFileSystem",
    "LocalLoader",
    "MemoryFileSystem",
    "ResourceFinder",
    "ResourceInfo",
    "ResourceLoader",
    "Rezolver",
    "RezolverBuilder",
    "RezolverError",
    "SearchPathFinder",
    "build_default_chain",
]
