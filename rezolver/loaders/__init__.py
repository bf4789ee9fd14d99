"""Resource loader implementations.

- ClasspathLoader: resources on the interpreter's search path (``classpath:``)
- LocalLoader: resources on a filesystem (``file:``)
- FallbackLoader: retries any loader under extra prefixes
"""

from .base import ResourceLoader
from .classpath import ClasspathLoader
from .fallback import FallbackLoader
from .local import LocalLoader

__all__ = [
    "ClasspathLoader",
    "FallbackLoader",
    "LocalLoader",
    "ResourceLoader",
]
