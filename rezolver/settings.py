"""Settings management for rezolver chains.

Scope-aware YAML settings describing which loaders to chain:

    chain:
      - type: classpath
        search_paths: [./resources]
      - type: local
        fallback: [/etc/myapp, ~/.myapp]

Scope priority (most specific wins):
1. local (.rezolver/settings.local.yaml) - machine-specific
2. project (.rezolver/settings.yaml) - committed, team-shared
3. global (~/.rezolver/settings.yaml) - user defaults

``REZOLVER_FALLBACK_PATHS`` (os.pathsep separated) appends fallback paths to
every local loader of the built chain.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError

from .chain import LoadersChain
from .chain import build_default_chain
from .errors import InvalidConfigurationError
from .finders import SearchPathFinder
from .loaders import ClasspathLoader
from .loaders import FallbackLoader
from .loaders import LocalLoader
from .loaders import ResourceLoader

logger = logging.getLogger(__name__)

FALLBACK_PATHS_ENV = "REZOLVER_FALLBACK_PATHS"


class LoaderConfig(BaseModel):
    """Configuration for a single loader in the chain."""

    type: Literal["classpath", "local"] = Field(..., description="Loader kind")
    fallback: list[str] | None = Field(None, description="Fallback paths tried in order")
    search_paths: list[str] = Field(default_factory=list, description="Extra classpath roots (classpath only)")
    wrap: bool | None = Field(
        None, description="Wrap in a FallbackLoader (default: true for local loaders, false for classpath)"
    )


class ChainConfig(BaseModel):
    """Chain section of the settings; no chain means the default chain."""

    chain: list[LoaderConfig] | None = Field(None, description="Loaders in resolution order")


@dataclass
class SettingsPaths:
    """Settings files, read in merge order. Missing scopes are None."""

    global_settings: Path | None
    project_settings: Path | None
    local_settings: Path | None

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard rezolver layout."""
        return cls(
            global_settings=Path.home() / ".rezolver" / "settings.yaml",
            project_settings=Path.cwd() / ".rezolver" / "settings.yaml",
            local_settings=Path.cwd() / ".rezolver" / "settings.local.yaml",
        )

    @classmethod
    def single(cls, path: Path) -> SettingsPaths:
        """Use one explicit settings file instead of the scope files."""
        return cls(global_settings=path, project_settings=None, local_settings=None)

    def files(self) -> list[Path]:
        return [p for p in (self.global_settings, self.project_settings, self.local_settings) if p is not None]


class RezolverSettings:
    """Loads and merges settings from all scopes.

    Usage:
        settings = RezolverSettings()
        chain = settings.build_chain()
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes; unreadable files are skipped."""
        result: dict[str, Any] = {}
        for path in self.paths.files():
            if not path.exists():
                continue
            try:
                with open(path) as f:
                    content = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to read {path}: {e}")
                continue
            if not isinstance(content, dict):
                logger.warning(f"Ignoring {path}: expected a mapping, got {type(content).__name__}")
                continue
            result = _deep_merge(result, content)
        return result

    def get_chain_config(self) -> ChainConfig:
        """Validate the merged chain section.

        Raises:
            InvalidConfigurationError: The chain section does not match the schema
        """
        settings = self.get_merged_settings()
        try:
            return ChainConfig.model_validate({"chain": settings.get("chain")})
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid chain settings: {e}") from e

    def build_chain(self, environ: Mapping[str, str] | None = None) -> LoadersChain:
        """Build the configured chain, or the default chain if none is configured."""
        return build_chain(self.get_chain_config(), environ)


def build_chain(config: ChainConfig, environ: Mapping[str, str] | None = None) -> LoadersChain:
    """Build a loaders chain from validated settings.

    Args:
        config: Chain settings
        environ: Environment to read REZOLVER_FALLBACK_PATHS from (default: os.environ)

    Returns:
        LoadersChain in configured order
    """
    if config.chain is None:
        chain = build_default_chain()
    else:
        chain = LoadersChain([_build_loader(entry) for entry in config.chain])

    environ = os.environ if environ is None else environ
    if extra := environ.get(FALLBACK_PATHS_ENV):
        add_local_fallback_paths(chain, [p for p in extra.split(os.pathsep) if p])

    return chain


def add_local_fallback_paths(chain: LoadersChain, paths: Iterable[str]) -> None:
    """Append fallback paths to every local loader of a chain.

    Local loaders wrapped in a FallbackLoader get the paths on the wrapper.
    """
    paths = list(paths)
    if not paths:
        return
    for loader in chain:
        if _is_local(loader):
            logger.debug(f"[rezolver:settings] Adding fallback paths {paths} to {loader!r}")
            loader.fallback_paths.extend(paths)


def _is_local(loader: ResourceLoader) -> bool:
    if isinstance(loader, FallbackLoader):
        return isinstance(loader.loader, LocalLoader)
    return isinstance(loader, LocalLoader)


def _build_loader(entry: LoaderConfig) -> ResourceLoader:
    fallback = [_expand(p) for p in entry.fallback] if entry.fallback is not None else None

    if entry.type == "classpath":
        finder = SearchPathFinder([_expand(p) for p in entry.search_paths]) if entry.search_paths else None
        if entry.wrap:
            return FallbackLoader(ClasspathLoader(fallback_paths=[], finder=finder), *(fallback or []))
        return ClasspathLoader(fallback_paths=fallback, finder=finder)

    if entry.search_paths:
        raise InvalidConfigurationError("search_paths is only supported for classpath loaders")

    if entry.wrap is False:
        return LocalLoader(fallback_paths=fallback)
    return FallbackLoader(LocalLoader(), *(fallback or []))


def _expand(path: str) -> str:
    return os.path.expandvars(os.path.expanduser(path))


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, overlay wins."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
