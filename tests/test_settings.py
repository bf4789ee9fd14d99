"""Tests for scope-aware chain settings."""

import logging
import os
from pathlib import Path

import pytest
import yaml
from rezolver.errors import InvalidConfigurationError
from rezolver.finders import SearchPathFinder
from rezolver.loaders import ClasspathLoader
from rezolver.loaders import FallbackLoader
from rezolver.loaders import LocalLoader
from rezolver.settings import FALLBACK_PATHS_ENV
from rezolver.settings import ChainConfig
from rezolver.settings import LoaderConfig
from rezolver.settings import RezolverSettings
from rezolver.settings import SettingsPaths
from rezolver.settings import add_local_fallback_paths
from rezolver.settings import build_chain


@pytest.fixture
def settings_paths(tmp_path):
    return SettingsPaths(
        global_settings=tmp_path / "home" / ".rezolver" / "settings.yaml",
        project_settings=tmp_path / "project" / ".rezolver" / "settings.yaml",
        local_settings=tmp_path / "project" / ".rezolver" / "settings.local.yaml",
    )


def write_yaml(path: Path, content: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(content))


def test_no_settings_builds_default_chain(settings_paths):
    loaders = RezolverSettings(settings_paths).build_chain(environ={}).loaders

    assert [loader.name for loader in loaders] == ["ClasspathLoader", "LocalLoader"]
    assert isinstance(loaders[1], FallbackLoader)


def test_configured_chain(settings_paths, tmp_path):
    write_yaml(
        settings_paths.project_settings,
        {
            "chain": [
                {"type": "classpath", "search_paths": [str(tmp_path / "classes")]},
                {"type": "local", "fallback": ["/etc/myapp", "/usr/share/myapp"]},
            ]
        },
    )

    classpath, local = RezolverSettings(settings_paths).build_chain(environ={}).loaders

    assert isinstance(classpath, ClasspathLoader)
    assert classpath.fallback_paths == ["META-INF"]
    assert isinstance(classpath.finder, SearchPathFinder)
    assert classpath.finder.search_paths == [tmp_path / "classes"]
    assert isinstance(local, FallbackLoader)
    assert isinstance(local.loader, LocalLoader)
    assert local.fallback_paths == ["/etc/myapp", "/usr/share/myapp"]


def test_more_specific_scope_wins(settings_paths):
    write_yaml(settings_paths.global_settings, {"chain": [{"type": "classpath"}, {"type": "local"}]})
    write_yaml(settings_paths.local_settings, {"chain": [{"type": "local", "wrap": False}]})

    (loader,) = RezolverSettings(settings_paths).build_chain(environ={}).loaders
    assert type(loader) is LocalLoader


def test_merged_settings_deep_merge(settings_paths):
    write_yaml(settings_paths.global_settings, {"extra": {"a": 1, "b": 2}})
    write_yaml(settings_paths.project_settings, {"extra": {"b": 3}})

    assert RezolverSettings(settings_paths).get_merged_settings() == {"extra": {"a": 1, "b": 3}}


def test_single_file_ignores_scope_files(settings_paths, tmp_path):
    write_yaml(settings_paths.project_settings, {"chain": [{"type": "classpath"}]})
    explicit = tmp_path / "explicit.yaml"
    write_yaml(explicit, {"chain": [{"type": "local"}]})

    (loader,) = RezolverSettings(SettingsPaths.single(explicit)).build_chain(environ={}).loaders
    assert loader.name == "LocalLoader"


def test_unknown_loader_type_is_invalid(settings_paths):
    write_yaml(settings_paths.project_settings, {"chain": [{"type": "remote"}]})

    with pytest.raises(InvalidConfigurationError):
        RezolverSettings(settings_paths).build_chain(environ={})


def test_search_paths_on_local_loader_is_invalid():
    config = ChainConfig(chain=[LoaderConfig(type="local", search_paths=["/classes"])])
    with pytest.raises(InvalidConfigurationError):
        build_chain(config, environ={})


def test_malformed_file_is_skipped(settings_paths, caplog):
    settings_paths.project_settings.parent.mkdir(parents=True)
    settings_paths.project_settings.write_text("chain: [unclosed")

    with caplog.at_level(logging.WARNING):
        chain = RezolverSettings(settings_paths).build_chain(environ={})

    assert len(chain) == 2
    assert "Failed to read" in caplog.text


def test_non_mapping_file_is_skipped(settings_paths):
    settings_paths.project_settings.parent.mkdir(parents=True)
    settings_paths.project_settings.write_text("- just\n- a list\n")

    assert RezolverSettings(settings_paths).get_merged_settings() == {}


def test_wrapped_classpath_loader():
    config = ChainConfig(chain=[LoaderConfig(type="classpath", fallback=["META-INF/fallback"], wrap=True)])
    (loader,) = build_chain(config, environ={}).loaders

    assert isinstance(loader, FallbackLoader)
    assert loader.fallback_paths == ["META-INF/fallback"]
    assert loader.loader.fallback_paths == []


def test_unwrapped_local_loader_keeps_fallbacks():
    config = ChainConfig(chain=[LoaderConfig(type="local", fallback=["/srv"], wrap=False)])
    (loader,) = build_chain(config, environ={}).loaders

    assert type(loader) is LocalLoader
    assert loader.fallback_paths == ["/srv"]


def test_fallback_paths_are_expanded(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("APP_DIR", "/opt/app")
    config = ChainConfig(chain=[LoaderConfig(type="local", fallback=["~/conf", "$APP_DIR/conf"])])
    (loader,) = build_chain(config, environ={}).loaders

    assert loader.fallback_paths == [str(tmp_path / "conf"), "/opt/app/conf"]


def test_environment_fallback_paths_apply_to_local_loaders():
    chain = build_chain(ChainConfig(), environ={FALLBACK_PATHS_ENV: os.pathsep.join(["/a", "", "/b"])})
    classpath, local = chain.loaders

    assert classpath.fallback_paths == ["META-INF"]
    assert local.fallback_paths == ["/a", "/b"]


def test_add_local_fallback_paths_to_plain_local_loader():
    config = ChainConfig(chain=[LoaderConfig(type="local", wrap=False), LoaderConfig(type="classpath")])
    chain = build_chain(config, environ={})
    add_local_fallback_paths(chain, ["/extra"])

    local, classpath = chain.loaders
    assert local.fallback_paths == ["/extra"]
    assert classpath.fallback_paths == ["META-INF"]


def test_settings_chain_resolves(settings_paths, classpath_root, tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "app.yaml").write_text("key: value")
    write_yaml(
        settings_paths.project_settings,
        {
            "chain": [
                {"type": "classpath", "search_paths": [str(classpath_root)]},
                {"type": "local", "fallback": [str(data_dir)]},
            ]
        },
    )
    chain = RezolverSettings(settings_paths).build_chain(environ={})

    assert chain.process("cl_resource.nfo").source_entity == "ClasspathLoader"
    app = chain.process("app.yaml")
    assert app.source_entity == "LocalLoader"
    assert app.location == (data_dir / "app.yaml").resolve().as_uri()
