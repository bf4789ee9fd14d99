"""Pytest configuration and shared fixtures for rezolver tests."""

import logging

import pytest
from rezolver.filesystem import MemoryFileSystem
from rezolver.finders import SearchPathFinder
from rezolver.logging_setup import JsonlHandler
from rezolver.rezolver import set_default

MAX_TEST_FILES = 5
TMP_DIR = "/tmp"


@pytest.fixture(autouse=True)
def reset_default_rezolver():
    """Drop the process-wide resolver between tests."""
    set_default(None)
    yield
    set_default(None)


@pytest.fixture(autouse=True)
def remove_jsonl_handlers():
    """Detach JSONL sinks installed by a test."""
    logger = logging.getLogger("rezolver")
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if isinstance(handler, JsonlHandler):
            logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def memory_fs():
    """POSIX in-memory filesystem with /tmp/fs_resource_<i>.nfo files."""
    fs = MemoryFileSystem()
    for i in range(MAX_TEST_FILES):
        fs.write_text(f"{TMP_DIR}/fs_resource_{i}.nfo", f"resource {i}")
    return fs


@pytest.fixture
def windows_fs():
    """Windows-flavored in-memory filesystem with c:\\tmp\\TestFile.txt."""
    fs = MemoryFileSystem("windows")
    fs.write_text("c:\\tmp\\TestFile.txt", "windows content")
    return fs


@pytest.fixture
def classpath_root(tmp_path):
    """Directory laid out like a classpath root."""
    root = tmp_path / "classes"
    meta_inf = root / "META-INF"
    (meta_inf / "fallback").mkdir(parents=True)
    (meta_inf / "cl_resource.nfo").write_text("classpath resource")
    (meta_inf / "dup_resource.nfo").write_text("classpath duplicate")
    (meta_inf / "fallback" / "cl_resource_2.nfo").write_text("fallback resource")
    return root


@pytest.fixture
def classpath_finder(classpath_root):
    return SearchPathFinder([classpath_root])
