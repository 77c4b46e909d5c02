"""
Shared test fixtures and configuration.

Every test runs against a fake host rooted in ``tmp_path`` and a
MockRunner, so nothing touches the real package database.
"""

from dataclasses import dataclass
from pathlib import Path

import pytest

from debsetup.adapters.mock import MockRunner
from debsetup.core.context import SetupContext
from debsetup.core.models.config import PathsConfig, SetupConfig
from debsetup.core.models.variant import Variant


@dataclass
class FakeHost:
    """A throwaway directory tree laid out like the host paths."""

    root: Path
    paths: PathsConfig

    def write_os_release(self, text: str) -> Path:
        path = Path(self.paths.os_release)
        path.write_text(text)
        return path

    def add_source(self, name: str, text: str) -> Path:
        path = Path(self.paths.apt_sources_dir) / name
        path.write_text(text)
        return path

    @property
    def workspace_dir(self) -> Path:
        return Path(self.paths.workspace_dir)

    @property
    def setup_dir(self) -> Path:
        return Path(self.paths.setup_dir)


@pytest.fixture
def host(tmp_path: Path) -> FakeHost:
    """Fake host directories (etc, apt sources, keyrings, workspace...)."""
    etc = tmp_path / "etc"
    sources = etc / "apt" / "sources.list.d"
    keyrings = etc / "apt" / "keyrings"
    workspace = tmp_path / "work"
    setup_dir = tmp_path / "setup"
    for d in (sources, keyrings, workspace, setup_dir):
        d.mkdir(parents=True)

    paths = PathsConfig(
        os_release=str(etc / "os-release"),
        apt_sources_dir=str(sources),
        keyrings_dir=str(keyrings),
        pkgconfig_dir=str(tmp_path / "pkgconfig"),
        install_prefix="/usr/local",
        workspace_dir=str(workspace),
        setup_dir=str(setup_dir),
        local_bin=str(tmp_path / "home" / ".local" / "bin"),
    )
    return FakeHost(root=tmp_path, paths=paths)


@pytest.fixture
def runner() -> MockRunner:
    """A fresh MockRunner with nothing installed and nothing on PATH."""
    return MockRunner()


@pytest.fixture
def make_ctx(host: FakeHost, runner: MockRunner):
    """Factory for a SetupContext on the fake host."""

    def _make(variant: Variant = Variant.DEBIAN, jobs: int = 4, **config) -> SetupContext:
        cfg = SetupConfig(paths=host.paths, **config)
        return SetupContext(variant=variant, runner=runner, config=cfg, jobs=jobs)

    return _make
