"""
Tests for repository bootstrap and the gum prerequisite.
"""

from pathlib import Path

import pytest

from debsetup.core.errors import RepositoryError
from debsetup.core.models.step import StepStatus
from debsetup.core.models.variant import Variant
from debsetup.core.services.prerequisites import ensure_gum
from debsetup.core.services.repositories import (
    CHARM_KEY_URL,
    HYPRLAND_PPA,
    add_charm_repository,
    add_hyprland_ppa,
    setup_repositories,
)


class TestSetupRepositories:
    """Tests for per-variant repository setup."""

    def test_ubuntu_registers_everything(self, make_ctx, runner, host):
        runner.set_output(["curl"], "-----BEGIN PGP PUBLIC KEY BLOCK-----\n")
        assert setup_repositories(make_ctx(Variant.UBUNTU)) is True

        assert runner.calls_matching("add-apt-repository", "-y", HYPRLAND_PPA)
        assert runner.calls_matching("curl", "-fsSL", CHARM_KEY_URL)
        gpg = runner.calls_matching("gpg", "--dearmor")[0]
        assert gpg.sudo is True
        assert gpg.input.startswith("-----BEGIN PGP")
        assert gpg.argv[-1] == str(Path(host.paths.keyrings_dir) / "charm.gpg")

        tee = runner.calls_matching("tee")[0]
        assert tee.argv[1].endswith("charm.list")
        assert tee.input.startswith(f"deb [signed-by={host.paths.keyrings_dir}/charm.gpg]")

        # Index refreshed last
        assert runner.commands[-1] == ["apt", "update"]

    def test_ubuntu_is_idempotent(self, make_ctx, runner, host):
        host.add_source("cppiber-ubuntu-hyprland-noble.sources", "URIs: https://ppa.launchpadcontent.net/cppiber/hyprland/ubuntu/\n")
        (Path(host.paths.keyrings_dir) / "charm.gpg").write_bytes(b"key")

        setup_repositories(make_ctx(Variant.UBUNTU))

        assert runner.calls_matching("add-apt-repository") == []
        assert runner.calls_matching("curl") == []
        assert runner.commands == [["apt", "update"]]

    def test_debian_is_informational_only(self, make_ctx, runner, caplog):
        with caplog.at_level("INFO"):
            assert setup_repositories(make_ctx(Variant.DEBIAN)) is False
        assert runner.call_count == 0
        assert "manually add repositories" in caplog.text

    def test_pikaos_is_noop(self, make_ctx, runner):
        assert setup_repositories(make_ctx(Variant.PIKAOS)) is False
        assert runner.call_count == 0

    def test_ppa_failure_raises(self, make_ctx, runner):
        runner.set_failure(["add-apt-repository"], returncode=2, error="no such PPA")
        with pytest.raises(RepositoryError) as exc_info:
            setup_repositories(make_ctx(Variant.UBUNTU))
        assert exc_info.value.exit_code == 2
        assert runner.calls_matching("apt", "update") == []


class TestIndividualRepositories:
    """Tests for the PPA and Charm registrations."""

    def test_add_ppa_returns_false_when_present(self, make_ctx, host):
        host.add_source("hyprland.list", "deb http://ppa.launchpad.net/cppiber/hyprland/ubuntu noble main\n")
        assert add_hyprland_ppa(make_ctx(Variant.UBUNTU)) is False

    def test_charm_key_download_failure(self, make_ctx, runner):
        runner.set_failure(["curl"], returncode=22)
        with pytest.raises(RepositoryError, match="Downloading Charm signing key"):
            add_charm_repository(make_ctx(Variant.UBUNTU))
        assert runner.calls_matching("gpg") == []

    def test_charm_creates_keyrings_dir(self, make_ctx, runner, host):
        add_charm_repository(make_ctx(Variant.UBUNTU))
        mkdir = runner.call_log[0]
        assert mkdir.argv == ["mkdir", "-p", host.paths.keyrings_dir]
        assert mkdir.sudo is True


class TestEnsureGum:
    """Tests for the gum prerequisite."""

    def test_skip_when_on_path(self, make_ctx, runner):
        runner.make_available("gum")
        assert ensure_gum(make_ctx(Variant.UBUNTU)) == StepStatus.SKIPPED
        assert runner.call_count == 0

    def test_pikaos_installs_from_apt(self, make_ctx, runner):
        assert ensure_gum(make_ctx(Variant.PIKAOS)) == StepStatus.OK
        assert runner.calls_matching("curl") == []
        assert runner.calls_matching("apt", "install")[0].argv == ["apt", "install", "-y", "gum"]

    def test_debian_adds_charm_first(self, make_ctx, runner):
        assert ensure_gum(make_ctx(Variant.DEBIAN)) == StepStatus.OK
        heads = [c.argv[:2] for c in runner.call_log if c.argv[0] in ("curl", "apt")]
        assert heads[0] == ["curl", "-fsSL"]
        assert ["apt", "update"] in heads
        assert heads[-1] == ["apt", "install"]
