"""
Tests for the installed-set query and the batch installer.
"""

import pytest

from debsetup.core.errors import PackageInstallError, SetupError
from debsetup.core.models.command import CommandResult
from debsetup.core.services.package_install import apt_update, install_packages
from debsetup.core.services.package_query import check_packages, is_installed

# ── Installed-set query ──────────────────────────────────────────────


class TestIsInstalled:
    """Tests for the dpkg installed-state query."""

    def test_installed_package(self, runner):
        runner.installed.add("git")
        assert is_installed(runner, "git") is True

    def test_unknown_package(self, runner):
        assert is_installed(runner, "no-such-package") is False

    def test_query_command(self, runner):
        is_installed(runner, "git")
        assert runner.commands == [["dpkg-query", "-W", "-f=${Status}", "git"]]

    def test_deinstalled_status_is_not_installed(self, runner):
        runner.set_output(["dpkg-query"], "deinstall ok config-files")
        assert is_installed(runner, "kitty") is False

    def test_missing_dpkg_query_does_not_raise(self, runner):
        runner.set_failure(["dpkg-query"], returncode=127, error="Command not found")
        assert is_installed(runner, "git") is False

    def test_not_cached(self, runner):
        assert is_installed(runner, "jq") is False
        runner.installed.add("jq")
        assert is_installed(runner, "jq") is True
        assert len(runner.calls_matching("dpkg-query")) == 2


class TestCheckPackages:
    """Tests for check_packages()."""

    def test_partition_preserves_order(self, runner):
        runner.installed.update({"b", "d"})
        result = check_packages(runner, ["a", "b", "c", "d"])
        assert result == {"missing": ["a", "c"], "installed": ["b", "d"]}


# ── Batch installer ─────────────────────────────────────────────────


class TestInstallPackages:
    """Tests for the batch apt transaction."""

    def test_single_transaction_for_missing(self, make_ctx, runner):
        runner.installed.add("git")
        installed = install_packages(make_ctx(), ["wget", "git", "unzip"])
        assert installed == ["wget", "unzip"]
        apt_calls = runner.calls_matching("apt", "install")
        assert len(apt_calls) == 1
        assert apt_calls[0].argv == ["apt", "install", "-y", "wget", "unzip"]
        assert apt_calls[0].sudo is True

    def test_all_installed_means_no_transaction(self, make_ctx, runner):
        runner.installed.update({"wget", "git"})
        assert install_packages(make_ctx(), ["wget", "git"]) == []
        assert runner.calls_matching("apt") == []

    def test_empty_request(self, make_ctx, runner):
        assert install_packages(make_ctx(), []) == []
        assert runner.call_count == 0

    def test_logs_already_installed(self, make_ctx, runner, caplog):
        runner.installed.add("git")
        with caplog.at_level("INFO"):
            install_packages(make_ctx(), ["git"])
        assert "git is already installed." in caplog.text

    def test_duplicates_requested_once(self, make_ctx, runner):
        install_packages(make_ctx(), ["jq", "jq", "fzf"])
        assert runner.calls_matching("apt", "install")[0].argv[3:] == ["jq", "fzf"]

    def test_idempotent_second_run(self, make_ctx, runner):
        ctx = make_ctx()
        packages = ["kitty", "waybar", "rofi"]
        assert install_packages(ctx, packages) == packages
        runner_calls_after_first = len(runner.calls_matching("apt"))

        assert install_packages(ctx, packages) == []
        assert runner_calls_after_first == 1
        assert len(runner.calls_matching("apt")) == 1

    def test_failure_raises_with_exit_code(self, make_ctx, runner):
        runner.set_failure(["apt", "install"], returncode=100, error="E: Unable to locate package")
        with pytest.raises(PackageInstallError) as exc_info:
            install_packages(make_ctx(), ["does-not-exist"])
        err = exc_info.value
        assert err.exit_code == 100
        assert err.argv == ["apt", "install", "-y", "does-not-exist"]
        assert isinstance(err, SetupError)

    def test_failed_transaction_marks_nothing_installed(self, make_ctx, runner):
        runner.set_failure(["apt", "install"], returncode=100)
        with pytest.raises(PackageInstallError):
            install_packages(make_ctx(), ["kitty"])
        assert "kitty" not in runner.installed


class TestAptUpdate:
    """Tests for apt_update()."""

    def test_update_runs_privileged(self, make_ctx, runner):
        apt_update(make_ctx())
        call = runner.call_log[0]
        assert call.argv == ["apt", "update"]
        assert call.sudo is True

    def test_update_failure_raises(self, make_ctx, runner):
        runner.set_response(["apt", "update"], CommandResult.failure(["apt", "update"], returncode=100))
        with pytest.raises(PackageInstallError, match="apt update failed"):
            apt_update(make_ctx())
