"""
Tests for variant detection — marker priority and fallback.
"""

from debsetup.core.models.variant import Variant
from debsetup.core.services.detection import detect_variant, sources_mention

UBUNTU_OS_RELEASE = 'NAME="Ubuntu"\nVERSION_ID="24.04"\nID=ubuntu\nID_LIKE=debian\n'
DEBIAN_OS_RELEASE = 'PRETTY_NAME="Debian GNU/Linux 13 (trixie)"\nID=debian\n'
PIKA_SOURCES = "Types: deb\nURIs: https://ppa.pika-os.com/\nSuites: pika\n"


class TestDetectVariant:
    """Tests for detect_variant()."""

    def test_pika_sources_detected(self, host):
        host.add_source("pika.sources", PIKA_SOURCES)
        host.write_os_release(DEBIAN_OS_RELEASE)
        assert detect_variant(host.paths) == Variant.PIKAOS

    def test_ubuntu_os_release_detected(self, host):
        host.write_os_release(UBUNTU_OS_RELEASE)
        assert detect_variant(host.paths) == Variant.UBUNTU

    def test_neither_marker_falls_back_to_debian(self, host):
        host.write_os_release(DEBIAN_OS_RELEASE)
        assert detect_variant(host.paths) == Variant.DEBIAN

    def test_pika_wins_over_ubuntu(self, host):
        """The sources check runs first; PikaOS is Ubuntu-based."""
        host.add_source("system.sources", PIKA_SOURCES)
        host.write_os_release(UBUNTU_OS_RELEASE)
        assert detect_variant(host.paths) == Variant.PIKAOS

    def test_pika_only_counts_in_sources_files(self, host):
        host.add_source("pika.list", "deb https://ppa.pika-os.com/ pika main\n")
        host.write_os_release(DEBIAN_OS_RELEASE)
        assert detect_variant(host.paths) == Variant.DEBIAN

    def test_missing_files_fall_back_to_debian(self, host):
        # No os-release written, sources dir empty
        assert detect_variant(host.paths) == Variant.DEBIAN

    def test_missing_sources_dir(self, host, tmp_path):
        paths = host.paths.model_copy(update={"apt_sources_dir": str(tmp_path / "nope")})
        host.write_os_release(UBUNTU_OS_RELEASE)
        assert detect_variant(paths) == Variant.UBUNTU

    def test_deterministic(self, host):
        host.write_os_release(UBUNTU_OS_RELEASE)
        assert {detect_variant(host.paths) for _ in range(3)} == {Variant.UBUNTU}


class TestSourcesMention:
    """Tests for apt sources scanning."""

    def test_pattern_filters_files(self, host):
        host.add_source("hyprland.list", "deb https://ppa.launchpadcontent.net/cppiber/hyprland/ubuntu noble main\n")
        sources = host.root / "etc" / "apt" / "sources.list.d"
        assert sources_mention(sources, "cppiber/hyprland")
        assert not sources_mention(sources, "cppiber/hyprland", "*.sources")

    def test_subdirectories_ignored(self, host):
        sources = host.root / "etc" / "apt" / "sources.list.d"
        (sources / "pika.sources").mkdir()
        assert not sources_mention(sources, "pika", "*.sources")


class TestVariantLabel:
    """Tests for Variant values and labels."""

    def test_labels(self):
        assert Variant.PIKAOS.label == "PikaOS"
        assert Variant.UBUNTU.label == "Ubuntu"
        assert Variant.DEBIAN.label == "Debian"

    def test_str_value(self):
        assert Variant("ubuntu") is Variant.UBUNTU
        assert f"{Variant.DEBIAN}" == "debian"
