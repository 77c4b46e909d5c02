"""
Distribution variant — which flavour of the Debian family we run on.

The variant decides package names, whether extra repositories are
registered, and which tools come from apt instead of prebuilt copies.
"""

from __future__ import annotations

from enum import StrEnum


class Variant(StrEnum):
    """Detected packaging-ecosystem flavour."""

    PIKAOS = "pikaos"   # ships Hyprland and friends natively
    UBUNTU = "ubuntu"   # needs the Hyprland PPA + Charm repo
    DEBIAN = "debian"   # plain fallback, repositories left to the operator

    @property
    def label(self) -> str:
        """Human-readable name for headers."""
        return {
            Variant.PIKAOS: "PikaOS",
            Variant.UBUNTU: "Ubuntu",
            Variant.DEBIAN: "Debian",
        }[self]
