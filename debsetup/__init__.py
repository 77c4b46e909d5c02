"""debsetup — Hyprland desktop provisioning for Debian-family hosts."""

__version__ = "0.1.0"
