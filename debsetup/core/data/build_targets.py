"""
Source-build recipes.

Tools built from git because no (usable) apt package exists on the
supported variants. Placeholders ``{nproc}`` and ``{prefix}`` are
substituted at build time.
"""

from __future__ import annotations

from debsetup.core.models.build import BuildStage, BuildTarget

NWG_DOCK_HYPRLAND = BuildTarget(
    name="nwg-dock-hyprland",
    repo_url="https://github.com/nwg-piotr/nwg-dock-hyprland.git",
    build_deps=[
        "golang-go",
        "libgtk-3-dev",
        "libgtk-layer-shell-dev",
        "libgirepository1.0-dev",
    ],
    stages=[
        BuildStage(
            name="build",
            argv=["go", "build", "-p", "{nproc}", "-v", "-o", "bin/nwg-dock-hyprland", "."],
        ),
        BuildStage(
            name="install",
            argv=[
                "install", "-Dm755",
                "bin/nwg-dock-hyprland",
                "{prefix}/bin/nwg-dock-hyprland",
            ],
            sudo=True,
        ),
    ],
)

HYPRPICKER = BuildTarget(
    name="hyprpicker",
    repo_url="https://github.com/hyprwm/hyprpicker.git",
    build_deps=[
        "cmake",
        "pkg-config",
        "libcairo2-dev",
        "libpango1.0-dev",
        "libjpeg-dev",
        "libwayland-dev",
        "wayland-protocols",
        "libxkbcommon-dev",
        "libhyprutils-dev",
        "hyprwayland-scanner",
    ],
    prepare="hyprwayland-scanner-pc",
    stages=[
        BuildStage(
            name="configure",
            argv=["cmake", "-B", "build", "-DCMAKE_INSTALL_PREFIX={prefix}"],
        ),
        BuildStage(name="build", argv=["cmake", "--build", "build", "-j", "{nproc}"]),
        BuildStage(name="install", argv=["cmake", "--install", "build"], sudo=True),
    ],
)

# Build order during a run
BUILD_TARGETS: list[BuildTarget] = [NWG_DOCK_HYPRLAND, HYPRPICKER]
