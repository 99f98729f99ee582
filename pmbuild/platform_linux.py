"""Linux native build configuration.

SDL2 and SDL2_ttf are located through pkg-config. Library discovery at configure
time is left to CMake's default probing, since distribution packages install into
the standard system prefixes.
"""

from .common import RequirementKind, ToolRequirement, probe, query_cpu_count

BUILD_DIR = "build-linux"

INSTALL_HINTS = (
    "On Ubuntu/Debian, install with: sudo apt-get install libsdl2-dev libsdl2-ttf-dev",
    "On Fedora/RHEL, install with: sudo dnf install SDL2-devel SDL2_ttf-devel",
    "On Arch Linux, install with: sudo pacman -S sdl2 sdl2_ttf",
)


def get_platform_name():
    """Get platform name for Linux."""
    return "Linux"


def get_requirements():
    """SDL2 and SDL2_ttf development packages, by pkg-config name."""
    return [
        ToolRequirement(
            RequirementKind.LIBRARY_VIA_PROBE,
            "sdl2",
            "Install the SDL2 development package for your distribution",
        ),
        ToolRequirement(
            RequirementKind.LIBRARY_VIA_PROBE,
            "SDL2_ttf",
            "Install the SDL2_ttf development package for your distribution",
        ),
    ]


def check_library(name):
    """Check if a library is known to pkg-config."""
    return probe(["pkg-config", "--exists", name])


def get_compile_flags():
    """Get compile flags for Linux."""
    return []


def get_cpu_count():
    return query_cpu_count(["nproc"])


def get_failure_checklist(build_dir_name):
    return [
        "Common Linux build issues:",
        "  • Ensure a C/C++ toolchain is installed (build-essential, gcc-c++ or base-devel)",
        "  • Reinstall the SDL2 development packages (libsdl2-dev libsdl2-ttf-dev)",
        f"  • Try clean build: rm -rf {build_dir_name} && python -m pmbuild --clean",
    ]
