"""macOS native build configuration.

IMPORTANT: CMake cannot find Homebrew-installed SDL2 by convention alone, so the
Homebrew prefixes of sdl2 and sdl2_ttf are passed explicitly, both as -D*_DIR
cache entries and as environment variables of the CMake child processes.

The deployment target and architecture are pinned rather than auto-detected, so
the binary runs on macOS 10.15+ and matches the host CPU.
"""

import os
import shutil

from .common import RequirementKind, ToolRequirement, get_arch, probe, query_cpu_count, run, run_capture

BUILD_DIR = "build-macos"
DEPLOYMENT_TARGET = "10.15"

# formula -> (variable name, CMake package config directory under the prefix)
BREW_FORMULAE = {
    "sdl2": ("SDL2_DIR", "lib/cmake/SDL2"),
    "sdl2_ttf": ("SDL2_TTF_DIR", "lib/cmake/SDL2_ttf"),
}


def get_platform_name():
    """Get platform name for macOS."""
    return "macOS"


def get_requirements():
    """SDL2 and SDL2_ttf, by Homebrew formula name. Both can be installed automatically."""
    return [
        ToolRequirement(RequirementKind.LIBRARY_VIA_PROBE, formula, f"brew install {formula}", auto_installable=True)
        for formula in BREW_FORMULAE
    ]


def has_package_manager():
    return shutil.which("brew") is not None


def check_library(name):
    """Check if a formula is installed via Homebrew."""
    return probe(["brew", "list", name])


def install_library(name):
    return run(["brew", "install", name])


def get_library_prefixes():
    """Map SDL2_DIR / SDL2_TTF_DIR to the Homebrew prefix of each formula."""
    prefixes = {}
    for formula, (variable, _) in BREW_FORMULAE.items():
        prefix = run_capture(["brew", "--prefix", formula])
        if prefix:
            prefixes[variable] = prefix
    return prefixes


def get_compile_flags():
    """Get compile flags for macOS."""
    return [
        f"-DCMAKE_OSX_DEPLOYMENT_TARGET={DEPLOYMENT_TARGET}",
        f"-DCMAKE_OSX_ARCHITECTURES={get_arch()}",
    ]


def get_library_flags(library_prefixes):
    flags = []
    for variable, subdir in BREW_FORMULAE.values():
        prefix = library_prefixes.get(variable)
        if prefix:
            flags.append(f"-D{variable}={prefix}/{subdir}")
    return flags


def get_env(library_prefixes):
    """Get environment variables for the CMake child processes."""
    if not library_prefixes:
        return None
    env = os.environ.copy()
    env.update(library_prefixes)
    return env


def get_cpu_count():
    return query_cpu_count(["sysctl", "-n", "hw.ncpu"])


def get_run_notes():
    return [
        "",
        "macOS-specific notes:",
        "  • If you get permission errors, run: chmod +x PocketMage_Desktop_Emulator",
        "  • For e-ink simulation, set: export POCKETMAGE_EINK_SIM=1",
        "  • Hotkeys: F5-F8 control e-ink simulation parameters",
        "  • If SDL2 issues occur, try: brew reinstall sdl2 sdl2_ttf",
    ]


def get_failure_checklist(build_dir_name):
    return [
        "Common macOS build issues:",
        "  • Ensure Xcode Command Line Tools: xcode-select --install",
        "  • Update Homebrew: brew update && brew upgrade",
        "  • Check SDL2 installation: brew list sdl2 sdl2_ttf",
        f"  • Try clean build: rm -rf {build_dir_name} && python -m pmbuild --clean",
    ]
