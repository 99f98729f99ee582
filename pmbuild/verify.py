"""Dependency verification.

Probing is side-effect free; remediation (installing missing libraries) is a
separate step that only the macOS verifier composes in.
"""

import shutil
from dataclasses import dataclass, field
from typing import Dict, List

from . import platform_linux, platform_macos, platform_wasm
from .common import MIN_CMAKE_VERSION, RequirementKind, Target, extract_version, run_capture, version_key
from .errors import MissingDependencyError

MIN_CMAKE_TEXT = ".".join(str(part) for part in MIN_CMAKE_VERSION)


@dataclass(frozen=True)
class VerifiedDependencies:
    cmake_version: str = ""
    library_prefixes: Dict[str, str] = field(default_factory=dict)


def probe_requirements(requirements, check_library=None) -> List:
    """Return the requirements that are not satisfied on this host."""
    missing = []
    for req in requirements:
        if req.kind is RequirementKind.EXECUTABLE_ON_PATH:
            found = shutil.which(req.name) is not None
        else:
            found = check_library(req.name)
        if not found:
            missing.append(req)
    return missing


def remediate(missing, install_library, reporter) -> List:
    """Install the auto-installable requirements in ``missing``.

    Returns the requirements that are still unresolved. A failed install is
    only reported; it surfaces later as a configure failure.
    """
    unresolved = []
    for req in missing:
        if not req.auto_installable:
            unresolved.append(req)
            continue
        reporter.info(f"Installing {req.name}...")
        rc = install_library(req.name)
        if rc != 0:
            reporter.warning(f"Installing {req.name} failed (exit code {rc}), try: {req.remediation_hint}")
            unresolved.append(req)
    return unresolved


def _unique(items):
    seen = []
    for item in items:
        if item and item not in seen:
            seen.append(item)
    return seen


def _verify_web(profile, reporter):
    missing = probe_requirements(profile.requirements)
    if missing:
        names = [req.name for req in missing]
        raise MissingDependencyError(
            f"Emscripten tools ({'/'.join(names)}) not found in PATH!",
            missing=names,
            hints=_unique([req.remediation_hint for req in missing]) + list(platform_wasm.INSTALL_HINTS),
        )
    reporter.success("Emscripten toolchain found")
    return {}


def _verify_linux(profile, reporter):
    missing = probe_requirements(profile.requirements, platform_linux.check_library)
    if missing:
        names = [req.name for req in missing]
        raise MissingDependencyError(
            f"{', '.join(names)} development package not found!",
            missing=names,
            hints=_unique([req.remediation_hint for req in missing]) + list(platform_linux.INSTALL_HINTS),
        )
    reporter.success("SDL2 and SDL2_ttf found via pkg-config")
    return {}


def _verify_macos(profile, reporter):
    if not platform_macos.has_package_manager():
        reporter.warning("Homebrew not found. Install from https://brew.sh/")
        reporter.info("Attempting to use system SDL2...")
        return {}

    reporter.info("Checking SDL2 installation via Homebrew...")
    missing = probe_requirements(profile.requirements, platform_macos.check_library)
    remediate(missing, platform_macos.install_library, reporter)
    reporter.success("SDL2 and SDL2_ttf available via Homebrew")

    prefixes = platform_macos.get_library_prefixes()
    if prefixes:
        configured = ", ".join(f"{name}={value}" for name, value in prefixes.items())
        reporter.info(f"SDL2 paths configured: {configured}")
    return prefixes


_VERIFIERS = {
    Target.WEB: _verify_web,
    Target.LINUX: _verify_linux,
    Target.MACOS: _verify_macos,
}


def check_cmake(reporter):
    """Check that cmake is on PATH and at least MIN_CMAKE_VERSION. Returns the version found."""
    if shutil.which("cmake") is None:
        raise MissingDependencyError(
            f"CMake not found! Please install CMake {MIN_CMAKE_TEXT} or later",
            missing=["cmake"],
        )
    version = extract_version(run_capture(["cmake", "--version"]))
    if not version:
        reporter.warning("Could not determine the CMake version")
        return ""
    if version_key(version) < MIN_CMAKE_VERSION:
        raise MissingDependencyError(
            f"CMake {version} is too old! Please install CMake {MIN_CMAKE_TEXT} or later",
            missing=["cmake"],
        )
    reporter.success(f"Found CMake {version}")
    return version


def verify_dependencies(profile, reporter):
    reporter.info("Checking dependencies...")
    library_prefixes = _VERIFIERS[profile.target](profile, reporter)
    cmake_version = check_cmake(reporter)
    return VerifiedDependencies(cmake_version=cmake_version, library_prefixes=library_prefixes)
