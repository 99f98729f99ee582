"""Target resolution and per-target profiles."""

import sys
from pathlib import Path

from . import platform_linux, platform_macos, platform_wasm
from .common import Target, TargetProfile
from .errors import UnsupportedPlatformError

PLATFORM_MODULES = {
    Target.LINUX: platform_linux,
    Target.MACOS: platform_macos,
    Target.WEB: platform_wasm,
}


def resolve_target(config, host=None):
    """Pick the build target from the config and the host identifier.

    ``--wasm`` always selects the web target. Otherwise only Linux and macOS
    hosts are supported; anything else raises UnsupportedPlatformError.
    """
    if config.target_is_web:
        return Target.WEB
    if host is None:
        host = sys.platform
    if host.startswith("linux"):
        return Target.LINUX
    if host.startswith("darwin"):
        return Target.MACOS
    raise UnsupportedPlatformError(host)


def get_platform_module(target):
    return PLATFORM_MODULES[target]


def get_target_profile(target, project_root):
    module = get_platform_module(target)
    project_root = Path(project_root)
    return TargetProfile(
        target=target,
        platform_name=module.get_platform_name(),
        source_dir=project_root,
        build_dir=project_root / module.BUILD_DIR,
        requirements=tuple(module.get_requirements()),
        generator_args=tuple(module.get_compile_flags()),
        parallelism=module.get_cpu_count(),
        configure_wrapper=tuple(getattr(module, "CONFIGURE_WRAPPER", ())),
        build_wrapper=tuple(getattr(module, "BUILD_WRAPPER", ())),
    )
