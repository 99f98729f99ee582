"""Turn a target profile into concrete CMake invocations."""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from .common import BUILD_TYPE
from .platforms import get_platform_module


@dataclass(frozen=True)
class GeneratorInvocation:
    cwd: Path
    configure_cmd: Tuple[str, ...]
    build_cmd: Tuple[str, ...]
    env: Optional[Dict[str, str]] = None


def get_configure_options(profile, library_prefixes=None):
    """Build type first, then the target's own flags and any library overrides."""
    module = get_platform_module(profile.target)
    options = [f"-DCMAKE_BUILD_TYPE={BUILD_TYPE}"] + list(profile.generator_args)
    library_flags_func = getattr(module, "get_library_flags", None)
    if library_flags_func and library_prefixes:
        options += library_flags_func(library_prefixes)
    return options


def build_invocation(profile, library_prefixes=None):
    module = get_platform_module(profile.target)
    build_dir = str(profile.build_dir)

    configure_cmd = [*profile.configure_wrapper, "cmake", "-S", str(profile.source_dir), "-B", build_dir]
    configure_cmd += get_configure_options(profile, library_prefixes)

    build_cmd = [*profile.build_wrapper, "cmake", "--build", build_dir, "--config", BUILD_TYPE]
    build_cmd.append(f"-j{profile.parallelism}")

    env = None
    env_func = getattr(module, "get_env", None)
    if env_func:
        env = env_func(library_prefixes or {})

    return GeneratorInvocation(
        cwd=profile.build_dir,
        configure_cmd=tuple(configure_cmd),
        build_cmd=tuple(build_cmd),
        env=env,
    )
