"""WebAssembly build configuration (Emscripten).

Assets are embedded into the binary by default (-DEMBED_ASSETS=ON), giving a
single deployable artifact at the cost of a larger download.

The emmake build wrapper runs under the same CPU count convention as Linux, so
parallelism is queried with nproc regardless of the host.
"""

from .common import RequirementKind, ToolRequirement, query_cpu_count

BUILD_DIR = "build-wasm"
CONFIGURE_WRAPPER = ("emcmake",)
BUILD_WRAPPER = ("emmake",)

EMSDK_HINT = "Install and activate emsdk, then run: source /path/to/emsdk/emsdk_env.sh"
INSTALL_HINTS = ("CI (GitHub Actions) installs and activates emsdk automatically; locally you must set it up.",)


def get_platform_name():
    """Get platform name for Emscripten."""
    return "Emscripten"


def get_requirements():
    return [
        ToolRequirement(RequirementKind.EXECUTABLE_ON_PATH, tool, EMSDK_HINT)
        for tool in ("emcmake", "emmake", "emcc")
    ]


def get_compile_flags():
    """Get compile flags for Emscripten."""
    return ["-DEMBED_ASSETS=ON"]


def get_cpu_count():
    return query_cpu_count(["nproc"])
