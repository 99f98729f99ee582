import enum
import platform
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

MIN_CMAKE_VERSION = (3, 16)
BUILD_TYPE = "Release"
EXECUTABLE_NAME = "PocketMage_Desktop_Emulator"
ASSETS_DIR_NAME = "data"
FONTS_SCRIPT = Path("fonts") / "download_fonts.sh"
DEFAULT_PARALLELISM = 4


class Target(enum.Enum):
    """The three build targets. Exactly one is selected per run."""

    LINUX = "linux"
    MACOS = "macos"
    WEB = "wasm"


class RequirementKind(enum.Enum):
    EXECUTABLE_ON_PATH = "executable"
    LIBRARY_VIA_PROBE = "library"


@dataclass(frozen=True)
class ToolRequirement:
    kind: RequirementKind
    name: str
    remediation_hint: str = ""
    auto_installable: bool = False


@dataclass(frozen=True)
class TargetProfile:
    """Everything the pipeline needs to know about the selected target.

    Derived once from the build config and the host, then only read.
    """

    target: Target
    platform_name: str
    source_dir: Path
    build_dir: Path
    requirements: Tuple[ToolRequirement, ...]
    generator_args: Tuple[str, ...]
    parallelism: int
    configure_wrapper: Tuple[str, ...] = ()
    build_wrapper: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildOutcome:
    succeeded: bool
    artifact_path: Optional[Path] = None
    diagnostics: Tuple[str, ...] = ()


def get_arch():
    """Get the host CPU architecture as reported by uname -m."""
    return platform.machine()


def run(cmd: Sequence[str], cwd=None, env=None) -> int:
    """Echo and run a command, returning its exit code."""
    argv = [str(part) for part in cmd]
    print("+", " ".join(argv), flush=True)
    return subprocess.call(argv, cwd=None if cwd is None else str(cwd), env=env)


def run_capture(cmd: Sequence[str]) -> str:
    """Run a command and return the first line of its output, or "" on failure."""
    try:
        result = subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except (FileNotFoundError, OSError):
        return ""
    if result.returncode != 0:
        return ""
    output = result.stdout.strip()
    if not output:
        return ""
    return output.splitlines()[0].strip()


def probe(cmd: Sequence[str]) -> bool:
    """Return True if the command exists and exits zero. Output is discarded."""
    try:
        rc = subprocess.call(list(cmd), stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except (FileNotFoundError, OSError):
        return False
    return rc == 0


def extract_version(text: str) -> str:
    match = re.search(r"\b(\d+\.\d+(?:\.\d+)?)", text)
    if not match:
        return ""
    return match.group(1)


def version_key(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


def query_cpu_count(cmd: Sequence[str]) -> int:
    """Ask the host for its logical CPU count, falling back to DEFAULT_PARALLELISM."""
    output = run_capture(cmd)
    try:
        count = int(output)
    except ValueError:
        return DEFAULT_PARALLELISM
    if count < 1:
        return DEFAULT_PARALLELISM
    return count
