"""Post-build inspection of the build directory.

The generator can exit zero without producing the expected output, so success
is decided here from what is actually on disk.
"""

from .common import ASSETS_DIR_NAME, EXECUTABLE_NAME, BuildOutcome, Target
from .platforms import get_platform_module

# in order of preference for the reported artifact
WEB_OUTPUT_PATTERNS = ("*.html", "*.js", "*.wasm")


def find_web_outputs(build_dir):
    outputs = []
    for pattern in WEB_OUTPUT_PATTERNS:
        outputs.extend(sorted(path for path in build_dir.glob(pattern) if path.is_file()))
    return outputs


def list_directory(build_dir):
    lines = []
    for path in sorted(build_dir.iterdir()):
        if path.is_dir():
            lines.append(f"  {path.name}/")
        else:
            lines.append(f"  {path.name}  {path.stat().st_size} bytes")
    return lines


class _Diagnostics:
    """Report messages and keep them, in order, for the BuildOutcome."""

    def __init__(self, reporter):
        self.reporter = reporter
        self.messages = []

    def __call__(self, level, message):
        getattr(self.reporter, level)(message)
        self.messages.append(message)


def inspect_web(profile, reporter):
    report = _Diagnostics(reporter)
    build_dir = profile.build_dir
    outputs = find_web_outputs(build_dir) if build_dir.is_dir() else []
    if not outputs:
        report("error", "WASM build failed - expected .js/.wasm/.html output not found")
        return BuildOutcome(succeeded=False, diagnostics=tuple(report.messages))

    report("success", "WASM build completed successfully!")
    report("info", f"Build output in: {build_dir}")
    for line in list_directory(build_dir):
        report("info", line)
    report("info", "Serve the directory over HTTP to run (python -m http.server 8000)")
    return BuildOutcome(succeeded=True, artifact_path=outputs[0], diagnostics=tuple(report.messages))


def inspect_native(profile, reporter):
    report = _Diagnostics(reporter)
    module = get_platform_module(profile.target)
    build_dir = profile.build_dir
    executable = build_dir / EXECUTABLE_NAME

    if not executable.is_file():
        report("error", "Build failed - executable not found")
        for line in module.get_failure_checklist(build_dir.name):
            report("error", line)
        return BuildOutcome(succeeded=False, diagnostics=tuple(report.messages))

    report("success", "Build completed successfully!")
    report("info", f"Executable: {executable}")
    if (build_dir / ASSETS_DIR_NAME).is_dir():
        report("success", "Assets copied to build directory")
    else:
        report("warning", "Assets directory not found - some features may not work")

    report("info", "To run the emulator:")
    report("info", f"  cd {build_dir.name}")
    report("info", f"  ./{EXECUTABLE_NAME}")
    notes_func = getattr(module, "get_run_notes", None)
    if notes_func:
        for line in notes_func():
            report("info", line)
    return BuildOutcome(succeeded=True, artifact_path=executable, diagnostics=tuple(report.messages))


def inspect_build(profile, reporter):
    if profile.target is Target.WEB:
        return inspect_web(profile, reporter)
    return inspect_native(profile, reporter)
