"""Sequential build steps: fonts, build directory, configure, build.

Each step either completes or raises; nothing is retried and a partially built
directory is left in place for inspection.
"""

import shutil

from .common import FONTS_SCRIPT, Target, run
from .errors import BuildError, StepFailedError


def run_step(step, cmd, cwd=None, env=None):
    try:
        rc = run(cmd, cwd=cwd, env=env)
    except OSError as e:
        raise StepFailedError(step, reason=str(e))
    if rc != 0:
        raise StepFailedError(step, returncode=rc)


def run_asset_step(config, project_root, reporter):
    """Run the font downloader, or only announce it on a dry run."""
    reporter.info("Checking and downloading fonts...")
    script = project_root / FONTS_SCRIPT
    if not script.is_file():
        reporter.warning(f"Font downloader script not found at: {script}")
        reporter.info("Fonts may need to be downloaded manually")
        return
    if config.dry_run:
        reporter.info(f"Would run font downloader: {script}")
        return
    reporter.info("Running font downloader...")
    run_step("Font download", ["bash", str(script)], cwd=project_root)
    reporter.success("Fonts ready")


def prepare_build_dir(config, profile, reporter):
    """Optionally wipe, then create the build directory. A dry run leaves it untouched."""
    build_dir = profile.build_dir
    if config.dry_run:
        if config.clean_build:
            reporter.info(f"Would clean build directory: {build_dir.name}")
        reporter.info(f"Would use build directory: {build_dir.name}")
        return
    try:
        if config.clean_build and build_dir.exists():
            reporter.info(f"Cleaning build directory: {build_dir.name}")
            shutil.rmtree(build_dir)
        reporter.info(f"Creating build directory: {build_dir.name}")
        build_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StepFailedError("Prepare build directory", reason=str(e))


def run_configure(invocation, profile, reporter):
    cmake_file = profile.source_dir / "CMakeLists.txt"
    if not cmake_file.exists():
        raise BuildError(f"CMakeLists.txt not found in {profile.source_dir}")

    reporter.info("Configuring build with CMake...")
    if profile.target is Target.WEB:
        reporter.info("Using emcmake to configure Emscripten build")
    elif profile.target is Target.MACOS:
        options = invocation.configure_cmd[invocation.configure_cmd.index("-B") + 2 :]
        reporter.info(f"CMake arguments: {' '.join(options)}")
    run_step("CMake configure", invocation.configure_cmd, cwd=invocation.cwd, env=invocation.env)


def run_build(invocation, profile, reporter):
    reporter.info("Building project...")
    if profile.target is Target.WEB:
        reporter.info("Building with emmake...")
    reporter.info(f"Building with {profile.parallelism} parallel jobs...")
    run_step("Build", invocation.build_cmd, cwd=invocation.cwd, env=invocation.env)
