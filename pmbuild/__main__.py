import sys
from pathlib import Path

from . import artifacts, configure, executor, options, platforms, verify
from .common import BuildOutcome
from .errors import BuildError
from .reporter import Reporter

DRY_RUN_MESSAGE = "Dry run completed - all dependencies and configuration look good!"


def build_project(config, reporter, project_root, host=None):
    """Run the whole pipeline for one invocation and return its BuildOutcome.

    Fatal conditions raise BuildError; a build whose artifact is missing is
    returned as an unsuccessful outcome instead.
    """
    target = platforms.resolve_target(config, host)
    profile = platforms.get_target_profile(target, project_root)
    reporter.info(f"Building PocketMage Desktop Emulator for {profile.platform_name}")

    dependencies = verify.verify_dependencies(profile, reporter)

    executor.run_asset_step(config, profile.source_dir, reporter)
    executor.prepare_build_dir(config, profile, reporter)

    if config.dry_run:
        reporter.success(DRY_RUN_MESSAGE)
        reporter.info("Dependencies verified, nothing built")
        reporter.info("To build for real, run: python -m pmbuild")
        return BuildOutcome(succeeded=True, diagnostics=(DRY_RUN_MESSAGE,))

    invocation = configure.build_invocation(profile, dependencies.library_prefixes)
    executor.run_configure(invocation, profile, reporter)
    executor.run_build(invocation, profile, reporter)
    return artifacts.inspect_build(profile, reporter)


def main(argv=None):
    reporter = Reporter()
    try:
        config = options.parse_args(argv)
        outcome = build_project(config, reporter, Path.cwd())
    except BuildError as e:
        reporter.error(str(e))
        for hint in e.hints:
            reporter.info(hint)
        return 1
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
