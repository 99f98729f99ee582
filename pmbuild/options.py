import argparse
import sys
from dataclasses import dataclass

from .errors import UsageError

FLAGS = ("--dry-run", "--clean", "--wasm")
HELP_FLAGS = ("-h", "--help")


@dataclass(frozen=True)
class BuildConfig:
    dry_run: bool = False
    clean_build: bool = False
    target_is_web: bool = False


def create_parser():
    parser = argparse.ArgumentParser(
        prog="pmbuild",
        description="PocketMage Desktop Emulator build script for Linux, macOS and WebAssembly.",
        epilog="The Emscripten tools (emcmake/emmake/emcc) must be activated in PATH for --wasm.",
        allow_abbrev=False,
    )
    parser.add_argument("--dry-run", action="store_true", help="Check dependencies without building")
    parser.add_argument("--clean", action="store_true", help="Clean build directory before building")
    parser.add_argument("--wasm", action="store_true", help="Build for WebAssembly using Emscripten")
    return parser


def parse_args(argv=None):
    """Parse command line flags into a BuildConfig.

    Any token the parser does not recognize raises UsageError naming it.
    ``--help`` prints usage and exits through argparse with status 0.
    """
    if argv is None:
        argv = sys.argv[1:]
    # tokens are read left to right, so a bad token before --help still fails
    for token in argv:
        if token in HELP_FLAGS:
            break
        if token not in FLAGS:
            raise UsageError(f"Unknown option: {token}", hints=("Use --help for usage information",))
    args, unknown = create_parser().parse_known_args(argv)
    if unknown:
        raise UsageError(f"Unknown option: {unknown[0]}", hints=("Use --help for usage information",))
    return BuildConfig(dry_run=args.dry_run, clean_build=args.clean, target_is_web=args.wasm)
