"""CLI entrypoints for panpack commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import PipelineError
from .logging import configure_logging
from .orchestrator import PLATFORMS, Orchestrator


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands repeat the options with SUPPRESS so they do not reset a value given earlier.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write a DEBUG-level transcript of the run to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panpack",
        description="Build and package PanPan game crates for desktop and Android.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the game crate for a platform.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    build_parser.add_argument(
        "--platform",
        choices=PLATFORMS,
        default="desktop",
        help="Target platform (defaults to desktop).",
    )
    build_parser.add_argument(
        "--release",
        action="store_true",
        help="Build in release mode.",
    )
    build_parser.add_argument(
        "--install",
        action="store_true",
        help="Install the APK on an attached device after building (Android only).",
    )
    build_parser.add_argument(
        "--path",
        default=".",
        help="Path to the game crate (defaults to current directory).",
    )
    build_parser.add_argument(
        "--android-template",
        default=None,
        help="Android application template directory (defaults to android.template in .panpack.yml).",
    )

    run_parser = subparsers.add_parser(
        "run",
        help="Build the game for desktop and run it.",
    )
    _add_logging_options(run_parser, suppress_default=True)
    run_parser.add_argument(
        "game",
        nargs="?",
        default=".",
        help="Path to the game crate (defaults to current directory).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for panpack commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            result = orchestrator.run_build(
                args.path,
                args.platform,
                release=bool(args.release),
                install=bool(args.install),
                android_template=args.android_template,
            )
        except PipelineError as exc:
            parser.exit(1, _failure_message("build", exc))
        if result.bundle is not None:
            print(f"APK built at {_relativize(result.bundle)}")
            if result.placement is not None and result.placement.missing:
                missing = ", ".join(artifact.profile.abi for artifact in result.placement.missing)
                print(f"Warning: the APK has no library for {missing}")
            if args.install and not result.installed:
                print("APK was not installed; see the warnings above.")
        elif result.binary is not None:
            print(f"Binary built at {_relativize(result.binary)}")
    elif args.command == "run":
        try:
            exit_code = orchestrator.run_game(args.game)
        except PipelineError as exc:
            parser.exit(1, _failure_message("run", exc))
        # Negative codes mean the game was killed by a signal.
        parser.exit(exit_code if exit_code >= 0 else 128 - exit_code)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _failure_message(command: str, exc: PipelineError) -> str:
    return (
        f"panpack {command} failed at {exc.stage} stage: {exc.describe()}\n"
        "Run with --verbose for more details.\n"
    )


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
