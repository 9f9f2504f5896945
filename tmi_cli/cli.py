"""Command line interface for tmi-cli.

Usage::

    tmi init-rn MyApp
    tmi init-rn                      # prompts for every value
    tmi generate-feature user-profile --no-slice
    generate-feature user-profile --ui-only
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable, Sequence

from rich.panel import Panel

from tmi_cli.config import Config, FeatureOptions
from tmi_cli.errors import TmiError, UsageError
from tmi_cli.prompts import collect_project_params
from tmi_cli.scaffolder.feature_gen import FeatureGenerator, print_feature_summary
from tmi_cli.scaffolder.project_gen import ProjectBootstrapper
from tmi_cli.utils import (
    console,
    err_console,
    print_banner,
    print_error,
    print_section,
    print_success,
    print_summary_table,
)

try:
    __version__ = version("tmi-cli")
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"

FEATURE_USAGE = "Usage: generate-feature <feature-name> [--ui-only] [--no-slice]"


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def _add_feature_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", nargs="?", help="Feature name, e.g. user-profile")
    parser.add_argument(
        "--ui-only",
        action="store_true",
        help="Create only UI layer (screens, components, hooks)",
    )
    parser.add_argument(
        "--no-slice",
        action="store_true",
        help="Skip Redux slice generation",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Project root containing the features directory (default: cwd)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmi",
        description="TMI CLI - Project Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  tmi init-rn MyApp\n"
            "  tmi init-rn\n"
            "  tmi generate-feature user-profile --no-slice\n"
        ),
    )
    parser.add_argument("-v", "--version", action="store_true", help="Show the version and exit")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    init_parser = subparsers.add_parser("init-rn", help="Create a new React Native project")
    init_parser.add_argument("name", nargs="?", help="Project name, e.g. MyAwesomeApp")
    init_parser.add_argument("--bundle-id", help="Bundle identifier (default: com.<name>)")
    init_parser.add_argument("--display-name", help="Name shown under the app icon")
    init_parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=None,
        help="Parent directory for the new project (default: cwd)",
    )
    init_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Accept the default answer for every question",
    )
    init_parser.add_argument(
        "--skip-install", action="store_true", help="Do not install dependencies"
    )
    init_parser.add_argument(
        "--skip-git", action="store_true", help="Do not initialise a git repository"
    )

    feature_parser = subparsers.add_parser(
        "generate-feature", help="Add a clean-architecture feature module"
    )
    _add_feature_arguments(feature_parser)

    return parser


def build_feature_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-feature",
        description="Add a clean-architecture feature module to the current project",
    )
    _add_feature_arguments(parser)
    return parser


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _print_feature_usage() -> None:
    err_console.print(FEATURE_USAGE, highlight=False)
    err_console.print("\nOptions:", highlight=False)
    err_console.print(
        "  --ui-only    Create only UI layer (screens, components, hooks)", highlight=False
    )
    err_console.print("  --no-slice   Skip Redux slice generation", highlight=False)


def _handle_generate_feature(args: argparse.Namespace, config: Config) -> int:
    if not args.name:
        _print_feature_usage()
        return 1

    options = FeatureOptions(ui_only=args.ui_only, include_state_container=not args.no_slice)
    root = args.root or Path.cwd()
    generator = FeatureGenerator(root / config.features_dir, options)
    result = asyncio.run(generator.generate(args.name))
    print_feature_summary(result, ui_only=options.ui_only)
    return 0


def _handle_init_rn(args: argparse.Namespace, config: Config) -> int:
    print_banner("TMI React Native Boilerplate Generator")

    params = collect_project_params(
        args.name,
        args.bundle_id,
        args.display_name,
        assume_yes=args.yes,
        install_dependencies=not args.skip_install,
        init_git=not args.skip_git,
    )

    console.print("\n[cyan]Creating React Native project...[/cyan]\n")
    bootstrapper = ProjectBootstrapper(config)
    result = asyncio.run(bootstrapper.bootstrap(params, args.directory or Path.cwd()))

    print_success("\nReact Native project created successfully!\n")
    print_section("Summary")
    print_summary_table(result.summary(), title="Project")

    next_steps = [f"cd {result.forms.kebab}"]
    if not params.install_dependencies:
        next_steps.append(f"{config.package_manager} install")
    next_steps.extend(
        [
            "cd ios && pod install && cd ..",
            f"{config.package_manager} ios      # Run on iOS",
            f"{config.package_manager} android  # Run on Android",
        ]
    )
    console.print(
        Panel("\n".join(next_steps), title="[bold]Next steps[/bold]", border_style="cyan")
    )
    return 0


_COMMANDS: dict[str, Callable[[argparse.Namespace, Config], int]] = {
    "init-rn": _handle_init_rn,
    "generate-feature": _handle_generate_feature,
}


def _run(handler: Callable[[argparse.Namespace, Config], int], args: argparse.Namespace) -> int:
    try:
        return handler(args, Config.from_env())
    except UsageError as exc:
        print_error(str(exc))
        return 1
    except TmiError as exc:
        print_error(f"\nError: {exc}")
        return 1
    except KeyboardInterrupt:
        print_error("\nAborted.")
        return 130


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``tmi`` umbrella command."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    if not argv or argv[0] in ("-h", "--help"):
        parser.print_help()
        return 0
    if argv[0] in ("-v", "--version"):
        console.print(f"tmi-cli v{__version__}", highlight=False)
        return 0

    command = argv[0]
    if command not in _COMMANDS:
        print_error(f"\nUnknown command: {command}\n")
        parser.print_help()
        return 1

    args = parser.parse_args(argv)
    return _run(_COMMANDS[command], args)


def generate_feature_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the standalone ``generate-feature`` command."""
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_feature_parser().parse_args(argv)
    return _run(_handle_generate_feature, args)


if __name__ == "__main__":
    sys.exit(main())
