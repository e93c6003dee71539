"""Command line interface for dddscaffold.

Usage::

    dddscaffold init shop --module example.com/shop --contexts user,billing
    dddscaffold init-ddd inventory,shipping
    dddscaffold templates context
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape

from dddscaffold.config import Config
from dddscaffold.scaffolder import (
    GoToolchain,
    NullToolchain,
    ScaffoldError,
    SkeletonBuilder,
    TemplateSource,
    Toolchain,
    module_or_default,
    split_list,
)
from dddscaffold.scaffolder.source import CONTEXT_ROOT, SKELETON_ROOT
from dddscaffold.utils import console, print_error, print_success, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dddscaffold",
        description="Scaffold layered (DDD) Go projects and bounded contexts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  dddscaffold init shop\n"
            "  dddscaffold init shop --module example.com/shop --contexts user,billing\n"
            "  dddscaffold init-ddd inventory,shipping\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="create a new project skeleton")
    init_parser.add_argument("project", help="Project directory name")
    init_parser.add_argument(
        "--module",
        default="",
        help="Go module path (e.g. github.com/you/shop); defaults to the project name",
    )
    init_parser.add_argument(
        "--contexts",
        default="",
        help="Comma-separated bounded contexts to create right away, e.g. user,billing",
    )
    init_parser.add_argument(
        "--framework",
        default=None,
        help="Local framework checkout to redirect the dependency to",
    )
    init_parser.add_argument(
        "--dir",
        type=Path,
        default=Path("."),
        help="Parent directory for the new project (default: current directory)",
    )
    _add_toolchain_flag(init_parser)

    ddd_parser = subparsers.add_parser(
        "init-ddd",
        help="append bounded contexts to an existing project",
        description=(
            "Append bounded contexts to an existing project. Files of a context "
            "that already exists are overwritten, including hand edits."
        ),
    )
    ddd_parser.add_argument("contexts", help="Comma-separated context names, e.g. user,billing")
    ddd_parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory)",
    )
    _add_toolchain_flag(ddd_parser)

    templates_parser = subparsers.add_parser("templates", help="list bundled template files")
    templates_parser.add_argument(
        "root",
        nargs="?",
        choices=[SKELETON_ROOT, CONTEXT_ROOT],
        default=None,
        help="Only list this template root",
    )

    return parser


def _add_toolchain_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--skip-toolchain",
        action="store_true",
        help="Do not run 'go mod' commands (run them yourself afterwards)",
    )


def _toolchain(args: argparse.Namespace, config: Config) -> Toolchain:
    if args.skip_toolchain:
        return NullToolchain()
    return GoToolchain(config.toolchain)


def _handle_init(args: argparse.Namespace, config: Config) -> int:
    contexts = split_list(args.contexts)
    builder = SkeletonBuilder.create(_toolchain(args, config), config)
    project_path = builder.build(
        args.project,
        module_path=args.module,
        contexts=contexts,
        framework_path=args.framework,
        parent_dir=args.dir,
    )
    print_summary_table(
        {
            "Project": escape(str(project_path)),
            "Module": escape(module_or_default(args.project, args.module)),
            "Contexts": escape(", ".join(contexts)) or "-",
        },
        title="Project created",
    )
    print_success(f"Project created: {escape(args.project)}")
    return 0


def _handle_init_ddd(args: argparse.Namespace, config: Config) -> int:
    contexts = split_list(args.contexts)
    builder = SkeletonBuilder.create(_toolchain(args, config), config)
    builder.appender.append(args.root, contexts)
    print_success(f"Contexts appended: {escape(', '.join(contexts))}")
    return 0


def _handle_templates(args: argparse.Namespace) -> int:
    source = TemplateSource.bundled()
    roots = [args.root] if args.root else [SKELETON_ROOT, CONTEXT_ROOT]
    for root in roots:
        console.print(f"[bold cyan]{root}[/bold cyan]")
        for path in source.list_files(root):
            console.print(f"  {path}")
    return 0


def _format_error(exc: BaseException) -> str:
    """Render *exc* followed by its chained causes, one per line."""
    lines = [str(exc)]
    cause = exc.__cause__
    while cause is not None:
        message = str(cause)
        if message and message not in lines[-1]:
            lines.append(f"  caused by: {message}")
        cause = cause.__cause__
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for ``dddscaffold`` and ``python -m dddscaffold``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env()
        if args.command == "init":
            return _handle_init(args, config)
        if args.command == "init-ddd":
            return _handle_init_ddd(args, config)
        if args.command == "templates":
            return _handle_templates(args)
    except (ScaffoldError, OSError, ValueError) as exc:
        print_error(f"Error: {escape(_format_error(exc))}")
        return 1

    parser.error("no command provided")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
