"""Skeleton builder for new layered-architecture projects.

Builds a project directory from the bundled ``skeleton`` tree, initialises
its Go module, optionally redirects the framework dependency to a local
checkout, and seeds any requested bounded contexts.  Steps run strictly in
order; the first failure aborts the rest and nothing already written is
removed.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape

from dddscaffold.config import Config
from dddscaffold.utils import print_step

from .contexts import ContextAppender
from .errors import ScaffoldError
from .source import SKELETON_ROOT, TemplateSource
from .templates import Materializer, RenderContext, module_or_default
from .toolchain import Toolchain


def resolve_framework_path(
    explicit: str | None,
    config: Config,
    cwd: str | Path | None = None,
) -> str:
    """Locate a local framework checkout.

    Precedence: *explicit* argument, then ``config.framework.path`` (set from
    ``DDDSCAFFOLD_FRAMEWORK_PATH``), then the conventional sibling directory
    relative to *cwd*.  Relative paths from any source are anchored at *cwd*.
    Returns ``""`` when nothing is found, meaning the dependency is resolved
    remotely.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    for candidate in (explicit or "", config.framework.path):
        if candidate.strip():
            return _anchor(candidate.strip(), base)

    sibling = base / config.framework.sibling_dir
    if sibling.is_dir():
        return str(sibling.resolve())
    return ""


def _anchor(path: str, base: Path) -> str:
    # go.mod replace paths are relative to the project, not to cwd
    if Path(path).is_absolute():
        return path
    return str((base / path).resolve())


class SkeletonBuilder:
    """Creates a new project and optionally seeds bounded contexts."""

    def __init__(
        self,
        source: TemplateSource,
        materializer: Materializer,
        toolchain: Toolchain,
        appender: ContextAppender,
        config: Config | None = None,
    ) -> None:
        self.source = source
        self.materializer = materializer
        self.toolchain = toolchain
        self.appender = appender
        self.config = config or Config()

    @classmethod
    def create(
        cls,
        toolchain: Toolchain,
        config: Config | None = None,
        source: TemplateSource | None = None,
    ) -> "SkeletonBuilder":
        """Wire a builder and its appender around one shared materializer."""
        source = source or TemplateSource.bundled()
        materializer = Materializer()
        appender = ContextAppender(source, materializer, toolchain)
        return cls(source, materializer, toolchain, appender, config)

    # -- Public API --------------------------------------------------------

    def build(
        self,
        project_name: str,
        module_path: str = "",
        contexts: Sequence[str] = (),
        framework_path: str | None = None,
        parent_dir: str | Path = ".",
    ) -> Path:
        """Generate the project *project_name* under *parent_dir*.

        Args:
            project_name: Directory name and default module path.
            module_path: Go module path; blank means use *project_name*.
            contexts: Bounded contexts to append after the skeleton.
            framework_path: Explicit local framework checkout.
            parent_dir: Directory the project folder is created in.

        Returns:
            Path to the generated project root.

        Raises:
            ScaffoldError: Wrapping the failure of whichever stage failed.
        """
        dest = Path(parent_dir) / project_name
        module = module_or_default(project_name, module_path)

        # 1. Destination directory
        print_step(f"Creating [bold]{escape(str(dest))}[/bold]")
        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldError("create project directory", str(exc)) from exc

        # 2. Skeleton
        print_step("Rendering skeleton")
        try:
            self.materializer.materialize(
                self.source.subtree(SKELETON_ROOT),
                dest,
                RenderContext.for_project(project_name, module_path),
            )
        except (ScaffoldError, OSError) as exc:
            raise ScaffoldError("render skeleton", str(exc)) from exc

        # 3. Module metadata
        print_step(f"Initialising module [bold]{escape(module)}[/bold]")
        self._toolchain_step("go mod init", self.toolchain.init, dest, module)

        # 4. Local framework redirect
        local_path = resolve_framework_path(framework_path, self.config)
        if local_path:
            framework = self.config.framework
            print_step(
                f"Redirecting {escape(framework.module)} to [bold]{escape(local_path)}[/bold]"
            )
            self._toolchain_step(
                "go mod edit -require", self.toolchain.edit_require, dest, framework.requirement
            )
            self._toolchain_step(
                "go mod edit -replace",
                self.toolchain.edit_replace,
                dest,
                framework.module,
                local_path,
            )

        # 5. Resolve dependencies
        print_step("Tidying module dependencies")
        self._toolchain_step("go mod tidy", self.toolchain.tidy, dest)

        # 6. Contexts (the appender tags its own failures and tidies once more)
        if contexts:
            self.appender.append(dest, contexts)

        return dest

    # -- Internal ----------------------------------------------------------

    @staticmethod
    def _toolchain_step(stage: str, call, *args) -> None:
        try:
            call(*args)
        except ScaffoldError as exc:
            raise ScaffoldError(stage, str(exc)) from exc
