"""Append bounded contexts to an existing project.

Each context name instantiates the bundled ``context`` tree, which holds the
four layers (domain, application, infrastructure, interfaces) under a ``CTX``
directory that becomes the context's lower-case name.  Appending the same
context twice re-renders identical content over the previous files.
"""

from __future__ import annotations

from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterable

from rich.markup import escape

from dddscaffold.utils import print_step, print_warning

from .errors import ScaffoldError
from .source import CONTEXT_ROOT, TemplateSource
from .templates import PLACEHOLDER, Materializer, RenderContext, destination_for
from .toolchain import Toolchain

MODULE_FILE = "go.mod"
APPEND_STAGE = "append contexts"
_MODULE_KEYWORD = "module "


def detect_module(project_root: str | Path) -> str:
    """Return the module path declared in ``go.mod`` under *project_root*.

    A missing file or a file with no ``module`` line yields ``""``.
    """
    module_file = Path(project_root) / MODULE_FILE
    try:
        raw = module_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""

    for line in raw.splitlines():
        line = line.strip()
        if line.startswith(_MODULE_KEYWORD):
            return line[len(_MODULE_KEYWORD):].strip().strip('"')
    return ""


class ContextAppender:
    """Materializes one context bundle per requested name into a project."""

    def __init__(
        self,
        source: TemplateSource,
        materializer: Materializer,
        toolchain: Toolchain,
    ) -> None:
        self.source = source
        self.materializer = materializer
        self.toolchain = toolchain

    def append(self, project_root: str | Path, names: Iterable[str]) -> list[Path]:
        """Render the context tree once per name, then tidy once.

        Args:
            project_root: Root of a previously generated project.
            names: Context names, rendered in the order given.

        Returns:
            The destination directories that replaced ``CTX`` for each name.

        Raises:
            ScaffoldError: Tagged ``append contexts`` when rendering or writing
                fails, ``go mod tidy`` when the final tidy fails.
        """
        root = Path(project_root).resolve()
        context_tree = self.source.subtree(CONTEXT_ROOT)
        project_name = root.name
        module = detect_module(root)
        if not module:
            print_warning(
                f"No module declared in {escape(str(root / MODULE_FILE))}; "
                "imports are rendered without a module prefix"
            )

        placeholder_dirs = _placeholder_dirs(context_tree)

        produced: list[Path] = []
        for name in names:
            context = RenderContext.for_context(project_name, module, name)
            print_step(f"Rendering context [bold]{escape(context.Context)}[/bold]")
            try:
                self.materializer.materialize(context_tree, root, context)
            except (ScaffoldError, OSError) as exc:
                raise ScaffoldError(APPEND_STAGE, str(exc)) from exc
            produced.extend(
                destination_for(root, relative, context) for relative in placeholder_dirs
            )

        print_step("Tidying module dependencies")
        try:
            self.toolchain.tidy(root)
        except ScaffoldError as exc:
            raise ScaffoldError("go mod tidy", str(exc)) from exc
        return produced


def _placeholder_dirs(node: Traversable, prefix: tuple[str, ...] = ()) -> list[tuple[str, ...]]:
    """Relative paths of the outermost ``CTX`` directories under *node*."""
    found: list[tuple[str, ...]] = []
    for entry in TemplateSource.entries(node):
        if not entry.is_dir():
            continue
        relative = prefix + (entry.name,)
        if entry.name == PLACEHOLDER:
            found.append(relative)
        else:
            found.extend(_placeholder_dirs(entry, relative))
    return found
