"""Jinja2 template rendering and template-tree materialization.

Provides the ``TemplateRenderer`` which renders template bodies against a
``RenderContext``, and the ``Materializer`` which walks a template tree and
reproduces it in a destination directory:

- files ending in ``.tmpl`` are rendered and written without the suffix;
- every other file is copied byte-for-byte;
- any path segment named ``CTX`` is replaced by the context name in the
  destination path only.

Re-materializing into the same destination overwrites files in place, which
is what lets contexts be appended to an existing project repeatedly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, StrictUndefined, TemplateError
from pydantic import BaseModel, ConfigDict

from .errors import TemplateRenderError
from .naming import normalize, pascal_case
from .source import TemplateSource

TEMPLATE_SUFFIX = ".tmpl"
PLACEHOLDER = "CTX"


# ---------------------------------------------------------------------------
# Render context
# ---------------------------------------------------------------------------


class RenderContext(BaseModel):
    """Variables exposed to template bodies for one materialization pass."""

    model_config = ConfigDict(frozen=True)

    Project: str
    Module: str
    Context: str = ""
    ContextP: str = ""

    @classmethod
    def for_project(cls, project: str, module: str = "") -> "RenderContext":
        """Context for the skeleton pass; *module* defaults to *project*."""
        return cls(Project=project, Module=module_or_default(project, module))

    @classmethod
    def for_context(cls, project: str, module: str, name: str) -> "RenderContext":
        """Context for rendering one bounded context named *name*."""
        normalized = normalize(name)
        return cls(
            Project=project,
            Module=module,
            Context=normalized.lower,
            ContextP=normalized.pascal,
        )


def module_or_default(project: str, module: str) -> str:
    """Return *module* unless blank, else *project* (local module addressing)."""
    if module.strip():
        return module
    return project


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template bodies with a fixed, narrow set of variables.

    Undefined names raise instead of rendering as empty text, so a typo in a
    template aborts the whole materialization.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.globals["Pascal"] = pascal_case

    def render_string(
        self,
        template_string: str,
        context: RenderContext,
        *,
        name: str = "<string>",
    ) -> str:
        """Render *template_string* against *context*.

        Raises:
            TemplateRenderError: On a syntax error or an undefined reference.
        """
        try:
            template = self.env.from_string(template_string)
            return template.render(**context.model_dump())
        except TemplateError as exc:
            raise TemplateRenderError(name, str(exc)) from exc


# ---------------------------------------------------------------------------
# Materializer
# ---------------------------------------------------------------------------


@dataclass
class MaterializeResult:
    """Destination paths touched by one materialization."""

    directories: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


def destination_for(
    dest_root: Path, relative_parts: Iterable[str], context: RenderContext
) -> Path:
    """Join *relative_parts* onto *dest_root*, substituting the placeholder.

    Only segments exactly equal to ``CTX`` are replaced; ``CTX`` appearing
    inside a longer name is left untouched.  *dest_root* is never rewritten.
    """
    parts = [context.Context if part == PLACEHOLDER else part for part in relative_parts]
    return dest_root.joinpath(*parts)


class Materializer:
    """Reproduces a template tree into a destination directory."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def materialize(
        self,
        source_root: Traversable,
        dest_root: str | Path,
        context: RenderContext,
    ) -> MaterializeResult:
        """Render or copy every entry under *source_root* into *dest_root*.

        The walk is depth-first in name order.  The first failure aborts the
        call; files written before it are left in place.

        Returns:
            The directories created and files written, in walk order.
        """
        result = MaterializeResult()
        self._walk(source_root, Path(dest_root), (), context, result)
        return result

    def _walk(
        self,
        node: Traversable,
        dest_root: Path,
        prefix: tuple[str, ...],
        context: RenderContext,
        result: MaterializeResult,
    ) -> None:
        for entry in TemplateSource.entries(node):
            relative = prefix + (entry.name,)
            target = destination_for(dest_root, relative, context)

            if entry.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                result.directories.append(target)
                self._walk(entry, dest_root, relative, context, result)
                continue

            if entry.name.endswith(TEMPLATE_SUFFIX):
                logical = "/".join(relative)
                rendered = self.renderer.render_string(
                    entry.read_text(encoding="utf-8"), context, name=logical
                )
                target = target.with_name(target.name[: -len(TEMPLATE_SUFFIX)])
                _write_file(target, rendered)
            else:
                _copy_file(entry, target)
            result.files.append(target)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write text content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Traversable, path: Path) -> None:
    """Create parent dirs and copy *source* verbatim."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(source.read_bytes())
