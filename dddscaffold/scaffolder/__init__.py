"""Template-tree scaffolder for layered (DDD) Go projects.

Materializes the bundled ``skeleton`` tree into a new project and appends
bounded contexts from the bundled ``context`` tree.

Quick usage::

    from dddscaffold.scaffolder import GoToolchain, SkeletonBuilder

    builder = SkeletonBuilder.create(GoToolchain())
    builder.build("shop", contexts=["user", "billing"])

    builder.appender.append("shop", ["inventory"])
"""

from dddscaffold.scaffolder.contexts import ContextAppender, detect_module
from dddscaffold.scaffolder.errors import (
    ScaffoldError,
    TemplateRenderError,
    TemplateSourceError,
    ToolchainError,
)
from dddscaffold.scaffolder.generator import SkeletonBuilder, resolve_framework_path
from dddscaffold.scaffolder.naming import NormalizedName, normalize, pascal_case, split_list
from dddscaffold.scaffolder.source import TemplateSource
from dddscaffold.scaffolder.templates import (
    Materializer,
    MaterializeResult,
    RenderContext,
    TemplateRenderer,
    module_or_default,
)
from dddscaffold.scaffolder.toolchain import GoToolchain, NullToolchain, Toolchain

__all__ = [
    "ContextAppender",
    "GoToolchain",
    "MaterializeResult",
    "Materializer",
    "NormalizedName",
    "NullToolchain",
    "RenderContext",
    "ScaffoldError",
    "SkeletonBuilder",
    "TemplateRenderError",
    "TemplateRenderer",
    "TemplateSource",
    "TemplateSourceError",
    "Toolchain",
    "ToolchainError",
    "detect_module",
    "module_or_default",
    "normalize",
    "pascal_case",
    "resolve_framework_path",
    "split_list",
]
