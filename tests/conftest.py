"""Shared pytest fixtures for the dddscaffold test suite.

Provides reusable fixtures for:
- A small hand-built template tree (skeleton + context roots)
- The bundled template source
- A mocked toolchain so no ``go`` process is ever started
- An existing project with a ``go.mod`` declaring a module path
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from dddscaffold.config import Config, FrameworkConfig
from dddscaffold.scaffolder import (
    ContextAppender,
    GoToolchain,
    Materializer,
    SkeletonBuilder,
    TemplateSource,
)


def _write(root: Path, relative: str, content: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A minimal template tree with ``skeleton`` and ``context`` roots.

    Layout::

        skeleton/README.md.tmpl
        skeleton/static/logo.bin
        skeleton/cmd/main.go.tmpl
        context/internal/CTX/domain/entity.go.tmpl
        context/internal/CTX/application/service.go.tmpl
        context/internal/CTX/infrastructure/repo.go.tmpl
        context/internal/CTX/interfaces/handler.go.tmpl
        context/internal/CTX/NOTES.txt
    """
    root = tmp_path / "tree"
    _write(root, "skeleton/README.md.tmpl", "# {{ Project }}\nmodule {{ Module }}\n")
    (root / "skeleton/static").mkdir(parents=True)
    (root / "skeleton/static/logo.bin").write_bytes(b"\x89PNG{{ Project }}\x00")
    _write(root, "skeleton/cmd/main.go.tmpl", 'import "{{ Module }}/internal"\n')

    layers = {
        "domain/entity.go.tmpl": "type {{ ContextP }} struct{}\n",
        "application/service.go.tmpl": 'import "{{ Module }}/internal/{{ Context }}/domain"\n',
        "infrastructure/repo.go.tmpl": "// {{ Pascal(Context) }} repo in {{ Project }}\n",
        "interfaces/handler.go.tmpl": 'route := "/{{ Context }}"\n',
    }
    for relative, body in layers.items():
        _write(root, f"context/internal/CTX/{relative}", body)
    _write(root, "context/internal/CTX/NOTES.txt", "copied {{ verbatim }}\n")
    return root


@pytest.fixture
def template_source(template_tree: Path) -> TemplateSource:
    """TemplateSource over the hand-built tree."""
    return TemplateSource(template_tree)


@pytest.fixture
def bundled_source() -> TemplateSource:
    """The template tree shipped with the package."""
    return TemplateSource.bundled()


# ---------------------------------------------------------------------------
# Toolchain
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_toolchain() -> MagicMock:
    """A toolchain whose every method is a no-op mock."""
    return MagicMock(spec=GoToolchain)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


@pytest.fixture
def no_framework_config(tmp_path: Path) -> Config:
    """Config whose sibling probe can never match."""
    return Config(
        framework=FrameworkConfig(sibling_dir=str(tmp_path / "no-such-framework")),
    )


@pytest.fixture
def appender(template_source: TemplateSource, mock_toolchain: MagicMock) -> ContextAppender:
    return ContextAppender(template_source, Materializer(), mock_toolchain)


@pytest.fixture
def builder(
    template_source: TemplateSource,
    mock_toolchain: MagicMock,
    no_framework_config: Config,
) -> SkeletonBuilder:
    return SkeletonBuilder.create(mock_toolchain, no_framework_config, template_source)


# ---------------------------------------------------------------------------
# Existing projects
# ---------------------------------------------------------------------------


@pytest.fixture
def existing_project(tmp_path: Path) -> Path:
    """A project directory whose go.mod declares ``example.com/shop``."""
    project = tmp_path / "shop"
    project.mkdir()
    (project / "go.mod").write_text(
        "// generated\nmodule example.com/shop\n\ngo 1.22\n", encoding="utf-8"
    )
    return project
