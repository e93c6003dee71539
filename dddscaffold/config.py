"""dddscaffold configuration.

Typed configuration for the scaffolder.  All settings use Pydantic v2 models
so they are validated at construction time and can be read from environment
variables.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field


class ToolchainConfig(BaseModel):
    """How the Go toolchain is invoked."""

    go_binary: str = Field(default="go", min_length=1)
    timeout: int = Field(default=300, ge=1, description="Per-command timeout in seconds")


class FrameworkConfig(BaseModel):
    """The framework dependency generated projects can be redirected to.

    When a local checkout is found, the project ``go.mod`` gets a placeholder
    ``require`` plus a ``replace`` pointing at that checkout.
    """

    module: str = Field(default="github.com/nomoyu/go-gin-framework")
    placeholder_version: str = Field(default="v0.0.0")
    path: str = Field(default="", description="Local checkout path, if any")
    sibling_dir: str = Field(
        default="../go-gin-framework",
        description="Conventional location probed relative to the working directory",
    )

    @property
    def requirement(self) -> str:
        """``module@version`` string for ``go mod edit -require``."""
        return f"{self.module}@{self.placeholder_version}"


class Config(BaseModel):
    """Global scaffolder configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the builder and the toolchain.
    """

    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    framework: FrameworkConfig = Field(default_factory=FrameworkConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            DDDSCAFFOLD_FRAMEWORK_PATH, DDDSCAFFOLD_FRAMEWORK_MODULE,
            DDDSCAFFOLD_GO_BINARY, DDDSCAFFOLD_TOOLCHAIN_TIMEOUT.
        """
        framework_kwargs: dict[str, Any] = {}
        if os.environ.get("DDDSCAFFOLD_FRAMEWORK_PATH", "").strip():
            framework_kwargs["path"] = os.environ["DDDSCAFFOLD_FRAMEWORK_PATH"].strip()
        if os.environ.get("DDDSCAFFOLD_FRAMEWORK_MODULE", "").strip():
            framework_kwargs["module"] = os.environ["DDDSCAFFOLD_FRAMEWORK_MODULE"].strip()

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("DDDSCAFFOLD_GO_BINARY"):
            toolchain_kwargs["go_binary"] = os.environ["DDDSCAFFOLD_GO_BINARY"]
        if os.environ.get("DDDSCAFFOLD_TOOLCHAIN_TIMEOUT"):
            toolchain_kwargs["timeout"] = int(os.environ["DDDSCAFFOLD_TOOLCHAIN_TIMEOUT"])

        return cls(
            toolchain=ToolchainConfig(**toolchain_kwargs),
            framework=FrameworkConfig(**framework_kwargs),
        )
