"""Adapter around the Go module toolchain.

The scaffolder never edits ``go.mod`` itself beyond reading the module line;
initialising, pinning, redirecting and tidying are delegated to ``go mod``
through the narrow :class:`Toolchain` protocol.  Every call blocks until the
process exits.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from dddscaffold.config import ToolchainConfig

from .errors import ToolchainError


class Toolchain(Protocol):
    """Module-management operations the builder and appender depend on."""

    def init(self, directory: Path, module_path: str) -> None: ...

    def tidy(self, directory: Path) -> None: ...

    def edit_require(self, directory: Path, requirement: str) -> None: ...

    def edit_replace(self, directory: Path, module: str, path: str) -> None: ...


def _run_go(
    *args: str,
    go_binary: str = "go",
    cwd: str | Path,
    timeout: float = 300.0,
) -> str:
    """Run a go command synchronously and return its combined output.

    Raises ToolchainError if the binary is missing, the command times out, or
    it exits with a non-zero code.
    """
    cmd = [go_binary, *args]
    cmd_str = " ".join(cmd)

    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolchainError(
            f"Go binary not found: {go_binary}", command=cmd_str
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise ToolchainError(
            f"Command timed out after {timeout}s: {cmd_str}", command=cmd_str
        ) from exc

    output = (completed.stdout or b"").decode("utf-8", errors="replace").strip()
    if completed.returncode != 0:
        raise ToolchainError(
            f"Command failed (exit {completed.returncode}): {cmd_str}",
            command=cmd_str,
            output=output,
        )
    return output


class GoToolchain:
    """Runs ``go mod`` subcommands inside a target directory."""

    def __init__(self, config: ToolchainConfig | None = None) -> None:
        self.config = config or ToolchainConfig()

    def _go(self, directory: Path, *args: str) -> str:
        return _run_go(
            *args,
            go_binary=self.config.go_binary,
            cwd=directory,
            timeout=self.config.timeout,
        )

    def init(self, directory: Path, module_path: str) -> None:
        """``go mod init <module_path>``; a blank module path is a no-op."""
        if not module_path:
            return
        self._go(directory, "mod", "init", module_path)

    def tidy(self, directory: Path) -> None:
        self._go(directory, "mod", "tidy")

    def edit_require(self, directory: Path, requirement: str) -> None:
        """Pin *requirement* (``module@version``) in ``go.mod``."""
        self._go(directory, "mod", "edit", f"-require={requirement}")

    def edit_replace(self, directory: Path, module: str, path: str) -> None:
        """Redirect *module* to the local checkout at *path*."""
        self._go(directory, "mod", "edit", f"-replace={module}={path}")


@dataclass
class NullToolchain:
    """Toolchain that records calls and runs nothing.

    Used when the Go toolchain is unavailable or deliberately skipped; the
    generated project then needs ``go mod init`` / ``go mod tidy`` by hand.
    """

    calls: list[tuple[str, ...]] = field(default_factory=list)

    def init(self, directory: Path, module_path: str) -> None:
        self.calls.append(("init", str(directory), module_path))

    def tidy(self, directory: Path) -> None:
        self.calls.append(("tidy", str(directory)))

    def edit_require(self, directory: Path, requirement: str) -> None:
        self.calls.append(("edit_require", str(directory), requirement))

    def edit_replace(self, directory: Path, module: str, path: str) -> None:
        self.calls.append(("edit_replace", str(directory), module, path))
