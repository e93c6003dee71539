"""Exception hierarchy for the scaffolder.

Every failure carries the name of the stage that produced it so the CLI can
print a single combined message.  Nothing in the scaffolder retries or
downgrades these errors; they always propagate to the outermost caller.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Raised when a scaffolding stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        self.message = message
        super().__init__(f"{stage}: {message}")


class TemplateSourceError(ScaffoldError):
    """Raised when a bundled template root cannot be located."""

    def __init__(self, message: str) -> None:
        super().__init__("template source", message)


class TemplateRenderError(ScaffoldError):
    """Raised when a template body fails to parse or render."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__("render", f"{template}: {message}")


class ToolchainError(ScaffoldError):
    """Raised when an external toolchain invocation fails."""

    def __init__(self, message: str, command: str = "", output: str = "") -> None:
        self.command = command
        self.output = output
        detail = f"{message}\n{output}" if output else message
        super().__init__("toolchain", detail)
