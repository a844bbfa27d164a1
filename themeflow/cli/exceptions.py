"""
ThemeFlow CLI exception hierarchy.

This module defines CLI-specific exceptions for the ThemeFlow application.
"""

import traceback

from rich.console import Console
from rich.panel import Panel

from themeflow.exceptions import ThemeFlowAppError

console = Console(stderr=True)


class ThemeFlowCLIError(ThemeFlowAppError):
    """
    Base exception class for CLI-related errors.

    Carries an optional hint and exit code, and renders itself in a rich panel.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        code: int = 1,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.code = code
        self.original_exception = original_exception

    def format_rich(self) -> str:
        """Format the error message for rich display."""
        error_message = f"[red bold]Error:[/] {self.message}"

        if self.hint:
            error_message += f"\n[yellow]Hint:[/] {self.hint}"

        if self.original_exception:
            error_message += "\n\n[dim]Original error:[/]"
            error_message += (
                f"\n[dim]{self.original_exception.__class__.__name__}: {self.original_exception!s}[/]"
            )

            tb = "".join(traceback.format_tb(self.original_exception.__traceback__))
            if tb:
                error_message += f"\n[dim]Traceback:[/]\n[dim]{tb}[/]"

        return error_message

    def show(self) -> None:
        """Display the error message using Rich formatting."""
        console.print(Panel(self.format_rich(), title="[red]ThemeFlow CLI Error[/]", border_style="red"))


class CLIInitError(ThemeFlowCLIError):
    """Raised when project initialization fails."""


class CLIResolveError(ThemeFlowCLIError):
    """Raised when resolving or rendering a template via CLI fails."""


class CLIShowError(ThemeFlowCLIError):
    """Raised when there are errors displaying information via CLI."""
