"""
Rich logging utilities for the speed reader.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

# Custom theme for the speed reader
custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "step": "blue bold",
    }
)

# Global console instance
console = Console(theme=custom_theme)


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]ℹ[/info] {escape(message)}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓[/success] {escape(message)}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]⚠[/warning] {escape(message)}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗[/error] {escape(message)}")


def step(message: str, step_num: Optional[int] = None, total: Optional[int] = None) -> None:
    """Print a step message."""
    if step_num and total:
        console.print(f"[step]\\[{step_num}/{total}][/step] {escape(message)}")
    else:
        console.print(f"[step]→[/step] {escape(message)}")


def header(message: str) -> None:
    """Print a header message."""
    console.print()
    console.rule(f"[bold]{escape(message)}[/bold]")
    console.print()


def verbatim(text: str) -> None:
    """Print text exactly as given: no markup, highlighting or rewrapping."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def status(message: str):
    """Spinner shown while a blocking call is in flight."""
    return console.status(f"[info]{escape(message)}[/info]", spinner="dots")
