"""
Console output for control results and listings.
"""

from typing import Iterable

from rich.console import Console
from rich.pretty import Pretty
from rich.text import Text

from .capabilities.protocols import ControlResult

# Global console instance
console = Console()


def show_result(result: ControlResult) -> None:
    """Print a control result as returned by the API."""
    console.print(Pretty(result.to_dict(), expand_all=True))


def show_names(names: Iterable[str]) -> None:
    for name in names:
        console.print(Text(name))


def show_error(message: str) -> None:
    text = Text()
    text.append("error: ", style="bold red")
    text.append(message)
    console.print(text)
