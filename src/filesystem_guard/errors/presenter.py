"""
Presentation of classified errors.

The handler produces Presentation records; a Presenter decides how they
reach the user. RichPresenter renders to a terminal, CollectingPresenter
keeps them in memory for an embedding host to pick up.
"""

from dataclasses import dataclass, field
from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from filesystem_guard.errors.types import ErrorCategory


@dataclass(frozen=True)
class Presentation:
    """A single user-visible notification."""

    category: ErrorCategory
    message: str
    suggestions: tuple[str, ...] = ()
    count: int = 1

    @property
    def severity(self) -> str:
        """"warning" for caller-correctable problems, "error" otherwise."""
        if self.category in (ErrorCategory.USER, ErrorCategory.CONFIGURATION):
            return "warning"
        return "error"

    @property
    def title(self) -> str:
        if self.category == ErrorCategory.SECURITY:
            return "Filesystem Security"
        return "Filesystem"

    @property
    def is_summary(self) -> bool:
        return self.count > 1

    def __str__(self) -> str:
        return f"{self.title}: {self.message}"


class Presenter(Protocol):
    """Receives presentations emitted by the ErrorHandler."""

    def present(self, presentation: Presentation) -> None:
        ...


class RichPresenter:
    """Renders presentations as rich panels."""

    _STYLES = {"warning": "yellow", "error": "red"}

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def present(self, presentation: Presentation) -> None:
        style = self._STYLES[presentation.severity]
        body = escape(presentation.message)
        if presentation.suggestions:
            body += "\n\n" + "\n".join(f"• {escape(s)}" for s in presentation.suggestions)
        self.console.print(
            Panel(
                body,
                title=f"[bold {style}]{presentation.title}[/bold {style}]",
                border_style=style,
            )
        )


@dataclass
class CollectingPresenter:
    """Keeps every presentation in order."""

    presentations: list[Presentation] = field(default_factory=list)

    def present(self, presentation: Presentation) -> None:
        self.presentations.append(presentation)

    def messages(self) -> list[str]:
        return [p.message for p in self.presentations]

    def clear(self) -> None:
        self.presentations.clear()

    def __len__(self) -> int:
        return len(self.presentations)
