"""Rich terminal formatting helpers."""

from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from neomama.assessments import EpdsInterpretation
from neomama.chat import format_timestamp
from neomama.models import (
    AssessmentResult,
    Chat,
    ChatInfo,
    Message,
    Note,
    NOTE_CATEGORIES,
    Screen,
    TransportService,
    WeekDevelopment,
)
from neomama.screens import ScreenAction

console = Console()

_LEVEL_STYLE: dict[str, str] = {
    "low": "green",
    "moderate": "yellow",
    "high": "red",
}


def print_screen(title: str, subtitle: Optional[str] = None) -> None:
    """Print the header bar for a screen."""
    body = Text(title, style="bold magenta", justify="center")
    if subtitle:
        body.append(f"\n{subtitle}", style="dim")
    console.print(Panel(body, border_style="magenta"))


def print_actions(
    actions: list[ScreenAction], bottom_nav: Optional[list[tuple[str, Screen]]] = None
) -> None:
    """Numbered menu of the choices on the current screen.

    Bottom-navigation entries follow the screen's own actions and continue
    the numbering.
    """
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("n", width=4, justify="right", style="bold cyan")
    table.add_column("label")
    for i, action in enumerate(actions, 1):
        table.add_row(f"{i}.", action.label)
    if bottom_nav:
        offset = len(actions)
        for j, (label, _screen) in enumerate(bottom_nav, offset + 1):
            table.add_row(f"{j}.", f"[dim]{label}[/dim]")
    console.print(table)


def print_splash() -> None:
    console.print(
        Panel(
            Text(
                "NeoMama\n\nCelebrating motherhood with\nKenyan Love",
                justify="center",
                style="bold magenta",
            ),
            border_style="magenta",
            padding=(2, 4),
        )
    )


def print_week(data: WeekDevelopment, week: int, progress_pct: float) -> None:
    """Show baby development for the selected week."""
    lines = [
        f"[bold]Week {week}[/bold] (trimester {data.trimester}) -- {progress_pct:.0f}% of the way",
        f"Baby is about the size of a [bold]{data.baby_size}[/bold] "
        f"({data.baby_weight}, {data.baby_height})",
        "",
        f"[magenta]{data.milestone}[/magenta]",
        data.details,
        "",
        "[bold]Baby's development[/bold]",
        *[f"  - {h}" for h in data.development_highlights],
        "",
        "[bold]Your body[/bold]",
        *[f"  - {m}" for m in data.mama_body],
    ]
    console.print(Panel("\n".join(lines), title="Baby Development", border_style="magenta"))


def print_transport(services: list[TransportService], emergency_line: str) -> None:
    """List transport services with the free emergency line on top."""
    console.print(
        Panel(
            f"Need immediate help? Call [bold]{emergency_line}[/bold] -- FREE emergency line",
            border_style="red",
        )
    )
    if not services:
        console.print(Panel("No services match.", border_style="dim"))
        return
    table = Table(title="Emergency Transport", border_style="blue")
    table.add_column("id", width=3)
    table.add_column("Service")
    table.add_column("Phone")
    table.add_column("Response")
    table.add_column("Cost")
    table.add_column("NICU", justify="center")
    table.add_column("Rating", justify="right")
    for s in services:
        table.add_row(
            s.id,
            s.name + (" [green](partner)[/green]" if s.is_partner else ""),
            s.phone,
            s.response_time,
            s.cost,
            "yes" if s.has_nicu else "",
            f"{s.rating:.1f}",
        )
    console.print(table)


def print_chat_list(chats: list[Chat]) -> None:
    """Print conversations with unread counts."""
    if not chats:
        console.print(Panel("No conversations.", title="Chats", border_style="dim"))
        return
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("id", width=4)
    table.add_column("name")
    table.add_column("last")
    table.add_column("when", style="dim")
    for c in chats:
        name = f"[bold]{c.name}[/bold]"
        if c.unread_count:
            name += f" [magenta]({c.unread_count})[/magenta]"
        table.add_row(f"#{c.id}", name, c.last_message, c.timestamp)
    console.print(Panel(table, title="Chats", border_style="blue"))


def print_people(title: str, people: list[tuple[str, str]]) -> None:
    """Name and one detail per line, e.g. suggested sisters or mentors."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("name", style="bold")
    table.add_column("detail", style="dim")
    for name, detail in people:
        table.add_row(name, detail)
    console.print(Panel(table, title=title, border_style="magenta"))


def print_conversation(
    info: ChatInfo, messages: list[Message], now: Optional[datetime] = None
) -> None:
    """Print a conversation header followed by its messages."""
    status = "Online" if info.is_online else "Last seen recently"
    console.print(f"[bold]{info.name}[/bold]  [dim]{status}[/dim]")
    for m in messages:
        when = format_timestamp(m.timestamp, now)
        if m.is_me:
            console.print(f"[cyan]{'You':>12}[/cyan]: {m.text}  [dim]{when}[/dim]")
        else:
            console.print(f"[magenta]{m.sender_name[:12]:>12}[/magenta]: {m.text}  [dim]{when}[/dim]")


def print_epds_result(
    result: AssessmentResult, interpretation: EpdsInterpretation
) -> None:
    """Print an EPDS total and its interpretation."""
    style = _LEVEL_STYLE.get(interpretation.level, "white")
    taken = result.taken_at.strftime("%Y-%m-%d %H:%M")
    body = (
        f"Score: [bold]{result.score}/{result.max_score}[/bold]  ({taken})\n\n"
        f"[bold {style}]{interpretation.title}[/bold {style}]\n"
        f"{interpretation.description}"
    )
    console.print(Panel(body, title=f"#{result.id} Wellbeing check", border_style=style))


def print_calendar(
    grid: list[list[Optional[int]]],
    year: int,
    month: int,
    marked: Optional[set[int]] = None,
    today: Optional[date] = None,
) -> None:
    """Print a Monday-first month grid; days with notes are marked."""
    marked = marked or set()
    table = Table(title=f"{calendar.month_name[month]} {year}", box=None)
    for day_name in ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"):
        table.add_column(day_name, justify="right", width=3)
    for week in grid:
        cells = []
        for day in week:
            if day is None:
                cells.append("")
                continue
            cell = str(day)
            if day in marked:
                cell = f"[magenta]{cell}*[/magenta]"
            if today and today.year == year and today.month == month and today.day == day:
                cell = f"[reverse]{cell}[/reverse]"
            cells.append(cell)
        table.add_row(*cells)
    console.print(table)


def print_notes(notes: list[Note]) -> None:
    if not notes:
        console.print(Panel("No notes yet.", title="Notes", border_style="dim"))
        return
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("date", width=10)
    table.add_column("category", width=14, style="magenta")
    table.add_column("text")
    for n in notes:
        table.add_row(n.date.isoformat(), NOTE_CATEGORIES.get(n.category, n.category), n.text)
    console.print(Panel(table, title="Notes", border_style="blue"))


def print_flags(flags: dict[str, str]) -> None:
    if not flags:
        console.print(Panel("No flags stored.", title="Flags", border_style="dim"))
        return
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("key", style="bold")
    table.add_column("value")
    for key, value in flags.items():
        table.add_row(key, value)
    console.print(Panel(table, title="Flags", border_style="blue"))


def print_nudge(message: str) -> None:
    """Print an affirmation or gentle message in a styled panel."""
    text = Text(message, justify="center")
    console.print(Panel(text, border_style="magenta", padding=(1, 4)))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{message}[/yellow]")
