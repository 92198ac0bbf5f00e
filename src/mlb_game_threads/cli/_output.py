from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

if TYPE_CHECKING:
    from mlb_game_threads.game.plays import Announcement
    from mlb_game_threads.presentation.blocks import ContentBlock

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def print_block(block: ContentBlock) -> None:
    if block.author_name:
        console.print(f"[dim]{escape(block.author_name)}[/dim]")
    if block.title:
        console.print(f"[bold]{escape(block.title)}[/bold]")
    if block.description:
        console.print(escape(block.description))
    for field in block.fields:
        console.print(f"[bold cyan]{escape(field.name)}[/bold cyan]")
        console.print(escape(field.value))
    if block.footer:
        console.print(f"[dim]{escape(block.footer)}[/dim]")


def print_thread_preview(title: str, blocks: list[ContentBlock], announcements: list[Announcement]) -> None:
    console.print(f"[bold green]Thread:[/bold green] {escape(title)}")
    for block in blocks:
        console.print(Rule())
        print_block(block)

    console.print()
    console.print(f"[bold green]Announcements:[/bold green] {len(announcements)}")
    for announcement in announcements:
        label = f"play {announcement.sequence_index}" + (" (pinned)" if announcement.pin else "")
        console.print(Rule(label))
        for block in announcement.blocks:
            print_block(block)
