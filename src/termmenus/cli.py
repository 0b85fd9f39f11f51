"""CLI entry point for termmenus. Uses Click for argument parsing."""

from __future__ import annotations

import contextlib
import logging
import sys
from typing import Iterator, TextIO

import click

from termmenus.config import load_config
from termmenus.keys import describe_key
from termmenus.menus import Menus
from termmenus.selection import Quit, Selected
from termmenus.terminal import KeySourceClosed, ProcessTerminal, Terminal

EXIT_SELECTED = 0
EXIT_CANCELLED = 1
EXIT_UNDEFINED_KEY = 2


def open_terminal(stack: contextlib.ExitStack) -> Terminal:
    """Return a terminal on the controlling tty.

    When stdin or stdout is redirected the menu is drawn on ``/dev/tty`` so
    the chosen item can still be captured from stdout.
    """
    if sys.stdin.isatty() and sys.stdout.isatty():
        return ProcessTerminal()
    try:
        tty_file = stack.enter_context(open("/dev/tty", "r+"))
    except OSError as e:
        raise click.ClickException(f"no terminal available: {e}") from e
    return ProcessTerminal(stdin_fd=tty_file.fileno(), stdout=tty_file)


@contextlib.contextmanager
def _menus() -> Iterator[Menus]:
    config = load_config()
    try:
        with contextlib.ExitStack() as stack:
            terminal = open_terminal(stack)
            yield stack.enter_context(
                Menus(terminal, theme=config.theme, keybindings=config.keybindings)
            )
    except (OSError, KeySourceClosed, UnicodeDecodeError) as e:
        raise click.ClickException(f"terminal I/O failed: {e}") from e


def _read_items(items: tuple[str, ...], file: TextIO | None) -> list[str]:
    result = list(items)
    if file is not None:
        result.extend(line.rstrip("\r\n") for line in file if line.strip())
    if not result:
        raise click.UsageError("no items given; pass ITEMS or --file")
    return result


def _items_options(func):
    func = click.option(
        "--file", "-f", type=click.File("r"), default=None,
        help="Read additional items from a file, one per line ('-' for stdin)",
    )(func)
    return click.argument("items", nargs=-1)(func)


@click.group()
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level for diagnostics written to stderr",
)
def main(log_level):
    """Pick an item from a list in the terminal."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@main.command()
@_items_options
@click.option("--title", default="Select an item", help="Line shown above the list")
@click.option("--prompt", default=">", help="Marker shown before the highlighted item")
@click.option("--quit", "quit_key", default=None, help="Key that cancels, e.g. 'q' or 'escape'")
def pick(items, file, title, prompt, quit_key):
    """Move through ITEMS with the arrow keys and press Enter."""
    choices = _read_items(items, file)
    with _menus() as menus:
        index = menus.select_menu(choices, title, prompt, quit_key)
    if index is None:
        sys.exit(EXIT_CANCELLED)
    click.echo(choices[index])


@main.command("filter")
@_items_options
@click.option("--prompt", default=">", help="Marker shown before the highlighted item")
@click.option("--input-prompt", default="Search: ", help="Label in front of the typed text")
@click.option("--quit", "quit_key", default=None, help="Key that cancels, e.g. 'escape'")
def filter_command(items, file, prompt, input_prompt, quit_key):
    """Type to narrow ITEMS by prefix, then pick one."""
    choices = _read_items(items, file)

    def lister(text: str) -> list[str]:
        needle = text.lower()
        return [choice for choice in choices if choice.lower().startswith(needle)]

    with _menus() as menus:
        chosen = menus.select_menu_with_input(lister, prompt, input_prompt, quit_key)
    if chosen is None:
        sys.exit(EXIT_CANCELLED)
    click.echo(chosen)


@main.command()
@_items_options
@click.option("--title", default="Choose an option", help="Line shown above the list")
@click.option("--quit", "quit_key", default="q", show_default=True, help="Key that cancels")
@click.option("--retry/--no-retry", default=False, help="Ask again after an unrecognised key")
def numbered(items, file, title, quit_key, retry):
    """Press the number of one of ITEMS (at most nine are reachable)."""
    choices = _read_items(items, file)
    with _menus() as menus:
        while True:
            outcome = menus.select_menu_numbered(choices, quit_key, title)
            if isinstance(outcome, (Selected, Quit)) or not retry:
                break
            menus.text(f"Unrecognised key; press 1-{min(len(choices), 9)} or {describe_key(quit_key)}")

    if isinstance(outcome, Selected):
        click.echo(choices[outcome.index])
    elif isinstance(outcome, Quit):
        sys.exit(EXIT_CANCELLED)
    else:
        click.echo(f"unrecognised key: {outcome.key!r}", err=True)
        sys.exit(EXIT_UNDEFINED_KEY)


if __name__ == "__main__":
    main()
