"""
SecretForge Console
====================

:class:`ForgeConsole` is the one place the CLI writes human-facing output.
It owns a themed :class:`rich.console.Console` on stdout and knows how to
draw the banner, section rules, labelled status lines, simple tables and
a spinner. Formatters in :mod:`forge.output.console` build on it.

Text that can contain user input (secrets, error messages) is wrapped in
:class:`rich.text.Text` so square brackets are never read as markup.
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_FORGE_THEME = Theme(
    {
        "forge.banner": "bold bright_cyan",
        "forge.section": "bold bright_magenta",
        "forge.success": "bold green",
        "forge.warning": "bold yellow",
        "forge.error": "bold red",
        "forge.info": "bold bright_blue",
        "forge.dim": "dim white",
        "forge.highlight": "bold bright_white",
        "forge.secret": "bold bright_green",
    }
)

_BANNER_ART = r"""
[bright_cyan]
  ___  ___  ___ ___ ___ _____   ___ ___  ___  ___ ___
 / __|| __|/ __| _ \ __|_   _| | __/ _ \| _ \/ __| __|
 \__ \| _|| (__|   / _|  | |   | _| (_) |   / (_ | _|
 |___/|___|\___|_|_\___| |_|   |_| \___/|_|_\\___|___|
[/bright_cyan]"""

_TAGLINE = "Cryptographically secure secret generation"


class ForgeConsole:
    """Themed stdout console for the SecretForge CLI.

    Args:
        quiet:  Drop everything written to this console. The CLI sets it
                in JSON mode so stdout carries the JSON document only.
        record: Keep rendered output so tests can read it back with
                ``console.rich.export_text()``.
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        self._console = Console(theme=_FORGE_THEME, quiet=quiet, record=record, highlight=False)

    @property
    def rich(self) -> Console:
        """The wrapped Rich console."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Headings
    # ------------------------------------------------------------------ #

    def banner(self, version: str) -> None:
        """Logo, tagline and version/time line inside a panel."""
        body = Text.from_markup(_BANNER_ART)
        body.append("\n\n")
        body.append(_TAGLINE, style="forge.highlight")
        body.append("\n")
        body.append(
            f"v{version}  ·  {_dt.datetime.now():%Y-%m-%d %H:%M}", style="forge.dim"
        )
        self._console.print(
            Panel(Align.center(body), border_style="forge.banner", padding=(1, 2))
        )

    def section(self, title: str) -> None:
        """Horizontal rule carrying *title*, followed by a blank line."""
        self._console.rule(Text(f" {title} "), style="forge.section")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Labelled messages
    # ------------------------------------------------------------------ #

    def _message(self, style: str, label: str, message: str) -> None:
        line = Text()
        line.append(label, style=style)
        line.append(" ")
        line.append(message)
        self._console.print(line)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._message("forge.success", "[✔] SUCCESS:", message)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._message("forge.warning", "[⚠] WARNING:", message)

    def error(self, message: str) -> None:
        """Print an error message.

        The message is printed verbatim; brackets in it are not markup.
        """
        self._message("forge.error", "[✘] ERROR:", message)

    def info(self, message: str) -> None:
        """Print an informational message."""
        self._message("forge.info", "[ℹ] INFO:", message)

    # ------------------------------------------------------------------ #
    #  Tables and spinners
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        headers: Sequence[str],
        rows: Iterable[Sequence[Any]],
        styles: Sequence[str] = (),
    ) -> None:
        """Print *rows* under *headers*; cells are shown as plain text.

        *styles* gives a column style per header, in order; missing
        entries leave the column unstyled.
        """
        grid = Table(
            title=title,
            border_style="forge.banner",
            header_style="forge.section",
            show_lines=True,
        )
        padded = list(styles) + [""] * (len(headers) - len(styles))
        for header, style in zip(headers, padded):
            grid.add_column(header, style=style)
        for row in rows:
            grid.add_row(*[Text(str(cell)) for cell in row])
        self._console.print(grid)

    @contextmanager
    def status(self, message: str) -> Iterator[Status]:
        """Spinner shown while the block runs."""
        with self._console.status(
            Text(message, style="forge.info"), spinner="dots"
        ) as spinner:
            yield spinner
