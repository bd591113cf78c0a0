"""
Forge Console Output
=====================

Rich-based console output formatters for SecretForge: the generated
secret panel, a colour-coded strength meter, batch and history tables,
character-set inspection and distribution audit results.

Secrets are always rendered through :class:`rich.text.Text` so that
characters such as ``[`` are never interpreted as console markup.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import ForgeConsole
from forge.core.models import (
    CharsetInfo,
    DistributionResult,
    GeneratorAlgorithm,
    SavedSecret,
    StrengthLevel,
    StrengthResult,
)


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_STRENGTH_COLOURS: dict[str, str] = {
    StrengthLevel.WEAK.value: "bold red",
    StrengthLevel.MEDIUM.value: "bold yellow",
    StrengthLevel.STRONG.value: "bold green",
    StrengthLevel.VERY_STRONG.value: "bold bright_green",
}

_METER_WIDTH = 40


def _algorithm_label(algorithm: Union[GeneratorAlgorithm, str]) -> str:
    try:
        return GeneratorAlgorithm(algorithm).label
    except ValueError:
        return str(algorithm)


class ForgeConsoleOutput:
    """Console output formatters for SecretForge results.

    Usage::

        console = ForgeConsole()
        output = ForgeConsoleOutput(console)
        output.display_secret(secret, GeneratorAlgorithm.UUID, strength)
        output.display_batch(engine.generate_batch(config, 10))
    """

    def __init__(self, console: Optional[ForgeConsole] = None) -> None:
        """Initialise the console output formatter.

        Args:
            console: ForgeConsole instance. Creates one if not provided.
        """
        self.console = console or ForgeConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Single Secret
    # ------------------------------------------------------------------ #

    def display_secret(
        self,
        secret: str,
        algorithm: Union[GeneratorAlgorithm, str],
        strength: Optional[StrengthResult] = None,
    ) -> None:
        """Show a generated secret in a panel, followed by its strength."""
        self.console.section("Generated Secret")

        body = Text(secret or "(empty)", style="forge.secret")
        subtitle = f"{_algorithm_label(algorithm)} | {len(secret)} characters"
        self._rich.print(
            Panel(body, title="Secret", subtitle=subtitle, border_style="cyan")
        )

        if strength is not None:
            self.display_strength(strength)

    # ------------------------------------------------------------------ #
    #  Strength
    # ------------------------------------------------------------------ #

    def display_strength(self, result: StrengthResult, secret: Optional[str] = None) -> None:
        """Display a strength estimate as a coloured meter with feedback.

        Args:
            result: StrengthResult from the estimator.
            secret: When given, its length is listed in the details table.
        """
        colour = _STRENGTH_COLOURS.get(result.strength.value, "white")
        label = result.strength.value.replace("-", " ").upper()

        filled = int((result.score / 100) * _METER_WIDTH)
        filled = max(0, min(_METER_WIDTH, filled))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{result.score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i >= filled:
                meter.append("░", style="dim")
            elif i < _METER_WIDTH * 0.30:
                meter.append("█", style="red")
            elif i < _METER_WIDTH * 0.60:
                meter.append("█", style="yellow")
            elif i < _METER_WIDTH * 0.80:
                meter.append("█", style="green")
            else:
                meter.append("█", style="bright_green")
        meter.append("]", style="dim")
        meter.append("  ")
        meter.append(label, style=colour)

        self._rich.print(Panel(meter, title="Strength Meter", border_style="cyan"))

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        if secret is not None:
            tbl.add_row("Length", str(len(secret)))
        tbl.add_row("Entropy", f"{result.entropy:.1f} bits")
        tbl.add_row("Strength", Text(label, style=colour))
        self._rich.print(tbl)

        for line in result.feedback:
            self._rich.print(Text(f"  • {line}", style="forge.dim"))
        self._rich.print()

    # ------------------------------------------------------------------ #
    #  Batch / History
    # ------------------------------------------------------------------ #

    def display_batch(self, items: Iterable[SavedSecret]) -> None:
        """Numbered table of a batch of secrets."""
        items = list(items)
        self.console.section(f"Batch ({len(items)} secrets)")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
        )
        tbl.add_column("#", justify="right", style="dim")
        tbl.add_column("Secret", style="forge.secret", overflow="fold")
        tbl.add_column("Algorithm")

        for index, item in enumerate(items, start=1):
            tbl.add_row(str(index), Text(item.secret), _algorithm_label(item.algorithm))
        self._rich.print(tbl)

    def display_history(self, items: Iterable[SavedSecret]) -> None:
        """Session history, newest first, with stored strength summaries."""
        items = list(items)
        if not items:
            self.console.info("History is empty.")
            return

        self.console.section(f"Session History ({len(items)})")
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("#", justify="right", style="dim")
        tbl.add_column("Secret", style="forge.secret", overflow="fold")
        tbl.add_column("Algorithm")
        tbl.add_column("Strength")
        tbl.add_column("Generated", style="dim")

        for index, item in enumerate(items, start=1):
            if item.strength is not None:
                colour = _STRENGTH_COLOURS.get(item.strength.strength.value, "white")
                strength = Text(
                    f"{item.strength.strength.value} ({item.strength.score})", style=colour
                )
            else:
                strength = Text("-", style="dim")
            tbl.add_row(
                str(index),
                Text(item.secret),
                _algorithm_label(item.algorithm),
                strength,
                item.created_at.strftime("%H:%M:%S"),
            )
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Character Sets
    # ------------------------------------------------------------------ #

    def display_charset(self, info: CharsetInfo) -> None:
        """Inspection result of a custom character set."""
        self.console.section("Character Set")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value", overflow="fold")

        tbl.add_row("Supplied", Text(info.charset or "(empty)"))
        tbl.add_row("Exclude Similar", "Yes" if info.exclude_similar else "No")
        tbl.add_row("Effective", Text(info.effective or "(empty)", style="forge.secret"))
        tbl.add_row("Size", str(info.size))
        tbl.add_row("Unique Characters", str(info.unique_count))
        tbl.add_row("Duplicates", str(info.duplicate_count))
        if info.exclude_similar:
            tbl.add_row("Removed", Text(info.removed or "(none)"))
        self._rich.print(tbl)

        if info.valid:
            self.console.success(f"{info.unique_count} distinct characters available.")
        else:
            self.console.error(
                "Character set is empty after filtering similar characters. "
                "Please add more characters."
            )

    # ------------------------------------------------------------------ #
    #  Distribution Audit
    # ------------------------------------------------------------------ #

    def display_audit(self, result: DistributionResult) -> None:
        """Chi-squared audit statistics and verdict."""
        self.console.section("Distribution Audit")

        verdict = Text()
        verdict.append("Algorithm: ", style="bold")
        verdict.append(f"{_algorithm_label(result.algorithm)}\n")
        verdict.append("Verdict: ", style="bold")
        if result.passed:
            verdict.append("UNIFORM", style="bold green")
        else:
            verdict.append("NON-UNIFORM", style="bold red")
        self._rich.print(Panel(verdict, title="Overview", border_style="cyan"))

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Statistic", style="bold")
        tbl.add_column("Value", justify="right")

        tbl.add_row("Samples", f"{result.samples:,}")
        tbl.add_row("Characters Counted", f"{result.characters:,}")
        tbl.add_row("Alphabet Size", str(result.alphabet_size))
        tbl.add_row("Chi-Squared", f"{result.chi_squared:.4f}")
        tbl.add_row("p-value", f"{result.p_value:.6f}")
        tbl.add_row("Significance", f"{result.significance}")
        tbl.add_row("Out of Alphabet", str(result.out_of_alphabet))
        tbl.add_row(
            "Shannon Entropy",
            f"{result.shannon_entropy:.4f} / {result.max_entropy:.4f} bits/char",
        )
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Algorithms
    # ------------------------------------------------------------------ #

    def display_algorithms(self) -> None:
        """List every algorithm tag with its description."""
        self.console.table(
            "Algorithms",
            ["Tag", "Name", "Description"],
            [(a.value, a.label, a.description) for a in GeneratorAlgorithm],
            styles=["bold bright_cyan", "bold", ""],
        )
