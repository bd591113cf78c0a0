"""
Forge CLI
==========

Click-based command-line interface for SecretForge. Provides subcommands
for single and batch secret generation, strength estimation, custom
character-set inspection, the output distribution audit, and a listing
of the supported algorithms.

Usage::

    python -m forge generate password --length 20 --password-symbols
    python -m forge generate uuid -n 3 --export uuids.json --format json
    python -m forge batch api-key --count 10 --segments 5
    python -m forge strength "kj2]aWru"
    python -m forge charset --preset alphanumeric-safe --exclude-similar
    python -m forge audit hexadecimal --samples 2000
    python -m forge algorithms

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional

import click

from shared.config import ForgeConfig
from shared.console import ForgeConsole

from forge import __version__
from forge.core.engine import ForgeEngine
from forge.core.errors import ForgeError
from forge.core.history import SecretHistory
from forge.core.models import GeneratorAlgorithm, GeneratorConfig, SavedSecret, StrengthLevel
from forge.generators.charsets import PRESETS
from forge.output.console import ForgeConsoleOutput
from forge.output.report import EXPORT_FORMATS, ForgeReportGenerator

_ALGORITHM_CHOICE = click.Choice([a.value for a in GeneratorAlgorithm])


# ===================================================================== #
#  Shared Options
# ===================================================================== #

_GENERATION_OPTIONS = [
    click.argument("algorithm", required=False, type=_ALGORITHM_CHOICE),
    click.option("--length", "-l", type=int, default=None,
                 help="Secret length in characters."),
    click.option("--symbols/--no-symbols", "include_symbols", default=None,
                 help="Add symbols to the with-symbols alphabet."),
    click.option("--segments", type=int, default=None,
                 help="Number of API-key segments."),
    click.option("--segment-length", type=int, default=None,
                 help="Characters per API-key segment."),
    click.option("--bytes", "byte_count", type=int, default=None,
                 help="Random bytes drawn for binary-key."),
    click.option("--uppercase/--no-uppercase", default=None,
                 help="Password: require uppercase letters."),
    click.option("--lowercase/--no-lowercase", default=None,
                 help="Password: require lowercase letters."),
    click.option("--numbers/--no-numbers", default=None,
                 help="Password: require digits."),
    click.option("--password-symbols/--no-password-symbols", default=None,
                 help="Password: require symbols."),
    click.option("--charset", "custom_charset", default=None,
                 help="Custom character set overriding the algorithm's alphabet."),
    click.option("--preset", type=click.Choice(sorted(PRESETS)), default=None,
                 help="Named character set used as the custom set."),
    click.option("--exclude-similar/--keep-similar", "exclude_similar", default=None,
                 help="Drop visually similar characters from the custom set."),
]

_EXPORT_OPTIONS = [
    click.option("--export", "export_path", type=click.Path(dir_okay=False), default=None,
                 help="Write the result to this file."),
    click.option("--export-dir", type=click.Path(file_okay=False), default=None,
                 help="Write the result under a default file name in this directory."),
    click.option("--format", "export_format", type=click.Choice(list(EXPORT_FORMATS)),
                 default=None, help="Export format."),
    click.option("--no-metadata", is_flag=True, default=False,
                 help="Omit metadata headers from TXT exports."),
]


def _apply(options: list[Callable[[Any], Any]]) -> Callable[[Any], Any]:
    """Decorator applying a list of click parameters in declaration order."""

    def decorator(func: Any) -> Any:
        for option in reversed(options):
            func = option(func)
        return func

    return decorator


def _build_config(engine: ForgeEngine, params: dict[str, Any]) -> GeneratorConfig:
    """Merge command-line generation options over the configured defaults."""
    charset = params.get("custom_charset")
    preset = params.get("preset")
    if preset is not None:
        charset = (charset or "") + PRESETS[preset]

    overrides: dict[str, Any] = {
        "algorithm": params.get("algorithm"),
        "length": params.get("length"),
        "include_symbols": params.get("include_symbols"),
        "segments": params.get("segments"),
        "segment_length": params.get("segment_length"),
        "byte_count": params.get("byte_count"),
        "exclude_similar_characters": params.get("exclude_similar"),
        "password_options": {
            "include_uppercase": params.get("uppercase"),
            "include_lowercase": params.get("lowercase"),
            "include_numbers": params.get("numbers"),
            "include_symbols": params.get("password_symbols"),
        },
    }
    if charset is not None:
        overrides["custom_character_set"] = charset
        overrides["use_custom_character_set"] = True
    return engine.default_config(**overrides)


def _fail(ctx: click.Context, exc: Exception) -> NoReturn:
    """Report *exc* on the console and the log, then exit with status 1."""
    console: ForgeConsole = ctx.obj["console"]
    engine: ForgeEngine = ctx.obj["engine"]
    console.error(str(exc))
    engine.logger.error("%s: %s", type(exc).__name__, exc)
    ctx.exit(1)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to SecretForge configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress the banner.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: str,
    quiet: bool,
) -> None:
    """SecretForge -- Cryptographically Secure Secret Generator.

    Generate passwords, API keys, tokens, UUIDs and PINs from the
    operating system's CSPRNG, estimate their strength, and audit the
    uniformity of the generators.
    """
    ctx.ensure_object(dict)

    try:
        forge_config = ForgeConfig.load(config) if config else ForgeConfig()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    ctx.obj["config"] = forge_config
    ctx.obj["output_format"] = output

    # JSON goes to stdout on its own.
    console = ForgeConsole(quiet=output == "json")
    ctx.obj["console"] = console
    ctx.obj["engine"] = ForgeEngine(forge_config)
    ctx.obj["display"] = ForgeConsoleOutput(console)
    ctx.obj["reporter"] = ForgeReportGenerator(forge_config.global_settings.output_dir)
    ctx.obj["history"] = SecretHistory(forge_config.history.max_items)

    if not quiet:
        console.banner(version=__version__)


def _export_target(
    export_path: Optional[str], export_dir: Optional[str]
) -> tuple[Optional[Path], Optional[ForgeReportGenerator]]:
    """Resolve ``--export`` / ``--export-dir`` into a path or a reporter."""
    if export_path:
        return Path(export_path), None
    if export_dir:
        return None, ForgeReportGenerator(export_dir)
    return None, None


def _wants_export(export_path: Optional[str], export_dir: Optional[str]) -> bool:
    return bool(export_path or export_dir)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@_apply(_GENERATION_OPTIONS)
@click.option("--count", "-n", type=click.IntRange(min=1), default=1,
              help="Number of secrets to generate, each recorded in the history.")
@click.option("--no-strength", is_flag=True, default=False,
              help="Skip the strength estimate.")
@_apply(_EXPORT_OPTIONS)
@click.pass_context
def generate(ctx: click.Context, count: int, no_strength: bool, **params: Any) -> None:
    """Generate one or more secrets.

    ALGORITHM defaults to the configured algorithm. A custom character
    set (--charset / --preset) replaces the algorithm's alphabet.
    """
    engine: ForgeEngine = ctx.obj["engine"]
    display: ForgeConsoleOutput = ctx.obj["display"]
    console: ForgeConsole = ctx.obj["console"]
    history: SecretHistory = ctx.obj["history"]

    generated: list[SavedSecret] = []
    try:
        config = _build_config(engine, params)
        for _ in range(count):
            secret = engine.generate(config)
            strength = None if no_strength else engine.estimate(secret)
            entry = history.add(
                secret,
                config.algorithm.value,
                strength=strength.summary() if strength is not None else None,
            )
            generated.append(entry)
            if ctx.obj["output_format"] == "console":
                display.display_secret(secret, config.algorithm, strength)
                if strength is not None and strength.strength is StrengthLevel.WEAK:
                    console.warning(
                        "This secret is weak; increase the length or enable more "
                        "character classes."
                    )
    except ForgeError as exc:
        _fail(ctx, exc)

    # Newest first, like the history itself.
    newest_first = generated[::-1]
    if ctx.obj["output_format"] == "json":
        _echo_json([item.model_dump(mode="json") for item in generated])
    elif count > 1:
        display.display_history(newest_first)

    export_path, export_dir = params["export_path"], params["export_dir"]
    if not _wants_export(export_path, export_dir):
        return

    path, reporter = _export_target(export_path, export_dir)
    reporter = reporter or ctx.obj["reporter"]
    fmt = params["export_format"] or "txt"
    try:
        if count == 1:
            written = reporter.export_secret(
                generated[0].secret,
                generated[0].algorithm,
                path,
                fmt=fmt,
                include_metadata=not params["no_metadata"],
            )
        else:
            written = reporter.export_history(
                newest_first, path, fmt=fmt, include_metadata=not params["no_metadata"]
            )
    except OSError as exc:
        _fail(ctx, exc)
    console.success(f"Exported to: {written}")


@cli.command()
@_apply(_GENERATION_OPTIONS)
@click.option("--count", "-n", type=int, default=None,
              help="Number of secrets in the batch (configured default when omitted).")
@_apply(_EXPORT_OPTIONS)
@click.pass_context
def batch(ctx: click.Context, count: Optional[int], **params: Any) -> None:
    """Generate a batch of independent secrets with one configuration."""
    engine: ForgeEngine = ctx.obj["engine"]
    display: ForgeConsoleOutput = ctx.obj["display"]
    console: ForgeConsole = ctx.obj["console"]

    try:
        config = _build_config(engine, params)
        with console.status("Generating batch..."):
            items = engine.generate_batch(config, count)
    except ForgeError as exc:
        _fail(ctx, exc)

    if ctx.obj["output_format"] == "json":
        _echo_json([item.model_dump(mode="json") for item in items])
    else:
        display.display_batch(items)

    export_path, export_dir = params["export_path"], params["export_dir"]
    if not _wants_export(export_path, export_dir):
        return

    path, reporter = _export_target(export_path, export_dir)
    reporter = reporter or ctx.obj["reporter"]
    try:
        written = reporter.export_batch(
            items,
            path,
            fmt=params["export_format"] or "json",
            include_metadata=not params["no_metadata"],
        )
    except OSError as exc:
        _fail(ctx, exc)
    console.success(f"Exported to: {written}")


@cli.command()
@click.argument("secret")
@click.pass_context
def strength(ctx: click.Context, secret: str) -> None:
    """Estimate the strength of SECRET.

    The score is a heuristic for display purposes, not a security
    guarantee.
    """
    engine: ForgeEngine = ctx.obj["engine"]
    display: ForgeConsoleOutput = ctx.obj["display"]

    result = engine.estimate(secret)

    if ctx.obj["output_format"] == "json":
        _echo_json(result.model_dump(mode="json"))
    else:
        ctx.obj["console"].section("Strength Estimate")
        display.display_strength(result, secret)


@cli.command()
@click.argument("charset", required=False)
@click.option("--preset", type=click.Choice(sorted(PRESETS)), default=None,
              help="Inspect a named character set.")
@click.option("--exclude-similar", is_flag=True, default=False,
              help="Apply similar-character filtering.")
@click.pass_context
def charset(
    ctx: click.Context,
    charset: Optional[str],
    preset: Optional[str],
    exclude_similar: bool,
) -> None:
    """Inspect a custom character set (CHARSET or --preset)."""
    if charset is None and preset is None:
        raise click.UsageError("Provide CHARSET or --preset.")

    engine: ForgeEngine = ctx.obj["engine"]
    display: ForgeConsoleOutput = ctx.obj["display"]

    supplied = (charset or "") + (PRESETS[preset] if preset else "")
    info = engine.inspect_charset(supplied, exclude_similar)

    if ctx.obj["output_format"] == "json":
        _echo_json(info.model_dump(mode="json"))
    else:
        display.display_charset(info)

    if not info.valid:
        ctx.exit(1)


@cli.command()
@_apply(_GENERATION_OPTIONS)
@click.option("--samples", "-s", type=int, default=None,
              help="Secrets to generate (configured default when omitted).")
@click.pass_context
def audit(ctx: click.Context, samples: Optional[int], **params: Any) -> None:
    """Run a chi-squared uniformity audit on generated output."""
    engine: ForgeEngine = ctx.obj["engine"]
    display: ForgeConsoleOutput = ctx.obj["display"]
    console: ForgeConsole = ctx.obj["console"]

    try:
        config = _build_config(engine, params)
        with console.status("Auditing distribution..."):
            result = engine.audit(config, samples)
    except ForgeError as exc:
        _fail(ctx, exc)

    if ctx.obj["output_format"] == "json":
        _echo_json(result.model_dump(mode="json"))
    else:
        display.display_audit(result)

    if not result.passed:
        ctx.exit(2)


@cli.command()
@click.pass_context
def algorithms(ctx: click.Context) -> None:
    """List the supported generation algorithms."""
    if ctx.obj["output_format"] == "json":
        _echo_json(
            [
                {"tag": a.value, "name": a.label, "description": a.description}
                for a in GeneratorAlgorithm
            ]
        )
    else:
        ctx.obj["display"].display_algorithms()


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the SecretForge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
