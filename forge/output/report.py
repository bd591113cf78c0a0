"""
Forge Report Generator
=======================

Renders secrets, the session history and batches as TXT or JSON exports
and writes them to disk.

The JSON layouts use camelCase keys (``exportedAt``, ``totalSecrets``,
``generatedAt``) so that files are interchangeable with exports produced
by the browser edition of the generator. Timestamps are ISO 8601 in UTC
with millisecond precision; ``timestamp`` fields are milliseconds since
the Unix epoch.

Exports contain the secrets in plain text. Callers choose the location;
nothing is written anywhere else.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from forge.core.models import GeneratorAlgorithm, SavedSecret

EXPORT_FORMATS: tuple[str, ...] = ("txt", "json")

_SINGLE_RULE = "=" * 50
_LIST_RULE = "=" * 60
_ITEM_RULE = "-" * 60


def _iso(moment: datetime) -> str:
    """``2024-05-01T12:00:00.000Z`` style UTC timestamp."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _algorithm_tag(algorithm: Union[GeneratorAlgorithm, str]) -> str:
    if isinstance(algorithm, GeneratorAlgorithm):
        return algorithm.value
    return str(algorithm)


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(
            f"Unsupported export format {fmt!r}; expected one of {', '.join(EXPORT_FORMATS)}"
        )
    return fmt


class ForgeReportGenerator:
    """Renders and writes TXT / JSON exports.

    Every ``render_*`` method returns the file content as a string; every
    ``export_*`` method renders and writes it, returning the path written.
    When no path is given, the default file name is placed in
    *output_dir*.

    Usage::

        reporter = ForgeReportGenerator(output_dir="exports")
        path = reporter.export_secret(secret, "uuid", fmt="json")
        path = reporter.export_history(history.items, fmt="txt")

    Args:
        output_dir: Directory for exports written without an explicit path.
    """

    def __init__(self, output_dir: Union[str, Path] = ".") -> None:
        self.output_dir = Path(output_dir)

    # ------------------------------------------------------------------ #
    #  File names
    # ------------------------------------------------------------------ #

    @staticmethod
    def default_filename(
        kind: str,
        fmt: str,
        algorithm: Union[GeneratorAlgorithm, str, None] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Default export file name for *kind* (``secret``, ``history`` or ``batch``)."""
        fmt = _check_format(fmt)
        stamp = _epoch_ms(now or datetime.now(timezone.utc))
        if kind == "secret":
            return f"secret-{_algorithm_tag(algorithm or 'unknown')}-{stamp}.{fmt}"
        if kind == "history":
            return f"secret-history-{stamp}.{fmt}"
        if kind == "batch":
            return f"batch-secrets-{stamp}.{fmt}"
        raise ValueError(f"Unknown export kind {kind!r}")

    # ------------------------------------------------------------------ #
    #  Single secret
    # ------------------------------------------------------------------ #

    def render_secret(
        self,
        secret: str,
        algorithm: Union[GeneratorAlgorithm, str],
        fmt: str = "txt",
        include_metadata: bool = True,
        now: Optional[datetime] = None,
    ) -> str:
        """Render one secret.

        TXT output is the bare secret unless *include_metadata* is set, in
        which case a short header precedes it. JSON output always carries
        ``secret``, ``algorithm``, ``timestamp`` and ``exportedAt``.
        """
        fmt = _check_format(fmt)
        stamp = _iso(now or datetime.now(timezone.utc))
        tag = _algorithm_tag(algorithm)

        if fmt == "json":
            return self._dumps(
                {
                    "secret": secret,
                    "algorithm": tag,
                    "timestamp": stamp,
                    "exportedAt": stamp,
                }
            )

        content = ""
        if include_metadata:
            content += "Secret Generator Export\n"
            content += f"Algorithm: {tag}\n"
            content += f"Generated: {stamp}\n"
            content += f"Exported: {stamp}\n"
            content += f"\n{_SINGLE_RULE}\n\n"
        return content + secret

    def export_secret(
        self,
        secret: str,
        algorithm: Union[GeneratorAlgorithm, str],
        output_path: Optional[Path] = None,
        fmt: str = "txt",
        include_metadata: bool = True,
    ) -> Path:
        """Write one secret; returns the path written."""
        now = datetime.now(timezone.utc)
        content = self.render_secret(secret, algorithm, fmt, include_metadata, now)
        path = output_path or self.output_dir / self.default_filename(
            "secret", fmt, algorithm, now
        )
        return self._write(content, path)

    # ------------------------------------------------------------------ #
    #  History
    # ------------------------------------------------------------------ #

    def render_history(
        self,
        items: Iterable[SavedSecret],
        fmt: str = "json",
        include_metadata: bool = True,
        now: Optional[datetime] = None,
    ) -> str:
        """Render history entries in the order given (newest first)."""
        fmt = _check_format(fmt)
        items = list(items)
        stamp = _iso(now or datetime.now(timezone.utc))

        if fmt == "json":
            secrets: list[dict[str, Any]] = []
            for item in items:
                entry: dict[str, Any] = {
                    "id": item.id,
                    "secret": item.secret,
                    "algorithm": item.algorithm,
                    "timestamp": item.timestamp,
                    "generatedAt": _iso(item.created_at),
                }
                if item.strength is not None:
                    entry["strength"] = item.strength.model_dump(mode="json")
                secrets.append(entry)
            return self._dumps(
                {"exportedAt": stamp, "totalSecrets": len(items), "secrets": secrets}
            )

        content = "Secret Generator - History Export\n"
        content += f"Exported: {stamp}\n"
        content += f"Total Secrets: {len(items)}\n"
        content += f"\n{_LIST_RULE}\n\n"

        for index, item in enumerate(items, start=1):
            content += f"[{index}] {item.algorithm.upper()}\n"
            if include_metadata:
                content += f"Generated: {_iso(item.created_at)}\n"
                if item.strength is not None:
                    s = item.strength
                    content += (
                        f"Strength: {s.strength.value} "
                        f"(Score: {s.score}/100, Entropy: {s.entropy} bits)\n"
                    )
                content += "\n"
            content += f"{item.secret}\n"
            content += f"\n{_ITEM_RULE}\n\n"
        return content

    def export_history(
        self,
        items: Iterable[SavedSecret],
        output_path: Optional[Path] = None,
        fmt: str = "json",
        include_metadata: bool = True,
    ) -> Path:
        """Write the history; returns the path written."""
        now = datetime.now(timezone.utc)
        content = self.render_history(items, fmt, include_metadata, now)
        path = output_path or self.output_dir / self.default_filename(
            "history", fmt, now=now
        )
        return self._write(content, path)

    # ------------------------------------------------------------------ #
    #  Batch
    # ------------------------------------------------------------------ #

    def render_batch(
        self,
        items: Iterable[SavedSecret],
        fmt: str = "json",
        include_metadata: bool = True,
        now: Optional[datetime] = None,
    ) -> str:
        """Render a batch; the batch algorithm is taken from its first item."""
        fmt = _check_format(fmt)
        items = list(items)
        stamp = _iso(now or datetime.now(timezone.utc))
        algorithm = items[0].algorithm if items else "unknown"

        if fmt == "json":
            return self._dumps(
                {
                    "exportedAt": stamp,
                    "totalSecrets": len(items),
                    "algorithm": algorithm,
                    "secrets": [
                        {
                            "id": item.id,
                            "index": index,
                            "secret": item.secret,
                            "algorithm": item.algorithm,
                            "timestamp": item.timestamp,
                            "generatedAt": _iso(item.created_at),
                        }
                        for index, item in enumerate(items, start=1)
                    ],
                }
            )

        content = "Secret Generator - Batch Export\n"
        content += f"Exported: {stamp}\n"
        content += f"Algorithm: {algorithm}\n"
        content += f"Total Secrets: {len(items)}\n"
        content += f"\n{_LIST_RULE}\n\n"

        for index, item in enumerate(items, start=1):
            if include_metadata:
                content += f"[{index}] Generated: {_iso(item.created_at)}\n"
                content += "\n"
            content += f"{item.secret}\n"
            content += f"\n{_ITEM_RULE}\n\n"
        return content

    def export_batch(
        self,
        items: Iterable[SavedSecret],
        output_path: Optional[Path] = None,
        fmt: str = "json",
        include_metadata: bool = True,
    ) -> Path:
        """Write a batch; returns the path written."""
        now = datetime.now(timezone.utc)
        content = self.render_batch(items, fmt, include_metadata, now)
        path = output_path or self.output_dir / self.default_filename(
            "batch", fmt, now=now
        )
        return self._write(content, path)

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _dumps(data: dict[str, Any]) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)

    @staticmethod
    def _write(content: str, output_path: Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        return output_path
