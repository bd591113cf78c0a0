"""
SecretForge Configuration Management
=====================================

Centralized configuration for the SecretForge toolkit using Python
dataclasses and TOML-based persistence.

Configuration is loaded explicitly and handed to whoever needs it; there
is no process-wide cached instance, so the generator core stays free of
global state.

References:
    - tomllib. https://docs.python.org/3/library/tomllib.html
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, TYPE_CHECKING

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

if TYPE_CHECKING:
    from forge.core.models import GeneratorConfig


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class GeneratorDefaults:
    """Default generation parameters used when the caller supplies none.

    Mirrors the fields of :class:`forge.core.models.GeneratorConfig` so a
    TOML file can pre-select an algorithm and its knobs.
    """

    algorithm: str = "alphanumeric"
    length: int = 32
    include_symbols: bool = True
    segments: int = 4
    segment_length: int = 4
    byte_count: int = 16
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_password_symbols: bool = False
    exclude_similar_characters: bool = False

    def to_generator_config(self, **overrides: Any) -> GeneratorConfig:
        """Build an immutable :class:`GeneratorConfig` from these defaults.

        Keyword *overrides* whose value is ``None`` are ignored, which lets
        CLI handlers pass unset options straight through.
        """
        from forge.core.models import GeneratorConfig, PasswordOptions

        values: dict[str, Any] = {
            "algorithm": self.algorithm,
            "length": self.length,
            "include_symbols": self.include_symbols,
            "segments": self.segments,
            "segment_length": self.segment_length,
            "byte_count": self.byte_count,
            "exclude_similar_characters": self.exclude_similar_characters,
        }
        options: dict[str, Any] = {
            "include_uppercase": self.include_uppercase,
            "include_lowercase": self.include_lowercase,
            "include_numbers": self.include_numbers,
            "include_symbols": self.include_password_symbols,
        }

        option_overrides = overrides.pop("password_options", None) or {}
        options.update({k: v for k, v in option_overrides.items() if v is not None})
        values.update({k: v for k, v in overrides.items() if v is not None})
        values["password_options"] = PasswordOptions(**options)
        return GeneratorConfig(**values)


@dataclass(frozen=False, slots=True)
class HistoryConfig:
    """Settings for the in-session secret history."""

    max_items: int = 50


@dataclass(frozen=False, slots=True)
class BatchConfig:
    """Settings for batch generation."""

    default_count: int = 5
    max_count: int = 100


@dataclass(frozen=False, slots=True)
class AuditConfig:
    """Settings for the output distribution audit.

    Reference:
        Pearson, K. (1900). On the criterion that a given system of
        deviations from the probable ... Philosophical Magazine, 50(302).
    """

    samples: int = 1000
    significance: float = 0.01


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging and the default export directory.

    ``debug`` overrides ``log_level`` with DEBUG.
    """

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    output_dir: str = "output"
    debug: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class ForgeConfig:
    """Master configuration aggregating every section.

    Usage:
        >>> config = ForgeConfig.load()                  # from default path
        >>> config = ForgeConfig.load("custom.toml")     # from custom path
        >>> config.generator.algorithm
        'alphanumeric'
        >>> config.history.max_items
        50
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    audit: AuditConfig = field(default_factory=AuditConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> ForgeConfig:
        """Read *path* (or the bundled ``config.toml``) into a config tree.

        Sections or keys absent from the file keep their defaults. A
        missing bundled file yields the defaults; a missing explicit
        *path* raises :class:`FileNotFoundError`. Malformed TOML raises
        :class:`tomllib.TOMLDecodeError`; a [generator] value the generator
        model rejects raises :class:`pydantic.ValidationError`. Both are
        :class:`ValueError` subclasses.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        loaded = cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            generator=cls._build_section(GeneratorDefaults, raw.get("generator", {})),
            history=cls._build_section(HistoryConfig, raw.get("history", {})),
            batch=cls._build_section(BatchConfig, raw.get("batch", {})),
            audit=cls._build_section(AuditConfig, raw.get("audit", {})),
        )
        # [generator] values must form a valid GeneratorConfig.
        loaded.generator.to_generator_config()
        return loaded

    # ------------------------------------------------------------------ #
    #  Serialisation helpers
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """The whole tree as nested plain dicts."""
        return asdict(self)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Build section *cls* from the TOML table *data*.

        Keys the section does not declare are dropped; the rest override
        the dataclass defaults.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
