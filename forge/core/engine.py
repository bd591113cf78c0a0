"""
Forge Engine
=============

Facade over the generator and analyzer subsystems. ``ForgeEngine`` adds
configuration defaults, batch generation and logging on top of the pure
functions in :mod:`forge.generators` and :mod:`forge.analyzers`; it holds
no per-call state, so one engine may serve any number of callers.

The engine never sees the session history: front ends record results in
their own :class:`~forge.core.history.SecretHistory`.
"""

from __future__ import annotations

from typing import Any, Optional

from shared.config import ForgeConfig
from shared.logger import ForgeLogger

from forge.analyzers.distribution import DistributionAuditor
from forge.analyzers.strength import StrengthEstimator
from forge.core.errors import ForgeError, InvalidConfigError
from forge.core.models import (
    CharsetInfo,
    DistributionResult,
    GeneratorConfig,
    SavedSecret,
    StrengthResult,
)
from forge.generators import algorithms
from forge.generators.charsets import inspect_charset


class ForgeEngine:
    """Orchestrates secret generation, strength estimation and audits.

    Usage::

        engine = ForgeEngine()
        secret = engine.generate(GeneratorConfig(algorithm="uuid"))
        result = engine.estimate(secret)
        batch = engine.generate_batch(engine.default_config(length=24), 10)

    Attributes:
        config: SecretForge configuration instance.
        logger: Logger for the engine. Never receives secret values.
    """

    def __init__(
        self,
        config: Optional[ForgeConfig] = None,
        logger: Optional[ForgeLogger] = None,
    ) -> None:
        self.config = config or ForgeConfig()
        settings = self.config.global_settings
        self.logger = logger or ForgeLogger(
            "engine",
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )
        self._estimator = StrengthEstimator()

    # ------------------------------------------------------------------ #
    #  Configuration
    # ------------------------------------------------------------------ #

    def default_config(self, **overrides: Any) -> GeneratorConfig:
        """Generation config from the configured defaults plus *overrides*."""
        return self.config.generator.to_generator_config(**overrides)

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def generate(self, config: Optional[GeneratorConfig] = None) -> str:
        """Generate one secret.

        Args:
            config: Generation config; the configured defaults when omitted.

        Raises:
            EmptyCharsetError: The effective alphabet is empty.
            InvalidConfigError: A structural parameter is out of range.
        """
        config = config or self.default_config()
        with self.logger.operation("generate"):
            try:
                secret = algorithms.generate(config)
            except ForgeError as exc:
                self.logger.warning(
                    "Generation failed: %s", exc, algorithm=config.algorithm.value
                )
                raise
            self.logger.debug(
                "Generated %d-character secret",
                len(secret),
                algorithm=config.algorithm.value,
                custom_charset=config.uses_custom_charset,
            )
            return secret

    def generate_batch(
        self, config: Optional[GeneratorConfig] = None, count: Optional[int] = None
    ) -> list[SavedSecret]:
        """Generate *count* independent secrets with the same config.

        Args:
            config: Generation config; the configured defaults when omitted.
            count: Number of secrets, ``1 <= count <= batch.max_count``.
                Defaults to ``batch.default_count``.

        Raises:
            InvalidConfigError: *count* is out of range.
        """
        config = config or self.default_config()
        count = self.config.batch.default_count if count is None else count
        max_count = self.config.batch.max_count
        if not 1 <= count <= max_count:
            raise InvalidConfigError(
                f"Batch count must be between 1 and {max_count}, got {count}"
            )

        algorithms.validate_config(config)
        with self.logger.timed(f"batch of {count} ({config.algorithm.value})"):
            return [
                SavedSecret(secret=self.generate(config), algorithm=config.algorithm.value)
                for _ in range(count)
            ]

    # ------------------------------------------------------------------ #
    #  Analysis
    # ------------------------------------------------------------------ #

    def estimate(self, secret: str) -> StrengthResult:
        """Heuristic strength estimate of any string."""
        with self.logger.operation("estimate"):
            result = self._estimator.estimate(secret)
            self.logger.debug(
                "Estimated strength %s", result.strength.value, length=len(secret)
            )
            return result

    def inspect_charset(self, charset: str, exclude_similar: bool = False) -> CharsetInfo:
        """Describe the effective alphabet of a custom character set."""
        return inspect_charset(charset, exclude_similar)

    def audit(
        self,
        config: Optional[GeneratorConfig] = None,
        samples: Optional[int] = None,
    ) -> DistributionResult:
        """Chi-squared uniformity audit of *config*'s output.

        Args:
            config: Generation config; the configured defaults when omitted.
            samples: Secrets to generate; ``audit.samples`` when omitted.
        """
        config = config or self.default_config()
        auditor = DistributionAuditor(
            samples=self.config.audit.samples if samples is None else samples,
            significance=self.config.audit.significance,
        )
        with self.logger.operation("audit"):
            with self.logger.timed(f"distribution audit ({config.algorithm.value})"):
                result = auditor.audit(config)
            if not result.passed:
                self.logger.info(
                    "Distribution audit failed",
                    algorithm=result.algorithm,
                    p_value=result.p_value,
                    out_of_alphabet=result.out_of_alphabet,
                )
            return result
