"""
Forge Core Module
==================

Contains the session history, the error hierarchy and the data models of
the SecretForge generator. The engine facade lives in
:mod:`forge.core.engine`, which depends on the generator and analyzer
packages and is therefore imported directly rather than from here.
"""

from forge.core.errors import EmptyCharsetError, ForgeError, InvalidConfigError
from forge.core.history import SecretHistory
from forge.core.models import (
    CharsetInfo,
    DistributionResult,
    GeneratorAlgorithm,
    GeneratorConfig,
    PasswordOptions,
    SavedSecret,
    StrengthLevel,
    StrengthResult,
    StrengthSummary,
)

__all__ = [
    "CharsetInfo",
    "DistributionResult",
    "EmptyCharsetError",
    "ForgeError",
    "GeneratorAlgorithm",
    "GeneratorConfig",
    "InvalidConfigError",
    "PasswordOptions",
    "SavedSecret",
    "SecretHistory",
    "StrengthLevel",
    "StrengthResult",
    "StrengthSummary",
]
