"""
SecretForge -- Cryptographically Secure Secret Generator
=========================================================

Generates passwords, API keys, tokens, UUIDs, PINs and raw keys from the
operating system's CSPRNG, and estimates the strength of arbitrary
strings with a transparent heuristic.

Modules:
    - forge.core.engine: Generation and analysis facade
    - forge.core.models: Pydantic data models
    - forge.core.history: In-session secret history
    - forge.generators: Algorithms, character sets and randomness source
    - forge.analyzers: Strength estimation and distribution audit
    - forge.output: Console and export output
    - forge.cli: Click-based command-line interface

References:
    - RFC 4122 (2005). A Universally Unique IDentifier (UUID) URN Namespace.
    - RFC 4648 (2006). The Base16, Base32, and Base64 Data Encodings.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

__version__ = "1.0.0"
__tool_name__ = "forge"

from forge.analyzers.strength import estimate
from forge.core.errors import EmptyCharsetError, ForgeError, InvalidConfigError
from forge.core.models import (
    GeneratorAlgorithm,
    GeneratorConfig,
    PasswordOptions,
    StrengthLevel,
    StrengthResult,
)
from forge.generators.algorithms import generate, generate_with_custom_charset

__all__ = [
    "EmptyCharsetError",
    "ForgeError",
    "GeneratorAlgorithm",
    "GeneratorConfig",
    "InvalidConfigError",
    "PasswordOptions",
    "StrengthLevel",
    "StrengthResult",
    "estimate",
    "generate",
    "generate_with_custom_charset",
]
