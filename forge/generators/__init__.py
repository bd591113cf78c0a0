"""
Forge Generators
=================

Secret generation algorithms, character sets and the CSPRNG access layer.
"""

from forge.generators.algorithms import (
    effective_alphabet,
    generate,
    generate_with_custom_charset,
    validate_config,
)
from forge.generators.charsets import (
    PRESETS,
    exclude_similar_characters,
    get_similar_characters,
    inspect_charset,
)

__all__ = [
    "PRESETS",
    "effective_alphabet",
    "exclude_similar_characters",
    "generate",
    "generate_with_custom_charset",
    "get_similar_characters",
    "inspect_charset",
    "validate_config",
]
