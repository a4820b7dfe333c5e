"""
Shared utilities for noteshelf.

Common functionality used across contexts:
- Name canonicalization and letter case
- Lexical path arithmetic
- Clock and timestamps
- Logging setup
"""

from noteshelf.utils.text_processing import canonicalize, is_canonical
from noteshelf.utils.timestamp import Clock, system_clock

__all__ = ["canonicalize", "is_canonical", "Clock", "system_clock"]
