"""
Memorizer app package initializer.

Re-exports the scripture core so callers can import from memorizer directly,
e.g.:

    from memorizer import Library, WordHidingSession
"""

# PUBLIC_INTERFACE
from .scripture import (
    DifficultyRegistry,
    FormatError,
    Library,
    Reference,
    WordHidingSession,
    parse_reference,
    render_reference,
)

__all__ = [
    "DifficultyRegistry",
    "FormatError",
    "Library",
    "Reference",
    "WordHidingSession",
    "parse_reference",
    "render_reference",
]
