"""
Scripture memorization core.

Exports:
- WordHidingSession, Token and Progress for hiding/revealing words of a text
- Reference, parse_reference, render_reference and FormatError for references
- Library and ScriptureEntry for ordered collections with file load/save
- DifficultyRegistry for words-hidden-per-round levels

These modules are framework-agnostic and can be reused by views, management
commands or a console front end without importing Django.
"""

from .difficulty import DEFAULT_DIFFICULTY, Difficulty, DifficultyRegistry
from .library import DEFAULT_SCRIPTURES, Library, ScriptureEntry
from .reference import FormatError, Reference, parse_reference, render_reference
from .session import Progress, Token, WordHidingSession, tokenize

__all__ = [
    "DEFAULT_DIFFICULTY",
    "DEFAULT_SCRIPTURES",
    "Difficulty",
    "DifficultyRegistry",
    "FormatError",
    "Library",
    "Progress",
    "Reference",
    "ScriptureEntry",
    "Token",
    "WordHidingSession",
    "parse_reference",
    "render_reference",
    "tokenize",
]
