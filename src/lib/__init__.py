"""
mapdown - XMind outline exporter

Converts mind maps into DokuWiki/Markdown documents and reveal.js slide decks.
"""

__version__ = "1.0.0"

from .compiler import Compiler
from .reader import OutlineReader, ReaderError
from .style import Style, StyleError
from .log import LOG, state_connectToLogger

__all__ = [
    "Compiler",
    "OutlineReader",
    "ReaderError",
    "Style",
    "StyleError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
