"""
mapdown - XMind outline exporter

Converts mind maps into DokuWiki/Markdown documents and reveal.js slide decks.
"""

__version__ = "1.0.0"

from .lib import Compiler, OutlineReader, Style, LOG, state_connectToLogger

__all__ = ["Compiler", "OutlineReader", "Style", "LOG", "state_connectToLogger", "__version__"]
