"""
Models package for mapdown

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .outline import OutlineNode
from .directives import (
    NodeKind,
    SlideKind,
    ListOption,
    SlideOption,
    SlideCommands,
)
from .compiler import (
    HeadingContext,
    LineKind,
    SlideLine,
    Slide,
    MapAnchor,
    Deck,
    ReferenceRegistry,
    CompileResult,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "OutlineNode",
    "NodeKind",
    "SlideKind",
    "ListOption",
    "SlideOption",
    "SlideCommands",
    "HeadingContext",
    "LineKind",
    "SlideLine",
    "Slide",
    "MapAnchor",
    "Deck",
    "ReferenceRegistry",
    "CompileResult",
]
