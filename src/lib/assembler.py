"""
Deck assembler

Wraps the finished deck with the reveal.js prologue (mode markers, footer,
title slide) and epilogue (extra style), and expands every presentation map
anchor into a map slide where the section that follows is set in bold.
"""

from typing import List, Optional

from ..config import appsettings, AppSettings
from ..models.compiler import Deck, MapAnchor
from ..models.directives import SlideCommands
from .slides import SLIDE_END, slideHeader_format
from .style import Style
from .log import LOG


DECK_START = "~~REVEAL~~\n~~NOCACHE~~\n\n"
DECK_END = ""


class DeckAssembler:
    """
    Produces the final slide deck text

    Example:
        >>> assembler = DeckAssembler(Style("doku"))
        >>> assembler.deck_assemble(Deck(), SlideCommands())
        ''
    """

    def __init__(self, style: Style, settings: Optional[AppSettings] = None) -> None:
        self.style = style
        self.settings = settings or appsettings

    def deck_assemble(self, deck: Deck, commands: SlideCommands) -> str:
        """
        Assemble the deck

        Returns:
            Complete deck text, or "" if no slide was emitted
        """
        if not deck.slide_count:
            LOG("No slide emitted, deck left empty", level=2)
            return ""

        parts = [DECK_START, self.footer_render(commands), self.titleSlide_render(commands)]
        for segment in deck.segments:
            if isinstance(segment, MapAnchor):
                parts.append(self.mapSlide_render(deck.map_entries, segment.key, commands))
            else:
                parts.append(segment)
        if commands.extra_style:
            parts.append(commands.extra_style + "\n\n")
        parts.append(DECK_END)
        return ''.join(parts)

    def footer_render(self, commands: SlideCommands) -> str:
        footer = commands.footer or commands.short_title or ""
        return f"<wrap footer>{footer}</wrap>\n\n"

    def titleSlide_render(self, commands: SlideCommands) -> str:
        """Title slide; every line only appears when its command was set"""
        parts = [slideHeader_format(commands.style, self.settings.background_placeholder, "no-footer")]
        title = commands.title or commands.long_title
        if title:
            parts.append(self.style.heading_format(1, self.style.lineBreaks_convert(title)) + "\n\n")
        for wrap_class, value in (
            ("authors", commands.authors),
            ("affiliation", commands.affiliation),
            ("date", commands.date),
            ("citation", commands.citation),
        ):
            if value:
                parts.append(f"<WRAP {wrap_class}>{self.style.lineBreaks_convert(value)}</WRAP>\n\n")
        if commands.banner:
            parts.append(f"<WRAP banner>{{{{ {commands.banner}?nolink }}}}</WRAP>\n\n")
        parts.append(SLIDE_END)
        return ''.join(parts)

    def mapSlide_render(self, entries: List[str], current: str, commands: SlideCommands) -> str:
        """Presentation map slide with the current section in bold"""
        lines = []
        for entry in entries:
            text = self.style.bold_wrap(entry) if entry == current else entry
            lines.append(f"  * {text}\n")
        return (
            "\n\n"
            + slideHeader_format(
                commands.style,
                self.settings.background_placeholder,
                commands.background_animation,
                commands.transition,
            )
            + self.style.heading_format(2, self.settings.map_title) + "\n\n"
            + "<WRAP map>\n" + ''.join(lines) + "</WRAP>\n"
            + SLIDE_END
        )
