"""
Node kind, directive and command models

Defines the fixed vocabulary of the outline markup: node kinds returned by
the classifier, the reserved directive words, the options a directive can
carry, and the typed record of slide commands.
"""

from enum import Enum
from dataclasses import dataclass, fields
from typing import Dict, FrozenSet, Optional, Tuple


class NodeKind(Enum):
    """
    Kinds of outline nodes, in classification precedence order

    Used by both the linear renderer and the slide compiler.
    """
    SUPPRESSED = "suppressed"            # [skip] anywhere in the title
    EXTRA_PAGE = "extra-page"            # {{page>...}}
    REFERENCE_PAGE = "reference-page"    # {{refs>...}}
    FORMAT_OVERRIDE = "format-override"  # {{pmid>doc_format:long}}
    MANUAL_CITATION = "manual-citation"  # [(name>free text)]
    SLIDE_GROUP = "slide-group"          # rj / rjs / reveal / revealjs
    TABLE = "table"                      # | cell | or ^ header ^
    RAW_MARKUP = "raw-markup"            # <WRAP ...>, <html>, ...
    OPTIONS = "options"                  # options / option / opt
    REGULAR = "regular"


class SlideKind(Enum):
    """Directive kinds only meaningful inside a slide group"""
    COMMAND = "command"        # titre, auteurs, footer, ...
    BACKGROUND = "background"  # background / bg
    NOTES = "notes"            # notes / note
    OPTION = "option"          # option / opt / options


class ListOption(Enum):
    """Options an OptionsDirective pushes onto the directive stack"""
    NO_LIST = "no-list"
    ONLY_BOLD = "only-bold"
    ONLY_TAGGED = "only-tagged"


class SlideOption(Enum):
    """Per-slide options read from a slide's option directive"""
    NO_FOOTER = "no-footer"
    NO_TITLE = "no-title"
    NO_LIST = "no-list"
    START_MAP_HERE = "start_map_here"
    HIGHLIGHT = "highlight"  # set from the slide root's marker, not by name


SLIDE_OPTION_NAMES: Dict[str, SlideOption] = {
    'no-footer': SlideOption.NO_FOOTER,
    'no-title': SlideOption.NO_TITLE,
    'no-list': SlideOption.NO_LIST,
    'no-ul': SlideOption.NO_LIST,
    'no-li': SlideOption.NO_LIST,
    'start_map_here': SlideOption.START_MAP_HERE,
    'start-map-here': SlideOption.START_MAP_HERE,
}


# Reserved words, compared case-insensitively
SLIDE_GROUP_WORDS: FrozenSet[str] = frozenset({'rj', 'rjs', 'reveal', 'revealjs'})
OPTIONS_WORDS: FrozenSet[str] = frozenset({'options', 'option', 'opt'})
BACKGROUND_WORDS: FrozenSet[str] = frozenset({'background', 'bg'})
NOTES_WORDS: FrozenSet[str] = frozenset({'notes', 'note'})

# Title prefixes
PAGE_PREFIX = '{{page>'
REFS_PREFIX = '{{refs>'
TABLE_PREFIXES: Tuple[str, ...] = ('|', '^')
RAW_MARKUP_PREFIXES: Tuple[str, ...] = (
    '<wrap', '<html', '<code', '<file', '<note', '<div', '<img', '<iframe',
)


@dataclass
class SlideCommands:
    """
    Named values collected from command directives inside slide groups

    Each field is None until its command directive is met; a later
    directive with the same name overwrites the earlier value.

    Attributes:
        title: Title of the presentation (title slide heading)
        short_title: Short title, used as footer fallback
        long_title: Long title, used as title fallback
        authors: Authors line of the title slide
        affiliation: Affiliation line of the title slide
        date: Date line of the title slide
        citation: Citation line of the title slide
        footer: Footer text shown on every slide
        style: Slide style name written in every slide header
        banner: Banner image of the title slide
        extra_style: Raw block appended after the last slide
        background_animation: Background animation written in slide headers
        transition: Slide transition written in slide headers
    """
    title: Optional[str] = None
    short_title: Optional[str] = None
    long_title: Optional[str] = None
    authors: Optional[str] = None
    affiliation: Optional[str] = None
    date: Optional[str] = None
    citation: Optional[str] = None
    footer: Optional[str] = None
    style: Optional[str] = None
    banner: Optional[str] = None
    extra_style: Optional[str] = None
    background_animation: Optional[str] = None
    transition: Optional[str] = None

    def command_set(self, name: str, value: str) -> bool:
        """
        Store a command value by its directive name or alias

        Args:
            name: Directive name as written in the outline (any case)
            value: Text of the directive's first child

        Returns:
            True if the name is a known command
        """
        field_name = command_fieldName(name)
        if field_name is None:
            return False
        setattr(self, field_name, value)
        return True


# Directive name (and alias) -> SlideCommands field
COMMAND_ALIASES: Dict[str, str] = {
    'titre': 'title',
    'titrecourt': 'short_title',
    'titrelong': 'long_title',
    'auteurs': 'authors',
    'bandeau': 'banner',
    'extrastyle': 'extra_style',
    'bg-anim': 'background_animation',
    'slide-transition': 'transition',
}

COMMAND_FIELDS: FrozenSet[str] = frozenset(f.name for f in fields(SlideCommands))


def command_fieldName(name: str) -> Optional[str]:
    """
    Map a command directive name to its SlideCommands field

    Accepts the canonical names with hyphens or underscores
    ("short-title", "short_title") and the aliases of COMMAND_ALIASES.

    Returns:
        Field name, or None if the name is not a command
    """
    key = name.strip().lower()
    if key in COMMAND_ALIASES:
        return COMMAND_ALIASES[key]
    key = key.replace('-', '_')
    if key in COMMAND_FIELDS:
        return key
    return None
