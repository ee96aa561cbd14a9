"""
Compiler state and result models

Accumulators used during one conversion run. Each logical channel (document
text, deck segments, presentation map, slide lines, notes, references) has
its own structure; nothing here is shared between runs.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Set, Union

from .directives import SlideOption


@dataclass
class HeadingContext:
    """
    Last heading text emitted at each level of the linear document

    Setting a heading clears every deeper level, so a stale subsection never
    outlives the section that contained it.

    Attributes:
        texts: Heading level (1-based) -> heading text
    """
    texts: Dict[int, str] = field(default_factory=dict)

    def heading_set(self, level: int, text: str) -> None:
        """Record the heading of a level and forget all deeper ones"""
        for deeper in [k for k in self.texts if k > level]:
            del self.texts[deeper]
        self.texts[level] = text

    def heading_get(self, level: int) -> str:
        """Return the last heading text of a level, or "" if none"""
        return self.texts.get(level, "")

    def section_get(self) -> str:
        """
        Return the heading keying the current slide group

        Level 2 is the section heading; when the outline has no level-2
        heading yet (single heading level, or slides right under the root),
        the level-1 heading stands in.
        """
        return self.heading_get(2) or self.heading_get(1)

    def slideTitle_get(self, depth: int) -> str:
        """
        Build the heading of a slide opened at the given outline depth

        Returns:
            "<section>" or "<section> - <subsection>" when the slide root
            sits below depth 2 and a level-3 heading is known
        """
        title = self.section_get()
        subsection = self.heading_get(3)
        if subsection and depth > 2:
            title = f"{title} - {subsection}"
        return title


class LineKind(Enum):
    """Kinds of content lines held by an open slide"""
    ITEM = "item"    # bulleted list entry
    RAW = "raw"      # verbatim block (table, markup, page inclusion)
    BREAK = "break"  # empty topic, rendered as a line break


@dataclass
class SlideLine:
    """One structured content line of a slide"""
    kind: LineKind
    text: str = ""


@dataclass
class Slide:
    """
    Slide being built by the slide compiler

    Rendering is deferred until the slide is flushed, so slide-wide options
    (no-list, highlight, no-title) transform the structured lines rather
    than already serialized text.

    Attributes:
        heading: Slide heading built from the heading context
        key: Presentation map key (section heading)
        style: Slide style name captured when the slide opened
        background: Background asset (placeholder until a background directive)
        animation: Background animation captured when the slide opened
        transition: Transition captured when the slide opened
        lines: Structured content lines
        notes: Speaker notes, one entry per note topic
        options: Slide-wide options
        empty: True until something marks the slide as having content
    """
    heading: str
    key: str
    style: str = ""
    background: str = ""
    animation: str = ""
    transition: str = ""
    lines: List[SlideLine] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    options: Set[SlideOption] = field(default_factory=set)
    empty: bool = True


@dataclass
class MapAnchor:
    """Place in the deck where a presentation map slide is inserted"""
    key: str


@dataclass
class Deck:
    """
    Finished slides and presentation map

    Attributes:
        segments: Rendered slide text interleaved with map anchors, in order
        map_entries: Distinct section headings, in first-seen order
        slide_count: Number of slides flushed into the deck
    """
    segments: List[Union[str, MapAnchor]] = field(default_factory=list)
    map_entries: List[str] = field(default_factory=list)
    slide_count: int = 0

    def text_add(self, text: str) -> None:
        """Append rendered text"""
        self.segments.append(text)

    def anchor_add(self, key: str) -> None:
        """Append a map anchor and register the key as map entry"""
        self.segments.append(MapAnchor(key))
        self.map_entries.append(key)

    def map_restart(self) -> None:
        """Forget all map entries and anchors accumulated so far"""
        self.map_entries = []
        self.segments = [s for s in self.segments if not isinstance(s, MapAnchor)]

    def text_get(self) -> str:
        """Return the rendered text of the deck, anchors excluded"""
        return ''.join(s for s in self.segments if isinstance(s, str))


@dataclass
class ReferenceRegistry:
    """
    References collected during one traversal

    Attributes:
        included_pages: Raw {{refs>...}} tokens, in outline order
        manual_references: Raw [(name>text)] lines, in outline order
        pmids: PubMed ids found in the rendered outputs
        reference_format: PubMed rendering format of the bibliography
    """
    included_pages: List[str] = field(default_factory=list)
    manual_references: List[str] = field(default_factory=list)
    pmids: Set[int] = field(default_factory=set)
    reference_format: str = "long"

    def page_include(self, token: str) -> None:
        self.included_pages.append(token)

    def manual_add(self, line: str) -> None:
        self.manual_references.append(line)

    def format_set(self, reference_format: str) -> None:
        self.reference_format = reference_format

    def empty_is(self) -> bool:
        """True when nothing would go into a bibliography"""
        return not (self.included_pages or self.manual_references or self.pmids)


@dataclass
class CompileResult:
    """
    Output of one conversion run

    Attributes:
        document: Linear wiki/markdown document
        deck: Slide deck document ("" when no slide was emitted)
        document_suffix: Suggested file suffix of the document (".md", ".txt")
        deck_suffix: Suggested file suffix of the deck ("_revealjs.md", ...)
        slide_count: Number of content slides emitted from the outline
        pmids: Sorted PubMed ids cited in either output
    """
    document: str
    deck: str
    document_suffix: str
    deck_suffix: str
    slide_count: int = 0
    pmids: List[int] = field(default_factory=list)
