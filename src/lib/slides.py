"""
Slide compiler for reveal.js decks

Builds DokuWiki reveal.js slides from slide groups. A slide group starts at a
topic titled rj / rjs / reveal / revealjs; everything below it is content of
one slide, whatever its depth.

State machine:
    OutsideSlide --(slide group root)--> InSlide
    InSlide --(root subtree exhausted)--> OutsideSlide (slide flushed)

Inside a slide, topics are either content (one list level), verbatim blocks,
or directives:
    titre / auteurs / footer / ...  -> presentation commands
    background / bg                 -> slide background
    notes / note                    -> speaker notes
    option / opt                    -> no-footer, no-title, no-list, start_map_here

Slides are kept as structured lines until flushed, so slide-wide options
(no-list, highlight, no-title) never rewrite serialized text.
"""

import re
from typing import Callable, Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.outline import OutlineNode
from ..models.compiler import Deck, HeadingContext, LineKind, ReferenceRegistry, Slide, SlideLine
from ..models.directives import (
    NodeKind,
    SlideKind,
    SlideCommands,
    SlideOption,
    SLIDE_OPTION_NAMES,
)
from .classifier import NodeClassifier, OutlineStructureError, children_require
from .renderer import emphasis_apply
from .style import Style
from .log import LOG


SLIDE_END = "<----\n\n"
PARTIAL_HIGHLIGHT_PATTERN = re.compile(r'([^|]*)\|\|([^|]*)\|\|(.*)', re.DOTALL)


def slideHeader_format(*parts: Optional[str]) -> str:
    """
    Build a slide opening line

    Example:
        >>> slideHeader_format("eric", ":1px.png", None, "fade")
        '---- eric :1px.png fade ---->\\n'
    """
    words = [p for p in parts if p]
    return "---- " + " ".join(words) + " ---->\n"


class SlideCompiler:
    """
    Compiles slide groups into a Deck

    Attributes:
        style: Output dialect (heading delimiters, line breaks, emphasis)
        classifier: Shared node classifier
        registry: Shared reference registry
        commands: Presentation commands collected so far
        deck: Finished slides and presentation map
        slide: Slide being built, None outside slide groups
    """

    def __init__(
        self,
        style: Style,
        classifier: NodeClassifier,
        registry: ReferenceRegistry,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.style = style
        self.classifier = classifier
        self.registry = registry
        self.settings = settings or appsettings
        self.commands = SlideCommands()
        self.deck = Deck()
        self.slide: Optional[Slide] = None
        self.handlers: Dict[SlideKind, Callable[[OutlineNode], None]] = {
            SlideKind.COMMAND: self.command_read,
            SlideKind.BACKGROUND: self.background_read,
            SlideKind.NOTES: self.notes_read,
            SlideKind.OPTION: self.options_read,
        }

    def inSlide_is(self) -> bool:
        return self.slide is not None

    def group_compile(self, root: OutlineNode, depth: int, headings: HeadingContext) -> None:
        """
        Compile one slide group

        Args:
            root: Slide group root topic
            depth: Depth of the root in the outline (selects the heading form)
            headings: Heading context of the linear document at this point

        Slide content is flat, but its depth keeps counting from the root's,
        so settings.max_depth bounds the outline and slide recursion together.
        """
        self.slide_open(root, headings.slideTitle_get(depth), headings.section_get())
        for child in root.children:
            self.child_compile(child, depth + 1)
        self.slide_flush()

    def slide_open(self, root: OutlineNode, heading: str, key: str) -> None:
        """Open a slide, capturing the header values of the current commands"""
        self.slide = Slide(
            heading=heading,
            key=key,
            style=self.commands.style or "",
            background=self.settings.background_placeholder,
            animation=self.commands.background_animation or "",
            transition=self.commands.transition or "",
        )
        if self.classifier.marker_has(root, self.settings.highlight_marker):
            self.slide.options.add(SlideOption.HIGHLIGHT)
        LOG(f"Slide opened: '{heading}'", level=3)

    def child_compile(self, node: OutlineNode, level: int) -> None:
        """Compile one topic of the open slide; a malformed directive is skipped"""
        try:
            self.node_compile(node, level)
        except OutlineStructureError as e:
            LOG(f"Ignoring malformed topic: {e}", level=2)

    def node_compile(self, node: OutlineNode, level: int) -> None:
        slide = self.slide
        if slide is None:
            return
        if level > self.settings.max_depth:
            LOG(f"Depth limit reached at '{node.title}', subtree not compiled", level=1)
            return

        kind = self.classifier.kind_get(node)
        if kind is NodeKind.SUPPRESSED:
            LOG(f"Skipping suppressed topic '{node.title}'", level=3)
            return
        if kind is NodeKind.EXTRA_PAGE:
            slide.lines.append(SlideLine(LineKind.RAW, node.title))
            slide.empty = False
            return
        if kind is NodeKind.REFERENCE_PAGE:
            self.registry.page_include(node.title)
            return
        if kind is NodeKind.FORMAT_OVERRIDE:
            self.registry.format_set(self.classifier.referenceFormat_extract(node))
            return
        if kind is NodeKind.MANUAL_CITATION:
            self.registry.manual_add(node.title)
            return
        if kind is NodeKind.SLIDE_GROUP:
            # Slide groups do not nest: the inner root only passes its children on
            LOG(f"Nested slide group '{node.title}' merged into the open slide", level=1)
            for child in node.children:
                self.child_compile(child, level + 1)
            return
        if kind in (NodeKind.TABLE, NodeKind.RAW_MARKUP):
            slide.lines.append(SlideLine(LineKind.RAW, node.title))
            slide.empty = False
            return

        slide_kind = self.classifier.slideKind_get(node)
        if slide_kind is not None:
            self.handlers[slide_kind](node)
            return

        self.content_add(node)
        for child in node.children:
            self.child_compile(child, level + 1)

    def content_add(self, node: OutlineNode) -> None:
        """Add a regular topic as a single-level list item"""
        slide = self.slide
        title = self.classifier.title_clean(node.title)
        if not title.strip():
            slide.lines.append(SlideLine(LineKind.BREAK))
        else:
            text = self.style.lineBreaks_convert(title)
            text = self.partialHighlight_apply(text)
            if self.classifier.marker_has(node, self.settings.highlight_marker):
                text = self.highlight_wrap(text)
            text = emphasis_apply(self.style, self.classifier, node, text)
            slide.lines.append(SlideLine(LineKind.ITEM, text))
        slide.empty = False

    def highlight_wrap(self, text: str) -> str:
        return f"<wrap {self.settings.highlight_class}>{self.style.bold_wrap(text)}</wrap>"

    def partialHighlight_apply(self, text: str) -> str:
        """Rewrite "a||b||c" as "a <wrap ...>**b**</wrap> c", wherever the span starts"""
        match = PARTIAL_HIGHLIGHT_PATTERN.search(text)
        if not match:
            return text
        before, middle, after = match.groups()
        return f"{text[:match.start()]}{before} {self.highlight_wrap(middle)} {after}"

    def command_read(self, node: OutlineNode) -> None:
        children_require(node)
        value = node.children[0].title
        self.commands.command_set(node.title, value)
        LOG(f"Command '{node.title.strip().lower()}' set to '{value}'", level=2)

    def background_read(self, node: OutlineNode) -> None:
        children_require(node)
        self.slide.background = node.children[0].title
        self.slide.empty = False

    def notes_read(self, node: OutlineNode) -> None:
        children_require(node)
        for note in node.children:
            self.slide.notes.append(self.style.lineBreaks_convert(note.title))
        self.slide.empty = False

    def options_read(self, node: OutlineNode) -> None:
        children_require(node)
        for child in node.children:
            name = child.title.strip().lower()
            option = SLIDE_OPTION_NAMES.get(name)
            if option is None:
                LOG(f"Unknown slide option '{child.title}' ignored", level=2)
                continue
            if option is SlideOption.START_MAP_HERE:
                LOG("Presentation map restarted", level=2)
                self.deck.map_restart()
                continue
            self.slide.options.add(option)
        self.slide.empty = False

    def slide_flush(self) -> None:
        """Close the open slide and append it to the deck unless it is empty"""
        slide = self.slide
        self.slide = None
        if slide is None:
            return
        if slide.empty:
            LOG(f"Empty slide '{slide.heading}' dropped", level=2)
            return
        if slide.key and slide.key not in self.deck.map_entries:
            self.deck.anchor_add(slide.key)
        self.deck.text_add(self.slide_render(slide))
        self.deck.slide_count += 1

    def slide_render(self, slide: Slide) -> str:
        no_footer = "no-footer" if SlideOption.NO_FOOTER in slide.options else ""
        parts: List[str] = [
            "\n\n\n",
            slideHeader_format(
                no_footer, slide.style, slide.background, slide.animation, slide.transition
            ),
            "\n",
        ]
        if SlideOption.NO_TITLE not in slide.options:
            parts.append(self.style.heading_format(2, slide.heading) + "\n\n\n")
        parts.append(self.body_render(slide))
        if slide.notes:
            parts.append("\n\n\n<notes>\n")
            parts.extend(f"  * {note}\n" for note in slide.notes)
            parts.append("\n</notes>\n")
        parts.append(SLIDE_END)
        return ''.join(parts)

    def body_render(self, slide: Slide) -> str:
        """
        Serialize the slide lines

        Whole-slide highlight turns bullets into line breaks inside a
        highlight block; no-list turns bullets into paragraphs.
        """
        highlight = SlideOption.HIGHLIGHT in slide.options
        no_list = SlideOption.NO_LIST in slide.options
        out = []
        for line in slide.lines:
            if line.kind is LineKind.ITEM:
                if highlight:
                    out.append(line.text + self.style.lineEnd_get() + "\n")
                elif no_list:
                    out.append(line.text + "\n\n")
                else:
                    out.append("  * " + line.text + "\n")
            elif line.kind is LineKind.BREAK:
                out.append("\n" + self.style.line_break + "\n")
            else:
                out.append("\n" + line.text + "\n")
        body = ''.join(out)
        if highlight and body:
            body = f"<WRAP {self.settings.highlight_class}>\n{body}</WRAP>\n"
        return body

    def page_include(self, text: str) -> None:
        """Record a page inclusion met outside slide groups"""
        self.deck.text_add("\n" + text + "\n")
