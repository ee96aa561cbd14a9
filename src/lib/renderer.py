"""
Linear document renderer

Emits the heading/list document for regular topics. The compiler owns the
traversal and calls entry_emit() in pre-order; the renderer keeps the
heading context, the directive stack and the scoped header depth.

Rendering of a regular topic at depth d, with h active heading levels:
    d < h  -> heading of level d+1 ("## Title")
    d >= h -> list item indented max(1, d - h + 1) times ("    * Title")
"""

from typing import List

from ..models.outline import OutlineNode
from ..models.compiler import HeadingContext
from ..models.directives import ListOption
from .classifier import NodeClassifier
from .directives import DirectiveStack, HeaderDepth
from .style import Style
from .log import LOG


INDENT_UNIT = "  "
BULLET = "* "
HEADING_LINE_BREAK = " / "


def emphasis_apply(style: Style, classifier: NodeClassifier, node: OutlineNode, text: str) -> str:
    """Wrap text in bold or italic delimiters; bold wins over italic"""
    if classifier.bold_is(node):
        return style.bold_wrap(text)
    if classifier.italic_is(node):
        return style.italic_wrap(text)
    return text


class DocumentRenderer:
    """
    Accumulates the linear document

    Attributes:
        style: Output dialect
        classifier: Shared node classifier
        parts: Emitted text fragments, in order
        headings: Last heading text per level
        directives: Active list options (scoped)
        header_depth: Active number of heading levels (scoped)
    """

    def __init__(self, style: Style, classifier: NodeClassifier, header_levels: int) -> None:
        self.style = style
        self.classifier = classifier
        self.parts: List[str] = []
        self.headings = HeadingContext()
        self.directives = DirectiveStack()
        self.header_depth = HeaderDepth(header_levels, style.headingLevels_count())

    def entry_emit(self, node: OutlineNode, depth: int) -> None:
        """
        Emit a regular topic as heading or list item

        Call inside header_depth.scope() when the topic carries a
        [level N] override, so the override already applies to it.
        """
        text = self.classifier.title_clean(node.title)
        if depth < self.header_depth.active_get():
            self.heading_emit(depth + 1, text)
        else:
            self.item_emit(node, text, depth)

    def heading_emit(self, level: int, text: str) -> None:
        flat = text.replace("\n", HEADING_LINE_BREAK)
        self.parts.append("\n\n" + self.style.heading_format(level, flat) + "\n\n")
        self.headings.heading_set(level, flat)

    def item_emit(self, node: OutlineNode, text: str, depth: int) -> None:
        if self.directives.active_has(ListOption.ONLY_BOLD) and not self.classifier.bold_is(node):
            LOG(f"only-bold: skipping '{text}'", level=3)
            return
        if self.directives.active_has(ListOption.ONLY_TAGGED) and not node.markers:
            LOG(f"only-tagged: skipping '{text}'", level=3)
            return

        body = self.emphasis_apply(node, self.style.lineBreaks_convert(text))
        if self.directives.active_has(ListOption.NO_LIST):
            self.parts.append(body + "\n\n")
            return

        indent = INDENT_UNIT * self.indent_get(depth)
        self.parts.append(f"{indent}{BULLET}{body}\n")

    def indent_get(self, depth: int) -> int:
        """Nesting units of a list item at the given depth (never below 1)"""
        return max(1, depth - self.header_depth.active_get() + 1)

    def emphasis_apply(self, node: OutlineNode, text: str) -> str:
        return emphasis_apply(self.style, self.classifier, node, text)

    def literal_emit(self, text: str) -> None:
        """Emit a table or markup block verbatim"""
        self.parts.append("\n" + text + "\n\n")

    def page_emit(self, text: str) -> None:
        """Emit a page inclusion verbatim"""
        self.parts.append(text + "\n")

    def text_get(self) -> str:
        return ''.join(self.parts)
