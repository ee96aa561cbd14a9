"""
Node classifier for outline topics

Inspects a topic's title, style and markers and tells the compiler what the
topic is. Stateless: the same node always classifies the same way.

Classification precedence (first match wins):
    [skip]                      -> SUPPRESSED
    {{page>...}}                -> EXTRA_PAGE
    {{refs>...}}                -> REFERENCE_PAGE
    {{pmid>doc_format:long}}    -> FORMAT_OVERRIDE
    [(name>free text)]          -> MANUAL_CITATION
    rj / rjs / reveal / revealjs -> SLIDE_GROUP
    | cell | or ^ header ^      -> TABLE
    <WRAP ...>, <html>, ...     -> RAW_MARKUP
    options / option / opt      -> OPTIONS
    anything else               -> REGULAR
"""

import re
from typing import Optional

from ..models.outline import OutlineNode
from ..models.directives import (
    NodeKind,
    SlideKind,
    SLIDE_GROUP_WORDS,
    OPTIONS_WORDS,
    BACKGROUND_WORDS,
    NOTES_WORDS,
    PAGE_PREFIX,
    REFS_PREFIX,
    TABLE_PREFIXES,
    RAW_MARKUP_PREFIXES,
    command_fieldName,
)


SKIP_PATTERN = re.compile(r'\[skip\]', re.IGNORECASE)
FORMAT_PATTERN = re.compile(r'^\{\{pmid>doc_format:([^}]+)\}\}$')
MANUAL_CITATION_PATTERN = re.compile(r'\[\([^>]+>.*\)\]', re.DOTALL)
HEADER_LEVEL_PATTERN = re.compile(r'\[level\s+(\d+)\]', re.IGNORECASE)

BOLD_PROPERTY = ('fo:font-weight', 'bold')
ITALIC_PROPERTY = ('fo:font-style', 'italic')


class OutlineStructureError(Exception):
    """Raised when a directive topic lacks what its kind requires (e.g. children)"""
    pass


def children_require(node: OutlineNode) -> None:
    """Raise OutlineStructureError if a directive topic has no children"""
    if not node.children:
        raise OutlineStructureError(f"Directive '{node.title}' has no child topic")


class NodeClassifier:
    """
    Classifies outline nodes

    Example:
        >>> classifier = NodeClassifier()
        >>> classifier.kind_get(OutlineNode(title="RJS"))
        <NodeKind.SLIDE_GROUP: 'slide-group'>
    """

    def kind_get(self, node: OutlineNode) -> NodeKind:
        """Return the kind of a node, evaluated in precedence order"""
        title = node.title
        lowered = title.lower()
        word = title.strip().lower()

        if SKIP_PATTERN.search(title):
            return NodeKind.SUPPRESSED
        if lowered.startswith(PAGE_PREFIX):
            return NodeKind.EXTRA_PAGE
        if lowered.startswith(REFS_PREFIX):
            return NodeKind.REFERENCE_PAGE
        if FORMAT_PATTERN.match(title.strip()):
            return NodeKind.FORMAT_OVERRIDE
        if MANUAL_CITATION_PATTERN.fullmatch(title.strip()):
            return NodeKind.MANUAL_CITATION
        if word in SLIDE_GROUP_WORDS:
            return NodeKind.SLIDE_GROUP
        if title.strip().startswith(TABLE_PREFIXES):
            return NodeKind.TABLE
        if lowered.startswith(RAW_MARKUP_PREFIXES):
            return NodeKind.RAW_MARKUP
        if word in OPTIONS_WORDS:
            return NodeKind.OPTIONS
        return NodeKind.REGULAR

    def slideKind_get(self, node: OutlineNode) -> Optional[SlideKind]:
        """
        Return the slide-only directive kind of a node, if any

        Only consulted for nodes inside a slide group, after kind_get()
        ruled out the kinds that take precedence everywhere.
        """
        word = node.title.strip().lower()
        if not word:
            return None
        if word in BACKGROUND_WORDS:
            return SlideKind.BACKGROUND
        if word in NOTES_WORDS:
            return SlideKind.NOTES
        if word in OPTIONS_WORDS:
            return SlideKind.OPTION
        if command_fieldName(word) is not None:
            return SlideKind.COMMAND
        return None

    def referenceFormat_extract(self, node: OutlineNode) -> str:
        """Return the format named by a FORMAT_OVERRIDE node"""
        match = FORMAT_PATTERN.match(node.title.strip())
        return match.group(1).strip() if match else ""

    def headerLevel_extract(self, title: str) -> Optional[int]:
        """
        Return the header depth requested by an inline [level N] token

        Returns:
            N, or None when the title carries no well-formed token
        """
        match = HEADER_LEVEL_PATTERN.search(title)
        if not match:
            return None
        return int(match.group(1))

    def title_clean(self, title: str) -> str:
        """Remove inline [level N] tokens from a title"""
        if not HEADER_LEVEL_PATTERN.search(title):
            return title
        return HEADER_LEVEL_PATTERN.sub('', title).strip()

    def bold_is(self, node: OutlineNode) -> bool:
        key, value = BOLD_PROPERTY
        return node.style_properties.get(key) == value

    def italic_is(self, node: OutlineNode) -> bool:
        key, value = ITALIC_PROPERTY
        return node.style_properties.get(key) == value

    def marker_has(self, node: OutlineNode, marker: str) -> bool:
        return marker in node.markers
