"""
Compiler for outline trees to wiki documents and reveal.js decks

Walks the outline once, depth-first, dispatching every topic by kind:
regular topics go to the linear renderer, slide groups to the slide
compiler, reference topics to the reference registry. Then resolves the
bibliography and assembles the deck.
"""

from typing import Optional, Union

from ..config import appsettings, AppSettings
from ..models.outline import OutlineNode
from ..models.compiler import CompileResult, ReferenceRegistry
from ..models.directives import NodeKind
from .classifier import NodeClassifier, OutlineStructureError, children_require
from .renderer import DocumentRenderer
from .slides import SlideCompiler
from .references import ReferenceResolver
from .assembler import DeckAssembler
from .style import Style
from .log import LOG


class Compiler:
    """
    Converts one outline tree into a linear document and a slide deck

    Responsibilities:
    - Classify each topic exactly once per traversal
    - Feed regular topics to the linear renderer
    - Hand slide groups to the slide compiler
    - Record references, then resolve the bibliography
    - Assemble the final deck

    Example:
        >>> outline = OutlineNode(title="Intro", children=(OutlineNode(title="Point A"),))
        >>> result = Compiler(outline, style="md", header_levels=1).compile()
        >>> "# Intro" in result.document
        True
    """

    def __init__(
        self,
        outline: OutlineNode,
        style: Union[str, Style, None] = None,
        header_levels: Optional[int] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            outline: Root topic of the outline
            style: Output dialect, by name ("md", "doku") or loaded Style
                   (default: settings.default_style)
            header_levels: Number of outline levels rendered as headings
                           (default: settings.header_levels)
            settings: Application settings (default: appsettings)
        """
        self.outline = outline
        self.settings = settings or appsettings
        if isinstance(style, Style):
            self.style = style
        else:
            self.style = Style(style or self.settings.default_style, self.settings.styles_dir)
        if header_levels is None:
            header_levels = self.settings.header_levels
        self.header_levels = header_levels

        self.classifier = NodeClassifier()
        self.assembler = DeckAssembler(self.style, self.settings)
        self.accumulators_reset()

    def accumulators_reset(self) -> None:
        """Start a run with an empty document, deck and reference registry"""
        self.registry = ReferenceRegistry(reference_format=self.settings.reference_format)
        self.renderer = DocumentRenderer(self.style, self.classifier, self.header_levels)
        self.slides = SlideCompiler(self.style, self.classifier, self.registry, self.settings)
        self.resolver = ReferenceResolver(self.registry, self.style, self.settings)

    def compile(self) -> CompileResult:
        """
        Convert the outline

        Every call is a fresh run: compiling twice gives the same result.

        Returns:
            CompileResult with the document, the deck and their suffixes
        """
        self.accumulators_reset()
        LOG(f"Exporting style: {self.style.name}", level=2)
        LOG(f"Number of header levels: {self.renderer.header_depth.active_get()}", level=2)

        self.child_visit(self.outline, 0)

        document = self.resolver.resolve(
            self.renderer.text_get(), self.slides.deck, self.slides.commands
        )
        deck = self.assembler.deck_assemble(self.slides.deck, self.slides.commands)
        LOG(f"Slides emitted: {self.slides.deck.slide_count}", level=2)

        return CompileResult(
            document=document,
            deck=deck,
            document_suffix=self.style.extension,
            deck_suffix=self.settings.deck_infix + self.style.extension,
            slide_count=self.slides.deck.slide_count,
            pmids=sorted(self.registry.pmids),
        )

    def child_visit(self, node: OutlineNode, depth: int) -> None:
        """Visit a topic; a malformed directive is skipped, the rest goes on"""
        try:
            self.node_visit(node, depth)
        except OutlineStructureError as e:
            LOG(f"Ignoring malformed topic: {e}", level=2)

    def node_visit(self, node: OutlineNode, depth: int) -> None:
        if depth > self.settings.max_depth:
            LOG(f"Depth limit reached at '{node.title}', subtree not rendered", level=1)
            return

        kind = self.classifier.kind_get(node)
        LOG(f"{'  ' * depth}{kind.value}: {node.title!r}", level=3)

        if kind is NodeKind.SUPPRESSED:
            return
        if kind is NodeKind.EXTRA_PAGE:
            self.renderer.page_emit(node.title)
            self.slides.page_include(node.title)
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
            self.slides.group_compile(node, depth, self.renderer.headings)
            return
        if kind in (NodeKind.TABLE, NodeKind.RAW_MARKUP):
            self.renderer.literal_emit(node.title)
            return
        if kind is NodeKind.OPTIONS:
            self.options_push(node)
            return

        override = self.classifier.headerLevel_extract(node.title)
        with self.renderer.header_depth.scope(override):
            self.renderer.entry_emit(node, depth)
            with self.renderer.directives.scope():
                for child in node.children:
                    self.child_visit(child, depth + 1)

    def options_push(self, node: OutlineNode) -> None:
        """Activate the options named by the children of an options topic"""
        children_require(node)
        unknown = self.renderer.directives.options_push(child.title for child in node.children)
        for name in unknown:
            LOG(f"Unknown option '{name}' ignored", level=2)
