"""
Reference resolver

Runs once after the traversal. Collects PubMed citations ([(P12345)]) from
both outputs, merges them with the reference pages and manual references
recorded during the traversal, and renders a refnotes bibliography:

- appended to the linear document under a "References" heading, followed by
  the ~~REFNOTES~~ render marker;
- appended to the deck as one bibliography slide plus ceil(n / 4) reference
  pages, n being the number of distinct [(...)] citations in the slides.

No citations and an empty registry leave both outputs untouched.
"""

import math
import re
from typing import List, Optional

from ..config import appsettings, AppSettings
from ..models.compiler import Deck, ReferenceRegistry
from ..models.directives import SlideCommands
from .slides import SLIDE_END, slideHeader_format
from .style import Style
from .log import LOG


PMID_PATTERN = re.compile(r'\[\(P(\d+)\)\]')
CITATION_PATTERN = re.compile(r'\[\([^)^>]*\)\]')
REFS_PREFIX_PATTERN = re.compile(re.escape('{{refs>'), re.IGNORECASE)
PAGE_FLAGS = '&nofooter&link'

REFNOTES_SETUP = """<refnotes>
  refnote-id       : 1
  reference-base   : text
  reference-font-weight : normal
  reference-font-style : normal
  reference-format : []
  reference-group  : ,
  reference-render : basic
  multi-ref-id : note
  note-preview : popup
  notes-separator : none
  note-text-align : left
  note-font-size : normal
  note-render : basic
  note-id-base : text
  note-id-font-weight : normal
  note-id-font-style : normal
  note-id-format : .
  back-ref-caret : none
  back-ref-base : text
  back-ref-font-weight : bold
  back-ref-font-style : normal
  back-ref-format : none
  back-ref-separator : ,
  scoping : single
</refnotes>

"""


def pmids_collect(*texts: str) -> List[int]:
    """
    Return the distinct PubMed ids cited in the texts, ascending

    Example:
        >>> pmids_collect("See [(P456)] and [(P123)]", "Also [(P123)]")
        [123, 456]
    """
    found = set()
    for text in texts:
        found.update(int(pmid) for pmid in PMID_PATTERN.findall(text))
    return sorted(found)


def citations_count(text: str) -> int:
    """Number of distinct [(...)] citation tokens in the text"""
    return len(set(CITATION_PATTERN.findall(text)))


def page_convert(token: str) -> str:
    """Turn a {{refs>page}} token into a footer-less, linked {{page>page}} inclusion"""
    if PAGE_FLAGS not in token:
        token = token.replace('}}', PAGE_FLAGS + '}}')
    return REFS_PREFIX_PATTERN.sub('{{page>', token, count=1)


class ReferenceResolver:
    """
    Renders the bibliography of one conversion run

    Attributes:
        registry: References collected during the traversal
        style: Output dialect (heading delimiters)
        settings: Titles and pagination settings
    """

    def __init__(
        self,
        registry: ReferenceRegistry,
        style: Style,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.registry = registry
        self.style = style
        self.settings = settings or appsettings

    def resolve(self, document: str, deck: Deck, commands: SlideCommands) -> str:
        """
        Append the bibliography to both outputs

        Args:
            document: Linear document text
            deck: Deck to extend with bibliography slides (modified in place)
            commands: Presentation commands (slide header values)

        Returns:
            The linear document, with its bibliography section if any
        """
        LOG("Preparing references...", level=1)
        pmids = pmids_collect(document, deck.text_get())
        self.registry.pmids.update(pmids)
        if self.registry.empty_is():
            LOG("No references found", level=2)
            return document

        LOG(f"Found {len(self.registry.included_pages)} reference page(s)", level=2)
        LOG(f"Found {len(self.registry.pmids)} unique PubMed PMID reference(s)", level=2)
        LOG(f"Found {len(self.registry.manual_references)} manual reference(s)", level=2)

        bibliography = self.bibliography_build(sorted(self.registry.pmids))
        document = self.document_append(document, bibliography)
        if deck.slide_count:
            self.deck_append(deck, bibliography, commands)
        return document

    def bibliography_build(self, pmids: List[int]) -> str:
        parts = [REFNOTES_SETUP, f"{{{{pmid>doc_format:{self.registry.reference_format}}}}}\n\n"]

        if self.registry.included_pages:
            parts.extend(page_convert(page) + "\n" for page in self.registry.included_pages)
            parts.append("\n\n")

        if pmids:
            parts.extend(f"[(P{pmid}>{{{{pmid>{pmid}}}}})]\n" for pmid in pmids)
            parts.append("\n\n")

        parts.extend(line + "\n" for line in self.registry.manual_references)
        return ''.join(parts)

    def document_append(self, document: str, bibliography: str) -> str:
        heading = self.style.heading_format(2, self.settings.references_title)
        return (
            document
            + "\n\n\n" + heading + "\n\n\n"
            + bibliography + "\n"
            + "\n\n~~REFNOTES~~\n\n"
        )

    def deck_append(self, deck: Deck, bibliography: str, commands: SlideCommands) -> None:
        """Add the bibliography slide and the paginated reference slides"""
        count = citations_count(deck.text_get())
        LOG(f"Distinct citations used in slides: {count}", level=2)
        if count == 0:
            return

        per_slide = self.settings.references_per_slide
        total = math.ceil(count / per_slide)
        title = self.settings.bibliography_title
        header = slideHeader_format(
            commands.style,
            self.settings.background_placeholder,
            commands.background_animation,
            commands.transition,
        )

        if title not in deck.map_entries:
            deck.anchor_add(title)

        parts = [
            header, "\n",
            self.style.heading_format(2, title), "\n\n",
            f"  * Number of references : {count}\n\n",
            f"  * Number of slides : {total}\n\n",
            "\n\n", bibliography, "\n",
            SLIDE_END,
        ]
        for page in range(1, total + 1):
            parts.extend([
                "\n\n\n", header, "\n",
                self.style.heading_format(3, f"{self.settings.references_title} {page} / {total}"),
                "\n\n",
                f"<WRAP references>~~REFNOTES {per_slide}~~</WRAP>\n",
                SLIDE_END,
            ])
        parts.append("\n\n\n")
        deck.text_add(''.join(parts))
