"""
Reference resolver tests

Tests PubMed citation collection, the bibliography appended to the linear
document and the paginated reference slides of the deck.
"""

import pytest

from mapdown.models.outline import OutlineNode
from mapdown.models.compiler import Deck, ReferenceRegistry
from mapdown.models.directives import SlideCommands
from mapdown.lib.compiler import Compiler
from mapdown.lib.references import (
    ReferenceResolver,
    citations_count,
    page_convert,
    pmids_collect,
)
from mapdown.lib.style import Style


def topic(title, *children, **kwargs):
    return OutlineNode(title=title, children=tuple(children), **kwargs)


def compile_outline(outline, style="md", header_levels=1):
    return Compiler(outline, style=style, header_levels=header_levels).compile()


class TestCollection:
    """Test citation scanning helpers"""

    def test_pmids_deduplicated_and_sorted(self):
        """PMIDs from every text are merged, sorted and unique"""
        assert pmids_collect("See [(P456)] and [(P123)]", "Also [(P123)]") == [123, 456]

    def test_pmids_collect_idempotent(self):
        """Collecting twice gives the same list"""
        text = "[(P9)] [(P3)] [(P9)]"
        assert pmids_collect(text) == pmids_collect(text) == [3, 9]

    def test_named_citations_not_pmids(self):
        """Named citations are not PubMed ids"""
        assert pmids_collect("[(smith)] [(Pabc)]") == []

    def test_citations_count_distinct(self):
        """Each distinct citation is counted once"""
        assert citations_count("[(P1)] [(P2)] [(P1)] [(smith)]") == 3

    def test_citation_definitions_not_counted(self):
        """Resolved definitions do not count as citations"""
        assert citations_count("[(P1>{{pmid>1}})]") == 0

    @pytest.mark.parametrize("token,expected", [
        ("{{refs>ns:biblio}}", "{{page>ns:biblio&nofooter&link}}"),
        ("{{REFS>ns:biblio}}", "{{page>ns:biblio&nofooter&link}}"),
        ("{{refs>ns:biblio&nofooter&link}}", "{{page>ns:biblio&nofooter&link}}"),
    ])
    def test_page_convert(self, token, expected):
        """Reference pages become page inclusions with fixed flags"""
        assert page_convert(token) == expected


class TestDocumentBibliography:
    """Test the bibliography of the linear document"""

    def test_pmid_definitions(self):
        """Each cited PMID gets one definition in the bibliography"""
        outline = topic("Doc", topic("See [(P123)] and [(P456)]"), topic("Also [(P123)]"))
        result = compile_outline(outline)
        assert "[(P123>{{pmid>123}})]\n[(P456>{{pmid>456}})]\n" in result.document
        assert result.document.count("[(P123>") == 1
        assert "\n\n\n## References\n\n\n<refnotes>\n" in result.document
        assert result.document.endswith("\n\n~~REFNOTES~~\n\n")
        assert result.pmids == [123, 456]

    def test_default_format(self):
        """The configured format is used without an override"""
        result = compile_outline(topic("Doc", topic("[(P1)]")))
        assert "{{pmid>doc_format:long}}\n\n" in result.document

    def test_format_override(self):
        """A format override replaces the default"""
        outline = topic("Doc", topic("{{pmid>doc_format:short}}"), topic("[(P1)]"))
        result = compile_outline(outline)
        assert "{{pmid>doc_format:short}}\n\n" in result.document
        assert "doc_format:long" not in result.document

    def test_no_references(self):
        """No bibliography without references"""
        result = compile_outline(topic("Doc", topic("plain")))
        assert result.document == "\n\n# Doc\n\n  * plain\n"
        assert "REFNOTES" not in result.document
        assert result.pmids == []

    def test_reference_page(self):
        """Reference pages go to the bibliography only"""
        outline = topic("Doc", topic("{{refs>ns:biblio}}"))
        result = compile_outline(outline)
        assert "{{page>ns:biblio&nofooter&link}}\n\n\n" in result.document
        assert "{{refs>" not in result.document

    def test_manual_citation(self):
        """Manual citations are defined in the bibliography, not listed"""
        outline = topic("Doc", topic("[(smith>Smith J. A title. 2020)]"), topic("As shown [(smith)]"))
        result = compile_outline(outline)
        assert "[(smith>Smith J. A title. 2020)]\n" in result.document
        assert "  * [(smith>" not in result.document
        assert "  * As shown [(smith)]\n" in result.document

    def test_dokuwiki_heading(self):
        """The bibliography heading follows the style"""
        result = compile_outline(topic("Doc", topic("[(P1)]")), style="doku")
        assert "===== References =====" in result.document

    def test_citations_in_deck_only(self):
        """Citations on slides reach the document bibliography"""
        outline = topic("Doc", topic("RJS", topic("Shown [(P77)]")))
        result = compile_outline(outline)
        assert "[(P77>{{pmid>77}})]" in result.document
        assert result.pmids == [77]


class TestDeckBibliography:
    """Test the bibliography slides of the deck"""

    @pytest.mark.parametrize("citations,pages", [(1, 1), (4, 1), (5, 2), (10, 3)])
    def test_pagination(self, citations, pages):
        """Reference slides hold four citations each"""
        items = [topic(f"Fact [(P{i})]") for i in range(1, citations + 1)]
        result = compile_outline(topic("Doc", topic("RJS", *items)))
        assert result.deck.count("<WRAP references>~~REFNOTES 4~~</WRAP>\n") == pages
        assert f"### References {pages} / {pages}\n" in result.deck
        assert f"### References {pages + 1} / " not in result.deck
        assert f"  * Number of references : {citations}\n" in result.deck
        assert f"  * Number of slides : {pages}\n" in result.deck

    def test_bibliography_in_map(self):
        """The bibliography gets its own map entry and slide"""
        outline = topic("Doc", topic("RJS", topic("Fact [(P1)]")))
        result = compile_outline(outline)
        assert "<WRAP map>\n  * Doc\n  * **Bibliography**\n</WRAP>\n" in result.deck
        assert result.deck.count("## Bibliography\n") == 1

    def test_no_slide_citation_no_slides(self):
        """No reference slides without citations on slides"""
        outline = topic("Doc", topic("Fact [(P1)]"), topic("RJS", topic("plain")))
        result = compile_outline(outline)
        assert "[(P1>{{pmid>1}})]" in result.document
        assert "Bibliography" not in result.deck
        assert "REFNOTES" not in result.deck

    def test_no_deck_no_slides(self):
        """No deck at all without slides"""
        result = compile_outline(topic("Doc", topic("Fact [(P1)]")))
        assert result.deck == ""


class TestResolver:
    """Test the resolver on its own"""

    @pytest.fixture
    def resolver(self):
        return ReferenceResolver(ReferenceRegistry(), Style("md"))

    def test_untouched_without_references(self, resolver):
        """Document and deck are left alone without references"""
        deck = Deck(slide_count=1)
        deck.text_add("slide")
        assert resolver.resolve("text", deck, SlideCommands()) == "text"
        assert deck.segments == ["slide"]

    def test_registry_filled(self, resolver):
        """Resolving records the PMIDs in the registry"""
        resolver.resolve("[(P5)] [(P2)]", Deck(), SlideCommands())
        assert resolver.registry.pmids == {2, 5}

    def test_bibliography_order(self, resolver):
        """Pages, then PMIDs, then manual references"""
        resolver.registry.page_include("{{refs>ns:a}}")
        resolver.registry.manual_add("[(x>X)]")
        text = resolver.bibliography_build([3, 11])
        page = text.index("{{page>ns:a")
        pmid = text.index("[(P3>{{pmid>3}})]")
        manual = text.index("[(x>X)]")
        assert text.startswith("<refnotes>\n")
        assert page < pmid < manual
