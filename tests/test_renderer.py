"""
Linear document tests

Tests heading/list rendering of regular topics, option scoping, [level N]
overrides, emphasis and the verbatim node kinds.
"""

import re

import pytest

from mapdown.models.outline import OutlineNode
from mapdown.models.compiler import HeadingContext
from mapdown.lib.compiler import Compiler


def topic(title, *children, **kwargs):
    return OutlineNode(title=title, children=tuple(children), **kwargs)


def document(outline, style="md", header_levels=2):
    return Compiler(outline, style=style, header_levels=header_levels).compile().document


BOLD = {"fo:font-weight": "bold"}
ITALIC = {"fo:font-style": "italic"}


class TestHeadingsAndLists:
    """Test the heading/list split"""

    def test_headings_then_list(self):
        """Levels within header depth are headings, the rest list items"""
        outline = topic("Intro", topic("Point A", topic("Detail", topic("Deeper"))))
        assert document(outline) == (
            "\n\n# Intro\n\n"
            "\n\n## Point A\n\n"
            "  * Detail\n"
            "    * Deeper\n"
        )

    def test_no_heading_level(self):
        """Header depth 0 renders the whole outline as a list"""
        outline = topic("Intro", topic("Point A"))
        assert document(outline, header_levels=0) == "  * Intro\n    * Point A\n"

    def test_list_indent_never_below_one(self):
        """The first list level is indented once"""
        outline = topic("Intro", topic("Point A"))
        assert document(outline, header_levels=1) == "\n\n# Intro\n\n  * Point A\n"

    def test_dokuwiki_headings(self):
        """Dokuwiki headings shrink with depth"""
        outline = topic("Intro", topic("Point A", topic("Detail")))
        assert document(outline, style="doku") == (
            "\n\n====== Intro ======\n\n"
            "\n\n===== Point A =====\n\n"
            "  * Detail\n"
        )

    def test_heading_line_breaks_flattened(self):
        """Line breaks in headings become slashes"""
        assert "# First / Second" in document(topic("First\nSecond"))

    def test_markdown_item_line_break(self):
        """Markdown items break lines with a backslash"""
        outline = topic("Intro", topic("x\ny"))
        assert document(outline, header_levels=1).endswith("  * x\\\ny\n")

    def test_dokuwiki_item_line_break(self):
        """Dokuwiki items break lines with a double backslash"""
        outline = topic("Intro", topic("x\ny"))
        assert document(outline, style="doku", header_levels=1).endswith("  * x \\\\ y\n")

    def test_header_levels_clamped_to_style(self):
        """Markdown has six heading levels; deeper levels become list items"""
        chain = topic("L8")
        for i in range(7, 0, -1):
            chain = topic(f"L{i}", chain)
        text = document(chain, header_levels=12)
        assert "###### L6" in text
        assert "####### " not in text
        assert "  * L7\n    * L8\n" in text

    def test_every_heading_within_active_depth(self):
        """No heading is deeper than the header depth"""
        chain = topic("L6")
        for i in range(5, 0, -1):
            chain = topic(f"L{i}", chain)
        text = document(chain, header_levels=3)
        headings = re.findall(r'^(#+) ', text, re.MULTILINE)
        assert headings == ["#", "##", "###"]

    def test_deep_outline_truncated(self):
        """Topics below max_depth are dropped instead of exhausting the stack"""
        chain = topic("L300")
        for i in range(299, 0, -1):
            chain = topic(f"L{i}", chain)
        text = document(chain, header_levels=1)
        assert "# L1\n" in text
        assert "* L201\n" in text
        assert "L202" not in text


class TestLevelOverride:
    """Test inline [level N] overrides"""

    def test_override_scoped_to_subtree(self):
        """An override applies to its subtree and not to siblings"""
        outline = topic(
            "Intro",
            topic("Sec [level 3]", topic("Sub", topic("Leaf"))),
            topic("Sibling", topic("Item")),
        )
        assert document(outline, header_levels=1) == (
            "\n\n# Intro\n\n"
            "\n\n## Sec\n\n"
            "\n\n### Sub\n\n"
            "  * Leaf\n"
            "  * Sibling\n"
            "    * Item\n"
        )

    def test_override_can_lower_depth(self):
        """An override can turn a heading into a list item"""
        outline = topic("Intro", topic("Sec [level 1]", topic("Sub")), topic("Other"))
        assert document(outline, header_levels=2) == (
            "\n\n# Intro\n\n"
            "  * Sec\n"
            "    * Sub\n"
            "\n\n## Other\n\n"
        )

    def test_malformed_override_is_plain_text(self):
        """A malformed level token is kept as text"""
        assert document(topic("Topic [level x]"), header_levels=1) == "\n\n# Topic [level x]\n\n"


class TestListOptions:
    """Test options topics and their scope"""

    def test_no_list_affects_following_siblings(self):
        """Options apply to the siblings after them"""
        outline = topic("Intro", topic("A"), topic("options", topic("no-list")), topic("B"))
        assert document(outline, header_levels=1) == "\n\n# Intro\n\n  * A\nB\n\n"

    def test_options_never_leak_past_parent(self):
        """Options end with the parent that holds them"""
        outline = topic(
            "Root",
            topic("S1", topic("options", topic("no-list")), topic("x")),
            topic("S2", topic("y")),
        )
        assert document(outline, header_levels=1) == (
            "\n\n# Root\n\n"
            "  * S1\n"
            "x\n\n"
            "  * S2\n"
            "    * y\n"
        )

    def test_options_inherited_by_descendants(self):
        """Options reach the children of later siblings"""
        outline = topic(
            "Root",
            topic("opt", topic("no-list")),
            topic("A", topic("B")),
        )
        assert document(outline, header_levels=1) == "\n\n# Root\n\nA\n\nB\n\n"

    def test_only_bold(self):
        """Only bold items are kept, at their own indent"""
        outline = topic(
            "Root",
            topic("options", topic("only-bold")),
            topic("plain", topic("child", style_properties=BOLD)),
            topic("Bold", style_properties=BOLD),
        )
        assert document(outline, header_levels=1) == (
            "\n\n# Root\n\n"
            "    * **child**\n"
            "  * **Bold**\n"
        )

    def test_only_tagged(self):
        """Only items with a marker are kept"""
        outline = topic(
            "Root",
            topic("options", topic("only-tagged")),
            topic("plain"),
            topic("Tagged", markers=("star-red",)),
        )
        assert document(outline, header_levels=1) == "\n\n# Root\n\n  * Tagged\n"

    def test_only_tagged_child_of_untagged_parent(self):
        """An untagged parent is hidden but its tagged child keeps its indent"""
        outline = topic(
            "Root",
            topic("options", topic("only-tagged")),
            topic("plain", topic("deep", markers=("tag-red",))),
        )
        assert document(outline, header_levels=1) == "\n\n# Root\n\n    * deep\n"

    def test_options_accumulate(self):
        """Two options topics combine their options"""
        outline = topic(
            "Root",
            topic("options", topic("no-list")),
            topic("options", topic("only-bold")),
            topic("plain"),
            topic("Bold", style_properties=BOLD),
        )
        assert document(outline, header_levels=1) == "\n\n# Root\n\n**Bold**\n\n"

    def test_headings_ignore_options(self):
        """Headings are emitted whatever the options"""
        outline = topic("Root", topic("options", topic("only-bold")), topic("Section"))
        assert "## Section" in document(outline, header_levels=2)

    def test_options_topic_without_children_ignored(self):
        """An empty options topic is skipped"""
        outline = topic("Root", topic("options"), topic("A"))
        assert document(outline, header_levels=1) == "\n\n# Root\n\n  * A\n"

    def test_unknown_option_ignored(self):
        """Unknown options change nothing"""
        outline = topic("Root", topic("options", topic("sparkles")), topic("A"))
        assert document(outline, header_levels=1) == "\n\n# Root\n\n  * A\n"


class TestEmphasis:
    """Test bold and italic list items"""

    def test_bold(self):
        """Bold items are wrapped in bold markup"""
        outline = topic("Root", topic("B", style_properties=BOLD))
        assert document(outline, header_levels=1).endswith("  * **B**\n")

    def test_italic_markdown(self):
        """Markdown italics use single stars"""
        outline = topic("Root", topic("I", style_properties=ITALIC))
        assert document(outline, header_levels=1).endswith("  * *I*\n")

    def test_italic_dokuwiki(self):
        """Dokuwiki italics use double slashes"""
        outline = topic("Root", topic("I", style_properties=ITALIC))
        assert document(outline, style="doku", header_levels=1).endswith("  * //I//\n")

    def test_bold_wins_over_italic(self):
        """Bold and italic together render as bold"""
        outline = topic("Root", topic("BI", style_properties={**BOLD, **ITALIC}))
        assert document(outline, header_levels=1).endswith("  * **BI**\n")


class TestVerbatimKinds:
    """Test suppressed, table, markup and page topics"""

    def test_skip_drops_subtree(self):
        """A skipped topic drops its whole subtree"""
        outline = topic("Root", topic("Draft [skip]", topic("Hidden")), topic("Shown"))
        text = document(outline, header_levels=1)
        assert "Draft" not in text
        assert "Hidden" not in text
        assert "  * Shown\n" in text

    def test_table_verbatim(self):
        """Table rows are copied and their children ignored"""
        outline = topic("Root", topic("| a | b |", topic("ignored")))
        assert document(outline, header_levels=1) == "\n\n# Root\n\n\n| a | b |\n\n"

    def test_raw_markup_verbatim(self):
        """Raw markup is copied as is"""
        outline = topic("Root", topic("<WRAP center>x</WRAP>"))
        assert "\n<WRAP center>x</WRAP>\n\n" in document(outline, header_levels=1)

    def test_page_inclusion(self):
        """Page inclusions are copied as is"""
        outline = topic("Root", topic("{{page>ns:page}}"))
        assert document(outline, header_levels=1).endswith("{{page>ns:page}}\n")

    def test_empty_root_title(self):
        """An empty root still yields an item"""
        assert document(topic(""), header_levels=0) == "  * \n"


class TestHeadingContext:
    """Test heading bookkeeping used for slide titles"""

    def test_deeper_levels_cleared(self):
        """Setting a heading clears the deeper ones"""
        headings = HeadingContext()
        headings.heading_set(1, "Root")
        headings.heading_set(2, "Sec")
        headings.heading_set(3, "Sub")
        headings.heading_set(2, "Other")
        assert headings.heading_get(3) == ""
        assert headings.section_get() == "Other"

    def test_section_falls_back_to_level_one(self):
        """Without a section the level one heading is used"""
        headings = HeadingContext()
        headings.heading_set(1, "Root")
        assert headings.section_get() == "Root"

    @pytest.mark.parametrize("depth,expected", [(2, "Sec"), (3, "Sec - Sub")])
    def test_slide_title(self, depth, expected):
        """Slide titles join the section and subsection"""
        headings = HeadingContext()
        headings.heading_set(1, "Root")
        headings.heading_set(2, "Sec")
        headings.heading_set(3, "Sub")
        assert headings.slideTitle_get(depth) == expected
