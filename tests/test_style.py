"""
Style loading tests
"""

import pytest

from mapdown.lib.style import Style, StyleError


class TestPackagedStyles:
    """Test the packaged markdown and dokuwiki styles"""

    @pytest.mark.parametrize("name,canonical,extension", [
        ("md", "markdown", ".md"),
        ("markdown", "markdown", ".md"),
        ("doku", "dokuwiki", ".txt"),
        ("DokuWiki", "dokuwiki", ".txt"),
    ])
    def test_aliases(self, name, canonical, extension):
        """Short and long names resolve to the same style"""
        style = Style(name)
        assert style.name == canonical
        assert style.extension == extension

    def test_markdown_headings(self):
        """Markdown headings add a hash per level"""
        style = Style("md")
        assert style.headingLevels_count() == 6
        assert style.heading_format(1, "T") == "# T"
        assert style.heading_format(3, "T") == "### T"

    def test_dokuwiki_headings(self):
        """Dokuwiki headings lose an equals sign per level"""
        style = Style("doku")
        assert style.headingLevels_count() == 5
        assert style.heading_format(1, "T") == "====== T ======"
        assert style.heading_format(5, "T") == "== T =="

    def test_heading_level_clamped(self):
        """Out of range levels are clamped"""
        assert Style("doku").heading_format(9, "T") == "== T =="
        assert Style("md").heading_format(0, "T") == "# T"

    def test_emphasis(self):
        """Bold and italic markup per style"""
        assert Style("md").italic_wrap("x") == "*x*"
        assert Style("doku").italic_wrap("x") == "//x//"
        assert Style("doku").bold_wrap("x") == "**x**"

    def test_line_breaks(self):
        """Line break markup per style"""
        assert Style("md").lineBreaks_convert("a\nb") == "a\\\nb"
        assert Style("md").lineEnd_get() == "\\"
        assert Style("doku").lineBreaks_convert("a\nb") == "a \\\\ b"


class TestStyleErrors:
    """Test unknown and malformed styles"""

    def test_unknown_style(self):
        """An unknown style name is reported"""
        with pytest.raises(StyleError, match="not found"):
            Style("latex")

    def test_custom_styles_dir(self, tmp_path):
        """Styles load from a custom directory"""
        (tmp_path / "plain.yaml").write_text(
            "extension: .txt\nline_break: ' '\nbold: ['', '']\nitalic: ['', '']\n"
            "headings:\n  - ['', '']\n"
        )
        style = Style("plain", styles_dir=str(tmp_path))
        assert style.headingLevels_count() == 1
        assert style.lineBreaks_convert("a\nb") == "a b"

    def test_invalid_yaml(self, tmp_path):
        """Unparsable YAML is reported"""
        (tmp_path / "broken.yaml").write_text("headings: [unclosed\n")
        with pytest.raises(StyleError, match="Failed to parse"):
            Style("broken", styles_dir=str(tmp_path))

    def test_missing_headings(self, tmp_path):
        """A style without headings is rejected"""
        (tmp_path / "bare.yaml").write_text("extension: .txt\n")
        with pytest.raises(StyleError, match="headings"):
            Style("bare", styles_dir=str(tmp_path))

    def test_bad_pair(self, tmp_path):
        """A markup pair needs two strings"""
        (tmp_path / "odd.yaml").write_text("bold: ['*']\nheadings:\n  - ['# ', '']\n")
        with pytest.raises(StyleError, match="bold"):
            Style("odd", styles_dir=str(tmp_path))
