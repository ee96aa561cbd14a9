"""
Output dialect loader for mapdown documents.

A style describes how the linear document and the slide deck spell their
markup. Each style is a YAML file in the styles directory containing:
  - name: Style name (e.g. "markdown", "dokuwiki")
  - extension: File extension of the document (".md", ".txt")
  - line_break: Token replacing embedded line breaks in list entries
  - bold / italic: [before, after] emphasis delimiters
  - headings: One [before, after] pair per heading level
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml


STYLE_ALIASES: Dict[str, str] = {
    'md': 'markdown',
    'doku': 'dokuwiki',
}


class StyleError(Exception):
    """Raised when style loading or validation fails"""
    pass


class Style:
    """
    Represents an output dialect.

    Example:
        >>> style = Style("md")
        >>> style.heading_format(2, "Intro")
        '## Intro'
    """

    def __init__(self, style_name: str, styles_dir: Optional[str] = None):
        """
        Load a style by name or alias.

        Args:
            style_name: Style name or alias (e.g., "md", "dokuwiki")
            styles_dir: Path to a styles directory (default: packaged styles)

        Raises:
            StyleError: If the style file doesn't exist or is malformed
        """
        key = style_name.strip().lower()
        self.name = STYLE_ALIASES.get(key, key)
        if styles_dir:
            self.styles_dir = Path(styles_dir)
        else:
            self.styles_dir = Path(__file__).parent.parent / "styles"

        self.config_path = self.styles_dir / f"{self.name}.yaml"
        if not self.config_path.exists():
            raise StyleError(
                f"Style '{style_name}' not found. "
                f"Expected file: {self.config_path}"
            )

        config = self._config_load()
        self.extension: str = str(config.get('extension', '.md'))
        self.line_break: str = str(config.get('line_break', '\n'))
        self.bold: Tuple[str, str] = self._pair_get(config, 'bold')
        self.italic: Tuple[str, str] = self._pair_get(config, 'italic')
        self.headings: List[Tuple[str, str]] = self._headings_get(config)

    def _config_load(self) -> Dict[str, Any]:
        """Load and parse the style YAML file"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StyleError(f"Failed to parse {self.config_path.name}: {e}")
        except OSError as e:
            raise StyleError(f"Failed to load {self.config_path.name}: {e}")
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise StyleError(f"Style '{self.name}' must be a mapping")
        return config

    def _pair_get(self, config: Dict[str, Any], key: str) -> Tuple[str, str]:
        pair = config.get(key, ["", ""])
        if not isinstance(pair, list) or len(pair) != 2:
            raise StyleError(f"Style '{self.name}': '{key}' must be a [before, after] pair")
        return str(pair[0]), str(pair[1])

    def _headings_get(self, config: Dict[str, Any]) -> List[Tuple[str, str]]:
        headings = config.get('headings', [])
        if not isinstance(headings, list) or not headings:
            raise StyleError(f"Style '{self.name}': 'headings' must be a non-empty list")
        result = []
        for pair in headings:
            if not isinstance(pair, list) or len(pair) != 2:
                raise StyleError(f"Style '{self.name}': each heading must be a [before, after] pair")
            result.append((str(pair[0]), str(pair[1])))
        return result

    def headingLevels_count(self) -> int:
        """Number of heading levels this style can express"""
        return len(self.headings)

    def heading_format(self, level: int, text: str) -> str:
        """
        Wrap text in the heading delimiters of a level.

        Levels deeper than the style defines use its deepest heading.
        """
        level = max(1, min(level, self.headingLevels_count()))
        before, after = self.headings[level - 1]
        return f"{before}{text}{after}"

    def bold_wrap(self, text: str) -> str:
        return f"{self.bold[0]}{text}{self.bold[1]}"

    def italic_wrap(self, text: str) -> str:
        return f"{self.italic[0]}{text}{self.italic[1]}"

    def lineBreaks_convert(self, text: str) -> str:
        """Replace embedded newlines by the style's line-break token"""
        return text.replace("\n", self.line_break)

    def lineEnd_get(self) -> str:
        """Line-break token usable at the end of a line (trailing newline removed)"""
        return self.line_break.rstrip("\n")
