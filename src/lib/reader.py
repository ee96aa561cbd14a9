"""
Reader for XMind files

An .xmind file is a zip archive; its content.json member holds a list of
sheets, each with a rootTopic:

    [
      {
        "title": "Sheet 1",
        "rootTopic": {
          "title": "Intro",
          "style": {"properties": {"fo:font-weight": "bold"}},
          "markers": [{"markerId": "tag-red"}],
          "children": {"attached": [{"title": "Point A"}]}
        }
      }
    ]

The reader turns the selected sheet's root topic into an OutlineNode tree.
"""

import json
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config import appsettings
from ..models.outline import OutlineNode
from .log import LOG


XMIND_EXTENSION = ".xmind"


class ReaderError(Exception):
    """Raised when an XMind file cannot be opened or decoded"""
    pass


class OutlineReader:
    """
    Decodes an XMind file into an outline tree

    Example:
        >>> reader = OutlineReader("talk.xmind")
        >>> root = reader.outline_read()
        >>> root.title
        'Intro'
    """

    def __init__(
        self,
        path: Union[str, Path],
        sheet: int = 0,
        content_file: Optional[str] = None,
    ) -> None:
        """
        Args:
            path: Path to the .xmind file
            sheet: Index of the sheet to convert
            content_file: Archive member holding the sheets
                          (default: settings.content_file)
        """
        self.path = Path(path)
        self.sheet = sheet
        self.content_file = content_file or appsettings.content_file

    def sheets_read(self) -> List[Dict[str, Any]]:
        """
        Open the archive and decode its sheets

        Raises:
            ReaderError: Missing file, wrong extension, bad archive, missing
                         content member or undecodable JSON
        """
        if not self.path.exists():
            raise ReaderError(f"{self.path} does not exist")
        if self.path.suffix.lower() != XMIND_EXTENSION:
            raise ReaderError(f"{self.path} has a wrong extension (expected {XMIND_EXTENSION})")

        try:
            with zipfile.ZipFile(self.path) as archive:
                raw = archive.read(self.content_file)
        except zipfile.BadZipFile as e:
            raise ReaderError(f"{self.path} is not a valid XMind archive: {e}")
        except KeyError:
            raise ReaderError(f"{self.path} has no {self.content_file}")

        if not raw:
            raise ReaderError(f"{self.path}: extracted {self.content_file} is empty")

        LOG(f"Decoding {self.content_file} ({len(raw)} bytes)", level=2)
        try:
            sheets = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ReaderError(f"{self.path}: cannot decode {self.content_file}: {e}")

        if not isinstance(sheets, list) or not sheets:
            raise ReaderError(f"{self.path}: {self.content_file} holds no sheet")
        return sheets

    def sheets_list(self) -> List[str]:
        """Titles of the sheets of the file, in order"""
        return [str(sheet.get("title", "")) for sheet in self.sheets_read()]

    def outline_read(self) -> OutlineNode:
        """
        Read the selected sheet's root topic

        Raises:
            ReaderError: On any reading error, an out-of-range sheet index or
                         a sheet without root topic
        """
        sheets = self.sheets_read()
        if not 0 <= self.sheet < len(sheets):
            raise ReaderError(
                f"{self.path}: sheet {self.sheet} out of range ({len(sheets)} sheet(s))"
            )
        root = sheets[self.sheet].get("rootTopic")
        if not isinstance(root, dict):
            raise ReaderError(f"{self.path}: sheet {self.sheet} has no root topic")
        return self.node_decode(root)

    def node_decode(self, topic: Dict[str, Any]) -> OutlineNode:
        """Convert a JSON topic and its attached children"""
        children = []
        attached = (topic.get("children") or {}).get("attached") or []
        for child in attached:
            if isinstance(child, dict):
                children.append(self.node_decode(child))

        properties = (topic.get("style") or {}).get("properties") or {}
        markers = [
            marker["markerId"]
            for marker in topic.get("markers") or []
            if isinstance(marker, dict) and "markerId" in marker
        ]
        return OutlineNode(
            title=str(topic.get("title") or ""),
            children=tuple(children),
            style_properties={str(k): str(v) for k, v in properties.items()},
            markers=tuple(markers),
        )
