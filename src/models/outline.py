"""
Outline data model

Defines the in-memory shape of a mind map topic as handed over by the
outline reader. Nodes are immutable; the compiler only reads them.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class OutlineNode:
    """
    One topic of the outline tree

    Attributes:
        title: Topic text, possibly multi-line and possibly carrying inline
               tokens (e.g. "[level 3]", "[skip]")
        children: Attached child topics, in render order
        style_properties: Style properties of the topic
                          (e.g. {"fo:font-weight": "bold"})
        markers: Marker ids attached to the topic (e.g. ("tag-red",))

    Example:
        OutlineNode(
            title="Intro",
            children=(OutlineNode(title="Point A"),),
        )
    """
    title: str = ""
    children: Tuple["OutlineNode", ...] = field(default_factory=tuple)
    style_properties: Dict[str, str] = field(default_factory=dict, hash=False, compare=True)
    markers: Tuple[str, ...] = field(default_factory=tuple)
