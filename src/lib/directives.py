"""
Scoped directive state for the linear renderer

Two stacks follow the recursion of the traversal:

- DirectiveStack holds the list options (no-list, only-bold, only-tagged)
  pushed by "options" topics. A frame is entered when a node starts iterating
  its children and left when the iteration ends, so an options topic affects
  its following siblings and their descendants and nothing else.
- HeaderDepth holds the number of heading levels, overridden by an inline
  [level N] token for one node and its subtree.

Both expose a scope() context manager: entering pushes a frame, leaving pops
it, whatever happens inside.
"""

from contextlib import contextmanager
from typing import FrozenSet, Iterable, Iterator, List, Optional

from ..models.directives import ListOption
from .log import LOG


LIST_OPTION_NAMES = {option.value: option for option in ListOption}


class DirectiveStack:
    """
    Stack of active list option sets

    Example:
        >>> stack = DirectiveStack()
        >>> with stack.scope():
        ...     stack.options_push(["no-list"])
        ...     stack.active_has(ListOption.NO_LIST)
        True
        >>> stack.active_has(ListOption.NO_LIST)
        False
    """

    def __init__(self) -> None:
        self.frames: List[FrozenSet[ListOption]] = [frozenset()]

    @contextmanager
    def scope(self) -> Iterator[None]:
        """Open a frame inheriting the current options; pop it on exit"""
        self.frames.append(self.frames[-1])
        try:
            yield
        finally:
            self.frames.pop()

    def options_push(self, names: Iterable[str]) -> List[str]:
        """
        Add options to the current frame

        Options accumulate with the ones already active; they never replace
        them.

        Args:
            names: Option names as written in the outline

        Returns:
            Names that are not known options (ignored)
        """
        added = set()
        unknown = []
        for name in names:
            option = LIST_OPTION_NAMES.get(name.strip().lower())
            if option is None:
                unknown.append(name)
                continue
            added.add(option)
        if added:
            self.frames[-1] = self.frames[-1] | added
            LOG(f"Options active: {sorted(o.value for o in self.frames[-1])}", level=3)
        return unknown

    def active_get(self) -> FrozenSet[ListOption]:
        return self.frames[-1]

    def active_has(self, option: ListOption) -> bool:
        return option in self.frames[-1]

    def depth_get(self) -> int:
        """Number of open frames (the root frame excluded)"""
        return len(self.frames) - 1


class HeaderDepth:
    """
    Active number of heading levels, lexically scoped

    Args:
        levels: Configured number of heading levels
        maximum: Deepest heading level the output style can express
    """

    def __init__(self, levels: int, maximum: int) -> None:
        self.maximum = maximum
        self.stack: List[int] = [self.clamp(levels)]

    def clamp(self, levels: int) -> int:
        if levels > self.maximum:
            LOG(f"Header levels {levels} clamped to {self.maximum}", level=2)
            return self.maximum
        return max(0, levels)

    @contextmanager
    def scope(self, override: Optional[int]) -> Iterator[None]:
        """Apply an override for the enclosed subtree; no-op if None"""
        if override is None:
            yield
            return
        self.stack.append(self.clamp(override))
        try:
            yield
        finally:
            self.stack.pop()

    def active_get(self) -> int:
        return self.stack[-1]
