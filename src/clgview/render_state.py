from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RenderState:
    """
    Mutable state for one render pass: whether we are inside a list run, and
    the title and list-item counters. Counters only ever increase.
    """

    in_list: bool = False
    title_count: int = 0
    list_count: int = 0

    def next_title_id(self) -> int:
        n = self.title_count
        self.title_count += 1
        return n

    def next_list_id(self) -> int:
        n = self.list_count
        self.list_count += 1
        return n

    def enter_list(self) -> bool:
        """Mark the state as inside a list. True if a container must be opened."""
        opening = not self.in_list
        self.in_list = True
        return opening

    def leave_list(self) -> bool:
        """Mark the state as outside a list. True if a container must be closed."""
        closing = self.in_list
        self.in_list = False
        return closing
