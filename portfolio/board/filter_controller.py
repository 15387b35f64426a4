"""
Filter Controller
=================

Multi-select tag filter. A card is shown when no filter is engaged or when it
carries at least one engaged tag.
"""

import logging
from typing import Iterable, List, Optional, Set

from .surface import Surface

logger = logging.getLogger(__name__)


class FilterController:
    """Owns the active filter set of one board."""

    def __init__(self, active: Optional[Iterable[str]] = None):
        self.active: Set[str] = set(active or [])

    def is_visible(self, tags: Iterable[str]) -> bool:
        if not self.active:
            return True
        return not self.active.isdisjoint(tags)

    def toggle(self, tag: str, surface: Optional[Surface] = None) -> bool:
        """
        Flip a tag's membership and refresh the board.

        Returns:
            True when the tag is engaged after the toggle
        """
        if tag in self.active:
            self.active.discard(tag)
            engaged = False
        else:
            self.active.add(tag)
            engaged = True

        logger.info(f"[FILTER] {tag} -> {'on' if engaged else 'off'}, active={sorted(self.active)}")

        if surface is not None:
            surface.set_filter_active(tag, engaged)
            self.apply(surface)
        return engaged

    def apply(self, surface: Surface) -> None:
        """Show or hide every card according to the current set."""
        for card_id in surface.all_elements():
            surface.set_visible(card_id, self.is_visible(surface.tags(card_id)))

    def active_tags(self) -> List[str]:
        return sorted(self.active)
