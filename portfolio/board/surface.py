"""
Board Surface
=============

Capability interface between the board controllers and whatever renders the
cards, plus the in-memory surface used by server sessions.

The controllers only ever measure and mutate cards through this interface, so
the placement, drag and filter logic runs without a browser.
"""

import logging
from typing import Dict, List, Optional, Protocol, Set

from ..models.board_models import (
    Band, BoardGeometry, Box, Card, FilterControlState, PlacementKind, Viewport
)

logger = logging.getLogger(__name__)


class Surface(Protocol):
    """What the board needs from a rendering environment."""

    def viewport(self) -> Viewport: ...

    def band_height(self, band: Band) -> float: ...

    def fixed_elements(self) -> List[str]: ...

    def random_elements(self) -> List[str]: ...

    def all_elements(self) -> List[str]: ...

    def measure(self, element_id: str) -> Box: ...

    def tags(self, element_id: str) -> Set[str]: ...

    def set_position(self, element_id: str, x: float, y: float) -> None: ...

    def set_rotation(self, element_id: str, degrees: float) -> None: ...

    def set_visible(self, element_id: str, visible: bool) -> None: ...

    def set_z_index(self, element_id: str, z_index: int) -> None: ...

    def set_dragging(self, element_id: str, dragging: bool) -> None: ...

    def filter_tags(self) -> List[str]: ...

    def set_filter_active(self, tag: str, active: bool) -> None: ...


class BoardSurface:
    """
    In-memory surface.

    Cards are kept in insertion (DOM) order. Band heights that were never
    reported count as absent, i.e. 0. Every mutator ignores unknown ids.
    """

    def __init__(
        self,
        viewport: Viewport,
        bands: Optional[Dict[Band, float]] = None,
        cards: Optional[List[Card]] = None,
        filters: Optional[List[str]] = None
    ):
        self._viewport = viewport
        self._bands: Dict[Band, float] = dict(bands or {})
        self._cards: Dict[str, Card] = {}
        self._filters: Dict[str, FilterControlState] = {}
        for card in cards or []:
            self.add_card(card)
        for tag in filters or []:
            self._filters.setdefault(tag, FilterControlState(tag=tag))

    @classmethod
    def from_geometry(cls, geometry: BoardGeometry) -> "BoardSurface":
        """Build a surface from what the page measured."""
        bands = {}
        if geometry.header_height is not None:
            bands[Band.HEADER] = geometry.header_height
        if geometry.footer_height is not None:
            bands[Band.FOOTER] = geometry.footer_height
        if geometry.filter_height is not None:
            bands[Band.FILTER] = geometry.filter_height

        cards = [
            Card(
                id=c.id,
                kind=c.kind,
                tags=set(c.tags),
                x=c.left,
                y=c.top,
                width=c.width,
                height=c.height
            )
            for c in geometry.cards
        ]
        return cls(geometry.viewport, bands=bands, cards=cards, filters=geometry.filters)

    # -- capability interface ------------------------------------------------

    def viewport(self) -> Viewport:
        return self._viewport

    def band_height(self, band: Band) -> float:
        return self._bands.get(band, 0.0)

    def fixed_elements(self) -> List[str]:
        return [c.id for c in self._cards.values() if c.kind == PlacementKind.FIXED]

    def random_elements(self) -> List[str]:
        return [c.id for c in self._cards.values() if c.kind == PlacementKind.RANDOM]

    def all_elements(self) -> List[str]:
        return list(self._cards)

    def measure(self, element_id: str) -> Box:
        card = self._cards.get(element_id)
        if card is None:
            return Box(left=0, top=0, width=0, height=0)
        return card.box

    def tags(self, element_id: str) -> Set[str]:
        card = self._cards.get(element_id)
        return set(card.tags) if card else set()

    def set_position(self, element_id: str, x: float, y: float) -> None:
        card = self._cards.get(element_id)
        if card:
            card.x = x
            card.y = y

    def set_rotation(self, element_id: str, degrees: float) -> None:
        card = self._cards.get(element_id)
        if card:
            card.rotation = degrees

    def set_visible(self, element_id: str, visible: bool) -> None:
        card = self._cards.get(element_id)
        if card:
            card.visible = visible

    def set_z_index(self, element_id: str, z_index: int) -> None:
        card = self._cards.get(element_id)
        if card:
            card.z_index = z_index

    def set_dragging(self, element_id: str, dragging: bool) -> None:
        card = self._cards.get(element_id)
        if card:
            card.dragging = dragging

    def filter_tags(self) -> List[str]:
        return list(self._filters)

    def set_filter_active(self, tag: str, active: bool) -> None:
        control = self._filters.get(tag)
        if control:
            control.active = active

    # -- board bookkeeping ---------------------------------------------------

    def add_card(self, card: Card) -> None:
        """Append a card; a card with the same id is replaced in place."""
        if card.id in self._cards:
            logger.debug(f"[SURFACE] Replacing card {card.id}")
        self._cards[card.id] = card

    def get_card(self, element_id: str) -> Optional[Card]:
        return self._cards.get(element_id)

    def cards(self) -> List[Card]:
        return list(self._cards.values())

    def filters(self) -> List[FilterControlState]:
        return list(self._filters.values())

    def set_viewport(self, viewport: Viewport) -> None:
        self._viewport = viewport

    def set_band_height(self, band: Band, height: Optional[float]) -> None:
        """Report a band height; None marks the band as absent."""
        if height is None:
            self._bands.pop(band, None)
        else:
            self._bands[band] = height
