"""
Board Controller
================

One board per browser session: the surface plus the layout, drag and filter
controllers that act on it, and the debounced relayout on resize.
"""

import logging
import random
from typing import List, Optional

from ..models.board_models import (
    BoardSnapshot, LayoutResult, PointerEvent, Viewport
)
from ..models.project_models import ProjectRecord
from ..services.card_factory import CardFactory
from .debounce import DEFAULT_DELAY_SEC, Debouncer
from .drag_controller import DragController
from .filter_controller import FilterController
from .layout_engine import LayoutEngine
from .surface import BoardSurface

logger = logging.getLogger(__name__)


class BoardController:
    """Explicit owner of all mutable board state."""

    def __init__(
        self,
        session_id: str,
        surface: BoardSurface,
        rng: Optional[random.Random] = None,
        resize_delay: float = DEFAULT_DELAY_SEC,
        card_factory: Optional[CardFactory] = None
    ):
        self.session_id = session_id
        self.surface = surface
        self.engine = LayoutEngine(rng=rng)
        self.filters = FilterController()
        self.drag = DragController(surface)
        self.card_factory = card_factory or CardFactory()
        self.resize_debouncer = Debouncer(self.layout_cards, delay=resize_delay)
        self.last_layout: Optional[LayoutResult] = None

    def add_projects(self, records: List[ProjectRecord]) -> int:
        """Materialize project records as cards. Returns how many were added."""
        cards = self.card_factory.from_projects(records)
        for card in cards:
            # Keep the page's measurement and placement kind when it already reported this card
            existing = self.surface.get_card(card.id)
            if existing is not None:
                card.kind = existing.kind
                card.width, card.height = existing.width, existing.height
                card.x, card.y = existing.x, existing.y
            self.surface.add_card(card)
        return len(cards)

    def layout_cards(self) -> LayoutResult:
        """Place every random card and apply the current filter."""
        self.last_layout = self.engine.layout_cards(self.surface, self.filters.is_visible)
        self.filters.apply(self.surface)
        logger.info(
            f"[BOARD] {self.session_id}: laid out {len(self.last_layout.placements)} cards, "
            f"{sum(1 for p in self.last_layout.placements if p.exhausted)} at attempt budget"
        )
        return self.last_layout

    def resize(self, width: float, height: float) -> None:
        """Record the new viewport and schedule a relayout after the resize settles."""
        self.surface.set_viewport(Viewport(width=width, height=height))
        self.resize_debouncer.trigger()

    async def resize_and_wait(self, width: float, height: float) -> bool:
        """Like `resize`, then wait until the debounced relayout has run."""
        self.resize(width, height)
        return await self.resize_debouncer.wait()

    def toggle_filter(self, tag: str) -> bool:
        return self.filters.toggle(tag, self.surface)

    def pointer_down(self, card_id: str, event: PointerEvent) -> bool:
        return self.drag.pointer_down(card_id, event) is not None

    def pointer_move(self, event: PointerEvent) -> bool:
        return self.drag.pointer_move(event)

    def pointer_up(self, event: PointerEvent) -> List[str]:
        return self.drag.pointer_up(event)

    def close(self) -> None:
        self.resize_debouncer.cancel()

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            session_id=self.session_id,
            viewport=self.surface.viewport(),
            cards=[c.model_copy(deep=True) for c in self.surface.cards()],
            filters=[f.model_copy() for f in self.surface.filters()],
            active_filters=self.filters.active_tags()
        )
