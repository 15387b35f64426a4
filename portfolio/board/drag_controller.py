"""
Drag Controller
===============

Pointer dragging for cards (mouse and touch).

Pointer-down is per card; pointer-move and pointer-up are document level, so
a drag keeps going when the pointer leaves the card. Each card has at most one
session. Sessions are grouped by input stream: a mouse move only moves the
cards pressed by the mouse, a touch stream only its own cards.
"""

import logging
from typing import Dict, List, Optional

from ..models.board_models import DragSession, PointerEvent, PointerSource
from .surface import Surface

logger = logging.getLogger(__name__)

BASE_Z_INDEX = 100


class DragController:
    """Tracks drag sessions and the board-wide stacking counter."""

    def __init__(self, surface: Surface, base_z_index: int = BASE_Z_INDEX):
        self.surface = surface
        self.z_counter = base_z_index
        self.sessions: Dict[str, DragSession] = {}

    def pointer_down(self, card_id: str, event: PointerEvent) -> Optional[DragSession]:
        """Press a card: remember the grab offset and raise it to the top."""
        if card_id not in self.surface.all_elements():
            return None

        pointer_x, pointer_y = event.position()
        box = self.surface.measure(card_id)

        self.z_counter += 1
        self.surface.set_z_index(card_id, self.z_counter)
        self.surface.set_dragging(card_id, True)

        session = DragSession(
            card_id=card_id,
            stream=event.stream,
            offset_x=pointer_x - box.left,
            offset_y=pointer_y - box.top,
            z_index=self.z_counter
        )
        self.sessions[card_id] = session
        logger.debug(f"[DRAG] down {card_id} stream={session.stream} z={session.z_index}")
        return session

    def pointer_move(self, event: PointerEvent) -> bool:
        """
        Move every pressed card on the event's stream.

        A mouse move with no button held means the release was missed, so the
        stream's cards are dropped where they are instead of moved.

        Returns:
            True when the browser default (touch scrolling) should be suppressed
        """
        moved = self._sessions_on(event.stream)
        if not moved:
            return False

        if event.released:
            self.pointer_up(event)
            return False

        pointer_x, pointer_y = event.position()
        for session in moved:
            self.surface.set_position(
                session.card_id,
                pointer_x - session.offset_x,
                pointer_y - session.offset_y
            )
        return event.source == PointerSource.TOUCH

    def pointer_up(self, event: PointerEvent) -> List[str]:
        """Release every card pressed on the event's stream."""
        released = []
        for session in self._sessions_on(event.stream):
            session.pressed = False
            self.surface.set_dragging(session.card_id, False)
            del self.sessions[session.card_id]
            released.append(session.card_id)
        if released:
            logger.debug(f"[DRAG] up {released} stream={event.stream}")
        return released

    def _sessions_on(self, stream: str) -> List[DragSession]:
        return [s for s in self.sessions.values() if s.pressed and s.stream == stream]
