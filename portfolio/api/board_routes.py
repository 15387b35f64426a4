"""
Board Routes
============

API routes for board sessions: layout, resize, filters and dragging.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..board.board_controller import BoardController
from ..models.board_models import BoardGeometry, BoardSnapshot, Card, PointerEvent

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/board", tags=["board"])

# Injected by server
state_manager = None


class ResizeRequest(BaseModel):
    """New viewport size."""
    width: float
    height: float


class FilterToggleResponse(BaseModel):
    """Filter state after a toggle."""
    tag: str
    active: bool
    active_filters: List[str]
    cards: List[Card]


class PointerResponse(BaseModel):
    """Cards touched by a pointer event."""
    prevent_default: bool = False
    cards: List[Card]


def _get_board(session_id: str) -> BoardController:
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    board = state_manager.get_session(session_id)
    if not board:
        raise HTTPException(status_code=404, detail="Session not found")
    return board


def _dragged_cards(board: BoardController, card_ids: List[str]) -> List[Card]:
    cards = [board.surface.get_card(card_id) for card_id in card_ids]
    return [c.model_copy() for c in cards if c is not None]


@router.post("/session")
async def create_session(geometry: Optional[BoardGeometry] = None) -> BoardSnapshot:
    """Create a board from the page's measured DOM and lay it out."""
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    board = state_manager.create_session(geometry)
    return board.snapshot()


@router.get("/state/{session_id}")
async def get_state(session_id: str) -> BoardSnapshot:
    """Get board state for session."""
    return _get_board(session_id).snapshot()


@router.delete("/state/{session_id}")
async def delete_session(session_id: str):
    """Drop a board session."""
    if not state_manager:
        raise HTTPException(status_code=500, detail="State manager not initialized")

    if not state_manager.remove_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")

    return {"message": "Session removed", "session_id": session_id}


@router.post("/{session_id}/layout")
async def layout(session_id: str) -> BoardSnapshot:
    """Re-run the layout immediately."""
    board = _get_board(session_id)
    board.layout_cards()
    return board.snapshot()


@router.post("/{session_id}/resize")
async def resize(session_id: str, request: ResizeRequest) -> BoardSnapshot:
    """
    Record a viewport change and answer once resizing settles.

    Every request of a burst resolves with the board after the single
    relayout that the burst produced.
    """
    board = _get_board(session_id)
    relaid_out = await board.resize_and_wait(request.width, request.height)
    if not relaid_out:
        logger.info(f"[BOARD-ROUTES] Relayout for {session_id} was cancelled")
    return board.snapshot()


@router.post("/{session_id}/filters/{tag}/toggle")
async def toggle_filter(session_id: str, tag: str) -> FilterToggleResponse:
    """Engage or release one tag filter."""
    board = _get_board(session_id)
    active = board.toggle_filter(tag)
    return FilterToggleResponse(
        tag=tag,
        active=active,
        active_filters=board.filters.active_tags(),
        cards=board.snapshot().cards
    )


@router.post("/{session_id}/cards/{card_id}/pointer-down")
async def pointer_down(session_id: str, card_id: str, event: PointerEvent) -> PointerResponse:
    """Start dragging a card."""
    board = _get_board(session_id)
    if not board.pointer_down(card_id, event):
        raise HTTPException(status_code=404, detail="Card not found")
    return PointerResponse(cards=_dragged_cards(board, [card_id]))


@router.post("/{session_id}/pointer-move")
async def pointer_move(session_id: str, event: PointerEvent) -> PointerResponse:
    """Move the cards pressed on this input stream."""
    board = _get_board(session_id)
    moving = [s.card_id for s in board.drag.sessions.values() if s.stream == event.stream]
    prevent_default = board.pointer_move(event)
    return PointerResponse(prevent_default=prevent_default, cards=_dragged_cards(board, moving))


@router.post("/{session_id}/pointer-up")
async def pointer_up(session_id: str, event: PointerEvent) -> PointerResponse:
    """Release the cards pressed on this input stream."""
    board = _get_board(session_id)
    released = board.pointer_up(event)
    return PointerResponse(cards=_dragged_cards(board, released))
