"""
Board State Manager
===================

Keeps one BoardController per browser session, in memory.

Sessions idle for longer than `session_ttl` seconds are dropped, and at most
`max_sessions` are kept (the least recently used go first). The page deletes
its own session when it is closed; eviction covers pages that never say so.
"""

import logging
import random
import time
import uuid
from typing import Callable, Dict, List, Optional

from ..models.board_models import BoardGeometry
from ..models.project_models import ProjectRecord
from ..services.card_factory import CardFactory
from .board_controller import BoardController
from .debounce import DEFAULT_DELAY_SEC
from .surface import BoardSurface

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SEC = 30 * 60
DEFAULT_MAX_SESSIONS = 500


class BoardStateManager:
    """Manages board sessions."""

    def __init__(
        self,
        projects: Optional[List[ProjectRecord]] = None,
        resize_delay: float = DEFAULT_DELAY_SEC,
        rng_factory: Optional[Callable[[], random.Random]] = None,
        session_ttl: Optional[float] = DEFAULT_SESSION_TTL_SEC,
        max_sessions: Optional[int] = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic
    ):
        self.projects: List[ProjectRecord] = list(projects or [])
        self.resize_delay = resize_delay
        self.rng_factory = rng_factory or random.Random
        self.session_ttl = session_ttl
        self.max_sessions = max_sessions
        self.clock = clock
        self.card_factory = CardFactory()
        # Insertion order doubles as recency order; touching a session moves it to the end
        self._sessions: Dict[str, BoardController] = {}
        self._last_seen: Dict[str, float] = {}
        logger.info(f"[STATE-MANAGER] Initialized with {len(self.projects)} projects")

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(
        self,
        geometry: Optional[BoardGeometry] = None,
        session_id: Optional[str] = None
    ) -> BoardController:
        """
        Create a board from the page's measured geometry and lay it out.

        Without reported cards the home page's static cards are used. Project
        cards are always appended after the reported ones.
        """
        if session_id is None:
            session_id = str(uuid.uuid4())

        geometry = geometry or BoardGeometry()
        surface = BoardSurface.from_geometry(geometry)
        if not geometry.cards:
            for card in self.card_factory.static_cards():
                surface.add_card(card)

        board = BoardController(
            session_id,
            surface,
            rng=self.rng_factory(),
            resize_delay=self.resize_delay,
            card_factory=self.card_factory
        )
        board.add_projects(self.projects)
        board.layout_cards()

        self.evict_expired()
        if self.max_sessions is not None:
            while self._sessions and len(self._sessions) >= self.max_sessions:
                oldest = next(iter(self._sessions))
                logger.info(f"[STATE-MANAGER] Session limit reached, evicting {oldest}")
                self.remove_session(oldest)

        self._sessions[session_id] = board
        self._last_seen[session_id] = self.clock()
        logger.info(f"[STATE-MANAGER] Created session {session_id} with {len(surface.cards())} cards")
        return board

    def get_session(self, session_id: str) -> Optional[BoardController]:
        board = self._sessions.get(session_id)
        if board is None:
            return None
        if self._expired(session_id, self.clock()):
            logger.info(f"[STATE-MANAGER] Session {session_id} expired")
            self.remove_session(session_id)
            return None

        # Mark as most recently used
        self._sessions[session_id] = self._sessions.pop(session_id)
        self._last_seen[session_id] = self.clock()
        return board

    def remove_session(self, session_id: str) -> bool:
        board = self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        if board is None:
            return False
        board.close()
        return True

    def evict_expired(self) -> int:
        """Drop every session idle for longer than the TTL."""
        now = self.clock()
        expired = [sid for sid in self._sessions if self._expired(sid, now)]
        for session_id in expired:
            self.remove_session(session_id)
        if expired:
            logger.info(f"[STATE-MANAGER] Evicted {len(expired)} idle sessions")
        return len(expired)

    def _expired(self, session_id: str, now: float) -> bool:
        if self.session_ttl is None:
            return False
        return now - self._last_seen.get(session_id, now) > self.session_ttl

    def set_projects(self, projects: List[ProjectRecord]) -> None:
        """Replace the project list used for new sessions."""
        self.projects = list(projects)

    def close(self) -> None:
        for board in self._sessions.values():
            board.close()
        self._sessions.clear()
        self._last_seen.clear()
