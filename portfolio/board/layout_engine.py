"""
Layout Engine
=============

Places random cards at pseudo-random positions between the header/filter bar
and the footer, keeping each card from sitting too much on top of the cards
placed before it.

Placement is rejection sampling: draw a position, compare it against every
obstacle so far, redraw when one overlap is too large. After the attempt
budget the last draw is kept as is, so layouts may overlap but never fail.
"""

import logging
import random
from typing import Callable, List, Optional, Set

from ..models.board_models import Band, Box, LayoutResult, Placement
from .surface import Surface

logger = logging.getLogger(__name__)

DEFAULT_CARD_WIDTH = 250
DEFAULT_CARD_HEIGHT = 200
HORIZONTAL_MARGIN = 20
VERTICAL_MARGIN = 100
MAX_ATTEMPTS = 40
MAX_OVERLAP_RATIO = 0.45
MAX_ROTATION_DEG = 15


class LayoutEngine:
    """Assigns positions and rotations to the random cards of a surface."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = MAX_ATTEMPTS,
        max_overlap_ratio: float = MAX_OVERLAP_RATIO,
        horizontal_margin: float = HORIZONTAL_MARGIN,
        vertical_margin: float = VERTICAL_MARGIN,
        max_rotation: float = MAX_ROTATION_DEG
    ):
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.max_overlap_ratio = max_overlap_ratio
        self.horizontal_margin = horizontal_margin
        self.vertical_margin = vertical_margin
        self.max_rotation = max_rotation

    def layout_cards(
        self,
        surface: Surface,
        is_visible: Optional[Callable[[Set[str]], bool]] = None
    ) -> LayoutResult:
        """
        Run one layout pass over the surface.

        Args:
            surface: Rendering surface holding the cards
            is_visible: Filter rule applied to each placed card's tags;
                cards stay visible when omitted

        Returns:
            LayoutResult with one Placement per random card and the final
            obstacle list (fixed boxes first, then placed cards in order)
        """
        result = LayoutResult()
        random_ids = surface.random_elements()
        if not random_ids:
            return result

        viewport = surface.viewport()
        header_height = surface.band_height(Band.HEADER)
        footer_height = surface.band_height(Band.FOOTER)
        filter_height = surface.band_height(Band.FILTER)

        obstacles: List[Box] = [surface.measure(card_id) for card_id in surface.fixed_elements()]

        for card_id in random_ids:
            measured = surface.measure(card_id)
            width = measured.width or DEFAULT_CARD_WIDTH
            height = measured.height or DEFAULT_CARD_HEIGHT

            usable_width = viewport.width - width - self.horizontal_margin
            usable_height = (
                viewport.height - header_height - footer_height - filter_height
                - height - self.vertical_margin
            )

            x, y, attempts, exhausted = self._sample_position(
                obstacles, width, height, usable_width, usable_height, header_height + filter_height
            )
            rotation = self.rng.random() * 2 * self.max_rotation - self.max_rotation

            surface.set_position(card_id, x, y)
            surface.set_rotation(card_id, rotation)

            obstacles.append(Box(left=x, top=y, width=width, height=height))

            if is_visible is not None:
                surface.set_visible(card_id, is_visible(surface.tags(card_id)))

            result.placements.append(Placement(
                card_id=card_id,
                x=x,
                y=y,
                rotation=rotation,
                attempts=attempts,
                exhausted=exhausted
            ))

        result.obstacles = obstacles
        logger.debug(f"[LAYOUT] Placed {len(result.placements)} cards among {len(obstacles)} boxes")
        return result

    def _sample_position(
        self,
        obstacles: List[Box],
        width: float,
        height: float,
        usable_width: float,
        usable_height: float,
        top_offset: float
    ):
        """Draw candidates until one fits or the budget runs out."""
        limit = self.max_overlap_ratio * width * height
        x = y = 0.0
        attempts = 0
        too_much_overlap = True

        while too_much_overlap and attempts < self.max_attempts:
            too_much_overlap = False
            attempts += 1

            x = self.rng.random() * usable_width
            y = top_offset + self.rng.random() * usable_height
            candidate = Box(left=x, top=y, width=width, height=height)

            for placed in obstacles:
                if candidate.intersection_area(placed) > limit:
                    too_much_overlap = True
                    break

        return x, y, attempts, too_much_overlap
