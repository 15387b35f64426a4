"""
Board Models for Portfolio
==========================

Models for card geometry, placements, drag sessions and board snapshots.
"""

from enum import Enum
from typing import List, Optional, Set, Tuple
from pydantic import BaseModel, Field


class PlacementKind(str, Enum):
    """How a card gets its position."""
    FIXED = "fixed"
    RANDOM = "random"


class Band(str, Enum):
    """Reserved horizontal bands of the page."""
    HEADER = "header"
    FOOTER = "footer"
    FILTER = "filter"


class PointerSource(str, Enum):
    """Input device behind a pointer event."""
    MOUSE = "mouse"
    TOUCH = "touch"


class Viewport(BaseModel):
    """Visible window size in pixels."""
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class Box(BaseModel):
    """Axis-aligned bounding box in container pixels."""
    left: float
    top: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def intersection_area(self, other: "Box") -> float:
        """Area shared with another box, 0 when they do not overlap."""
        overlap_width = min(self.left + self.width, other.left + other.width) - max(self.left, other.left)
        overlap_height = min(self.top + self.height, other.top + other.height) - max(self.top, other.top)
        if overlap_width > 0 and overlap_height > 0:
            return overlap_width * overlap_height
        return 0.0


class Card(BaseModel):
    """A card on the board, fixed or randomly placed."""
    id: str
    kind: PlacementKind = PlacementKind.RANDOM
    tags: Set[str] = Field(default_factory=set)
    x: float = 0.0
    y: float = 0.0
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    rotation: float = 0.0
    visible: bool = True
    z_index: Optional[int] = None
    dragging: bool = False
    html: Optional[str] = None
    link: Optional[str] = None

    @property
    def box(self) -> Box:
        return Box(left=self.x, top=self.y, width=self.width, height=self.height)


class Placement(BaseModel):
    """Where the layout engine put one random card."""
    card_id: str
    x: float
    y: float
    rotation: float
    attempts: int
    exhausted: bool = False


class LayoutResult(BaseModel):
    """Outcome of one layout pass."""
    placements: List[Placement] = Field(default_factory=list)
    obstacles: List[Box] = Field(default_factory=list)


class TouchPoint(BaseModel):
    """A single touch contact."""
    client_x: float
    client_y: float
    identifier: int = 0


class PointerEvent(BaseModel):
    """Pointer or touch event forwarded by the page."""
    client_x: float = 0.0
    client_y: float = 0.0
    source: PointerSource = PointerSource.MOUSE
    touches: List[TouchPoint] = Field(default_factory=list)
    pointer_id: Optional[str] = None
    # Mouse button bitmask as reported by the browser, None when unknown
    buttons: Optional[int] = None

    @property
    def released(self) -> bool:
        """A mouse event reporting no pressed button."""
        return self.source == PointerSource.MOUSE and self.buttons == 0

    @property
    def stream(self) -> str:
        """Input stream key; sessions on the same stream move together."""
        if self.pointer_id:
            return self.pointer_id
        return self.source.value

    def position(self) -> Tuple[float, float]:
        """Pointer coordinates, taken from the first touch point when present."""
        if self.touches:
            first = self.touches[0]
            return first.client_x, first.client_y
        return self.client_x, self.client_y


class DragSession(BaseModel):
    """Ephemeral state of one pressed card."""
    card_id: str
    stream: str
    offset_x: float
    offset_y: float
    pressed: bool = True
    z_index: int


class CardGeometry(BaseModel):
    """Card as measured by the page."""
    id: str
    kind: PlacementKind = PlacementKind.RANDOM
    tags: List[str] = Field(default_factory=list)
    left: float = 0.0
    top: float = 0.0
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)


class BoardGeometry(BaseModel):
    """Measured DOM state reported by the page."""
    viewport: Viewport = Field(default_factory=lambda: Viewport(width=1280, height=800))
    header_height: Optional[float] = None
    footer_height: Optional[float] = None
    filter_height: Optional[float] = None
    cards: List[CardGeometry] = Field(default_factory=list)
    filters: List[str] = Field(default_factory=list)


class FilterControlState(BaseModel):
    """A filter button and whether it is engaged."""
    tag: str
    active: bool = False


class BoardSnapshot(BaseModel):
    """Everything the page needs to render the board."""
    session_id: str
    viewport: Viewport
    cards: List[Card] = Field(default_factory=list)
    filters: List[FilterControlState] = Field(default_factory=list)
    active_filters: List[str] = Field(default_factory=list)
