"""
Drag Controller - turns pointer events into angle/radius updates.

States:
- Idle
- Dragging(node_id): entered on pointer down over a category, left on
  pointer up or when the pointer leaves the canvas

Every event method returns the resulting DragState snapshot, so a drag
sequence can be replayed in tests without a live canvas.

Multi-touch policy is first-wins: while a drag is active, events carrying
a different pointer id are ignored until the active pointer is released.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from orbit.constants import NODE_RADIUS, SELECTED_NODE_RADIUS
from orbit.edit.selection import Inspector
from orbit.geometry import ORIGIN, Point, ViewTransform, to_cartesian, to_polar
from orbit.model import GraphModel

logger = logging.getLogger(__name__)

IDLE = "idle"
DRAGGING = "dragging"


@dataclass(frozen=True)
class DragState:
    """Immutable snapshot of the current drag state."""
    phase: str = IDLE
    node_id: Optional[str] = None
    pointer_id: Optional[int] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase == DRAGGING


class DragController:
    """Owns the drag state machine and writes positions into the model."""

    def __init__(self, model: GraphModel, inspector: Inspector,
                 transform: Optional[ViewTransform] = None,
                 origin: Point = ORIGIN):
        self._model = model
        self._inspector = inspector
        self._transform = transform or ViewTransform()
        self._origin = origin
        self._state = DragState()
        self._on_state_change: List[Callable[[DragState], None]] = []

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    def set_transform(self, transform: ViewTransform) -> None:
        """Replace the screen transform (zoom/pan changed)."""
        self._transform = transform

    def set_on_state_change(self, callback: Callable[[DragState], None]) -> None:
        self._on_state_change.append(callback)

    def _set_state(self, state: DragState) -> DragState:
        if state != self._state:
            self._state = state
            for callback in self._on_state_change:
                callback(state)
        return self._state

    # --- Hit testing ---

    def hit_test(self, canvas_point: Point) -> Optional[str]:
        """
        Return the id of the topmost category whose disc contains the point.

        Later categories are drawn on top, so they are tested first. The
        center node and tool satellites are never drag targets.
        """
        selected_id = self._inspector.selected_id
        for category in reversed(self._model.categories):
            pos = to_cartesian(self._origin, category.angle, category.radius)
            hit_radius = SELECTED_NODE_RADIUS if category.id == selected_id else NODE_RADIUS
            dx, dy = canvas_point.x - pos.x, canvas_point.y - pos.y
            if dx * dx + dy * dy <= hit_radius * hit_radius:
                return category.id
        return None

    # --- Events ---

    def pointer_down(self, screen_point: Point, pointer_id: Optional[int] = None) -> DragState:
        """Pointer pressed somewhere on the canvas; starts a drag if it lands on a node."""
        if self._state.is_dragging:
            return self._state
        node_id = self.hit_test(self._transform.to_canvas(screen_point))
        if node_id is None:
            return self._state
        return self.begin_drag(node_id, pointer_id)

    def begin_drag(self, node_id: str, pointer_id: Optional[int] = None) -> DragState:
        """Start dragging a known node. A drag always selects its node."""
        if self._state.is_dragging:
            logger.debug(f"Ignoring drag of {node_id}: {self._state.node_id} is already being dragged")
            return self._state
        if node_id not in self._model:
            return self._state
        self._inspector.select(node_id)
        return self._set_state(DragState(phase=DRAGGING, node_id=node_id, pointer_id=pointer_id))

    def pointer_move(self, screen_point: Point, pointer_id: Optional[int] = None) -> DragState:
        """
        Apply a move to the dragged node. Moves are applied in the order they
        arrive; each one overwrites the previous angle/radius.
        """
        if not self._state.is_dragging or not self._owns(pointer_id):
            return self._state
        canvas_point = self._transform.to_canvas(screen_point)
        polar = to_polar(self._origin, canvas_point).rounded()
        applied = self._model.update_category(self._state.node_id, angle=polar.angle, radius=polar.radius)
        if not applied:
            # Node was deleted mid-drag
            return self._set_state(DragState())
        return self._state

    def pointer_up(self, pointer_id: Optional[int] = None) -> DragState:
        if not self._state.is_dragging or not self._owns(pointer_id):
            return self._state
        return self._set_state(DragState())

    def pointer_leave(self) -> DragState:
        """The pointer left the canvas: end any drag, keeping the last position."""
        if not self._state.is_dragging:
            return self._state
        return self._set_state(DragState())

    def _owns(self, pointer_id: Optional[int]) -> bool:
        active = self._state.pointer_id
        return active is None or pointer_id is None or pointer_id == active
