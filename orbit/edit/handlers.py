"""
Pointer event handlers binding the chart element to the DragController.

The chart element forwards DOM pointer events (mouse and touch alike)
with the keys in POINTER_EVENT_KEYS. Positions are element offsets in
screen pixels; the controller converts them to canvas units.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from orbit.edit.controller import DragController
from orbit.edit.selection import Inspector
from orbit.geometry import Point

logger = logging.getLogger(__name__)

# Event keys we request from DOM pointer events
POINTER_EVENT_KEYS = ['offsetX', 'offsetY', 'pointerId', 'isPrimary']


def normalize_pointer_payload(raw: Any) -> Optional[Tuple[Point, Optional[int]]]:
    """
    Normalize a pointer event payload into (screen point, pointer id).

    Accepts the dict NiceGUI delivers, a positional list/tuple in
    POINTER_EVENT_KEYS order, or an event object with ``args``.
    Returns None when no position can be read.
    """
    raw = raw.args if hasattr(raw, 'args') else raw

    if isinstance(raw, (list, tuple)):
        raw = {POINTER_EVENT_KEYS[i]: raw[i] for i in range(min(len(raw), len(POINTER_EVENT_KEYS)))}
    if not isinstance(raw, dict):
        return None

    x = raw.get('offsetX', raw.get('x'))
    y = raw.get('offsetY', raw.get('y'))
    if x is None or y is None:
        return None
    try:
        point = Point(float(x), float(y))
    except (TypeError, ValueError):
        return None

    pointer_id = raw.get('pointerId')
    if pointer_id is not None:
        try:
            pointer_id = int(pointer_id)
        except (TypeError, ValueError):
            pointer_id = None
    return point, pointer_id


def setup_drag_handlers(
    controller: DragController,
    refresh_chart: Callable[[], None],
    refresh_inspector: Callable[[], None],
) -> Dict[str, Callable[[Any], None]]:
    """
    Build the pointer handlers for the chart element.

    Args:
        controller: DragController driving the model
        refresh_chart: Redraws the chart from the model
        refresh_inspector: Rebuilds the inspector panel (drag ended, fields show the final position)

    Returns:
        Dict with handler functions for binding to UI events
    """

    def handle_pointer_down(event):
        parsed = normalize_pointer_payload(event)
        if parsed is None:
            return
        point, pointer_id = parsed
        before = controller.state
        state = controller.pointer_down(point, pointer_id)
        # The inspector rebuilds itself from the selection-change callback
        if state != before:
            refresh_chart()

    def handle_pointer_move(event):
        if not controller.state.is_dragging:
            return
        parsed = normalize_pointer_payload(event)
        if parsed is None:
            return
        point, pointer_id = parsed
        controller.pointer_move(point, pointer_id)
        refresh_chart()

    def handle_pointer_up(event):
        if not controller.state.is_dragging:
            return
        parsed = normalize_pointer_payload(event)
        pointer_id = parsed[1] if parsed else None
        state = controller.pointer_up(pointer_id)
        if not state.is_dragging:
            # angle/radius fields show the final position
            refresh_inspector()
            refresh_chart()

    def handle_pointer_leave(event):
        if not controller.state.is_dragging:
            return
        controller.pointer_leave()
        refresh_inspector()
        refresh_chart()

    return {
        'handle_pointer_down': handle_pointer_down,
        'handle_pointer_move': handle_pointer_move,
        'handle_pointer_up': handle_pointer_up,
        'handle_pointer_leave': handle_pointer_leave,
    }


def make_position_field_handler(
    inspector: Inspector,
    field_name: str,
    refresh_chart: Callable[[], None],
) -> Callable[[Any], None]:
    """
    Build the on_change handler for the inspector's angle or radius number.

    The model normalizes what is typed (-90 is stored as 270, -5 as 0);
    the field is then set to the stored value so it never shows a number
    the node does not have.
    """

    def handle_change(event):
        if event.value is None:
            return
        if not inspector.update(**{field_name: event.value}):
            return
        stored = getattr(inspector.get_selected(), field_name)
        if stored != event.value:
            event.sender.value = stored
        refresh_chart()

    return handle_change
