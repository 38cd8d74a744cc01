"""
Interactive editing for the radial graph.

This package provides:
- DragController: pointer-drag state machine (Idle / Dragging)
- Inspector: selection plus mutators bound to the selected node
- setup_drag_handlers: event handlers for app.py integration

Usage:
    from orbit.edit import DragController, Inspector
    from orbit.edit.handlers import setup_drag_handlers
"""

from orbit.edit.selection import Inspector
from orbit.edit.controller import DragController, DragState, DRAGGING, IDLE
from orbit.edit.handlers import (
    make_position_field_handler,
    normalize_pointer_payload,
    setup_drag_handlers,
)

__all__ = [
    'DragController',
    'DragState',
    'Inspector',
    'setup_drag_handlers',
    'make_position_field_handler',
    'normalize_pointer_payload',
    'DRAGGING',
    'IDLE',
]
