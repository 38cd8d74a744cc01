"""
Selection and inspector surface.

Tracks which single category is being edited and exposes the model's
mutators pre-bound to that selection, so an inspector form never handles
ids. With nothing selected the inspector edits the global title/subtitle.

States: NoSelection <-> Selected(id). Removing the selected category from
the model (by any route) drops back to NoSelection.
"""

import logging
from typing import Any, Callable, List, Optional

from orbit.model import CATEGORY_ADDED, CATEGORY_REMOVED, Category, GraphModel, Tool

logger = logging.getLogger(__name__)


class Inspector:
    """Single source of truth for the active node."""

    def __init__(self, model: GraphModel):
        self._model = model
        self._selected_id: Optional[str] = None
        self._on_change: List[Callable[[Optional[str]], None]] = []
        model.add_listener(self._on_model_event)

    @property
    def model(self) -> GraphModel:
        return self._model

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def set_on_selection_change(self, callback: Callable[[Optional[str]], None]) -> None:
        self._on_change.append(callback)

    def _notify(self) -> None:
        for callback in self._on_change:
            callback(self._selected_id)

    def select(self, category_id: Optional[str]) -> None:
        """Select a category, or None for global mode. Unknown ids clear the selection."""
        if category_id is not None and category_id not in self._model:
            logger.debug(f"select: no category {category_id}, clearing selection")
            category_id = None
        if category_id == self._selected_id:
            return
        self._selected_id = category_id
        self._notify()

    def get_selected(self) -> Optional[Category]:
        return self._model.get_category(self._selected_id)

    @property
    def is_global_mode(self) -> bool:
        return self._selected_id is None

    def _on_model_event(self, event: str, category_id: str) -> None:
        if event == CATEGORY_ADDED:
            self.select(category_id)
        elif event == CATEGORY_REMOVED and category_id == self._selected_id:
            self._selected_id = None
            self._notify()

    # --- Global (no selection) fields ---

    def set_title(self, title: str) -> None:
        self._model.title = title

    def set_subtitle(self, subtitle: str) -> None:
        self._model.subtitle = subtitle

    # --- Category fields, bound to the selection ---

    def update(self, **fields) -> bool:
        if self._selected_id is None:
            return False
        return self._model.update_category(self._selected_id, **fields)

    def set_label(self, label: str) -> bool:
        return self.update(label=label)

    def set_icon_type(self, icon_type: str) -> bool:
        return self.update(icon_type=icon_type)

    def set_color(self, color: str) -> bool:
        return self.update(color=color)

    def set_angle(self, angle: Any) -> bool:
        return self.update(angle=angle)

    def set_radius(self, radius: Any) -> bool:
        return self.update(radius=radius)

    def delete_selected(self) -> bool:
        """Remove the selected category (caller confirms with the user first)."""
        if self._selected_id is None:
            return False
        return self._model.remove_category(self._selected_id)

    # --- Tools of the selected category ---

    def add_tool(self, **fields) -> Optional[Tool]:
        if self._selected_id is None:
            return None
        return self._model.add_tool(self._selected_id, **fields)

    def update_tool(self, tool_id: str, field_name: str, value: Any) -> bool:
        if self._selected_id is None:
            return False
        return self._model.update_tool(self._selected_id, tool_id, field_name, value)

    def remove_tool(self, tool_id: str) -> bool:
        if self._selected_id is None:
            return False
        return self._model.remove_tool(self._selected_id, tool_id)
