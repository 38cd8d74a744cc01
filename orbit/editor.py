"""
Editor session: the glue between storage, model, interaction and rendering.

Data flow:
    gateway.load -> GraphModel -> chart options -> pointer events
    -> DragController updates angle/radius -> re-render -> gateway.save
"""

import logging
from typing import Any, Dict, Optional, Tuple

from orbit.chart_builder import build_echart_options
from orbit.constants import DEFAULT_ZOOM
from orbit.edit.controller import DragController
from orbit.edit.selection import Inspector
from orbit.geometry import ViewTransform, zoom_in, zoom_out
from orbit.model import GraphModel
from orbit.storage.protocol import GraphGateway, PersistenceError

logger = logging.getLogger(__name__)


class EditorSession:
    """
    One editing session over one graph document.

    The model instance lives as long as the session; loading replaces its
    content in place so the inspector and controller stay bound to it.
    """

    def __init__(self, gateway: Optional[GraphGateway] = None,
                 model: Optional[GraphModel] = None):
        self.gateway = gateway
        self.model = model or GraphModel.default()
        self.inspector = Inspector(self.model)
        self.controller = DragController(self.model, self.inspector)
        self.zoom = DEFAULT_ZOOM
        self.viewport: Optional[Tuple[float, float]] = None
        self.is_saving = False
        self.last_error: Optional[str] = None
        self._apply_transform()

    # --- Persistence ---

    def load(self) -> bool:
        """
        Load the stored graph into the session. On failure the current model
        is kept so the editor stays usable; the error is kept in last_error.
        """
        if self.gateway is None:
            return False
        try:
            loaded = self.gateway.load()
        except PersistenceError as e:
            logger.error(f"Failed to load graph: {e}")
            self.last_error = str(e)
            return False
        self.apply_loaded(loaded)
        return True

    def apply_loaded(self, loaded: GraphModel) -> None:
        """Swap loaded content into the live model, dropping drag and selection."""
        self.controller.pointer_leave()
        self.inspector.select(None)
        self.model.replace_with(loaded)
        self.last_error = None

    def save(self) -> Dict[str, Any]:
        """Send the whole model to the gateway."""
        if self.gateway is None:
            return {"success": False, "message": "No storage configured"}
        if self.is_saving:
            return {"success": False, "message": "Save already in progress"}
        self.is_saving = True
        try:
            result = self.gateway.save(self.model)
        finally:
            self.is_saving = False
        self.last_error = None if result.get("success") else result.get("message")
        return result

    # --- View ---

    def _apply_transform(self) -> None:
        if self.viewport:
            width, height = self.viewport
            transform = ViewTransform.fit(width, height, self.zoom)
        else:
            transform = ViewTransform(scale=self.zoom)
        self.controller.set_transform(transform)

    def set_viewport(self, width: float, height: float) -> None:
        """Use a letterboxed viewport instead of a canvas sized to the zoom."""
        self.viewport = (width, height) if width > 0 and height > 0 else None
        self._apply_transform()

    def set_zoom(self, zoom: float) -> float:
        self.zoom = zoom
        self._apply_transform()
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(zoom_in(self.zoom))

    def zoom_out(self) -> float:
        return self.set_zoom(zoom_out(self.zoom))

    def reset_zoom(self) -> float:
        return self.set_zoom(DEFAULT_ZOOM)

    def chart_options(self) -> Dict[str, Any]:
        return build_echart_options(
            self.model,
            selected_id=self.inspector.selected_id,
            animate=not self.controller.state.is_dragging,
        )

    # --- Convenience used by the toolbar ---

    def add_category(self):
        """Add a node; the inspector selects it through the model listener."""
        return self.model.add_category()
