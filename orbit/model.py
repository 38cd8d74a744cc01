"""
In-memory data model for the expertise graph.

Structure:
- GraphModel: title/subtitle header text plus an ordered list of categories
- Category: a draggable node positioned by (angle, radius) around the center
- Tool: a satellite of one category

Wire format (JSON, camelCase keys as stored by the admin API):
{
  "title": "My Creative Universe",
  "subtitle": "...",
  "categories": [
    {"id": "cat-1700000000000", "label": "Design", "iconType": "code",
     "angle": 315, "radius": 240, "color": "#F2A7A7",
     "tools": [{"id": "t-1", "name": "Figma", "iconUrl": "...", "color": "bg-white"}]}
  ]
}

Mutators never raise on unknown ids: the UI can legitimately race a delete
against a pending update from the drag stream, so misses are no-ops.
"""

import logging
import math
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from orbit.constants import (
    DEFAULT_COLOR,
    DEFAULT_ICON_TYPE,
    DEFAULT_LABEL,
    DEFAULT_RADIUS,
    DEFAULT_SUBTITLE,
    DEFAULT_TITLE,
    DEFAULT_TOOL_COLOR,
    DEFAULT_TOOL_NAME,
)
from orbit.geometry import normalize_angle

logger = logging.getLogger(__name__)

# Event names passed to model listeners
CATEGORY_ADDED = "category_added"
CATEGORY_REMOVED = "category_removed"

CATEGORY_FIELDS = ("label", "icon_type", "angle", "radius", "color")
TOOL_FIELDS = ("name", "icon_url", "color")

# Accept wire (camelCase) names wherever a field name is passed in
FIELD_ALIASES = {
    "iconType": "icon_type",
    "iconUrl": "icon_url",
}


class NodeKind(Enum):
    """Closed set of things drawn on the canvas."""
    CENTER = "center"
    CATEGORY = "category"
    TOOL = "tool"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _as_number(value: Any, default: float = 0) -> float:
    """Coerce loaded values to a finite number, falling back to default."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
    if isinstance(number, float) and not math.isfinite(number):
        return default
    return number


def clamp_radius(radius: Any) -> float:
    return max(0, _as_number(radius))


def clean_angle(angle: Any) -> float:
    return normalize_angle(_as_number(angle))


@dataclass
class Tool:
    id: str
    name: str = DEFAULT_TOOL_NAME
    icon_url: str = ""
    color: str = DEFAULT_TOOL_COLOR

    @property
    def kind(self) -> NodeKind:
        return NodeKind.TOOL

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "iconUrl": self.icon_url, "color": self.color}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tool":
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name", DEFAULT_TOOL_NAME)),
            icon_url=str(data.get("iconUrl", data.get("icon_url", "")) or ""),
            color=str(data.get("color", DEFAULT_TOOL_COLOR)),
        )


@dataclass
class Category:
    id: str
    label: str = DEFAULT_LABEL
    icon_type: str = DEFAULT_ICON_TYPE
    angle: float = 0
    radius: float = DEFAULT_RADIUS
    color: str = DEFAULT_COLOR
    tools: List[Tool] = field(default_factory=list)

    def __post_init__(self):
        self.angle = clean_angle(self.angle)
        self.radius = clamp_radius(self.radius)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.CATEGORY

    def get_tool(self, tool_id: str) -> Optional[Tool]:
        for tool in self.tools:
            if tool.id == tool_id:
                return tool
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "iconType": self.icon_type,
            "angle": self.angle,
            "radius": self.radius,
            "color": self.color,
            "tools": [t.to_dict() for t in self.tools],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        raw_tools = data.get("tools") or []
        if not isinstance(raw_tools, list):
            raw_tools = []
        tools = []
        seen: Set[str] = set()
        for raw in raw_tools:
            if not isinstance(raw, dict):
                continue
            tool = Tool.from_dict(raw)
            # Tool ids only need to be unique within their category
            if not tool.id or tool.id in seen:
                tool.id = f"t-{len(tools)}-{_now_ms()}"
            seen.add(tool.id)
            tools.append(tool)
        return cls(
            id=str(data.get("id") or ""),
            label=str(data.get("label", DEFAULT_LABEL)),
            icon_type=str(data.get("iconType", data.get("icon_type", DEFAULT_ICON_TYPE))),
            angle=data.get("angle", 0),
            radius=data.get("radius", DEFAULT_RADIUS),
            color=str(data.get("color", DEFAULT_COLOR)),
            tools=tools,
        )


class GraphModel:
    """
    Owns the category/tool collections and keeps their invariants.

    - angle is always normalized to [0, 360), radius is always >= 0
    - category ids are unique and never reissued, even after deletion
    - insertion order of categories is the draw (z) order

    Selection is not stored here. Listeners registered with add_listener are
    told about additions and removals so the inspector can react.
    """

    def __init__(self, title: str = DEFAULT_TITLE, subtitle: str = DEFAULT_SUBTITLE,
                 categories: Optional[List[Category]] = None,
                 rng: Optional[random.Random] = None):
        self.title = title
        self.subtitle = subtitle
        self.categories: List[Category] = []
        self._issued_ids: Set[str] = set()
        self._rng = rng or random.Random()
        self._listeners: List[Callable[[str, str], None]] = []
        categories = categories or []
        self._issued_ids.update(c.id for c in categories if c.id)
        seen: Set[str] = set()
        for category in categories:
            if not category.id or category.id in seen:
                category.id = self._new_category_id()
                self._issued_ids.add(category.id)
            seen.add(category.id)
            self.categories.append(category)

    # --- Listeners ---

    def add_listener(self, callback: Callable[[str, str], None]) -> None:
        self._listeners.append(callback)

    def _notify(self, event: str, category_id: str) -> None:
        for callback in self._listeners:
            callback(event, category_id)

    # --- Lookup ---

    def get_category(self, category_id: Optional[str]) -> Optional[Category]:
        if category_id is None:
            return None
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def __contains__(self, category_id: str) -> bool:
        return self.get_category(category_id) is not None

    # --- Id generation ---

    def _new_category_id(self) -> str:
        stamp = _now_ms()
        candidate = f"cat-{stamp}"
        while candidate in self._issued_ids:
            stamp += 1
            candidate = f"cat-{stamp}"
        return candidate

    @staticmethod
    def _new_tool_id(category: Category) -> str:
        stamp = _now_ms()
        existing = {t.id for t in category.tools}
        candidate = f"t-{stamp}"
        while candidate in existing:
            stamp += 1
            candidate = f"t-{stamp}"
        return candidate

    # --- Category mutators ---

    def add_category(self, **fields) -> Category:
        """
        Create a category with a fresh id, a random angle in [0, 360) and
        the default radius/color, append it and notify listeners (the
        inspector selects it).
        """
        category = Category(
            id=self._new_category_id(),
            angle=self._rng.random() * 360,
        )
        self._issued_ids.add(category.id)
        self._apply_category_fields(category, fields)
        self.categories.append(category)
        logger.debug(f"Added category {category.id} at angle={category.angle:.1f}")
        self._notify(CATEGORY_ADDED, category.id)
        return category

    def update_category(self, category_id: str, **fields) -> bool:
        """Merge fields into a category. Returns False (and changes nothing) on a stale id."""
        category = self.get_category(category_id)
        if category is None:
            logger.debug(f"update_category: no category {category_id}, ignoring")
            return False
        self._apply_category_fields(category, fields)
        return True

    @staticmethod
    def _apply_category_fields(category: Category, fields: Dict[str, Any]) -> None:
        for key, value in fields.items():
            name = FIELD_ALIASES.get(key, key)
            if name not in CATEGORY_FIELDS:
                logger.warning(f"Ignoring unknown category field '{key}'")
                continue
            if name == "angle":
                value = clean_angle(value)
            elif name == "radius":
                value = clamp_radius(value)
            setattr(category, name, value)

    def remove_category(self, category_id: str) -> bool:
        """Remove a category. Deleting an unknown id is a no-op (returns False)."""
        before = len(self.categories)
        self.categories = [c for c in self.categories if c.id != category_id]
        if len(self.categories) == before:
            logger.debug(f"remove_category: no category {category_id}, ignoring")
            return False
        logger.debug(f"Removed category {category_id}")
        self._notify(CATEGORY_REMOVED, category_id)
        return True

    # --- Tool mutators ---

    def add_tool(self, category_id: str, **fields) -> Optional[Tool]:
        category = self.get_category(category_id)
        if category is None:
            logger.debug(f"add_tool: no category {category_id}, ignoring")
            return None
        tool = Tool(id=self._new_tool_id(category))
        for key, value in fields.items():
            self._set_tool_field(tool, key, value)
        category.tools.append(tool)
        return tool

    def update_tool(self, category_id: str, tool_id: str, field_name: str, value: Any) -> bool:
        category = self.get_category(category_id)
        tool = category.get_tool(tool_id) if category else None
        if tool is None:
            logger.debug(f"update_tool: no tool {tool_id} in {category_id}, ignoring")
            return False
        return self._set_tool_field(tool, field_name, value)

    @staticmethod
    def _set_tool_field(tool: Tool, key: str, value: Any) -> bool:
        name = FIELD_ALIASES.get(key, key)
        if name not in TOOL_FIELDS:
            logger.warning(f"Ignoring unknown tool field '{key}'")
            return False
        setattr(tool, name, value)
        return True

    def remove_tool(self, category_id: str, tool_id: str) -> bool:
        category = self.get_category(category_id)
        if category is None:
            return False
        before = len(category.tools)
        category.tools = [t for t in category.tools if t.id != tool_id]
        return len(category.tools) != before

    def replace_with(self, other: "GraphModel") -> None:
        """
        Take over another model's content (e.g. a fresh load) while keeping
        this instance, its listeners and its issued-id history.
        """
        for category in list(self.categories):
            self.remove_category(category.id)
        self.title = other.title
        self.subtitle = other.subtitle
        self.categories = list(other.categories)
        self._issued_ids.update(other._issued_ids)

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "categories": [c.to_dict() for c in self.categories],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], rng: Optional[random.Random] = None) -> "GraphModel":
        """
        Build a model from loaded JSON. Malformed values are corrected, never
        rejected: the editor must be able to open whatever it receives.
        """
        data = data if isinstance(data, dict) else {}
        raw_categories = data.get("categories") or []
        if not isinstance(raw_categories, list):
            logger.warning("Loaded 'categories' is not a list, starting empty")
            raw_categories = []
        categories = [Category.from_dict(c) for c in raw_categories if isinstance(c, dict)]
        # A cleared ("") title is kept; only a missing one takes the default
        title = data.get("title")
        subtitle = data.get("subtitle")
        return cls(
            title=DEFAULT_TITLE if title is None else str(title),
            subtitle=DEFAULT_SUBTITLE if subtitle is None else str(subtitle),
            categories=categories,
            rng=rng,
        )

    @classmethod
    def default(cls) -> "GraphModel":
        return cls()
