# portfolio/services/canvas.py
"""
In-memory model of the visual builder canvas.

Element lifecycle:

    unselected --click--> selected --pointer down + move--> dragging
        --pointer up--> dropped (position recorded, still selected)
        --next interaction--> selected / unselected

The side panel shows the properties editor while an element is selected
and the theme editor otherwise. Save/load goes through the whole-document
schema in ``portfolio.schemas.builder``.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from portfolio.schemas.builder import (
    ELEMENT_MODELS,
    ElementType,
    BuilderDocument,
    BuilderSaveRequest,
    CanvasElement,
    Theme,
)

log = logging.getLogger("portfolio.builder")


class ElementState(str, Enum):
    UNSELECTED = "unselected"
    SELECTED = "selected"
    DRAGGING = "dragging"
    DROPPED = "dropped"


class Panel(str, Enum):
    PROPERTIES = "properties"
    THEME = "theme"


@dataclass(frozen=True)
class CanvasRect:
    """Canvas bounding box in viewport coordinates."""
    left: float
    top: float
    width: float
    height: float


@dataclass
class _Drag:
    element_id: str
    start_x: float
    start_y: float
    origin_left: float
    origin_top: float
    moved: bool = False


def _px(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{round(value, 2)}px"


def _parse_px(value: Optional[str]) -> float:
    if not value or not value.endswith("px"):
        return 0.0
    try:
        return float(value[:-2])
    except ValueError:
        return 0.0


def _prop_names(model, props: Dict[str, Any]) -> Dict[str, Any]:
    """Key ``props`` by field name, accepting either the field or its camelCase alias."""
    names = {}
    for name, field in model.model_fields.items():
        names[name] = name
        if field.alias:
            names[field.alias] = name
    out = {}
    for key, value in props.items():
        if key not in names:
            raise ValueError(f"{model.__name__} has no property {key!r}")
        out[names[key]] = value
    return out


def default_styles(element_type: str, x: float, y: float) -> Dict[str, str]:
    styles = {
        "position": "absolute",
        "left": _px(x),
        "top": _px(y),
        "width": "100%" if element_type == "section" else "200px",
        "height": "100px" if element_type == "section" else "auto",
    }
    if element_type == "image":
        styles["width"] = "200px"
        styles["height"] = "150px"
    elif element_type == "section":
        styles["backgroundColor"] = "#f5f5f5"
    elif element_type == "container":
        styles["padding"] = "20px"
        styles["backgroundColor"] = "#ffffff"
        styles["border"] = "1px dashed #cccccc"
    return styles


class Canvas:
    def __init__(
        self,
        elements: Optional[List[CanvasElement]] = None,
        theme: Optional[Theme] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.elements: List[CanvasElement] = list(elements or [])
        self.theme: Theme = theme or Theme()
        self.selected_id: Optional[str] = None
        self._drag: Optional[_Drag] = None
        self._dropped_id: Optional[str] = None
        self._clock = clock

    # ---- lookup ----
    def _walk(self, elements: List[CanvasElement]) -> Iterator[Tuple[List[CanvasElement], CanvasElement]]:
        for el in elements:
            yield elements, el
            yield from self._walk(el.children)

    def find(self, element_id: str) -> Optional[CanvasElement]:
        for _, el in self._walk(self.elements):
            if el.id == element_id:
                return el
        return None

    def _require(self, element_id: str) -> CanvasElement:
        el = self.find(element_id)
        if el is None:
            raise KeyError(f"No element with id {element_id!r}")
        return el

    def _new_id(self) -> str:
        base = f"element-{int(self._clock() * 1000)}"
        candidate, n = base, 1
        while self.find(candidate) is not None:
            candidate = f"{base}-{n}"
            n += 1
        return candidate

    # ---- state ----
    def element_state(self, element_id: str) -> ElementState:
        self._require(element_id)
        if self._drag is not None and self._drag.moved and self._drag.element_id == element_id:
            return ElementState.DRAGGING
        if self._dropped_id == element_id:
            return ElementState.DROPPED
        if self.selected_id == element_id:
            return ElementState.SELECTED
        return ElementState.UNSELECTED

    @property
    def selected(self) -> Optional[CanvasElement]:
        return self.find(self.selected_id) if self.selected_id else None

    @property
    def active_panel(self) -> Panel:
        return Panel.PROPERTIES if self.selected_id else Panel.THEME

    def select(self, element_id: str) -> CanvasElement:
        el = self._require(element_id)
        self._dropped_id = None
        self.selected_id = element_id
        return el

    def clear_selection(self) -> None:
        """Click on the canvas background."""
        self._dropped_id = None
        self.selected_id = None

    # ---- palette drop ----
    def drop_new(
        self,
        element_type: ElementType,
        client_x: float,
        client_y: float,
        rect: CanvasRect,
        parent_id: Optional[str] = None,
    ) -> CanvasElement:
        model = ELEMENT_MODELS.get(element_type)
        if model is None:
            raise ValueError(f"Unknown element type {element_type!r}")

        x = client_x - rect.left
        y = client_y - rect.top
        el = model(
            id=self._new_id(),
            parent=parent_id,
            styles=default_styles(element_type, x, y),
        )
        if parent_id is not None:
            self._require(parent_id).children.append(el)
        else:
            self.elements.append(el)

        log.debug("Dropped %s at (%s, %s) as %s", element_type, x, y, el.id)
        self.select(el.id)
        return el

    # ---- moving existing elements ----
    def pointer_down(self, element_id: str, client_x: float, client_y: float) -> None:
        el = self.select(element_id)
        self._drag = _Drag(
            element_id=element_id,
            start_x=client_x,
            start_y=client_y,
            origin_left=_parse_px(el.styles.get("left")),
            origin_top=_parse_px(el.styles.get("top")),
        )

    def pointer_move(self, client_x: float, client_y: float) -> None:
        if self._drag is None:
            return
        drag = self._drag
        if client_x != drag.start_x or client_y != drag.start_y:
            drag.moved = True
        if drag.moved:
            el = self._require(drag.element_id)
            el.styles["left"] = _px(drag.origin_left + client_x - drag.start_x)
            el.styles["top"] = _px(drag.origin_top + client_y - drag.start_y)

    def pointer_up(self, client_x: float, client_y: float) -> Optional[CanvasElement]:
        """Finish a drag. Returns the moved element, or None for a plain click."""
        if self._drag is None:
            return None
        self.pointer_move(client_x, client_y)
        drag, self._drag = self._drag, None
        if not drag.moved:
            return None
        self._dropped_id = drag.element_id
        return self._require(drag.element_id)

    # ---- editing ----
    def update_element(
        self,
        element_id: str,
        props: Optional[Dict[str, Any]] = None,
        styles: Optional[Dict[str, str]] = None,
    ) -> CanvasElement:
        el = self._require(element_id)
        if props:
            model = type(el.props)
            merged = el.props.model_dump()
            merged.update(_prop_names(model, props))
            el.props = model.model_validate(merged)
        if styles:
            el.styles.update({k: str(v) for k, v in styles.items()})
        return el

    def remove_element(self, element_id: str) -> None:
        for siblings, el in self._walk(self.elements):
            if el.id == element_id:
                siblings.remove(el)
                break
        else:
            raise KeyError(f"No element with id {element_id!r}")
        if self.selected_id is not None and self.find(self.selected_id) is None:
            self.clear_selection()

    def set_theme(self, theme: Theme) -> None:
        self.theme = theme

    # ---- persistence ----
    def to_document(self, page_id: int, expected_version: Optional[int] = None) -> BuilderSaveRequest:
        return BuilderSaveRequest(
            page_id=page_id,
            elements=self.elements,
            theme=self.theme,
            expected_version=expected_version,
        )

    @classmethod
    def from_document(cls, doc: BuilderDocument, **kwargs: Any) -> "Canvas":
        return cls(elements=doc.elements, theme=doc.theme, **kwargs)
