"""
In-memory SVG scene.

Holds shape elements with their attributes and pointer handlers, animates
them through a Timeline, and serializes the current state with svgwrite.
"""

from dataclasses import dataclass, field
from typing import Callable

import svgwrite

from src.animation import Timeline, Transition

POINTER_ENTER = "pointerenter"
POINTER_LEAVE = "pointerleave"


@dataclass
class Element:
    """A shape in the scene."""

    id: str
    tag: str  # "rect", "text" or "tooltip"
    classes: tuple[str, ...]
    attrs: dict
    text: str = ""
    data: object = None
    handlers: dict = field(default_factory=dict)


class SceneError(Exception):
    """Raised when addressing an element that is not in the scene."""

    pass


class SvgScene:
    """Rendering surface for the heatmap."""

    def __init__(self, width: float = 0, height: float = 0):
        self.width = width
        self.height = height
        self._elements: dict[str, Element] = {}
        self._next_id = 0
        self.timeline = Timeline(read=self._read_attrs, write=self._write_attrs)

    def set_size(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def create(
        self,
        tag: str,
        classes: tuple[str, ...] = (),
        attrs: dict | None = None,
        text: str = "",
        data: object = None,
    ) -> Element:
        self._next_id += 1
        element = Element(
            id=f"el-{self._next_id}",
            tag=tag,
            classes=tuple(classes),
            attrs=dict(attrs or {}),
            text=text,
            data=data,
        )
        self._elements[element.id] = element
        return element

    def get(self, element_id: str) -> Element:
        try:
            return self._elements[element_id]
        except KeyError:
            raise SceneError(f"No element with id {element_id!r}") from None

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._elements

    def select(self, class_name: str) -> list[Element]:
        """Elements carrying `class_name`, in creation order."""
        return [e for e in self._elements.values() if class_name in e.classes]

    def update(self, element_id: str, attrs: dict | None = None, text: str | None = None) -> None:
        element = self.get(element_id)
        if attrs:
            element.attrs.update(attrs)
        if text is not None:
            element.text = text

    def remove(self, element_id: str) -> None:
        """Remove an element, abandoning its scheduled transitions."""
        self.timeline.cancel_element(element_id)
        self._elements.pop(element_id, None)

    def remove_class(self, class_name: str) -> int:
        """Remove every element carrying `class_name`; returns how many."""
        doomed = [e.id for e in self.select(class_name)]
        for element_id in doomed:
            self.remove(element_id)
        return len(doomed)

    def on(self, element_id: str, event: str, handler: Callable[[Element], None]) -> None:
        self.get(element_id).handlers[event] = handler

    def off(self, element_id: str, event: str) -> None:
        self.get(element_id).handlers.pop(event, None)

    def dispatch(self, element_id: str, event: str) -> bool:
        """
        Deliver a pointer event to an element.

        Returns:
            True if a handler ran
        """
        element = self.get(element_id)
        handler = element.handlers.get(event)
        if handler is None:
            return False
        handler(element)
        return True

    def animate(
        self,
        element_id: str,
        targets: dict,
        duration: float,
        delay: float = 0.0,
        easing: str = "linear",
    ) -> Transition:
        self.get(element_id)
        return self.timeline.schedule(element_id, targets, duration, delay=delay, easing=easing)

    def _read_attrs(self, element_id: str, names: list) -> dict:
        element = self._elements.get(element_id)
        if element is None:
            return {}
        return {name: element.attrs.get(name) for name in names}

    def _write_attrs(self, element_id: str, attrs: dict) -> None:
        element = self._elements.get(element_id)
        if element is not None:
            element.attrs.update(attrs)

    def to_svg(self) -> str:
        """Serialize the scene as it currently looks."""
        drawing = svgwrite.Drawing(size=(self.width, self.height), profile="full", debug=False)

        for element in self._elements.values():
            class_name = " ".join(element.classes)
            attrs = element.attrs

            if element.tag == "rect":
                drawing.add(
                    drawing.rect(
                        insert=(attrs.get("x", 0), attrs.get("y", 0)),
                        size=(attrs.get("width", 0), attrs.get("height", 0)),
                        fill=attrs.get("fill", "none"),
                        opacity=attrs.get("opacity", 1),
                        class_=class_name,
                    )
                )
            elif element.tag == "text":
                drawing.add(
                    drawing.text(
                        element.text,
                        insert=(attrs.get("x", 0), attrs.get("y", 0)),
                        font_size=attrs.get("font_size", 12),
                        fill=attrs.get("fill", "#aaaaaa"),
                        opacity=attrs.get("opacity", 1),
                        class_=class_name,
                    )
                )
            elif element.tag == "tooltip":
                group = drawing.g(class_=class_name, opacity=attrs.get("opacity", 0))
                x, y = attrs.get("x", 0), attrs.get("y", 0)
                group.add(
                    drawing.rect(
                        insert=(x, y),
                        size=(attrs.get("width", 0), attrs.get("height", 0)),
                        rx=4,
                        ry=4,
                        fill=attrs.get("fill", "#495057"),
                    )
                )
                group.add(
                    drawing.text(
                        element.text,
                        insert=(x + attrs.get("padding", 0), y + attrs.get("height", 0) / 2 + 4),
                        font_size=12,
                        fill="#ffffff",
                    )
                )
                drawing.add(group)

        return drawing.tostring()
