"""Free-standing graphic elements drawn over the chart area."""

from __future__ import annotations

from typing import Any, ClassVar

from .parts import EncodeContext, Part, put

DEFAULT_COLOR = "black"


class Shape(Part):
    """Base class of graphic elements.

    Args:
        name: Optional element name.
    """

    category = "graphic"
    shape_type: ClassVar[str]

    def __init__(self, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.x: int | float | None = None
        self.y: int | float | None = None
        self.z: int | None = None
        self.visible = True
        self.draggable = False
        self.fill: str | None = DEFAULT_COLOR
        self.stroke: str | None = DEFAULT_COLOR

    def move_to(self, x: int | float, y: int | float) -> None:
        self.x, self.y = x, y

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        self.encode_shape(fragment, context)

    def encode_shape(self, fragment: dict[str, Any], context: EncodeContext, z: int | None = None) -> None:
        """Encode this shape; `z` is the level inherited from an enclosing group."""

        super().encode(fragment, context)
        fragment["type"] = self.shape_type
        put(fragment, "x", self.x)
        put(fragment, "y", self.y)
        put(fragment, "z", self.z if self.z is not None else z)
        fragment["invisible"] = not self.visible
        fragment["draggable"] = self.draggable
        style: dict[str, Any] = {}
        put(style, "fill", self.fill)
        put(style, "stroke", self.stroke)
        self.encode_style(style)
        if style:
            fragment["style"] = style

    def encode_style(self, style: dict[str, Any]) -> None:
        pass


class Rectangle(Shape):
    shape_type = "rect"

    def __init__(
        self,
        width: int | float,
        height: int | float,
        *border_radius: int | float,
        name: str | None = None,
    ) -> None:
        super().__init__(name=name)
        self.width = width
        self.height = height
        self.border_radius = tuple(border_radius)

    def encode_shape(self, fragment: dict[str, Any], context: EncodeContext, z: int | None = None) -> None:
        super().encode_shape(fragment, context, z)
        shape: dict[str, Any] = {"width": self.width, "height": self.height}
        if self.border_radius:
            shape["r"] = list(self.border_radius)
        fragment["shape"] = shape


class Circle(Shape):
    shape_type = "circle"

    def __init__(self, radius: int | float, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.radius = radius

    def encode_shape(self, fragment: dict[str, Any], context: EncodeContext, z: int | None = None) -> None:
        super().encode_shape(fragment, context, z)
        shape: dict[str, Any] = {"r": self.radius}
        put(shape, "cx", self.x)
        put(shape, "cy", self.y)
        fragment["shape"] = shape


class Text(Shape):
    """A text element, centered on its position by default."""

    shape_type = "text"

    def __init__(self, text: str, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.text = text
        self.font: str | None = None
        self.align = "center"
        self.vertical_align = "middle"

    def encode_style(self, style: dict[str, Any]) -> None:
        style["text"] = self.text
        put(style, "font", self.font)
        style["textAlign"] = self.align
        style["textVerticalAlign"] = self.vertical_align


class ShapeGroup(Shape):
    """Shapes moved and layered as one element.

    Members are encoded inline as the group's children. A member without its
    own `z` takes the group's.
    """

    shape_type = "group"

    def __init__(self, *shapes: Shape, name: str | None = None) -> None:
        super().__init__(name=name)
        self.fill = None
        self.stroke = None
        self._shapes: list[Shape] = []
        self.add(*shapes)

    @property
    def shapes(self) -> tuple[Shape, ...]:
        return tuple(self._shapes)

    def add(self, *shapes: Shape | None) -> None:
        self._shapes.extend(shape for shape in shapes if shape is not None)

    def remove(self, *shapes: Shape) -> None:
        for shape in shapes:
            self._shapes = [existing for existing in self._shapes if existing is not shape]

    def encode_shape(self, fragment: dict[str, Any], context: EncodeContext, z: int | None = None) -> None:
        super().encode_shape(fragment, context, z)
        level = self.z if self.z is not None else z
        children = []
        for shape in self._shapes:
            child: dict[str, Any] = {}
            shape.encode_shape(child, context, level)
            children.append(child)
        fragment["children"] = children
