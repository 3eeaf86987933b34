"""Axes plotted by coordinate systems.

An axis is owned by exactly one coordinate system (its arena). The axis keeps
only the owner's id; the owner index written into the document is resolved
through the encode context.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable

from .data import DataSource, DataType
from .parts import DisplayablePart, EncodeContext, Label, encode_property, put


class Axis(DisplayablePart):
    """Base class for all axes.

    Args:
        data_type: Type of the values plotted along the axis.
        name: Optional axis name (displayed by the renderer).
    """

    owner_key: ClassVar[str] = "gridIndex"

    def __init__(self, data_type: DataType = DataType.NUMBER, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.data_type = data_type
        self.owner_id: int | None = None
        self.data: DataSource | None = None
        self.label: Label | None = None
        self.min: Any = None
        self.max: Any = None
        self.divisions: int | None = None

    def validate(self) -> None:
        if self.data_type is DataType.OBJECT:
            self.fail("Object data cannot be plotted")
        if self.data is not None and self.data_type is not DataType.CATEGORY:
            self.fail("Only category axes can carry axis data")

    def data_sources(self) -> Iterable[DataSource]:
        return (self.data,) if self.data is not None else ()

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        fragment["type"] = self.data_type.axis_type
        owner_index = context.indexes.get(self.owner_id) if self.owner_id is not None else None
        put(fragment, self.owner_key, owner_index)
        data = context.axis_data.get(self.id, self.data)
        if data is not None:
            fragment["data"] = context.serial_of(data)
        put(fragment, "min", self.min)
        put(fragment, "max", self.max)
        put(fragment, "splitNumber", self.divisions)
        encode_property(fragment, "axisLabel", self.label)


class XYAxis(Axis):
    """An axis of a rectangular coordinate system."""

    opposite_position: ClassVar[str] = ""

    def __init__(self, data_type: DataType = DataType.NUMBER, *, name: str | None = None) -> None:
        super().__init__(data_type, name=name)
        self.opposite = False
        self.offset = 0

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.opposite:
            fragment["position"] = self.opposite_position
        if self.offset > 0:
            fragment["offset"] = self.offset


class XAxis(XYAxis):
    category = "xAxis"
    display = "X-Axis"
    opposite_position = "top"


class YAxis(XYAxis):
    category = "yAxis"
    display = "Y-Axis"
    opposite_position = "right"


class AngleAxis(Axis):
    """The circular axis of a polar coordinate system."""

    category = "angleAxis"
    display = "Angle Axis"
    owner_key = "polarIndex"

    def __init__(self, data_type: DataType = DataType.NUMBER, *, name: str | None = None) -> None:
        super().__init__(data_type, name=name)
        self.start_angle: int | None = None
        self.clockwise = True

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "startAngle", self.start_angle)
        if not self.clockwise:
            fragment["clockwise"] = False


class RadiusAxis(Axis):
    """The radial axis of a polar coordinate system."""

    category = "radiusAxis"
    display = "Radius Axis"
    owner_key = "polarIndex"
