"""Document-level components: titles, legends, tooltips, zooms, visual maps."""

from __future__ import annotations

from collections import defaultdict
from enum import StrEnum
from typing import Any, Iterable

from .charts import Chart
from .coordinates import CoordinateSystem
from .data import DataSource
from .parts import DisplayablePart, EncodeContext, Part, Position, put


class Title(DisplayablePart):
    category = "title"

    def __init__(self, text: str, subtext: str | None = None, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.text = text
        self.subtext = subtext
        self.position: Position | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        fragment["text"] = self.text
        put(fragment, "subtext", self.subtext)
        if self.position is not None:
            self.position.encode(fragment)


class Legend(DisplayablePart):
    """Series legend. Added to a document automatically unless disabled."""

    category = "legend"

    def __init__(self, *, vertical: bool = False, name: str | None = None) -> None:
        super().__init__(name=name)
        self.vertical = vertical
        self.position: Position | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.vertical:
            fragment["orient"] = "vertical"
        if self.position is not None:
            self.position.encode(fragment)


class TooltipTrigger(StrEnum):
    ITEM = "item"
    AXIS = "axis"
    NONE = "none"


class Tooltip(DisplayablePart):
    """Hover tooltip, optionally with a composed formatter.

    The formatter is a sequence of text fragments, data sources and charts.
    Sources and charts are written as serials the renderer resolves against
    its cached data when the tooltip is shown.
    """

    category = "tooltip"

    def __init__(self, trigger: TooltipTrigger | None = None, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.trigger = trigger
        self._body: list[str | DataSource | Chart] = []

    @property
    def body(self) -> tuple[str | DataSource | Chart, ...]:
        return tuple(self._body)

    def append(self, item: str | DataSource | Chart | None) -> Tooltip:
        """Append a formatter item and return self.

        Consecutive text fragments are merged; blank text is ignored.
        """

        if item is None:
            return self
        if isinstance(item, str):
            if not item.strip() and item != "<br>":
                return self
            if self._body and isinstance(self._body[-1], str):
                self._body[-1] += item
            else:
                self._body.append(item)
            return self
        self._body.append(item)
        return self

    def newline(self) -> Tooltip:
        return self.append("<br>")

    def data_sources(self) -> Iterable[DataSource]:
        sources: list[DataSource] = []
        for item in self._body:
            if isinstance(item, DataSource):
                sources.append(item)
            elif isinstance(item, Chart) and item.value_source() is not None:
                sources.append(item.value_source())
        return sources

    def references(self) -> Iterable[Part]:
        return [item for item in self._body if isinstance(item, Chart)]

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.trigger is not None:
            fragment["trigger"] = str(self.trigger)
        if not self._body:
            return
        body: list[Any] = []
        for item in self._body:
            if isinstance(item, str):
                body.append(item.replace("\n", "<br>"))
            elif isinstance(item, DataSource):
                body.append(context.serial_of(item))
            else:
                source = item.value_source()
                if source is None:
                    continue
                if item.value_index is None:
                    body.append(context.serial_of(source))
                else:
                    body.append([context.serial_of(source), item.value_index])
        fragment["formatter"] = {"functionP": {"body": body}}


class DataZoom(DisplayablePart):
    """Zoom control acting on some axes of one coordinate system.

    The zoom holds the system and axis handles (ids); the axes themselves stay
    owned by the system. With no axes given, every axis of the system zooms.

    Args:
        system: The coordinate system whose axes are zoomed.
        *axes: Axes of `system` to zoom.
        slider: Show a slider instead of zooming on mouse wheel and drag.
    """

    category = "dataZoom"

    def __init__(self, system: CoordinateSystem, *axes: Any, slider: bool = False, name: str | None = None) -> None:
        super().__init__(name=name)
        self.system = system
        self.axis_ids = tuple(axis.id for axis in axes)
        self.slider = slider
        self.start: float | None = None
        self.end: float | None = None

    def references(self) -> Iterable[Part]:
        return (self.system,)

    def validate(self) -> None:
        for axis_id in self.axis_ids:
            if self.system.axis(axis_id) is None:
                self.fail(f"Axis {axis_id} does not belong to {self.system.class_name()}")

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        fragment["type"] = "slider" if self.slider else "inside"
        axes = [self.system.axis(axis_id) for axis_id in self.axis_ids] or list(self.system.axes)
        indexes: dict[str, list[int]] = defaultdict(list)
        for axis in axes:
            if axis is not None:
                indexes[f"{axis.category}Index"].append(context.index_of(axis))
        fragment.update(indexes)
        put(fragment, "start", self.start)
        put(fragment, "end", self.end)


class VisualMap(DisplayablePart):
    """Maps the values of one chart to a visual channel (color, size)."""

    category = "visualMap"

    def __init__(self, chart: Chart | None = None, *, piecewise: bool = False, name: str | None = None) -> None:
        super().__init__(name=name)
        self.chart = chart
        self.piecewise = piecewise
        self.min: Any = None
        self.max: Any = None
        self.dimension: int | None = None
        self.position: Position | None = None

    def references(self) -> Iterable[Part]:
        return (self.chart,) if self.chart is not None else ()

    def validate(self) -> None:
        if self.chart is None:
            self.fail("Chart not set")

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        fragment["type"] = "piecewise" if self.piecewise else "continuous"
        if self.chart is not None:
            fragment["seriesIndex"] = context.index_of(self.chart)
        put(fragment, "min", self.min)
        put(fragment, "max", self.max)
        put(fragment, "dimension", self.dimension)
        if self.position is not None:
            self.position.encode(fragment)


class ComponentGroup(Part):
    """Bundles components so they are added to and removed from a document together.

    The group itself emits nothing; its members are emitted in their own
    categories.
    """

    def __init__(self, *components: Part, name: str | None = None) -> None:
        super().__init__(name=name)
        self._components: list[Part] = [component for component in components if component is not None]

    @property
    def components(self) -> tuple[Part, ...]:
        return tuple(self._components)

    def add(self, *components: Part) -> None:
        for component in components:
            if all(existing is not component for existing in self._components):
                self._components.append(component)

    def remove(self, *components: Part) -> None:
        for component in components:
            self._components = [existing for existing in self._components if existing is not component]

    def children(self) -> Iterable[Part]:
        return self.components
