"""Coordinate systems: the owners of axes and of the charts plotted on them."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Iterable

from .axes import AngleAxis, Axis, RadiusAxis, XAxis, YAxis
from .exceptions import UnsupportedOperationError
from .parts import DisplayablePart, EncodeContext, Position, put

if TYPE_CHECKING:
    from .charts import Chart

logger = logging.getLogger(__name__)


class CoordinateSystem(DisplayablePart):
    """Base class of coordinate systems.

    The system owns its axes (`axes` is the canonical list) and keeps the list
    of charts plotted on it. A chart belongs to at most one system at a time.

    Attributes:
        axis_kinds: Axis classes, in dimension order, that a chart plotted on
            this system uses (for example XAxis then YAxis).
    """

    axis_kinds: ClassVar[tuple[type[Axis], ...]] = ()

    def __init__(self, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.axes: list[Axis] = []
        self._charts: list[Chart] = []

    @property
    def charts(self) -> tuple[Chart, ...]:
        return tuple(self._charts)

    def add_axis(self, *axes: Axis | None) -> None:
        """Add axes to this system.

        An axis already owned by another system is still added; validation
        reports the conflict.

        Raises:
            UnsupportedOperationError: When the axis kind is not used by this system.
        """

        for axis in axes:
            if axis is None:
                continue
            if not isinstance(axis, self.axis_kinds):
                raise UnsupportedOperationError(f"{axis.class_name()} cannot be added to {self.class_name()}")
            if any(existing is axis for existing in self.axes):
                continue
            if axis.owner_id is None:
                axis.owner_id = self.id
            self.axes.append(axis)

    def remove_axis(self, *axes: Axis) -> None:
        for axis in axes:
            self.axes[:] = [existing for existing in self.axes if existing is not axis]
            if axis.owner_id == self.id:
                axis.owner_id = None

    def add(self, *charts: Chart) -> None:
        """Plot charts on this system, detaching them from any previous system.

        Raises:
            UnsupportedOperationError: When a chart type is never plotted on a
                coordinate system.
        """

        for chart in charts:
            if not chart.chart_type.requires_coordinate_system:
                raise UnsupportedOperationError(
                    f"{chart.class_name()} cannot be plotted on a coordinate system"
                )
            previous = chart.coordinate_system
            if previous is self:
                continue
            if previous is not None:
                logger.debug("Moving %s from %s to %s", chart.class_name(), previous.class_name(), self.class_name())
                previous.remove(chart)
            self._charts.append(chart)
            chart._bind(self)

    def remove(self, *charts: Chart) -> None:
        """Stop plotting charts on this system.

        A chart that has since been bound to another system keeps that binding.
        """

        for chart in charts:
            self._charts = [existing for existing in self._charts if existing is not chart]
            if chart.coordinate_system is self:
                chart._unbind()

    def axes_of(self, kind: type[Axis]) -> list[Axis]:
        return [axis for axis in self.axes if isinstance(axis, kind)]

    def axis(self, axis_id: int) -> Axis | None:
        """Resolve an axis handle to the owned axis, or None."""

        for axis in self.axes:
            if axis.id == axis_id:
                return axis
        return None

    def resolve_axes(self, chart: Chart) -> tuple[Axis, ...]:
        """Return the axes a chart is plotted against, one per axis kind.

        The chart's preferred axis of a kind is used when it is still owned by
        this system; otherwise the first axis of that kind.
        """

        resolved: list[Axis] = []
        for kind in self.axis_kinds:
            candidates = self.axes_of(kind)
            preferred = [axis for axis in candidates if axis.id in chart.axis_ids]
            chosen = (preferred or candidates)[:1]
            resolved.extend(chosen)
        return tuple(resolved)

    def validate(self) -> None:
        """Validate axes first, then chart data slots, then chart rules."""

        self.validate_axes()
        for axis in self.axes:
            if axis.owner_id not in (None, self.id):
                self.fail(f"{axis.class_name()} is used by some other coordinate system")
            axis.validate()
        for chart in self._charts:
            chart.validate()
        for chart in self._charts:
            chart.validate_structure(self)
        self.validate_axis_bindings()

    def validate_axes(self) -> None:
        for kind in self.axis_kinds:
            if not self.axes_of(kind):
                self.fail(f"{kind.display} not set")

    def validate_axis_bindings(self) -> None:
        """Fail when one axis would carry more than one category source.

        An axis writes a single `"data"` serial, so every chart binding data to
        an axis must bind the axis's own data (if set) or the same source as the
        other charts.
        """

        bound = {axis.id: axis.data for axis in self.axes if axis.data is not None}
        for chart in self._charts:
            for axis_id, source in chart.axis_bindings().items():
                existing = bound.setdefault(axis_id, source)
                if existing is not source:
                    axis = self.axis(axis_id)
                    label = axis.class_name() if axis is not None else "Axis"
                    self.fail(f"{label} is bound to different category data by {chart.class_name()}")

    def series_keys(self, chart: Chart, context: EncodeContext) -> dict[str, Any]:
        """Return the keys that tie a chart's series entry to this system."""

        return {}

    def children(self) -> Iterable[Any]:
        return (*self.axes, *self._charts)


class RectangularCoordinate(CoordinateSystem):
    """A cartesian grid with X and Y axes."""

    category = "grid"
    axis_kinds = (XAxis, YAxis)

    def __init__(self, x_axis: XAxis | None = None, y_axis: YAxis | None = None, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.position: Position | None = None
        self.add_axis(x_axis, y_axis)

    @property
    def x_axes(self) -> list[Axis]:
        return self.axes_of(XAxis)

    @property
    def y_axes(self) -> list[Axis]:
        return self.axes_of(YAxis)

    def series_keys(self, chart: Chart, context: EncodeContext) -> dict[str, Any]:
        keys: dict[str, Any] = {}
        for axis in self.resolve_axes(chart):
            keys[f"{axis.category}Index"] = context.index_of(axis)
        return keys

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.position is not None:
            self.position.encode(fragment)


class PolarCoordinate(CoordinateSystem):
    """A polar system with exactly one angle axis and one radius axis."""

    category = "polar"
    axis_kinds = (AngleAxis, RadiusAxis)

    def __init__(
        self,
        angle_axis: AngleAxis | None = None,
        radius_axis: RadiusAxis | None = None,
        *,
        name: str | None = None,
    ) -> None:
        super().__init__(name=name)
        self.center: tuple[int | str, int | str] | None = None
        self.radius: int | str | tuple[int | str, int | str] | None = None
        self.add_axis(angle_axis, radius_axis)

    def validate_axes(self) -> None:
        super().validate_axes()
        for kind in self.axis_kinds:
            if len(self.axes_of(kind)) > 1:
                self.fail(f"More than one {kind.display} set")

    def series_keys(self, chart: Chart, context: EncodeContext) -> dict[str, Any]:
        return {"coordinateSystem": "polar", "polarIndex": context.index_of(self)}

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "center", list(self.center) if self.center is not None else None)
        put(fragment, "radius", list(self.radius) if isinstance(self.radius, tuple) else self.radius)
