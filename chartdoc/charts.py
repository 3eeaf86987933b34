"""Chart (series) parts.

A chart owns a fixed number of data slots given by its `ChartType`. XY and
pie-like charts map each slot to a named dimension and reference the sources
through an `"encode"` mapping of placeholders; charts with type-specific data
(boxplot, tree, Sankey) reference a single embedded source by serial.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Iterable

from .axes import Axis
from .data import DataSource, DataType, ObjectData
from .exceptions import UnsupportedOperationError
from .graphs import SankeyData, TreeData, TreeSource
from .parts import EncodeContext, Label, LabelMode, Part, encode_label, put

if TYPE_CHECKING:
    from .coordinates import CoordinateSystem

DIMENSION_NAMES: dict[str, str] = {
    "x": "X-Axis",
    "y": "Y-Axis",
    "itemName": "Item Name",
    "value": "Value",
}


class ChartType(Enum):
    """Renderer type, dimension names and coordinate requirement per chart kind."""

    LINE = ("line", ("x", "y"), True)
    BAR = ("bar", ("x", "y"), True)
    SCATTER = ("scatter", ("x", "y"), True)
    EFFECT_SCATTER = ("effectScatter", ("x", "y"), True)
    BOXPLOT = ("boxplot", ("x", "y"), True)
    PIE = ("pie", ("itemName", "value"), False)
    FUNNEL = ("funnel", ("itemName", "value"), False)
    GAUGE = ("gauge", (), False)
    TREE = ("tree", (), False)
    TREEMAP = ("treemap", (), False)
    SUNBURST = ("sunburst", (), False)
    SANKEY = ("sankey", (), False)

    def __init__(self, renderer_type: str, dimensions: tuple[str, ...], requires_coordinate_system: bool) -> None:
        self.renderer_type = renderer_type
        self.dimensions = dimensions
        self.requires_coordinate_system = requires_coordinate_system

    @property
    def arity(self) -> int:
        return len(self.dimensions)


class Chart(Part):
    """Base class of all charts.

    Args:
        *sources: Initial data, one source per dimension of the chart type.
        name: Series name (shown by legends and tooltips).
    """

    category = "series"
    chart_type: ClassVar[ChartType]
    label_mode: ClassVar[LabelMode] = LabelMode.DEFAULT
    label_key: ClassVar[str] = "label"
    value_index: ClassVar[int | None] = None

    def __init__(self, *sources: DataSource | None, name: str | None = None) -> None:
        super().__init__(name=name)
        self._slots: list[DataSource | None] = [None] * self.chart_type.arity
        self._coordinate_system: CoordinateSystem | None = None
        self.axis_ids: tuple[int, ...] = ()
        self.label: Label | None = None
        if any(source is not None for source in sources):
            self.set_data(*sources)

    @property
    def slots(self) -> tuple[DataSource | None, ...]:
        return tuple(self._slots)

    def set_data(self, *sources: DataSource | None) -> None:
        """Fill the data slots in dimension order.

        Raises:
            ValueError: When more sources than dimensions are given.
        """

        if len(sources) > len(self._slots):
            raise ValueError(f"{self.class_name()} takes at most {len(self._slots)} data source(s).")
        for index, source in enumerate(sources):
            self._slots[index] = source

    @property
    def coordinate_system(self) -> CoordinateSystem | None:
        return self._coordinate_system

    @property
    def axes(self) -> list[Axis]:
        """The axis list of the bound coordinate system (shared, not copied)."""

        if self._coordinate_system is None:
            return []
        return self._coordinate_system.axes

    def _bind(self, system: CoordinateSystem) -> None:
        self._coordinate_system = system

    def _unbind(self) -> None:
        self._coordinate_system = None

    def plot_on(self, system: CoordinateSystem, *axes: Axis) -> None:
        """Plot this chart on `system`, preferring the given axes."""

        system.add_axis(*axes)
        self.axis_ids = tuple(axis.id for axis in axes)
        system.add(self)

    def validate(self) -> None:
        for dimension, source in zip(self.chart_type.dimensions, self._slots):
            if source is None:
                self.fail(f"Data for {DIMENSION_NAMES[dimension]} not set")
        if self.chart_type.requires_coordinate_system and self._coordinate_system is None:
            self.fail("Coordinate system not set")

    def validate_structure(self, system: CoordinateSystem) -> None:
        """Check rules that need the resolved axes of `system`."""

    def axis_bindings(self) -> dict[int, DataSource]:
        """Axis id to the category source this chart supplies to that axis."""

        return {}

    def embedded_data(self) -> DataSource | None:
        """Return the source encoded as `"data": <serial>`, if any."""

        return None

    def value_source(self) -> DataSource | None:
        """Return the source holding this chart's plotted values.

        The last dimension carries the values; charts with embedded data use
        the embedded source.
        """

        if self.chart_type.dimensions:
            return self._slots[-1]
        return self.embedded_data()

    def data_sources(self) -> Iterable[DataSource]:
        sources = [source for source in self._slots if source is not None]
        embedded = self.embedded_data()
        if embedded is not None and all(source is not embedded for source in sources):
            sources.append(embedded)
        return sources

    def references(self) -> Iterable[Part]:
        return (self._coordinate_system,) if self._coordinate_system is not None else ()

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        fragment["type"] = self.chart_type.renderer_type
        if self._coordinate_system is not None:
            fragment.update(self._coordinate_system.series_keys(self, context))
        embedded = self.embedded_data()
        if embedded is not None:
            fragment["data"] = context.serial_of(embedded)
        elif self.chart_type.dimensions:
            fragment["encode"] = {
                dimension: context.placeholder(source)
                for dimension, source in zip(self.chart_type.dimensions, self._slots)
                if source is not None
            }
        if self.label is not None:
            fragment[self.label_key] = encode_label(self.label, self.label_mode)


class XYChart(Chart):
    """A chart plotted against the X and Y axes of a rectangular grid."""

    def __init__(self, x_data: DataSource | None = None, y_data: DataSource | None = None, *, name: str | None = None) -> None:
        super().__init__(x_data, y_data, name=name)

    @property
    def x_data(self) -> DataSource | None:
        return self._slots[0]

    @property
    def y_data(self) -> DataSource | None:
        return self._slots[1]

    def set_x_data(self, source: DataSource) -> None:
        self._slots[0] = source

    def set_y_data(self, source: DataSource) -> None:
        self._slots[1] = source


class LineChart(XYChart):
    chart_type = ChartType.LINE

    def __init__(self, x_data: DataSource | None = None, y_data: DataSource | None = None, *, name: str | None = None) -> None:
        super().__init__(x_data, y_data, name=name)
        self.smooth = False
        self.stack: str | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.smooth:
            fragment["smooth"] = True
        put(fragment, "stack", self.stack)


class BarChart(XYChart):
    chart_type = ChartType.BAR

    def __init__(self, x_data: DataSource | None = None, y_data: DataSource | None = None, *, name: str | None = None) -> None:
        super().__init__(x_data, y_data, name=name)
        self.stack: str | None = None
        self.bar_width: int | str | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "stack", self.stack)
        put(fragment, "barWidth", self.bar_width)


class ScatterChart(XYChart):
    chart_type = ChartType.SCATTER

    def __init__(self, x_data: DataSource | None = None, y_data: DataSource | None = None, *, name: str | None = None) -> None:
        super().__init__(x_data, y_data, name=name)
        self.symbol_size: int | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "symbolSize", self.symbol_size)


class EffectScatterChart(ScatterChart):
    chart_type = ChartType.EFFECT_SCATTER


@dataclass(frozen=True, slots=True)
class BoxplotItem:
    """Five-number summary of one boxplot category."""

    minimum: float
    lower_quartile: float
    median: float
    upper_quartile: float
    maximum: float

    def as_json(self) -> list[float]:
        return [self.minimum, self.lower_quartile, self.median, self.upper_quartile, self.maximum]


class BoxplotChart(Chart):
    """Box-and-whisker chart.

    The category source is supplied to the category axis of the coordinate
    system; the five-number summaries are embedded as the series data.

    Args:
        categories: Category labels, one per box.
        stats: `ObjectData` of `BoxplotItem` values.
        horizontal: Plot boxes along the Y axis instead of the X axis.
    """

    chart_type = ChartType.BOXPLOT
    value_index = 2

    def __init__(
        self,
        categories: DataSource | None = None,
        stats: ObjectData | None = None,
        *,
        horizontal: bool = False,
        name: str | None = None,
    ) -> None:
        super().__init__(categories, stats, name=name)
        self.horizontal = horizontal

    @property
    def categories(self) -> DataSource | None:
        return self._slots[0]

    @property
    def stats(self) -> DataSource | None:
        return self._slots[1]

    def _category_axis(self) -> Axis | None:
        if self._coordinate_system is None:
            return None
        axes = self._coordinate_system.resolve_axes(self)
        index = 1 if self.horizontal else 0
        return axes[index] if len(axes) > index else None

    def validate_structure(self, system: CoordinateSystem) -> None:
        axis = self._category_axis()
        if axis is None or axis.data_type is not DataType.CATEGORY:
            label = "Y-Axis" if self.horizontal else "X-Axis"
            self.fail(f"{label} must be a category axis")

    def axis_bindings(self) -> dict[int, DataSource]:
        axis = self._category_axis()
        if axis is None or self.categories is None:
            return {}
        return {axis.id: self.categories}

    def embedded_data(self) -> DataSource | None:
        return self.stats

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.horizontal:
            fragment["layout"] = "horizontal"


class PieChart(Chart):
    """Pie chart of item names and values."""

    chart_type = ChartType.PIE

    def __init__(
        self,
        item_names: DataSource | None = None,
        values: DataSource | None = None,
        *,
        name: str | None = None,
    ) -> None:
        super().__init__(item_names, values, name=name)
        self.radius: int | str | tuple[int | str, int | str] | None = None
        self.center: tuple[int | str, int | str] | None = None
        self.rose = False

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "radius", list(self.radius) if isinstance(self.radius, tuple) else self.radius)
        put(fragment, "center", list(self.center) if self.center is not None else None)
        if self.rose:
            fragment["roseType"] = "radius"


class FunnelChart(Chart):
    chart_type = ChartType.FUNNEL

    def __init__(
        self,
        item_names: DataSource | None = None,
        values: DataSource | None = None,
        *,
        name: str | None = None,
    ) -> None:
        super().__init__(item_names, values, name=name)
        self.ascending = False
        self.gap: int | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.ascending:
            fragment["sort"] = "ascending"
        put(fragment, "gap", self.gap)


@dataclass(slots=True)
class Needle:
    """One needle of a gauge."""

    value: Any = 0
    name: str | None = None

    def as_json(self) -> dict[str, Any]:
        return {"value": self.value, "name": self.name or ""}


class GaugeChart(Chart):
    """A dial with one or more needles.

    Needle values are small and encoded inline; a structure-only re-encode
    leaves them out so the renderer keeps its current values.
    """

    chart_type = ChartType.GAUGE
    label_mode = LabelMode.GAUGE
    label_key = "detail"

    def __init__(self, needles: int = 1, *, value_name: str | None = None, name: str | None = None) -> None:
        super().__init__(name=name)
        self.needles = [Needle() for _ in range(max(needles, 1))]
        self.needles[0].name = value_name
        self.min: Any = None
        self.max: Any = None
        self.start_angle: int | None = None
        self.end_angle: int | None = None
        self.divisions: int | None = None

    def set_data(self, *sources: DataSource | None) -> None:
        raise UnsupportedOperationError(f"{self.class_name()} does not use data sources; set needle values instead")

    def set_value(self, value: Any, needle: int = 0) -> None:
        """Set a needle's value; out-of-range needle indexes are ignored."""

        if 0 <= needle < len(self.needles):
            self.needles[needle].value = value

    def get_value(self, needle: int = 0) -> Any:
        if 0 <= needle < len(self.needles):
            return self.needles[needle].value
        return None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "startAngle", self.start_angle)
        put(fragment, "endAngle", self.end_angle)
        put(fragment, "min", self.min)
        put(fragment, "max", self.max)
        put(fragment, "splitNumber", self.divisions)
        if not context.skip_data:
            fragment["data"] = [needle.as_json() for needle in self.needles]


class _HierarchyChart(Chart):
    """A chart whose embedded data is a single tree."""

    def __init__(self, root: TreeData | None = None, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self._source: TreeSource | None = None
        if root is not None:
            self.set_tree(root)

    @property
    def root(self) -> TreeData | None:
        return self._source.root if self._source is not None else None

    def set_tree(self, root: TreeData) -> None:
        self._source = TreeSource(root, name=root.name)

    def set_data(self, *sources: DataSource | None) -> None:
        raise UnsupportedOperationError(f"{self.class_name()} takes its data from set_tree()")

    def validate(self) -> None:
        super().validate()
        if self._source is None:
            self.fail("Data not set")

    def embedded_data(self) -> DataSource | None:
        return self._source


class TreeChart(_HierarchyChart):
    chart_type = ChartType.TREE

    def __init__(self, root: TreeData | None = None, *, name: str | None = None) -> None:
        super().__init__(root, name=name)
        self.orient: str | None = None

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        put(fragment, "orient", self.orient)


class TreemapChart(_HierarchyChart):
    chart_type = ChartType.TREEMAP


class SunburstChart(_HierarchyChart):
    chart_type = ChartType.SUNBURST


class SankeyChart(Chart):
    """Flow chart over a `SankeyData` node/edge set.

    Nodes travel through the data dictionary; links are encoded inline by
    node name.
    """

    chart_type = ChartType.SANKEY

    def __init__(self, data: SankeyData | None = None, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.data = data
        self.vertical = False

    def set_data(self, *sources: DataSource | None) -> None:
        raise UnsupportedOperationError(f"{self.class_name()} takes its data in the constructor")

    def validate(self) -> None:
        super().validate()
        if self.data is None:
            self.fail("Data not set")

    def embedded_data(self) -> DataSource | None:
        return self.data

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        if self.data is not None:
            fragment["links"] = [edge.as_json() for edge in self.data.edges]
        if self.vertical:
            fragment["orient"] = "vertical"
