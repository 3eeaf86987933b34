"""Tests for binding charts to coordinate systems and their validation order."""

from __future__ import annotations

import pytest

from chartdoc.axes import AngleAxis, XAxis, YAxis
from chartdoc.charts import BarChart, BoxplotChart, BoxplotItem, ChartType, GaugeChart, LineChart, PieChart, SankeyChart
from chartdoc.coordinates import RectangularCoordinate
from chartdoc.data import CategoryData, Data, DataType, ObjectData
from chartdoc.exceptions import ChartValidationError, UnsupportedOperationError

pytestmark = pytest.mark.unit


def test_adding_to_a_second_system_detaches_from_the_first(months, sales) -> None:
    """Move a chart to the last coordinate system it was added to."""

    first = RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis())
    second = RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis())
    chart = BarChart(months, sales)

    first.add(chart)
    second.add(chart)

    assert chart.coordinate_system is second
    assert chart not in first.charts
    assert second.charts == (chart,)


def test_removing_from_a_stale_system_keeps_the_current_binding(months, sales) -> None:
    """Keep a chart's new binding when its old system removes it."""

    first = RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis())
    second = RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis())
    chart = BarChart(months, sales)
    first.add(chart)
    second.add(chart)

    first.remove(chart)

    assert chart.coordinate_system is second


def test_chart_axes_are_the_system_axis_list(grid, months, sales) -> None:
    """Expose the owning system's axes as the chart's axes."""

    chart = LineChart(months, sales)
    grid.add(chart)
    extra = YAxis()

    grid.add_axis(extra)

    assert chart.axes is grid.axes
    assert extra in chart.axes


def test_unbound_chart_has_no_axes(months, sales) -> None:
    """Return no axes for a chart outside any coordinate system."""

    assert LineChart(months, sales).axes == []


def test_plot_on_prefers_the_given_axes(grid, months, sales) -> None:
    """Resolve a chart against the axes passed to plot_on."""

    right = YAxis()
    right.opposite = True
    chart = LineChart(months, sales)

    chart.plot_on(grid, right)

    assert grid.resolve_axes(chart) == (grid.x_axes[0], right)


def test_system_rejects_foreign_axis_kinds() -> None:
    """Refuse axes that the coordinate system does not use."""

    with pytest.raises(UnsupportedOperationError):
        RectangularCoordinate().add_axis(AngleAxis())


def test_system_rejects_charts_without_coordinates(grid) -> None:
    """Refuse charts that are never plotted on a coordinate system."""

    with pytest.raises(UnsupportedOperationError):
        grid.add(PieChart(CategoryData("a"), Data(1)))


def test_missing_axis_is_reported_before_chart_data(months) -> None:
    """Report a missing axis before any chart data problem."""

    grid = RectangularCoordinate(XAxis(DataType.CATEGORY))
    grid.add(BarChart(months, None))
    with pytest.raises(ChartValidationError, match="Y-Axis not set for Rectangular Coordinate"):
        grid.validate()


def test_axis_owned_by_another_system_fails(months, sales) -> None:
    """Reject an axis shared with another coordinate system."""

    shared = XAxis(DataType.CATEGORY)
    RectangularCoordinate(shared, YAxis())
    other = RectangularCoordinate(shared, YAxis())
    other.add(BarChart(months, sales))
    with pytest.raises(ChartValidationError, match="X-Axis is used by some other coordinate system"):
        other.validate()


def test_object_axis_cannot_be_plotted() -> None:
    """Reject axes declared with OBJECT data."""

    grid = RectangularCoordinate(XAxis(DataType.OBJECT), YAxis())
    with pytest.raises(ChartValidationError, match="Object data cannot be plotted for X-Axis"):
        grid.validate()


def test_boxplot_requires_a_category_axis() -> None:
    """Reject a boxplot plotted on a numeric X axis."""

    grid = RectangularCoordinate(XAxis(DataType.NUMBER), YAxis())
    grid.add(BoxplotChart(CategoryData("a"), ObjectData(BoxplotItem(1, 2, 3, 4, 5))))
    with pytest.raises(ChartValidationError, match="X-Axis must be a category axis for Boxplot Chart"):
        grid.validate()


def test_boxplot_slot_check_runs_before_the_axis_rule() -> None:
    """Report missing boxplot data before the category axis rule."""

    grid = RectangularCoordinate(XAxis(DataType.NUMBER), YAxis())
    grid.add(BoxplotChart(CategoryData("a"), None))
    with pytest.raises(ChartValidationError, match="Data for Y-Axis not set"):
        grid.validate()


def test_horizontal_boxplot_binds_categories_to_the_y_axis() -> None:
    """Write a horizontal boxplot's categories on the Y axis."""

    y_axis = YAxis(DataType.CATEGORY)
    grid = RectangularCoordinate(XAxis(), y_axis)
    categories = CategoryData("a")
    boxplot = BoxplotChart(categories, ObjectData(BoxplotItem(1, 2, 3, 4, 5)), horizontal=True)
    grid.add(boxplot)

    grid.validate()

    assert boxplot.axis_bindings() == {y_axis.id: categories}


def test_chart_type_arity_and_requirements() -> None:
    """Describe each chart type's dimensions and coordinate needs."""

    assert ChartType.BAR.arity == 2
    assert ChartType.PIE.dimensions == ("itemName", "value")
    assert ChartType.SANKEY.arity == 0
    assert ChartType.LINE.requires_coordinate_system is True
    assert ChartType.GAUGE.requires_coordinate_system is False


def test_pie_reports_missing_value_dimension() -> None:
    """Name the missing value dimension of a pie chart."""

    with pytest.raises(ChartValidationError, match=r"Data for Value not set for Pie Chart \(Share\)"):
        PieChart(CategoryData("a"), name="Share").validate()


def test_unsupported_setters_raise() -> None:
    """Raise on data setters a chart type does not support."""

    with pytest.raises(UnsupportedOperationError):
        SankeyChart().set_data(Data(1))
    with pytest.raises(UnsupportedOperationError):
        GaugeChart().set_data(Data(1))


def test_set_data_rejects_extra_sources(months, sales) -> None:
    """Reject more sources than the chart has dimensions."""

    with pytest.raises(ValueError):
        BarChart().set_data(months, sales, Data(1))


def test_xy_setters_fill_the_slots(months, sales) -> None:
    """Fill X and Y slots through the XY setters."""

    chart = LineChart()
    chart.set_x_data(months)
    chart.set_y_data(sales)
    assert chart.slots == (months, sales)
