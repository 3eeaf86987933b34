"""Tests for part encoding helpers, labels, components and shapes."""

from __future__ import annotations

import json

import pytest

from chartdoc.axes import AngleAxis, RadiusAxis, XAxis, YAxis
from chartdoc.charts import BarChart, BoxplotChart, BoxplotItem, GaugeChart, PieChart
from chartdoc.components import ComponentGroup, DataZoom, Title, Tooltip, TooltipTrigger, VisualMap
from chartdoc.coordinates import PolarCoordinate, RectangularCoordinate
from chartdoc.data import CategoryData, Data, DataType, ObjectData
from chartdoc.document import ChartDocument
from chartdoc.exceptions import ChartValidationError
from chartdoc.parts import Label, LabelMode, Position, display_name, encode_label
from chartdoc.shapes import Circle, Rectangle, ShapeGroup, Text

pytestmark = pytest.mark.unit


def test_display_name_splits_camel_case() -> None:
    """Split class names into words."""

    assert display_name("BarChart") == "Bar Chart"
    assert display_name("xAxis") == "X Axis"
    assert display_name("Data") == "Data"


def test_label_default_mode_translates_placeholders() -> None:
    """Translate named formatter placeholders to renderer letters."""

    label = Label(formatter="{chart} {name}: {value} ({percent}%)", position="inside")
    assert encode_label(label) == {"show": True, "formatter": "{a} {b}: {c} ({d}%)", "position": "inside"}


def test_label_gauge_mode_keeps_formatter_raw_and_drops_position() -> None:
    """Keep gauge formatters untranslated and without position."""

    label = Label(formatter="{value} km/h", position="inside")
    assert encode_label(label, LabelMode.GAUGE) == {"show": True, "formatter": "{value} km/h"}


def test_encoding_a_label_does_not_mutate_it() -> None:
    """Leave the label unchanged after encoding."""

    label = Label(formatter="{value}")
    encode_label(label, LabelMode.DEFAULT)
    encode_label(label, LabelMode.GAUGE)
    assert label.formatter == "{value}"


def test_position_encodes_only_set_edges() -> None:
    """Write only the position edges that are set."""

    fragment: dict = {}
    Position(top=10, left="center").encode(fragment)
    assert fragment == {"top": 10, "left": "center"}


def test_gauge_encodes_detail_label_and_inline_needles(plain_options) -> None:
    """Write gauge needles inline and the label as detail."""

    gauge = GaugeChart(2, value_name="Speed")
    gauge.set_value(70)
    gauge.set_value(90, needle=1)
    gauge.set_value(5, needle=9)
    gauge.max = 120
    gauge.label = Label(formatter="{value} km/h")

    series = json.loads(ChartDocument(gauge, options=plain_options).encode())["series"][0]

    assert series["type"] == "gauge"
    assert series["detail"] == {"show": True, "formatter": "{value} km/h"}
    assert "label" not in series
    assert series["max"] == 120
    assert series["data"] == [{"value": 70, "name": "Speed"}, {"value": 90, "name": ""}]


def test_gauge_omits_needles_on_structure_only_encode(plain_options) -> None:
    """Leave gauge needles out of structure-only encodes."""

    document = ChartDocument(GaugeChart(), options=plain_options)
    document.encode()
    series = json.loads(document.encode(skip_data=True))["series"][0]
    assert "data" not in series


def test_tooltip_formatter_references_serials(plain_options, grid, months, sales) -> None:
    """Reference sources and charts by serial in the formatter."""

    bar = BarChart(months, sales, name="Sales")
    grid.add(bar)
    tooltip = Tooltip(TooltipTrigger.AXIS)
    tooltip.append("Month: ").append(months).append("\n").append(" ").newline().append("Total: ").append(bar)

    parsed = json.loads(ChartDocument(grid, tooltip, options=plain_options).encode())

    formatter = parsed["tooltip"][0]["formatter"]
    assert parsed["tooltip"][0]["trigger"] == "axis"
    assert formatter == {
        "functionP": {"body": ["Month: ", months.serial, "<br>Total: ", sales.serial]}
    }


def test_tooltip_text_newlines_become_line_breaks(plain_options) -> None:
    """Turn newlines in tooltip text into line breaks."""

    tooltip = Tooltip().append("first\nsecond")
    parsed = json.loads(ChartDocument(Title("t"), tooltip, options=plain_options).encode())
    assert parsed["tooltip"][0]["formatter"]["functionP"]["body"] == ["first<br>second"]


def test_tooltip_references_boxplot_median_by_index(plain_options) -> None:
    """Reference a boxplot's median by value index."""

    categories = CategoryData("A", "B")
    stats = ObjectData(BoxplotItem(1, 2, 3, 4, 5), BoxplotItem(2, 3, 4, 5, 6))
    grid = RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis())
    boxplot = BoxplotChart(categories, stats)
    grid.add(boxplot)
    tooltip = Tooltip().append(boxplot)

    parsed = json.loads(ChartDocument(grid, tooltip, options=plain_options).encode())

    assert parsed["tooltip"][0]["formatter"]["functionP"]["body"] == [[stats.serial, 2]]
    assert parsed["dataset"]["source"][f"d{stats.serial}"] == [[1, 2, 3, 4, 5], [2, 3, 4, 5, 6]]
    assert parsed["xAxis"][0]["data"] == categories.serial


def test_data_zoom_encodes_axis_indexes(plain_options, grid, months, sales) -> None:
    """Write the indexes of the zoomed axes."""

    grid.add(BarChart(months, sales))
    zoom = DataZoom(grid, grid.x_axes[0], slider=True)
    zoom.start, zoom.end = 10, 90

    fragment = json.loads(ChartDocument(grid, zoom, options=plain_options).encode())["dataZoom"][0]

    assert fragment["type"] == "slider"
    assert fragment["xAxisIndex"] == [0]
    assert "yAxisIndex" not in fragment
    assert (fragment["start"], fragment["end"]) == (10, 90)


def test_data_zoom_rejects_axes_of_another_system(plain_options, grid, months, sales) -> None:
    """Reject zooming an axis of another system."""

    grid.add(BarChart(months, sales))
    zoom = DataZoom(grid, XAxis())
    with pytest.raises(ChartValidationError, match="does not belong to Rectangular Coordinate"):
        ChartDocument(grid, zoom, options=plain_options).encode()


def test_visual_map_points_at_series_index(plain_options) -> None:
    """Point a visual map at its chart's series index."""

    first = PieChart(CategoryData("a"), Data(1))
    second = PieChart(CategoryData("b"), Data(2))
    visual_map = VisualMap(second)
    visual_map.min, visual_map.max = 0, 10

    parsed = json.loads(ChartDocument(first, second, visual_map, options=plain_options).encode())

    assert parsed["visualMap"][0]["seriesIndex"] == 1
    assert parsed["visualMap"][0]["type"] == "continuous"


def test_visual_map_requires_a_chart(plain_options) -> None:
    """Reject a visual map without a chart."""

    with pytest.raises(ChartValidationError, match="Chart not set for Visual Map"):
        ChartDocument(VisualMap(), options=plain_options).encode()


def test_component_group_emits_members_only(plain_options) -> None:
    """Write group members but not the group itself."""

    group = ComponentGroup(Title("Report"), PieChart(CategoryData("a"), Data(1)))
    parsed = json.loads(ChartDocument(group, options=plain_options).encode())
    assert parsed["title"][0]["text"] == "Report"
    assert len(parsed["series"]) == 1


def test_polar_series_are_tied_to_the_polar_system(plain_options) -> None:
    """Tie polar series to their polar system index."""

    polar = PolarCoordinate(AngleAxis(DataType.CATEGORY), RadiusAxis())
    polar.center = ("50%", "50%")
    polar.add(BarChart(CategoryData("N", "S"), Data(3, 4)))

    parsed = json.loads(ChartDocument(polar, options=plain_options).encode())

    series = parsed["series"][0]
    assert series["coordinateSystem"] == "polar"
    assert series["polarIndex"] == 0
    assert parsed["angleAxis"][0]["polarIndex"] == 0
    assert parsed["angleAxis"][0]["type"] == "category"
    assert parsed["polar"][0]["center"] == ["50%", "50%"]


def test_polar_rejects_a_second_angle_axis(plain_options) -> None:
    """Reject a second angle axis on a polar system."""

    polar = PolarCoordinate(AngleAxis(), RadiusAxis())
    polar.add_axis(AngleAxis())
    with pytest.raises(ChartValidationError, match="More than one Angle Axis set"):
        polar.validate()


def test_shape_group_passes_its_level_to_members(plain_options) -> None:
    """Give grouped shapes the group's z level."""

    rectangle = Rectangle(10, 20, 4)
    text = Text("Hello")
    circle = Circle(5)
    circle.z = 9
    group = ShapeGroup(rectangle, text, circle)
    group.z = 3
    group.move_to(100, 50)

    graphic = json.loads(ChartDocument(group, options=plain_options).encode())["graphic"][0]

    assert graphic["type"] == "group"
    assert (graphic["x"], graphic["y"], graphic["z"]) == (100, 50, 3)
    children = graphic["children"]
    assert [child["type"] for child in children] == ["rect", "text", "circle"]
    assert children[0]["shape"] == {"width": 10, "height": 20, "r": [4]}
    assert children[0]["z"] == 3
    assert children[1]["style"]["text"] == "Hello"
    assert children[2]["z"] == 9
    assert rectangle.z is None
