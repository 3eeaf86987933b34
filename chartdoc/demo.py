"""Sample documents used by the `render_chart_demo` command.

Each builder returns a fresh, valid `ChartDocument` built from fixed data so
its output is reproducible.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Final

from .axes import XAxis, YAxis
from .charts import BarChart, BoxplotChart, BoxplotItem, GaugeChart, LineChart, PieChart, SankeyChart, TreeChart
from .components import DataZoom, Title, Tooltip, TooltipTrigger
from .coordinates import RectangularCoordinate
from .data import CategoryData, Data, DataType, ObjectData, SerialDate
from .document import ChartDocument
from .graphs import SankeyData, SankeyNode, TreeData
from .options import DocumentOptions
from .parts import Label, Position


def build_xy_document(options: DocumentOptions | None = None) -> ChartDocument:
    """Line and bar series sharing one category axis, with a zoom slider."""

    months = CategoryData("Jan", "Feb", "Mar", "Apr", "May", "Jun", name="Months")
    visits = Data(120, 132, 101, 134, 90, 230, name="Visits")
    orders = Data(22, 18, 19, 23, 29, 33, name="Orders")

    x_axis = XAxis(DataType.CATEGORY)
    y_axis = YAxis(DataType.NUMBER)
    grid = RectangularCoordinate(x_axis, y_axis)
    line = LineChart(months, visits, name="Visits")
    line.smooth = True
    bar = BarChart(months, orders, name="Orders")
    grid.add(line, bar)

    zoom = DataZoom(grid, x_axis, slider=True)
    tooltip = Tooltip(TooltipTrigger.AXIS)
    return ChartDocument(Title("Monthly traffic"), grid, zoom, tooltip, options=options)


def build_pie_document(options: DocumentOptions | None = None) -> ChartDocument:
    """A labelled pie chart."""

    browsers = CategoryData("Firefox", "Chrome", "Safari", "Edge", name="Browsers")
    shares = Data(18, 52, 20, 10, name="Share")
    pie = PieChart(browsers, shares, name="Browser share")
    pie.radius = ("40%", "70%")
    pie.label = Label(formatter="{name}: {percent}%")
    return ChartDocument(Title("Browser share"), pie, options=options)


def build_gauge_document(options: DocumentOptions | None = None) -> ChartDocument:
    """A two-needle gauge; needle values are inline."""

    gauge = GaugeChart(2, value_name="Speed", name="Dashboard")
    gauge.set_value(72)
    gauge.needles[1].name = "Limit"
    gauge.set_value(90, needle=1)
    gauge.max = 160
    gauge.label = Label(formatter="{value} km/h")
    return ChartDocument(gauge, options=options)


def build_sankey_document(options: DocumentOptions | None = None) -> ChartDocument:
    """Energy flows between sources and uses."""

    data = SankeyData(name="Energy")
    coal, gas, grid_node = SankeyNode("Coal"), SankeyNode("Gas"), SankeyNode("Grid")
    homes, industry = SankeyNode("Homes"), SankeyNode("Industry")
    data.connect(coal, grid_node, 40)
    data.connect(gas, grid_node, 25)
    data.connect(grid_node, homes, 30)
    data.connect(grid_node, industry, 35)
    return ChartDocument(Title("Energy flow"), SankeyChart(data, name="Energy"), options=options)


def build_tree_document(options: DocumentOptions | None = None) -> ChartDocument:
    """An organisation tree."""

    root = TreeData("CEO")
    engineering = TreeData("Engineering").add(TreeData("Platform", 12), TreeData("Apps", 9))
    sales = TreeData("Sales").add(TreeData("EMEA", 5), TreeData("Americas", 7))
    root.add(engineering, sales)
    tree = TreeChart(root, name="Organisation")
    tree.orient = "LR"
    title = Title("Organisation")
    title.position = Position(left="center")
    return ChartDocument(title, tree, options=options)


def build_boxplot_document(options: DocumentOptions | None = None) -> ChartDocument:
    """Weekly response-time summaries on a category axis."""

    weeks = SerialDate(date(2024, 1, 1), date(2024, 1, 22), 1, "weeks", name="Weeks")
    labels = CategoryData(*(week.isoformat() for week in weeks.stream()), name="Week")
    stats = ObjectData(
        BoxplotItem(120, 180, 210, 260, 340),
        BoxplotItem(110, 170, 205, 250, 330),
        BoxplotItem(130, 190, 230, 270, 360),
        BoxplotItem(100, 160, 190, 240, 300),
        name="Response time",
    )
    grid = RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis(DataType.NUMBER))
    grid.add(BoxplotChart(labels, stats, name="Response time"))
    return ChartDocument(Title("Response time (ms)"), grid, options=options)


DEMO_BUILDERS: Final[dict[str, Callable[[DocumentOptions | None], ChartDocument]]] = {
    "xy": build_xy_document,
    "pie": build_pie_document,
    "gauge": build_gauge_document,
    "sankey": build_sankey_document,
    "tree": build_tree_document,
    "boxplot": build_boxplot_document,
}
