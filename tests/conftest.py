"""Pytest fixtures shared across chart document tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import pytest

from chartdoc.axes import XAxis, YAxis
from chartdoc.charts import BarChart
from chartdoc.coordinates import RectangularCoordinate
from chartdoc.data import CategoryData, Data, DataType
from chartdoc.document import ChartDocument
from chartdoc.options import DocumentOptions


@pytest.fixture
def plain_options() -> DocumentOptions:
    """Return options without the default legend and tooltip."""

    return DocumentOptions(default_legend=False, default_tooltip=False)


@pytest.fixture
def months() -> CategoryData:
    return CategoryData("Jan", "Feb", "Mar", name="Months")


@pytest.fixture
def sales() -> Data:
    return Data(10, 20, 30, name="Sales")


@pytest.fixture
def grid() -> RectangularCoordinate:
    """Return a grid with a category X axis and a numeric Y axis."""

    return RectangularCoordinate(XAxis(DataType.CATEGORY), YAxis(DataType.NUMBER))


@pytest.fixture
def bar_document(
    plain_options: DocumentOptions,
    grid: RectangularCoordinate,
    months: CategoryData,
    sales: Data,
) -> ChartDocument:
    """Return a document with one bar chart plotted on `grid`."""

    grid.add(BarChart(months, sales, name="Sales"))
    return ChartDocument(grid, options=plain_options)


@pytest.fixture
def captured_signal() -> Iterator[Any]:
    """Connect a recording receiver to a chartdoc signal for the test's duration.

    Usage: `calls = captured_signal(signals.document_encoded)`.
    """

    connected: list[tuple[Any, str]] = []

    def connect(signal) -> list[dict[str, Any]]:
        calls: list[dict[str, Any]] = []

        def receiver(sender, **kwargs) -> None:
            calls.append({"sender": sender, **kwargs})

        uid = f"test-receiver-{id(calls)}"
        signal.connect(receiver, weak=False, dispatch_uid=uid)
        connected.append((signal, uid))
        return calls

    yield connect
    for signal, uid in connected:
        signal.disconnect(dispatch_uid=uid)


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests that do not depend on Django configuration.
    - `integration`: tests touching Django settings, signals, or commands.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
