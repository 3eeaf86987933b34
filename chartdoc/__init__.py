"""Chart component graphs serialized into renderer documents.

Parts (charts, axes, coordinate systems, legends, tooltips, shapes) form a
graph that `ChartDocument` validates and encodes. Data arrays are not inlined
in the structure: each data source is numbered once per encode and its values
travel in a separate data dictionary, so a `DataChannel` can later update
them without re-sending the document.
"""

from .axes import AngleAxis, RadiusAxis, XAxis, YAxis
from .channel import DataChannel, UpdateMessage
from .charts import (
    BarChart,
    BoxplotChart,
    BoxplotItem,
    ChartType,
    EffectScatterChart,
    FunnelChart,
    GaugeChart,
    LineChart,
    PieChart,
    SankeyChart,
    ScatterChart,
    SunburstChart,
    TreeChart,
    TreemapChart,
)
from .components import ComponentGroup, DataZoom, Legend, Title, Tooltip, TooltipTrigger, VisualMap
from .coordinates import PolarCoordinate, RectangularCoordinate
from .data import (
    CategoryData,
    Data,
    DataRegistry,
    DataStream,
    DataType,
    DateData,
    LogData,
    ObjectData,
    SerialData,
    SerialDate,
    SerialTime,
    TimeData,
    WrappedData,
)
from .document import ChartDocument, ValidationResult, collect_references
from .exceptions import (
    ArityMismatchError,
    ChartError,
    ChartValidationError,
    CircularEdgeError,
    DataMismatchError,
    DuplicateNodeError,
    EmptyDataError,
    InvalidEdgeError,
    NullDataError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from .graphs import SankeyData, SankeyEdge, SankeyNode, TreeData
from .options import DocumentOptions
from .parts import Label, LabelMode, Position
from .shapes import Circle, Rectangle, ShapeGroup, Text

__all__ = [
    "AngleAxis",
    "ArityMismatchError",
    "BarChart",
    "BoxplotChart",
    "BoxplotItem",
    "CategoryData",
    "ChartDocument",
    "ChartError",
    "ChartType",
    "ChartValidationError",
    "Circle",
    "CircularEdgeError",
    "ComponentGroup",
    "Data",
    "DataChannel",
    "DataMismatchError",
    "DataRegistry",
    "DataStream",
    "DataType",
    "DataZoom",
    "DateData",
    "DocumentOptions",
    "DuplicateNodeError",
    "EffectScatterChart",
    "EmptyDataError",
    "FunnelChart",
    "GaugeChart",
    "InvalidEdgeError",
    "Label",
    "LabelMode",
    "Legend",
    "LineChart",
    "LogData",
    "NullDataError",
    "ObjectData",
    "PieChart",
    "PolarCoordinate",
    "Position",
    "RadiusAxis",
    "Rectangle",
    "RectangularCoordinate",
    "SankeyChart",
    "SankeyData",
    "SankeyEdge",
    "SankeyNode",
    "ScatterChart",
    "SerialData",
    "SerialDate",
    "SerialTime",
    "ShapeGroup",
    "SunburstChart",
    "Text",
    "TimeData",
    "Title",
    "Tooltip",
    "TooltipTrigger",
    "TreeChart",
    "TreeData",
    "TreemapChart",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "UpdateMessage",
    "ValidationResult",
    "VisualMap",
    "WrappedData",
    "XAxis",
    "YAxis",
    "collect_references",
]
