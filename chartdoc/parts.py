"""The encodable part contract and shared encoding helpers.

Every node of a chart document is a `Part`. A part validates itself and writes
its structural fragment into a mapping supplied by its caller. Values are
never serialized here; the document driver turns the assembled tree into JSON
text in one step.

Small cosmetic leaves (positions, labels) are `ComponentProperty` objects held
by composition: a chart *has* a label rather than inheriting label behavior.
"""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, NoReturn

from .exceptions import ChartValidationError

if TYPE_CHECKING:
    from .data import DataRegistry, DataSource

_part_ids = itertools.count(1)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

_FORMATTER_PLACEHOLDERS: dict[str, str] = {
    "{chart}": "{a}",
    "{name}": "{b}",
    "{value}": "{c}",
    "{percent}": "{d}",
}


def display_name(identifier: str) -> str:
    """Turn a class or attribute name into words.

    `BarChart` becomes `Bar Chart`, `xAxis` becomes `X Axis`. All-lowercase
    names are returned unchanged.
    """

    if not identifier or identifier[1:] == identifier[1:].lower():
        return identifier
    words = _CAMEL_BOUNDARY.sub(" ", identifier)
    return words[0].upper() + words[1:]


def put(fragment: dict[str, Any], key: str, value: Any) -> None:
    """Set `fragment[key]` only when `value` is not None."""

    if value is not None:
        fragment[key] = value


def encode_property(fragment: dict[str, Any], key: str, prop: ComponentProperty | None) -> None:
    """Encode a nested property under `key`, skipping it when unset or empty."""

    if prop is None:
        return
    nested: dict[str, Any] = {}
    prop.encode(nested)
    if nested:
        fragment[key] = nested


class ComponentProperty:
    """A cosmetic leaf that knows how to encode itself into a fragment."""

    def encode(self, fragment: dict[str, Any]) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class Position(ComponentProperty):
    """Placement of a component inside the chart area.

    Values may be pixel numbers or strings such as `"10%"` or `"center"`.
    """

    top: int | str | None = None
    left: int | str | None = None
    bottom: int | str | None = None
    right: int | str | None = None
    width: int | str | None = None
    height: int | str | None = None

    def encode(self, fragment: dict[str, Any]) -> None:
        put(fragment, "top", self.top)
        put(fragment, "left", self.left)
        put(fragment, "bottom", self.bottom)
        put(fragment, "right", self.right)
        put(fragment, "width", self.width)
        put(fragment, "height", self.height)


class LabelMode(StrEnum):
    """How a label is rendered by the chart that owns it."""

    DEFAULT = "default"
    GAUGE = "gauge"


@dataclass(slots=True)
class Label(ComponentProperty):
    """A text label attached to a chart or an axis.

    Formatter placeholders: `{chart}`, `{name}`, `{value}`, `{percent}`.
    """

    show: bool = True
    formatter: str | None = None
    position: str | None = None
    rotate: int | None = None

    def encode(self, fragment: dict[str, Any], mode: LabelMode = LabelMode.DEFAULT) -> None:
        fragment.update(encode_label(self, mode))


def encode_label(label: Label, mode: LabelMode = LabelMode.DEFAULT) -> dict[str, Any]:
    """Return the encoded fragment of a label for the given mode.

    Gauge details only understand the raw `{value}` placeholder and have no
    position, so `LabelMode.GAUGE` passes the formatter through untouched and
    drops the position.
    """

    fragment: dict[str, Any] = {"show": label.show}
    if label.formatter is not None:
        if mode is LabelMode.GAUGE:
            fragment["formatter"] = label.formatter
        else:
            formatter = label.formatter
            for placeholder, code in _FORMATTER_PLACEHOLDERS.items():
                formatter = formatter.replace(placeholder, code)
            fragment["formatter"] = formatter
    if mode is not LabelMode.GAUGE:
        put(fragment, "position", label.position)
    put(fragment, "rotate", label.rotate)
    return fragment


@dataclass(slots=True)
class EncodeContext:
    """State shared by all parts during one document encode.

    Args:
        registry: Data registry of the current pass.
        skip_data: True when the data dictionary is not re-emitted.
        indexes: Part id to index within its document category.
        axis_data: Axis id to the category source a chart binds to it.
    """

    registry: DataRegistry
    skip_data: bool = False
    indexes: dict[int, int] = field(default_factory=dict)
    axis_data: dict[int, DataSource] = field(default_factory=dict)

    def index_of(self, part: Part) -> int:
        """Return the index of a part within its category.

        Raises:
            KeyError: When the part is not part of the document.
        """

        return self.indexes[part.id]

    def serial_of(self, source: DataSource) -> int:
        return self.registry.serial_of(source)

    def placeholder(self, source: DataSource) -> str:
        """Return the dimension name used for a source, such as `"d3"`."""

        return f"d{self.serial_of(source)}"


class Part:
    """Base class of every node in the component graph.

    Attributes:
        category: Document key under which instances are emitted, or None for
            parts that are only ever encoded inline by their owner.
    """

    category: ClassVar[str | None] = None
    display: ClassVar[str | None] = None

    def __init__(self, *, name: str | None = None) -> None:
        self.id = next(_part_ids)
        self.name = name

    def validate(self) -> None:
        """Raise `ChartValidationError` when required state is missing."""

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        """Write this part's structural fragment into `fragment`."""

        put(fragment, "name", self.name)
        fragment["id"] = self.id

    def children(self) -> Iterable[Part]:
        """Parts owned by this part that the document must also emit."""

        return ()

    def references(self) -> Iterable[Part]:
        """Parts this part refers to without owning them."""

        return ()

    def data_sources(self) -> Iterable[DataSource]:
        """Data sources referenced by this part's encoded fragment."""

        return ()

    def class_name(self) -> str:
        """Return a display name such as `Bar Chart (Sales)`."""

        label = self.display or display_name(type(self).__name__)
        return f"{label} ({self.name})" if self.name else label

    def fail(self, message: str) -> NoReturn:
        """Raise a validation error naming this part."""

        raise ChartValidationError(f"{message} for {self.class_name()}", part=self)

    def __repr__(self) -> str:
        return f"<{self.class_name()} id={self.id}>"


class DisplayablePart(Part):
    """A part that can be shown or hidden by the renderer."""

    def __init__(self, *, name: str | None = None) -> None:
        super().__init__(name=name)
        self.visible = True

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def encode(self, fragment: dict[str, Any], context: EncodeContext) -> None:
        super().encode(fragment, context)
        fragment["show"] = self.visible
