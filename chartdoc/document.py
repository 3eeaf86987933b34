"""The chart document: the serialization driver for a component graph.

`ChartDocument.encode()` runs one full pass:

1. Collect every reachable part depth-first (a part, then the parts it
   references, then the parts it owns), each part once.
2. Validate all parts, coordinate systems first, then every data source.
   Nothing is numbered or written when validation fails.
3. Register the data sources in discovery order. Serials start at 1.
4. Encode the structural tree category by category, with placeholders
   (`"d<serial>"`) or serials standing in for data.
5. Append the data dictionary under `DATA_KEY`, pulling each source's values
   one at a time from its stream.

A structure-only pass (`skip_data=True`) reuses the serials of the previous
full pass and omits the data dictionary.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

from . import signals
from .charts import Chart
from .codec import dumps, dumps_compact
from .components import Legend, Tooltip
from .coordinates import CoordinateSystem
from .data import UNREGISTERED, DataRegistry, DataSource
from .exceptions import ChartValidationError
from .options import DocumentOptions
from .parts import EncodeContext, Part

if TYPE_CHECKING:
    from .channel import DataChannel, UpdateMessage

logger = logging.getLogger(__name__)

DATA_KEY = "dataset"

ENCODER_ORDER: tuple[str, ...] = (
    "title",
    "legend",
    "tooltip",
    "angleAxis",
    "radiusAxis",
    "xAxis",
    "yAxis",
    "polar",
    "grid",
    "series",
    "dataZoom",
    "visualMap",
    "graphic",
)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of checking a chart document."""

    is_valid: bool
    errors: tuple[str, ...] = ()


class ChartDocument:
    """A set of top-level components encoded into one renderer document.

    Args:
        *components: Initial top-level components.
        options: Encoding defaults; read from Django settings when omitted.
    """

    def __init__(self, *components: Part, options: DocumentOptions | None = None) -> None:
        self.options = options or DocumentOptions.from_settings()
        self._components: list[Part] = []
        self._default_legend: Legend | None = Legend() if self.options.default_legend else None
        self._default_tooltip: Tooltip | None = Tooltip() if self.options.default_tooltip else None
        self._registry: DataRegistry | None = None
        self._encoded = False
        self.add(*components)

    @property
    def components(self) -> tuple[Part, ...]:
        return tuple(self._components)

    @property
    def encoded(self) -> bool:
        """True once a full encode has been produced (until `clear()`)."""

        return self._encoded

    def add(self, *components: Part | None) -> None:
        for component in components:
            if component is not None and all(existing is not component for existing in self._components):
                self._components.append(component)

    def remove(self, *components: Part) -> None:
        for component in components:
            self._components = [existing for existing in self._components if existing is not component]

    def remove_all(self) -> None:
        """Remove every component. The display is untouched until the next encode or `clear()`."""

        self._components.clear()

    def disable_default_legend(self) -> None:
        self._default_legend = None

    def disable_default_tooltip(self) -> None:
        self._default_tooltip = None

    def collect_parts(self) -> list[Part]:
        """Return all reachable parts in discovery order, without duplicates."""

        parts: list[Part] = []
        seen: set[int] = set()

        def visit(part: Part) -> None:
            if id(part) in seen:
                return
            seen.add(id(part))
            parts.append(part)
            for referenced in part.references():
                visit(referenced)
            for child in part.children():
                visit(child)

        for component in self._components:
            visit(component)
        return parts

    def _parts_for_pass(self, skip_data: bool) -> list[Part]:
        parts = self.collect_parts()
        if not skip_data:
            if self._default_legend is not None and not any(isinstance(part, Legend) for part in parts):
                parts.append(self._default_legend)
            if self._default_tooltip is not None and not any(isinstance(part, Tooltip) for part in parts):
                parts.append(self._default_tooltip)
        return parts

    @staticmethod
    def _unique_sources(parts: Iterable[Part]) -> list[DataSource]:
        sources: list[DataSource] = []
        seen: set[int] = set()
        for part in parts:
            for source in part.data_sources():
                if source is not None and id(source) not in seen:
                    seen.add(id(source))
                    sources.append(source)
        return sources

    @staticmethod
    def _validation_order(parts: list[Part]) -> list[Part]:
        return sorted(parts, key=lambda part: not isinstance(part, CoordinateSystem))

    def validate(self) -> None:
        """Validate every reachable part and data source.

        Raises:
            ChartValidationError: On the first failure found.
        """

        parts = self._parts_for_pass(skip_data=False)
        try:
            for part in self._validation_order(parts):
                part.validate()
            for source in self._unique_sources(parts):
                source.validate()
        except ChartValidationError as exc:
            logger.info("Chart document validation failed: %s", exc)
            raise

    def check(self) -> ValidationResult:
        """Validate without raising.

        Returns:
            ValidationResult listing the failure of each invalid part or source.
        """

        errors: list[str] = []
        parts = self._parts_for_pass(skip_data=False)
        checks = [*self._validation_order(parts), *self._unique_sources(parts)]
        for item in checks:
            try:
                item.validate()
            except ChartValidationError as exc:
                errors.append(str(exc))
        unique_errors = tuple(dict.fromkeys(errors))
        return ValidationResult(is_valid=not unique_errors, errors=unique_errors)

    def _prepare(self, skip_data: bool) -> tuple[list[Part], EncodeContext]:
        parts = self._parts_for_pass(skip_data)
        try:
            for part in self._validation_order(parts):
                part.validate()
            sources = self._unique_sources(parts)
            if not skip_data:
                for source in sources:
                    source.validate()
            registry = DataRegistry(frozen=skip_data)
            for source in sources:
                registry.register(source)
        except ChartValidationError as exc:
            logger.info("Chart document validation failed: %s", exc)
            raise

        if not skip_data:
            previous = self._registry
            if previous is not None:
                for source in previous:
                    if source not in registry:
                        source.serial = UNREGISTERED
            self._registry = registry

        context = EncodeContext(registry=registry, skip_data=skip_data)
        counters: dict[str, int] = defaultdict(int)
        for part in parts:
            if part.category is None:
                continue
            context.indexes[part.id] = counters[part.category]
            counters[part.category] += 1
            if isinstance(part, Chart):
                context.axis_data.update(part.axis_bindings())
        return parts, context

    def iter_encode(self, *, skip_data: bool = False) -> Iterator[str]:
        """Yield the encoded document in chunks.

        Validation and serial assignment complete before the first chunk is
        produced. The data dictionary is streamed value by value.

        Args:
            skip_data: Omit the data dictionary and keep the serials of the
                previous full encode. Ignored for the first encode.

        Raises:
            ChartValidationError: When the graph is invalid, or when
                `skip_data` is set and a data source was never registered.
        """

        if skip_data and not self._encoded:
            skip_data = False
        if not self._components:
            self.clear()
            yield "{}"
            return
        parts, context = self._prepare(skip_data)
        if not skip_data:
            self._encoded = True

        tree: dict[str, list[dict[str, Any]]] = {}
        for category in ENCODER_ORDER:
            fragments = []
            for part in parts:
                if part.category == category:
                    fragment: dict[str, Any] = {}
                    part.encode(fragment, context)
                    fragments.append(fragment)
            if fragments:
                tree[category] = fragments

        structure = dumps(tree, indent=self.options.indent)
        if skip_data or not len(context.registry):
            yield structure
            return

        head = structure.rstrip()[:-1].rstrip()
        yield head
        yield "," if tree else ""
        yield f'"{DATA_KEY}":{{"source":{{'
        for position, source in enumerate(context.registry):
            yield f'{"," if position else ""}"d{source.serial}":['
            for index, value in enumerate(source.stream()):
                yield ("," if index else "") + dumps_compact(source.encode_value(value))
            yield "]"
        yield "}}}"

    def encode(self, *, skip_data: bool = False) -> str:
        """Encode the document and publish it through `signals.document_encoded`.

        Args:
            skip_data: See `iter_encode`.

        Returns:
            The JSON document.
        """

        effective_skip = skip_data and self._encoded
        payload = "".join(self.iter_encode(skip_data=skip_data))
        if self._components:
            registry_size = len(self._registry) if self._registry is not None else 0
            logger.debug(
                "Encoded chart document: %d component(s), %d data source(s), skip_data=%s",
                len(self._components),
                registry_size,
                effective_skip,
            )
            signals.document_encoded.send(
                sender=type(self), document=self, payload=payload, skip_data=effective_skip
            )
        return payload

    def clear(self) -> None:
        """Ask the renderer to clear its display; the next encode includes data again."""

        if not self._encoded:
            return
        self._encoded = False
        logger.debug("Clearing chart document")
        signals.document_cleared.send(sender=type(self), document=self)

    def data_channel(self, *sources: DataSource) -> DataChannel:
        from .channel import DataChannel

        return DataChannel(self, *sources)

    def dispatch_update(self, message: UpdateMessage) -> None:
        """Publish an incremental data update through `signals.data_updated`."""

        signals.data_updated.send(
            sender=type(self), document=self, command=message.command, payload=message.payload
        )


def collect_references(tree: Any) -> set[int]:
    """Return the data serials referenced by a decoded structural document.

    References are `"d<serial>"` values of `"encode"` mappings, integer
    `"data"` values, and serials in tooltip formatter bodies. The data
    dictionary itself (`DATA_KEY`) is not searched.
    """

    found: set[int] = set()

    def walk(node: Any) -> None:
        if isinstance(node, list):
            for item in node:
                walk(item)
            return
        if not isinstance(node, dict):
            return
        for key, value in node.items():
            if key == "encode" and isinstance(value, dict):
                for placeholder in value.values():
                    if isinstance(placeholder, str) and placeholder.startswith("d") and placeholder[1:].isdigit():
                        found.add(int(placeholder[1:]))
            elif key == "data" and isinstance(value, int) and not isinstance(value, bool):
                found.add(value)
            elif key == "functionP" and isinstance(value, dict):
                for item in value.get("body", ()):
                    if isinstance(item, int) and not isinstance(item, bool):
                        found.add(item)
                    elif isinstance(item, list) and item:
                        found.add(item[0])
            else:
                walk(value)

    if isinstance(tree, dict):
        walk({key: value for key, value in tree.items() if key != DATA_KEY})
    else:
        walk(tree)
    return found
