"""Typed data sources and the per-encode serial registry.

A data source is an ordered, typed sequence of values. Sources are never
inlined into the structural part of a chart document; the document refers to
them by a serial number (`"d1"`, `"d2"`, ...) and carries the values once, in
a separate data dictionary. The serial is assigned by `DataRegistry` during a
full encode pass.
"""

from __future__ import annotations

import calendar
import itertools
from collections.abc import Callable, Iterable, Iterator, MutableSequence
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import StrEnum
from numbers import Real
from typing import Any, Final, Literal

from .exceptions import ChartValidationError
from .parts import display_name

UNREGISTERED: Final[int] = -1

DateStepUnit = Literal["days", "weeks", "months", "years"]
TimeStepUnit = Literal["seconds", "minutes", "hours", "days"]


class DataType(StrEnum):
    """Declared value type of a data source.

    Values are stable identifiers; `axis_type` gives the name the rendering
    engine expects for an axis plotting this kind of data.
    """

    NUMBER = "number"
    CATEGORY = "category"
    DATE = "date"
    TIME = "time"
    LOGARITHMIC = "logarithmic"
    OBJECT = "object"

    @property
    def axis_type(self) -> str:
        """Return the renderer axis type for this data type."""

        return _AXIS_TYPES[self]

    def accepts(self, value: object) -> bool:
        """Return True when `value` may be stored in a source of this type.

        Booleans are not numbers here, and a `datetime` is a TIME value, not a
        DATE value.
        """

        if self in (DataType.NUMBER, DataType.LOGARITHMIC):
            return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)
        if self is DataType.CATEGORY:
            return isinstance(value, str)
        if self is DataType.DATE:
            return isinstance(value, date) and not isinstance(value, datetime)
        if self is DataType.TIME:
            return isinstance(value, datetime)
        return True


_AXIS_TYPES: Final[dict[DataType, str]] = {
    DataType.NUMBER: "value",
    DataType.CATEGORY: "category",
    DataType.DATE: "time",
    DataType.TIME: "time",
    DataType.LOGARITHMIC: "log",
    DataType.OBJECT: "",
}


class DataSource:
    """Base class for every data source.

    Subclasses implement `stream()`. The serial stays at `UNREGISTERED` until a
    full document encode registers the source.
    """

    def __init__(self, data_type: DataType, *, name: str | None = None) -> None:
        self._data_type = data_type
        self._serial = UNREGISTERED
        self.name = name

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def serial(self) -> int:
        return self._serial

    @serial.setter
    def serial(self, value: int) -> None:
        self._serial = value

    @property
    def is_registered(self) -> bool:
        """Return True once a full encode has assigned a serial."""

        return self.serial > 0

    def canonical(self) -> DataSource:
        """Return the source whose identity owns the serial."""

        return self

    def stream(self) -> Iterator[Any]:
        """Return a fresh iterator over the values of this source."""

        raise NotImplementedError

    def as_list(self) -> list[Any]:
        """Materialize the values into a new list."""

        return list(self.stream())

    def encode_value(self, value: Any) -> Any:
        """Convert one value into something the JSON encoder understands.

        Objects exposing `as_json()` (tree nodes, Sankey nodes, boxplot items)
        are converted through it; everything else is returned unchanged.
        """

        as_json = getattr(value, "as_json", None)
        if callable(as_json):
            return as_json()
        return value

    def validate(self) -> None:
        """Validate the source. Lazy sources are not consumed here."""

    def class_name(self) -> str:
        """Return a display name such as `Category Data (Months)`."""

        label = display_name(type(self).__name__)
        return f"{label} ({self.name})" if self.name else label

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.data_type} serial={self.serial}>"


class ListData(DataSource, MutableSequence):
    """A list-backed data source.

    Equality is identity: two sources holding equal values are still two
    different sources with two different serials.
    """

    def __init__(self, data_type: DataType, *values: Any, name: str | None = None) -> None:
        super().__init__(data_type, name=name)
        self._values: list[Any] = list(values)

    def __getitem__(self, index):
        return self._values[index]

    def __setitem__(self, index, value) -> None:
        self._values[index] = value

    def __delitem__(self, index) -> None:
        del self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def insert(self, index: int, value: Any) -> None:
        self._values.insert(index, value)

    def stream(self) -> Iterator[Any]:
        return iter(self._values)

    def as_list(self) -> list[Any]:
        return list(self._values)

    def validate(self) -> None:
        """Reject stored values that do not match the declared data type.

        `None` entries are allowed; they encode as gaps.
        """

        for index, value in enumerate(self._values):
            if value is not None and not self.data_type.accepts(value):
                raise ChartValidationError(
                    f"Incompatible data at position {index} in {self.class_name()}: "
                    f"{value!r} is not {self.data_type}",
                    part=self,
                )


class Data(ListData):
    """Numeric values."""

    def __init__(self, *values: Any, name: str | None = None) -> None:
        super().__init__(DataType.NUMBER, *values, name=name)


class LogData(ListData):
    """Numeric values meant for a logarithmic axis."""

    def __init__(self, *values: Any, name: str | None = None) -> None:
        super().__init__(DataType.LOGARITHMIC, *values, name=name)


class CategoryData(ListData):
    """Category labels."""

    def __init__(self, *values: str, name: str | None = None) -> None:
        super().__init__(DataType.CATEGORY, *values, name=name)

    @property
    def min(self) -> str | None:
        """Return the first category, or None when empty."""

        return self._values[0] if self._values else None

    @property
    def max(self) -> str | None:
        """Return the last category, or None when empty."""

        return self._values[-1] if self._values else None


class DateData(ListData):
    """Calendar dates."""

    def __init__(self, *values: date, name: str | None = None) -> None:
        super().__init__(DataType.DATE, *values, name=name)


class TimeData(ListData):
    """Timestamps."""

    def __init__(self, *values: datetime, name: str | None = None) -> None:
        super().__init__(DataType.TIME, *values, name=name)


class ObjectData(ListData):
    """Arbitrary structured values (encoded through `as_json()` when present)."""

    def __init__(self, *values: Any, name: str | None = None) -> None:
        super().__init__(DataType.OBJECT, *values, name=name)


class DataStream(DataSource):
    """A lazily produced data source.

    Args:
        data_type: Declared type of the produced values.
        source: An iterable, or a zero-argument callable returning one. A
            callable is invoked on every encode; a plain iterator is consumed
            by the first encode.
        limit: Optional maximum number of values taken from `source`.
        name: Optional display name.
    """

    def __init__(
        self,
        data_type: DataType,
        source: Iterable[Any] | Callable[[], Iterable[Any]],
        *,
        limit: int | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(data_type, name=name)
        if limit is not None and limit < 0:
            raise ValueError("limit must be >= 0.")
        self._source = source
        self._limit = limit

    def stream(self) -> Iterator[Any]:
        values = self._source() if callable(self._source) else self._source
        iterator = iter(values)
        if self._limit is None:
            return iterator
        return itertools.islice(iterator, self._limit)


class SerialData(DataSource):
    """An inclusive arithmetic progression of integers.

    A zero step is treated as 1. The bounds are reordered so that the
    progression always runs in the direction of the step.
    """

    def __init__(self, start: int, end: int, step: int = 1, *, name: str | None = None) -> None:
        super().__init__(DataType.NUMBER, name=name)
        self.step = step or 1
        if self.step > 0:
            self.start, self.end = min(start, end), max(start, end)
        else:
            self.start, self.end = max(start, end), min(start, end)

    def stream(self) -> Iterator[int]:
        return iter(range(self.start, self.end + (1 if self.step > 0 else -1), self.step))


class SerialDate(DataSource):
    """An inclusive range of dates.

    Args:
        start: First date.
        end: Last date (inclusive when reachable by whole steps).
        step: Step size; 0 means one unit in the direction of `end`.
        unit: Step unit.
    """

    def __init__(
        self,
        start: date,
        end: date,
        step: int = 0,
        unit: DateStepUnit = "days",
        *,
        name: str | None = None,
    ) -> None:
        super().__init__(DataType.DATE, name=name)
        self.unit = unit
        self.step = step or (1 if start <= end else -1)
        if self.step > 0:
            self.start, self.end = min(start, end), max(start, end)
        else:
            self.start, self.end = max(start, end), min(start, end)

    def stream(self) -> Iterator[date]:
        for offset in itertools.count():
            current = _shift_date(self.start, offset * self.step, self.unit)
            if (self.step > 0 and current > self.end) or (self.step < 0 and current < self.end):
                return
            yield current


class SerialTime(DataSource):
    """An inclusive range of timestamps; minutes are the default unit."""

    def __init__(
        self,
        start: datetime,
        end: datetime,
        step: int = 0,
        unit: TimeStepUnit = "minutes",
        *,
        name: str | None = None,
    ) -> None:
        super().__init__(DataType.TIME, name=name)
        self.unit = unit
        self.step = step or (1 if start <= end else -1)
        if self.step > 0:
            self.start, self.end = min(start, end), max(start, end)
        else:
            self.start, self.end = max(start, end), min(start, end)

    def stream(self) -> Iterator[datetime]:
        delta = timedelta(**{self.unit: self.step})
        for offset in itertools.count():
            current = self.start + offset * delta
            if (self.step > 0 and current > self.end) or (self.step < 0 and current < self.end):
                return
            yield current


class WrappedData(DataSource):
    """A view over another source that shares its serial and values."""

    def __init__(self, wrapped: DataSource, *, name: str | None = None) -> None:
        super().__init__(wrapped.data_type, name=name or wrapped.name)
        self.wrapped = wrapped

    @property
    def data_type(self) -> DataType:
        return self.wrapped.data_type

    @property
    def serial(self) -> int:
        return self.wrapped.serial

    @serial.setter
    def serial(self, value: int) -> None:
        self.wrapped.serial = value

    def canonical(self) -> DataSource:
        return self.wrapped.canonical()

    def stream(self) -> Iterator[Any]:
        return self.wrapped.stream()

    def encode_value(self, value: Any) -> Any:
        return self.wrapped.encode_value(value)

    def validate(self) -> None:
        self.wrapped.validate()


class DataRegistry:
    """Discovery-ordered registry of data sources for one encode pass.

    Serials are 1-based and follow first-seen order. Registration is keyed by
    object identity of the canonical source.
    """

    def __init__(self, *, frozen: bool = False) -> None:
        """Initialize an empty registry.

        Args:
            frozen: When True, sources keep the serial assigned by an earlier
                full encode and unregistered sources are rejected.
        """

        self._frozen = frozen
        self._sources: dict[int, DataSource] = {}

    def register(self, source: DataSource) -> int:
        """Register a source (no-op when already seen) and return its serial.

        Raises:
            ChartValidationError: When the registry is frozen and the source
                has never been registered by a full encode.
        """

        canonical = source.canonical()
        key = id(canonical)
        if key in self._sources:
            return canonical.serial
        if self._frozen:
            if not canonical.is_registered:
                raise ChartValidationError(
                    f"Skipping data but new data found: {source.class_name()}",
                    part=source,
                )
        else:
            canonical.serial = len(self._sources) + 1
        self._sources[key] = canonical
        return canonical.serial

    def serial_of(self, source: DataSource) -> int:
        """Return the serial of a registered source.

        Raises:
            KeyError: When the source was not registered in this pass.
        """

        canonical = source.canonical()
        if id(canonical) not in self._sources:
            raise KeyError(f"{source.class_name()} is not registered in this document.")
        return canonical.serial

    def __contains__(self, source: object) -> bool:
        if not isinstance(source, DataSource):
            return False
        return id(source.canonical()) in self._sources

    def __iter__(self) -> Iterator[DataSource]:
        return iter(self._sources.values())

    def __len__(self) -> int:
        return len(self._sources)


def _shift_date(start: date, amount: int, unit: DateStepUnit) -> date:
    """Return `start` moved by `amount` units, clamping month ends."""

    if unit == "days":
        return start + timedelta(days=amount)
    if unit == "weeks":
        return start + timedelta(weeks=amount)
    months = amount * (12 if unit == "years" else 1)
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)
