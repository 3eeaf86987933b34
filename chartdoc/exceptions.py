"""Exception taxonomy for chart documents.

Three families exist:

- `ChartValidationError`: structural problems found before any output is
  produced (missing data slots, duplicate node names, circular edges).
- `DataMismatchError`: bad arguments given to an incremental data update.
- `UnsupportedOperationError`: a setter that a concrete chart type does not
  support was called.
"""

from __future__ import annotations


class ChartError(Exception):
    """Base class for every error raised by this package."""


class ChartValidationError(ChartError, ValueError):
    """Raised when a component graph fails validation."""

    def __init__(self, message: str, *, part: object | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable failure description.
            part: The offending part or data source, when known.
        """

        super().__init__(message)
        self.part = part


class DuplicateNodeError(ChartValidationError):
    """Raised when two nodes of one data set share a name."""

    def __init__(self, name: str, *, part: object | None = None) -> None:
        super().__init__(f"Duplicate node name - {name}", part=part)
        self.name = name


class CircularEdgeError(ChartValidationError):
    """Raised when the edge relation of a graph data set contains a cycle."""

    def __init__(self, *, part: object | None = None) -> None:
        super().__init__("Circular edge detected", part=part)


class InvalidEdgeError(ChartValidationError):
    """Raised when an edge references a missing or unregistered node."""

    def __init__(self, detail: str = "", *, part: object | None = None) -> None:
        super().__init__(f"Invalid edge{f' - {detail}' if detail else ''}", part=part)


class DataMismatchError(ChartError, ValueError):
    """Raised when values handed to a data channel cannot be applied."""


class EmptyDataError(DataMismatchError):
    """Raised when a data update carries no values at all."""

    def __init__(self) -> None:
        super().__init__("No data provided")


class NullDataError(DataMismatchError):
    """Raised when a data update contains a null value."""

    def __init__(self, *, index: int) -> None:
        super().__init__(f"Null value at position {index}")
        self.index = index


class ArityMismatchError(DataMismatchError):
    """Raised when the number of values differs from the number of bound sources."""

    def __init__(self, *, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} value(s), got {actual}")
        self.expected = expected
        self.actual = actual


class TypeMismatchError(DataMismatchError):
    """Raised when a value is incompatible with its source's data type."""

    def __init__(self, *, index: int, value: object, expected: str) -> None:
        """Initialize the error.

        Args:
            index: Position of the offending value in the update call.
            value: The rejected value.
            expected: Name of the data type the bound source declares.
        """

        super().__init__(f"Incompatible data at position {index}: {value!r} is not {expected}")
        self.index = index
        self.value = value
        self.expected = expected


class UnsupportedOperationError(ChartError, TypeError):
    """Raised when a chart type is asked to do something it never supports."""
