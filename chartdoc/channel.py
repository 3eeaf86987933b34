"""Incremental data updates for an encoded document.

A channel is bound to data sources that a full encode has already numbered.
Each call produces a small message keyed by serial; the renderer applies it to
its cached copy of the data dictionary, so the structural document is never
re-sent.

Message shapes (compact JSON):

- append / push: `{"d":[{"i":<serial>,"v":<value>},...]}`
- reset: `{"d":[<serial>,...]}`

Sources without a serial (never encoded) are left out of the message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from .codec import dumps_compact
from .data import DataSource
from .exceptions import ArityMismatchError, EmptyDataError, NullDataError, TypeMismatchError

if TYPE_CHECKING:
    from .document import ChartDocument

logger = logging.getLogger(__name__)

UpdateCommand = Literal["append", "push", "reset"]

MISSING_VALUE = '"-"'


@dataclass(frozen=True, slots=True)
class UpdateMessage:
    """One incremental update, as handed to the renderer."""

    command: UpdateCommand
    payload: str


class DataChannel:
    """Sends appended, pushed or reset values of bound sources.

    Args:
        document: Document whose renderer receives the updates.
        *sources: Bound sources; update calls take one value per source, in
            this order.

    Raises:
        ValueError: When no source is given.
    """

    def __init__(self, document: ChartDocument, *sources: DataSource) -> None:
        if not sources:
            raise ValueError("A data channel needs at least one data source.")
        self.document = document
        self.sources: tuple[DataSource, ...] = sources

    def append(self, *values: Any) -> UpdateMessage:
        """Append one value to the end of each bound source's data.

        Raises:
            EmptyDataError: When no value is given.
            ArityMismatchError: When the value count differs from the source count.
            NullDataError: When a value is None.
            TypeMismatchError: When a value does not match its source's data type.
        """

        return self._send("append", self._encode_values(values))

    def push(self, *values: Any) -> UpdateMessage:
        """Like `append`, but the renderer also drops the oldest value of each source."""

        return self._send("push", self._encode_values(values))

    def append_encoded(self, *values: str | None) -> UpdateMessage:
        """Append values already encoded as JSON text. Types are not checked.

        A None entry is sent as the renderer's missing-value marker.

        Raises:
            EmptyDataError: When no value is given.
            ArityMismatchError: When the value count differs from the source count.
        """

        self._check_arity(values)
        return self._send("append", [MISSING_VALUE if value is None else value for value in values])

    def push_encoded(self, *values: str | None) -> UpdateMessage:
        """Push values already encoded as JSON text. Types are not checked.

        A None entry is sent as the renderer's missing-value marker.

        Raises:
            EmptyDataError: When no value is given.
            ArityMismatchError: When the value count differs from the source count.
        """

        self._check_arity(values)
        return self._send("push", [MISSING_VALUE if value is None else value for value in values])

    def reset(self) -> UpdateMessage:
        """Clear the renderer-side data of every bound source."""

        serials = [str(source.serial) for source in self.sources if source.serial > 0]
        return self._dispatch(UpdateMessage(command="reset", payload='{"d":[' + ",".join(serials) + "]}"))

    def _check_arity(self, values: tuple[Any, ...]) -> None:
        if not values:
            raise EmptyDataError()
        if len(values) != len(self.sources):
            raise ArityMismatchError(expected=len(self.sources), actual=len(values))

    def _encode_values(self, values: tuple[Any, ...]) -> list[str]:
        self._check_arity(values)
        for index, value in enumerate(values):
            if value is None:
                raise NullDataError(index=index)
        for index, (source, value) in enumerate(zip(self.sources, values)):
            if not source.data_type.accepts(value):
                raise TypeMismatchError(index=index, value=value, expected=str(source.data_type))
        return [dumps_compact(source.encode_value(value)) for source, value in zip(self.sources, values)]

    def _send(self, command: UpdateCommand, encoded: list[str]) -> UpdateMessage:
        entries = [
            f'{{"i":{source.serial},"v":{value}}}'
            for source, value in zip(self.sources, encoded)
            if source.serial > 0
        ]
        return self._dispatch(UpdateMessage(command=command, payload='{"d":[' + ",".join(entries) + "]}"))

    def _dispatch(self, message: UpdateMessage) -> UpdateMessage:
        logger.debug("Sending %s update for %d source(s): %s", message.command, len(self.sources), message.payload)
        self.document.dispatch_update(message)
        return message
