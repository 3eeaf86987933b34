"""JSON encoding helpers shared by documents and data channels."""

from __future__ import annotations

import json
from decimal import Decimal
from numbers import Integral, Real
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

COMPACT_SEPARATORS = (",", ":")


class ChartJSONEncoder(DjangoJSONEncoder):
    """DjangoJSONEncoder that keeps every real number numeric.

    `Decimal`, `Fraction` and third-party numeric scalars are accepted by NUMBER
    sources, so they are written as JSON numbers: integrals as `int`, the rest
    as `float`.

    Dates, times and UUIDs are handled by the parent encoder; the renderer
    parses ISO 8601 text on time axes.
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, Integral):
            return int(o)
        if isinstance(o, (Real, Decimal)):
            return float(o)
        return super().default(o)


def dumps(value: Any, *, indent: int | None = None) -> str:
    """Serialize a structural payload.

    Args:
        value: JSON-serializable payload.
        indent: Pretty-print indent; None produces compact text.

    Returns:
        JSON text.
    """

    separators = None if indent else COMPACT_SEPARATORS
    return json.dumps(value, cls=ChartJSONEncoder, indent=indent, separators=separators)


def dumps_compact(value: Any) -> str:
    return json.dumps(value, cls=ChartJSONEncoder, separators=COMPACT_SEPARATORS)
