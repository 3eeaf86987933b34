"""Document defaults read from Django settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass(frozen=True, slots=True)
class DocumentOptions:
    """Defaults applied by `ChartDocument` when encoding.

    Attributes:
        default_legend: Add a legend when the document has none.
        default_tooltip: Add a tooltip when the document has none.
        indent: Indent of the structural part of the output; None is compact.
    """

    default_legend: bool = True
    default_tooltip: bool = True
    indent: int | None = None

    @classmethod
    def from_settings(cls) -> DocumentOptions:
        """Build options from the `CHARTDOC` settings dict.

        Returns:
            DocumentOptions; library defaults when Django settings are not
            configured.
        """

        if not settings.configured:
            return cls()
        raw: dict[str, Any] = getattr(settings, "CHARTDOC", {}) or {}
        indent = int(raw.get("INDENT", 0) or 0)
        return cls(
            default_legend=bool(raw.get("DEFAULT_LEGEND", True)),
            default_tooltip=bool(raw.get("DEFAULT_TOOLTIP", True)),
            indent=indent if indent > 0 else None,
        )
