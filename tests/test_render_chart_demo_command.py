"""Integration tests for the `render_chart_demo` management command."""

from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from chartdoc.demo import DEMO_BUILDERS
from chartdoc.document import DATA_KEY, collect_references

pytestmark = pytest.mark.integration


def _render(*args: str, **options) -> str:
    out = StringIO()
    call_command("render_chart_demo", *args, stdout=out, **options)
    return out.getvalue()


@pytest.mark.parametrize("name", sorted(DEMO_BUILDERS))
def test_every_demo_encodes_to_consistent_json(name: str) -> None:
    """Render each demo with matching data keys and references."""

    parsed = json.loads(_render("--chart", name))

    assert parsed["series"]
    referenced = collect_references(parsed)
    stored = {int(key[1:]) for key in parsed.get(DATA_KEY, {}).get("source", {})}
    assert referenced == stored


def test_pie_demo_translates_label_placeholders() -> None:
    """Render the pie demo's label and radius."""

    parsed = json.loads(_render("--chart", "pie"))
    assert parsed["series"][0]["label"]["formatter"] == "{b}: {d}%"
    assert parsed["series"][0]["radius"] == ["40%", "70%"]


def test_skip_data_prints_structure_only() -> None:
    """Print only the structure with --skip-data."""

    parsed = json.loads(_render("--chart", "xy", "--skip-data"))
    assert DATA_KEY not in parsed
    assert parsed["series"][0]["encode"] == {"x": "d1", "y": "d2"}


def test_all_prints_a_header_per_demo() -> None:
    """Print a header before each demo by default."""

    output = _render()
    headers = [line for line in output.splitlines() if line.startswith("# ")]
    assert headers == [f"# {name}" for name in DEMO_BUILDERS]


def test_indent_option_pretty_prints() -> None:
    """Pretty-print with --indent."""

    output = _render("--chart", "gauge", "--indent", "2")
    assert '\n  "series"' in output
    assert json.loads(output)["series"][0]["type"] == "gauge"


def test_negative_indent_is_rejected() -> None:
    """Reject a negative --indent."""

    with pytest.raises(CommandError, match="--indent must be >= 0"):
        _render("--chart", "pie", indent=-1)
