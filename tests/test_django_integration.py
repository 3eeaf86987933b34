"""Integration tests for settings-driven options and delivery signals."""

from __future__ import annotations

import json

import pytest

from chartdoc import signals
from chartdoc.components import Title
from chartdoc.document import ChartDocument
from chartdoc.options import DocumentOptions

pytestmark = pytest.mark.integration


def test_options_are_read_from_settings(settings) -> None:
    """Read document options from the CHARTDOC setting."""

    settings.CHARTDOC = {"DEFAULT_LEGEND": False, "DEFAULT_TOOLTIP": True, "INDENT": 2}
    assert DocumentOptions.from_settings() == DocumentOptions(
        default_legend=False, default_tooltip=True, indent=2
    )


def test_zero_indent_means_compact_output(settings) -> None:
    """Treat an INDENT of 0 as compact output."""

    settings.CHARTDOC = {"INDENT": 0}
    assert DocumentOptions.from_settings().indent is None


def test_document_uses_settings_when_no_options_given(settings) -> None:
    """Fall back to settings when no options are passed."""

    settings.CHARTDOC = {"DEFAULT_LEGEND": False, "DEFAULT_TOOLTIP": False, "INDENT": 0}
    assert list(json.loads(ChartDocument(Title("t")).encode())) == ["title"]


def test_encode_publishes_document_encoded(bar_document, captured_signal) -> None:
    """Send document_encoded for full and structure-only encodes."""

    calls = captured_signal(signals.document_encoded)

    payload = bar_document.encode()
    bar_document.encode(skip_data=True)

    assert len(calls) == 2
    assert calls[0]["sender"] is ChartDocument
    assert calls[0]["document"] is bar_document
    assert calls[0]["payload"] == payload
    assert calls[0]["skip_data"] is False
    assert calls[1]["skip_data"] is True


def test_channel_updates_publish_data_updated(bar_document, sales, captured_signal) -> None:
    """Send data_updated for each channel message."""

    calls = captured_signal(signals.data_updated)
    bar_document.encode()

    bar_document.data_channel(sales).push(1)

    assert [(call["command"], call["payload"]) for call in calls] == [
        ("push", f'{{"d":[{{"i":{sales.serial},"v":1}}]}}')
    ]


def test_clear_publishes_only_after_an_encode(bar_document, captured_signal) -> None:
    """Send document_cleared only for an encoded document."""

    calls = captured_signal(signals.document_cleared)

    bar_document.clear()
    assert calls == []

    bar_document.encode()
    bar_document.clear()
    assert len(calls) == 1
    assert bar_document.encoded is False


def test_encoding_an_emptied_document_clears_it(bar_document, captured_signal) -> None:
    """Clear the display when an emptied document is encoded."""

    calls = captured_signal(signals.document_cleared)
    bar_document.encode()
    bar_document.remove_all()

    assert bar_document.encode() == "{}"
    assert len(calls) == 1
