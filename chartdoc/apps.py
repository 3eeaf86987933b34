"""App configuration for the chartdoc Django app."""

from __future__ import annotations

from django.apps import AppConfig


class ChartDocConfig(AppConfig):
    """Configuration for the `chartdoc` app."""

    name = "chartdoc"
    verbose_name = "Chart documents"
