"""Django project package for chartdoc (settings only)."""
