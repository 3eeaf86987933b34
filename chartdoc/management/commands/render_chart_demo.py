"""Render one or all demo chart documents to stdout.

With `--skip-data` each document is encoded twice: a full encode (which
numbers the data sources) followed by the structure-only encode that is
printed.
"""

from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from chartdoc.demo import DEMO_BUILDERS
from chartdoc.exceptions import ChartError
from chartdoc.options import DocumentOptions


class Command(BaseCommand):
    """Encode demo chart documents."""

    help = "Print the encoded JSON of a demo chart document."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--chart",
            choices=[*DEMO_BUILDERS, "all"],
            default="all",
            help="Demo document to render (default: all).",
        )
        parser.add_argument(
            "--skip-data",
            action="store_true",
            help="Print the structure-only re-encode instead of the full document.",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=None,
            help="Indent of the structural part (overrides CHARTDOC['INDENT']).",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        chart: str = options["chart"]
        skip_data: bool = options["skip_data"]
        indent: int | None = options["indent"]
        if indent is not None and indent < 0:
            raise CommandError("--indent must be >= 0.")

        defaults = DocumentOptions.from_settings()
        document_options = DocumentOptions(
            default_legend=defaults.default_legend,
            default_tooltip=defaults.default_tooltip,
            indent=(indent or None) if indent is not None else defaults.indent,
        )

        names = list(DEMO_BUILDERS) if chart == "all" else [chart]
        for name in names:
            document = DEMO_BUILDERS[name](document_options)
            try:
                payload = document.encode()
                if skip_data:
                    payload = document.encode(skip_data=True)
            except ChartError as exc:
                raise CommandError(f"{name}: {exc}") from exc
            if len(names) > 1:
                self.stdout.write(f"# {name}")
            self.stdout.write(payload)
        return None
