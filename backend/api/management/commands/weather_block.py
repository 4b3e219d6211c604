"""Management command to decorate a weather block using the same stack as the API."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import block_markup, decorate_markup


class Command(BaseCommand):
    help = "Render a weather block for a city or an authored HTML fragment"

    def add_arguments(self, parser) -> None:  # noqa: D401
        group = parser.add_mutually_exclusive_group()
        group.add_argument("--city", type=str, help="City name (defaults to the configured city)")
        group.add_argument("--html-file", type=str, help="Path to the block markup to decorate")
        parser.add_argument("--json", action="store_true", help="Print the API payload instead of markup")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        html_file = options.get("html_file")
        if html_file:
            try:
                markup = Path(html_file).read_text(encoding="utf-8")
            except OSError as exc:
                raise CommandError(f"Cannot read {html_file}: {exc}") from exc
        else:
            markup = block_markup(options.get("city") or "")

        payload = decorate_markup(markup)
        if payload["state"] != "success":
            self.stderr.write("Weather could not be loaded; rendered the error state")

        if options.get("json"):
            self.stdout.write(json.dumps(payload))
        else:
            self.stdout.write(payload["html"])
