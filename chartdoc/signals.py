"""Signals through which documents hand their output to the rendering side.

Receivers get `document` plus the keyword arguments listed per signal.

- `document_encoded`: `payload` (the full JSON text) and `skip_data`.
- `data_updated`: `command` (`"append"`, `"push"` or `"reset"`) and `payload`.
- `document_cleared`: no extra arguments.
"""

from __future__ import annotations

from django.dispatch import Signal

document_encoded = Signal()
data_updated = Signal()
document_cleared = Signal()
