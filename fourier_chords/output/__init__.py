"""Output layer - Presentation of detected notes.

- Plain text ("None" when nothing was detected)
- Rich tables for the terminal
- JSON-ready dictionaries
"""

from .display import NO_NOTES, render_notes, notes_table, results_to_dict

__all__ = [
    "NO_NOTES",
    "render_notes",
    "notes_table",
    "results_to_dict",
]
