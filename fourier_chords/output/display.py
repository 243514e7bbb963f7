"""Presentation of detected notes."""

from typing import Any, Dict, Iterable, List, Sequence

from rich.table import Table

from ..detection.engine import PassResult

NO_NOTES = "None"


def render_notes(notes: Sequence[str]) -> str:
    """Notes joined for display, or "None" when nothing was detected."""
    if not notes:
        return NO_NOTES
    return ", ".join(notes)


def notes_table(results: Iterable[PassResult], title: str = "Detected notes") -> Table:
    """Rich table with one row per analysis pass."""
    table = Table(title=title)
    table.add_column("Pass", justify="right")
    table.add_column("Time (s)", style="green", justify="right")
    table.add_column("Notes", style="cyan")
    table.add_column("Peaks (Hz)", style="yellow")

    for result in results:
        table.add_row(
            str(result.pass_index),
            f"{result.time:.3f}",
            render_notes(result.notes),
            ", ".join(f"{freq:.1f}" for freq in result.peak_frequencies) or "-",
        )
    return table


def results_to_dict(results: Iterable[PassResult]) -> List[Dict[str, Any]]:
    """JSON-serializable form of pass results."""
    return [
        {
            "pass": result.pass_index,
            "time": round(result.time, 6),
            "notes": list(result.notes),
            "peak_frequencies": [round(freq, 3) for freq in result.peak_frequencies],
            "frequency_resolution": result.context.frequency_resolution,
            "magnitude_threshold": result.context.magnitude_threshold,
            "prominence_threshold": result.context.prominence_threshold,
        }
        for result in results
    ]
