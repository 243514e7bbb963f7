"""Command-line interface for Fourier Chords.

Provides commands for:
- analyze: Stream an audio file through the note detection engine
- tone: Synthesize sine tones and show which notes are detected
- table: Print the frequency to note-name table
- info: Show audio file information
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.constants import DEFAULT_BLOCK_SIZE, DEFAULT_SR, DEFAULT_WINDOW_SIZE
from .core.errors import ConfigurationError

app = typer.Typer(
    name="fourier-chords",
    help="Real-time note detection from spectral peaks",
    rich_markup_mode="markdown",
)
console = Console()
log_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=log_console, show_path=False)],
        force=True,
    )


def _frequency_range(fmin: float, fmax: float) -> Optional[Tuple[float, float]]:
    if fmin <= 0 and fmax <= 0:
        return None
    return (fmin if fmin > 0 else 1.0, fmax if fmax > 0 else float("inf"))


def _check_block_size(block_size: int) -> None:
    if block_size < 1:
        console.print(f"[red]Error: block size must be positive, got {block_size}[/red]")
        raise typer.Exit(1)


def _run_stream(audio: np.ndarray, sr: int, config, block_size: int):
    """Feed audio through a fresh engine block by block."""
    from .detection import NoteDetectionEngine
    from .input import iter_blocks

    engine = NoteDetectionEngine(config)
    engine.initialize(sr, max_block_size=block_size)

    results = []
    for block in iter_blocks(audio, block_size):
        results.extend(engine.process_block(block))
    return engine, results


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, FLAC, MP3, ...)"),
    window_size: int = typer.Option(
        DEFAULT_WINDOW_SIZE, "-w", "--window-size", help="Analysis window in samples"
    ),
    block_size: int = typer.Option(
        DEFAULT_BLOCK_SIZE, "-b", "--block-size", help="Host block size in samples"
    ),
    sample_rate: int = typer.Option(
        0, "--sr", help="Resample to this rate. 0 = keep the file's rate"
    ),
    overlap: float = typer.Option(
        0.0, "--overlap", help="Window overlap fraction [0, 1)"
    ),
    fmin: float = typer.Option(
        0.0, "--fmin", help="Ignore peaks below this frequency (Hz). 0 = no limit"
    ),
    fmax: float = typer.Option(
        0.0, "--fmax", help="Ignore peaks above this frequency (Hz). 0 = no limit"
    ),
    smoothing: float = typer.Option(
        0.0, "--smoothing", help="Magnitude smoothing time in seconds. 0 = off"
    ),
    gate: float = typer.Option(
        0.0, "--gate", help="Drop samples quieter than this absolute amplitude"
    ),
    complex_transform: bool = typer.Option(
        False, "--complex", help="Use the full complex transform instead of rfft"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Detect notes in an audio file, one analysis window at a time.

    **Examples:**

        fourier-chords analyze chord.wav

        fourier-chords analyze guitar.flac -w 4096 -b 256 --fmin 60 --fmax 1500
    """
    from .detection import EngineConfig
    from .input import AudioLoader
    from .output import notes_table, results_to_dict

    _configure_logging(verbose)
    _check_block_size(block_size)

    try:
        config = EngineConfig(
            window_size=window_size,
            window_overlap=overlap,
            frequency_range=_frequency_range(fmin, fmax),
            smoothing_time=smoothing,
            gate_threshold=gate,
            real_input=not complex_transform,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    loader = AudioLoader(target_sr=sample_rate or None)
    try:
        audio, sr = loader.load(str(input_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not json_output:
        console.print(f"[blue]Analyzing:[/blue] {input_file}")
        console.print(f"  Duration: {loader.get_duration(audio, sr):.2f}s, Sample rate: {sr}Hz")

    engine, results = _run_stream(audio, sr, config, block_size)

    if json_output:
        console.print_json(data={
            "input": str(input_file),
            "sample_rate": sr,
            "window_size": config.window_size,
            "block_size": block_size,
            "passes": results_to_dict(results),
        })
        return

    if verbose:
        for line in engine.diagnostics():
            console.print(f"  [dim]{line}[/dim]")

    if not results:
        console.print("[yellow]Audio is shorter than one analysis window[/yellow]")
        return

    console.print(notes_table(results))
    console.print(f"[green]{len(results)} passes analyzed[/green]")


@app.command()
def tone(
    frequencies: List[float] = typer.Argument(..., help="Tone frequencies in Hz"),
    sample_rate: int = typer.Option(DEFAULT_SR, "--sr", help="Sample rate"),
    duration: float = typer.Option(0.5, "-d", "--duration", help="Duration in seconds"),
    window_size: int = typer.Option(
        DEFAULT_WINDOW_SIZE, "-w", "--window-size", help="Analysis window in samples"
    ),
    block_size: int = typer.Option(
        DEFAULT_BLOCK_SIZE, "-b", "--block-size", help="Host block size in samples"
    ),
    amplitude: float = typer.Option(0.8, "--amplitude", help="Peak amplitude of the mix"),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Also write the tones to this WAV file"
    ),
):
    """Synthesize a mix of sine tones and report the detected notes.

    **Example:**

        fourier-chords tone 440 554.37 659.26
    """
    import librosa
    import soundfile as sf

    from .detection import EngineConfig
    from .output import render_notes

    _check_block_size(block_size)

    try:
        config = EngineConfig(window_size=window_size)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    audio = sum(
        librosa.tone(freq, sr=sample_rate, duration=duration) for freq in frequencies
    )
    audio = (amplitude / len(frequencies)) * audio

    if output is not None:
        sf.write(str(output), audio, sample_rate)
        console.print(f"[blue]Wrote:[/blue] {output}")

    engine, results = _run_stream(audio, sample_rate, config, block_size)

    console.print(
        "Tones: " + ", ".join(f"{freq:g} Hz" for freq in frequencies)
    )
    console.print(f"Detected: [cyan]{render_notes(engine.latest_notes().notes)}[/cyan]")
    if results:
        resolution = results[-1].context.frequency_resolution
        console.print(f"  [dim]{len(results)} passes, {resolution:.2f} Hz/bin[/dim]")


@app.command()
def table():
    """Print the frequency to note-name table."""
    from .core import DEFAULT_NOTE_TABLE

    out = Table(title="Note Table")
    out.add_column("Note", style="cyan")
    out.add_column("Frequency (Hz)", style="green", justify="right")

    for entry in DEFAULT_NOTE_TABLE:
        out.add_row(entry.name, f"{entry.frequency:.2f}")

    console.print(out)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    window_size: int = typer.Option(
        DEFAULT_WINDOW_SIZE, "-w", "--window-size", help="Analysis window in samples"
    ),
):
    """Show information about an audio file."""
    from .detection import EngineConfig
    from .input import AudioLoader

    loader = AudioLoader()
    try:
        window_size = EngineConfig(window_size=window_size).window_size
        audio, sr = loader.load(str(input_file))
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {audio.shape[-1]:,}")
    console.print(f"  Frequency resolution: {sr / window_size:.2f} Hz/bin at {window_size} samples")
    console.print(f"  Full windows: {audio.shape[-1] // window_size}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
