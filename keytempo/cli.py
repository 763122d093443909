"""Command-line interface for keytempo.

Provides commands for:
- analyze: Estimate tempo (BPM) and key of an audio file
- export: Write the analysis result to a JSON file
- info: Show audio file information
"""

import logging
import typer
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .core.constants import DEFAULT_MAX_SECONDS

app = typer.Typer(
    name="keytempo",
    help="Tempo and key estimation for audio files",
    rich_markup_mode="markdown",
)
console = Console()

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # Only our own loggers go to DEBUG; numba and librosa stay quiet
    logging.getLogger("keytempo").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load_audio(input_file: Path, max_seconds: Optional[float]):
    """Decode input_file, exiting with code 1 on any decode failure."""
    from .input import AudioLoader

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    loader = AudioLoader(max_seconds=max_seconds)
    try:
        audio, sr = loader.load(str(input_file))
    except Exception as e:
        logger.debug("Decoding failed", exc_info=True)
        console.print(f"[red]Failed: {e}[/red]")
        raise typer.Exit(1)
    return loader, audio, sr


@app.command()
def analyze(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    max_seconds: float = typer.Option(
        DEFAULT_MAX_SECONDS, "--max-seconds", "-m", help="Analyze at most this many seconds (0 = whole file)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="TOML file overriding analysis parameters"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    copy: bool = typer.Option(
        False, "--copy", help="Print the plain-text summary used for the clipboard"
    ),
    parallel: bool = typer.Option(
        False, "--parallel", help="Run tempo and key estimation on separate threads"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Estimate the tempo and key of an audio file.

    **Examples:**

        keytempo analyze song.wav

        keytempo analyze song.mp3 --json

        keytempo analyze song.flac --max-seconds 30 --config keytempo.toml
    """
    from .analyzer import Analyzer
    from .config import AnalysisConfig
    from .core import ConfigError
    from .exporter import copy_text, display_fields

    _configure_logging(verbose)

    try:
        config = AnalysisConfig.load(str(config_path) if config_path else None)
    except ConfigError as e:
        console.print(f"[red]Invalid config: {e}[/red]")
        raise typer.Exit(1)

    if not json_output:
        console.print(f"[blue]Loading audio:[/blue] {input_file}")
    loader, audio, sr = _load_audio(input_file, max_seconds or None)
    duration = loader.get_duration(audio, sr)

    if verbose and not json_output:
        console.print(f"  Duration: {duration:.2f}s, Sample rate: {sr}Hz")

    if not json_output:
        console.print("[blue]Analyzing audio...[/blue]")
    analyzer = Analyzer(config, parallel=parallel)
    result = analyzer.analyze(audio, sr)

    if json_output:
        data = result.to_dict()
        data.update({"input": str(input_file), "duration": duration, "sample_rate": sr})
        console.print_json(data=data)
        return

    bpm_text, key_text = display_fields(result)
    console.print(f"  BPM: [green]{bpm_text}[/green]")
    console.print(f"  Key: [green]{key_text}[/green]")

    if verbose and result.key is not None:
        _show_key_candidates(analyzer, audio, sr)

    if copy:
        text = copy_text(result)
        if text is None:
            console.print("[yellow]Nothing to copy yet.[/yellow]")
        else:
            console.print(text, markup=False)

    console.print("[green]Done.[/green]")


@app.command()
def export(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    output: Path = typer.Option(..., "-o", "--output", help="Output JSON file path"),
    max_seconds: float = typer.Option(
        DEFAULT_MAX_SECONDS, "--max-seconds", "-m", help="Analyze at most this many seconds (0 = whole file)"
    ),
):
    """Analyze an audio file and write the result to a JSON file."""
    from .analyzer import analyze as analyze_buffer
    from .exporter import ResultExporter

    _configure_logging(False)

    _, audio, sr = _load_audio(input_file, max_seconds or None)
    result = analyze_buffer(audio, sr)
    ResultExporter().to_json(result, str(output))
    console.print(f"[green]Wrote:[/green] {output}")


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show information about an audio file."""
    _configure_logging(False)

    loader, audio, sr = _load_audio(input_file, None)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {audio.shape[-1]:,}")


def _show_key_candidates(analyzer, audio, sr, limit: int = 5):
    """Display the best-scoring key candidates in a table."""
    from .analysis import ChromaExtractor
    from .inference import KeyDetector

    chroma = ChromaExtractor(analyzer.config.key).extract(audio, sr)
    candidates = KeyDetector(analyzer.config.key.profiles).candidates(chroma)
    # Stable sort keeps enumeration order among equal scores
    candidates.sort(key=lambda c: c.score, reverse=True)

    table = Table(title="Key Candidates")
    table.add_column("Key", style="cyan")
    table.add_column("Score", style="magenta")

    for candidate in candidates[:limit]:
        table.add_row(candidate.name, f"{candidate.score:.4f}")

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
