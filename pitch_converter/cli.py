"""Command-line interface for Pitch Converter.

Provides commands for:
- convert: Convert one pitch to one or more notations
- table: List every semitone between two pitches
- info: Show how a pitch string is understood
"""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core import (
    DEFAULT_DECIMAL_PLACES,
    DEFAULT_REFERENCE_HZ,
    ConfigError,
    OctaveNotation,
    ParseError,
    PrecisionConfig,
    Spelling,
    TuningReference,
)
from .engine import ConversionEngine, ConversionRequest
from .logging_config import configure_logging
from .notation import DEFAULT_OUTPUTS, NotationKind, NotationParser
from .output import PitchTable, TextRenderer, describe_error

app = typer.Typer(
    name="pitch-converter",
    help="Convert pitches between frequency, MIDI number, note name and cents",
    rich_markup_mode="markdown",
    no_args_is_help=True,
)
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

EXIT_CONVERSION_ERROR = 1
EXIT_CONFIG_ERROR = 2

REFERENCE_ENVVAR = "PITCH_CONVERTER_REFERENCE"
DECIMALS_ENVVAR = "PITCH_CONVERTER_DECIMALS"


def _split_formats(formats: Optional[List[str]]) -> List[str]:
    """Flatten '--to freq,midi --to note' into ['freq', 'midi', 'note']."""
    if not formats:
        return [kind.value for kind in DEFAULT_OUTPUTS]
    names = []
    for item in formats:
        names.extend(part.strip() for part in item.split(",") if part.strip())
    return names


def _build_reference(reference: float) -> TuningReference:
    try:
        return TuningReference(reference)
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(describe_error(e))}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR)


def _build_precision(decimals: int, flats: bool, helmholtz: bool) -> PrecisionConfig:
    precision = PrecisionConfig(
        decimal_places=decimals,
        spelling=Spelling.FLAT if flats else Spelling.SHARP,
        octave_notation=OctaveNotation.HELMHOLTZ if helmholtz else OctaveNotation.SCIENTIFIC,
    )
    try:
        return precision.validate()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(describe_error(e))}[/red]")
        raise typer.Exit(EXIT_CONFIG_ERROR)


@app.command()
def convert(
    pitch: str = typer.Argument(..., help="Pitch to convert, e.g. 440, 'midi:69', C#4, A4+15c, hiA (use -- before negative values)"),
    input_format: Optional[str] = typer.Option(
        None, "-f", "--from", help="Input notation: freq, midi, note, cents or alt (default: auto-detect)"
    ),
    output_formats: Optional[List[str]] = typer.Option(
        None, "-t", "--to", help="Output notations, comma-separated or repeated (default: freq,midi,note,cents)"
    ),
    reference: float = typer.Option(
        DEFAULT_REFERENCE_HZ, "-r", "--reference", envvar=REFERENCE_ENVVAR, help="Frequency of A4 in Hz"
    ),
    decimals: int = typer.Option(
        DEFAULT_DECIMAL_PLACES, "-d", "--decimals", envvar=DECIMALS_ENVVAR,
        help="Decimal places for frequency and cents (0-15)",
    ),
    flats: bool = typer.Option(False, "--flats", help="Spell black keys with flats"),
    helmholtz: bool = typer.Option(False, "--helmholtz", help="Use Helmholtz octave marks for note names"),
    strict_cents: bool = typer.Option(
        False, "--strict-cents", help="Reject cents qualifiers outside -50..50 instead of renormalising"
    ),
    labels: bool = typer.Option(False, "-l", "--labels", help="Prefix each line with its format"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON (for scripting)"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Convert a pitch to other notations, one result per line.

    **Examples:**

        pitch-converter convert A4

        pitch-converter convert 445 --to note,cents

        pitch-converter convert midi:60 --to freq -r 432

        pitch-converter convert 60 --from midi --to note --flats

    Put negative values after `--` so they are not read as options:

        pitch-converter convert -- -5.0
    """
    configure_logging(verbose)

    request = ConversionRequest(
        text=pitch,
        hint=input_format,
        outputs=_split_formats(output_formats),
        reference=_build_reference(reference),
        precision=_build_precision(decimals, flats, helmholtz),
        strict_cents=strict_cents,
    )
    result = ConversionEngine().run(request)

    if json_output:
        console.print_json(data=result.to_dict())
    else:
        for line, ok in TextRenderer(labels=labels).render(result):
            if ok:
                console.print(line, markup=False, highlight=False)
            else:
                err_console.print(f"[red]{escape(line)}[/red]")

    if isinstance(result.error, ConfigError):
        raise typer.Exit(EXIT_CONFIG_ERROR)
    if not result.ok:
        raise typer.Exit(EXIT_CONVERSION_ERROR)


@app.command()
def table(
    start: str = typer.Argument(..., help="First pitch of the range, e.g. C4"),
    end: str = typer.Argument(..., help="Last pitch of the range, e.g. C5"),
    reference: float = typer.Option(
        DEFAULT_REFERENCE_HZ, "-r", "--reference", envvar=REFERENCE_ENVVAR, help="Frequency of A4 in Hz"
    ),
    decimals: int = typer.Option(
        DEFAULT_DECIMAL_PLACES, "-d", "--decimals", envvar=DECIMALS_ENVVAR,
        help="Decimal places for frequencies (0-15)",
    ),
    flats: bool = typer.Option(False, "--flats", help="Spell black keys with flats"),
    helmholtz: bool = typer.Option(False, "--helmholtz", help="Use Helmholtz octave marks for note names"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """Show every semitone between two pitches with MIDI number and frequency.

    **Examples:**

        pitch-converter table C4 C5

        pitch-converter table midi:21 midi:108 -r 442
    """
    configure_logging(verbose)
    tuning = _build_reference(reference)
    precision = _build_precision(decimals, flats, helmholtz)
    parser = NotationParser(tuning)
    engine = ConversionEngine()

    bounds = []
    for text in (start, end):
        try:
            pitch = parser.parse(text)
        except ParseError as e:
            err_console.print(f"[red]Error: {escape(describe_error(e))}[/red]")
            raise typer.Exit(EXIT_CONVERSION_ERROR)
        bounds.append(engine.convert(pitch, tuning, NotationKind.MIDI).number)

    rows = PitchTable(tuning, precision).rows(bounds[0], bounds[1])

    pitch_table = Table(title=f"Pitches ({tuning})")
    pitch_table.add_column("Note", style="cyan")
    pitch_table.add_column("MIDI", style="green", justify="right")
    pitch_table.add_column("Frequency", style="yellow", justify="right")
    pitch_table.add_column("Alternative", style="magenta")

    for row in rows:
        pitch_table.add_row(row.note, str(row.midi), row.frequency, row.alternative)

    console.print(pitch_table)


@app.command()
def info(
    pitch: str = typer.Argument(..., help="Pitch to inspect"),
    input_format: Optional[str] = typer.Option(
        None, "-f", "--from", help="Input notation: freq, midi, note, cents or alt (default: auto-detect)"
    ),
    reference: float = typer.Option(
        DEFAULT_REFERENCE_HZ, "-r", "--reference", envvar=REFERENCE_ENVVAR, help="Frequency of A4 in Hz"
    ),
):
    """Show how a pitch string is recognized and what it converts to."""
    configure_logging(False)
    tuning = _build_reference(reference)
    request = ConversionRequest(
        text=pitch,
        hint=input_format,
        outputs=[kind.value for kind in NotationKind],
        reference=tuning,
        precision=PrecisionConfig(decimal_places=4),
    )
    result = ConversionEngine().run(request)

    if result.error is not None:
        err_console.print(f"[red]Error: {escape(describe_error(result.error))}[/red]")
        code = EXIT_CONFIG_ERROR if isinstance(result.error, ConfigError) else EXIT_CONVERSION_ERROR
        raise typer.Exit(code)

    parsed = result.parsed
    console.print(f"\n[bold]Pitch Info:[/bold] {escape(pitch)}")
    console.print(f"  Notation: {parsed.notation.value}")
    console.print(f"  Exact: {'yes' if parsed.pitch.is_exact else 'no (measured)'}")
    console.print(f"  Reference: {tuning}")
    for output in result.outputs:
        console.print(f"  {output.name}: {escape(output.text)}")
    midi = next(o.value for o in result.outputs if o.name == NotationKind.MIDI.value)
    if midi.non_standard:
        console.print("  [yellow]MIDI number is outside the standard 0-127 range[/yellow]")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
