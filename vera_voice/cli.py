"""CLI entrypoint for vera-voice."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import CONFIG_ENV_VAR, Config, get_config_path
from .exceptions import VeraVoiceError
from .log import setup_logging
from .playback import play_wav
from .synthesis import check_api_key, synthesize_speech
from .voices import group_by_gender
from .wav import AudioFormat, pcm_duration, pcm_to_wav

app = typer.Typer(
    name="vera-voice",
    help="Text-to-speech CLI using Gemini prebuilt voices",
    add_completion=False,
    no_args_is_help=False,
)
console = Console()
err_console = Console(stderr=True)

API_KEY_ENV = "GEMINI_API_KEY"


def get_default_output(config: Config, voice: str, expression: str) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    filename = f"{config.audio_filename_prefix}{voice}_{expression}_{timestamp}.{config.audio.format}"
    return Path.cwd() / filename


def version_callback(value: bool) -> None:
    if value:
        console.print(f"vera-voice version {__version__}")
        raise typer.Exit()


def fail(error: VeraVoiceError) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {error}")
    if error.detail:
        err_console.print(f"[dim]{error.detail}[/dim]")
    raise typer.Exit(error.exit_code)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    text: Annotated[
        Optional[str],
        typer.Option("--text", "-t", help="Text to synthesize"),
    ] = None,
    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-f", help="Path to text file to read"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output WAV file path"),
    ] = None,
    voice: Annotated[
        Optional[str],
        typer.Option("--voice", help="Prebuilt voice name (e.g., 'Puck', 'Kore')"),
    ] = None,
    expression: Annotated[
        Optional[str],
        typer.Option("--expression", "-e", help="Expression style (e.g., 'warm_friendly')"),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Gemini TTS model id"),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", envvar=API_KEY_ENV, help="Gemini API key"),
    ] = None,
    play: Annotated[
        bool,
        typer.Option("--play", "-p", help="Play audio after generation"),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to config file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Show only errors"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Convert text to speech using Gemini."""
    if ctx.invoked_subcommand is not None:
        return

    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        config = Config.load(config_path)

        if text:
            input_text = text
        elif file:
            if not file.exists():
                err_console.print(f"[red]Error:[/red] File not found: {file}")
                raise typer.Exit(1)
            input_text = file.read_text(encoding="utf-8")
        elif not sys.stdin.isatty():
            input_text = sys.stdin.read()
        else:
            err_console.print(
                "[red]Error:[/red] No input provided. Use --text, --file, or pipe text."
            )
            raise typer.Exit(1)

        if not input_text.strip():
            err_console.print("[red]Error:[/red] Empty input")
            raise typer.Exit(1)

        if not api_key:
            err_console.print(
                f"[red]Error:[/red] No API key. Use --api-key or set {API_KEY_ENV}."
            )
            raise typer.Exit(1)

        voice_name = voice or config.default_voice
        expression_name = expression or config.default_expression
        output_path = output or get_default_output(config, voice_name, expression_name)

        if verbose:
            console.print(f"Model: {model or config.tts_model}")
            console.print(f"Voice: {voice_name} ({expression_name})")
            console.print(f"Output: {output_path}")

        result = synthesize_speech(
            text=input_text,
            voice=voice_name,
            expression=expression_name,
            api_key=api_key,
            model_id=model,
            config=config,
        )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(result.wav)

        if not quiet:
            console.print(f"[green]Audio saved:[/green] {output_path} ({result.duration:.1f}s)")

        if play:
            play_wav(result.wav, player_command=config.player_command)

    except VeraVoiceError as e:
        fail(e)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(130)


@app.command("list-voices")
def list_voices(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to config file"),
    ] = None,
) -> None:
    """List available prebuilt voices."""
    try:
        config = Config.load(config_path)
    except VeraVoiceError as e:
        fail(e)

    table = Table(title="Available voices")
    table.add_column("Voice", style="bold")
    table.add_column("Gender")
    table.add_column("Trait")
    for gender, voices in group_by_gender(config.voice_models).items():
        for v in voices:
            marker = " (default)" if v.name == config.default_voice else ""
            table.add_row(f"{v.name}{marker}", gender, v.trait)
    console.print(table)

    console.print("[yellow]Usage:[/yellow] vera-voice --voice Kore --text 'Hello world'")


@app.command("list-expressions")
def list_expressions(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to config file"),
    ] = None,
) -> None:
    """List expression styles and their instructions."""
    try:
        config = Config.load(config_path)
    except VeraVoiceError as e:
        fail(e)

    for name in config.expressions:
        marker = " [dim](default)[/dim]" if name == config.default_expression else ""
        console.print(f"[bold]{name}[/bold]{marker}")
        console.print(f"  {config.expression_instructions.get(name, '(no instruction)')}\n")


@app.command("check-key")
def check_key(
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", envvar=API_KEY_ENV, help="Gemini API key"),
    ] = None,
) -> None:
    """Check that a Gemini API key works."""
    try:
        message = check_api_key(api_key or "", config=Config.load())
    except VeraVoiceError as e:
        fail(e)
    console.print(f"[green]{message}[/green]")


@app.command("wrap")
def wrap(
    input_path: Annotated[Path, typer.Argument(help="Raw PCM file")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output WAV path (default: input with .wav)"),
    ] = None,
    sample_rate: Annotated[
        int, typer.Option("--sample-rate", "-r", help="Samples per second")
    ] = 24000,
    channels: Annotated[
        int, typer.Option("--channels", "-c", help="Interleaved channel count")
    ] = 1,
    sample_width: Annotated[
        int, typer.Option("--sample-width", "-w", help="Bytes per sample")
    ] = 2,
) -> None:
    """Wrap a raw PCM file in a WAV header."""
    if not input_path.exists():
        err_console.print(f"[red]Error:[/red] File not found: {input_path}")
        raise typer.Exit(1)

    output_path = output or input_path.with_suffix(".wav")
    pcm = input_path.read_bytes()
    try:
        wav = pcm_to_wav(pcm, sample_rate, channels, sample_width)
    except VeraVoiceError as e:
        fail(e)

    output_path.write_bytes(wav)
    seconds = pcm_duration(
        len(pcm),
        AudioFormat(sample_rate=sample_rate, channels=channels, sample_width=sample_width),
    )
    console.print(f"[green]Wrote:[/green] {output_path} ({len(wav)} bytes, {seconds:.2f}s)")


@app.command("info")
def info() -> None:
    """Show information about the installation."""
    try:
        config = Config.load()
    except VeraVoiceError as e:
        fail(e)

    console.print(f"[bold]vera-voice[/bold] version {__version__}\n")
    console.print(f"[bold]Config file:[/bold] {get_config_path()}")
    console.print(f"[bold]TTS model:[/bold] {config.tts_model}")
    console.print(f"[bold]Default voice:[/bold] {config.default_voice}")
    console.print(f"[bold]Default expression:[/bold] {config.default_expression}")
    audio = config.audio
    console.print(
        f"[bold]Audio:[/bold] {audio.sample_rate} Hz, {audio.channels} channel(s), "
        f"{audio.bits_per_sample}-bit {audio.format}"
    )
    console.print(f"[bold]Voices:[/bold] {len(config.voice_models)}")


@app.command("serve")
def serve(
    host: Annotated[
        str,
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = 8000,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to config file"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Enable auto-reload for development"),
    ] = False,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", help="Number of workers (default: 1)"),
    ] = 1,
) -> None:
    """Start the HTTP server."""
    import uvicorn

    console.print("[bold]Starting vera-voice server[/bold]")
    console.print(f"  Host: {host}")
    console.print(f"  Port: {port}")
    console.print(f"  Workers: {workers}")
    if reload:
        console.print("  [yellow]Reload mode enabled[/yellow]")

    if reload or workers > 1:
        if config_path:
            os.environ[CONFIG_ENV_VAR] = str(config_path)
        # Reload and multi-worker modes import the app by path in each process.
        uvicorn.run(
            "vera_voice.server.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=workers,
        )
    else:
        from .server.app import create_app

        try:
            config = Config.load(config_path)
        except VeraVoiceError as e:
            fail(e)
        uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    app()
