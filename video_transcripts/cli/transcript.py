# video_transcripts/cli/transcript.py
"""
CLI entrypoint for transcript extraction.

Thin adapter, no business logic:
- Parse arguments
- Invoke the extractor
- Print or write the JSON result

Pipeline logs are structured JSON lines on stderr; stdout carries only the
JSON result.
"""

from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Optional

import typer

from video_transcripts.logging_core.logger import set_log_stream
from video_transcripts.transcription import (
    TranscriptExtractor,
    TranscriptionConfig,
    extract_video_id,
)


app = typer.Typer(
    name="video-transcripts",
    help="Fetch a transcript for a YouTube video (Gemini, captions, simulated fallback)",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Video transcript tools."""


@app.command()
def fetch(
    video: str = typer.Argument(..., help="YouTube video id or URL"),
    max_duration: Optional[float] = typer.Option(
        None, "--max-duration", "-d", help="Keep only segments starting within this many seconds"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the simulated fallback"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write JSON here instead of stdout"),
) -> None:
    """
    Fetch a transcript and emit it as JSON.
    """
    try:
        video_id = extract_video_id(video)
    except ValueError as exc:
        typer.echo(typer.style(f"✗ {exc}", fg=typer.colors.RED, bold=True), err=True)
        raise typer.Exit(code=2)

    set_log_stream(sys.stderr)
    extractor = TranscriptExtractor(
        TranscriptionConfig.from_env(),
        rng=random.Random(seed) if seed is not None else None,
    )

    try:
        if max_duration is not None:
            result = extractor.extract_transcript_for_duration(video_id, max_duration)
        else:
            result = extractor.extract_video_transcript(video_id)
        payload = result.model_dump_json(by_alias=True, indent=2)
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user.", err=True)
        sys.exit(1)

    if out is not None:
        out = out.expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
        typer.echo(f"Transcript written to: {out}", err=True)
    else:
        typer.echo(payload)

    if not result.is_authentic:
        typer.echo(
            typer.style("⚠ No real transcript available, output is simulated placeholder content.", fg=typer.colors.YELLOW),
            err=True,
        )


if __name__ == "__main__":
    app()
